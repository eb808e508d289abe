"""Shared markdown-it token utilities"""


def heading_level(token) -> int:
    """Return the heading level for a heading_open token, clamped to 1-6 (1 if the tag is unusable)."""
    tag = token.tag or ''
    if tag[:1] != 'h' or not tag[1:].isdigit():
        return 1
    return max(1, min(int(tag[1:]), 6))


def attr(token, name: str) -> str | None:
    """Return a token attribute as a string, else None."""
    attrs = token.attrs or {}
    value = attrs.get(name)
    return None if value is None else str(value)


def list_start(token) -> int:
    """Return the ordered-list start number; missing, invalid or non-positive values give 1."""
    raw = attr(token, 'start')
    try:
        start = int(raw) if raw is not None else 1
    except ValueError:
        return 1
    return start if start > 0 else 1


def extract_block_tokens(tokens: list, start: int) -> tuple[list, int]:
    """Return (inner_tokens, close_index) for the container opened at tokens[start].

    Same-type opens nested inside the span increase the depth, so the close
    matched is the one balancing tokens[start]. When no close exists the span
    runs to the end of the list.
    """
    open_type = tokens[start].type
    close_type = open_type.replace('_open', '_close')
    inner: list = []
    depth = 1
    i = start + 1
    while i < len(tokens) and depth > 0:
        tok = tokens[i]
        if tok.type == open_type:
            depth += 1
        elif tok.type == close_type:
            depth -= 1
        if depth > 0:
            inner.append(tok)
        i += 1
    return inner, i - 1
