"""Inline token rendering: text, emphasis family, links, emoji, code spans, breaks"""

import re
from typing import Iterable, Protocol

from mdplain.core.render.links import LinkStack
from mdplain.options import PlainTextOptions


FOOTNOTE_REF_RE = re.compile(r'\[\^([^\]]+)\]')
FOOTNOTE_DEF_RE = re.compile(r'\[\^([^\]]+)\]:')
IMG_TAG_RE = re.compile(r'<img[^>]*>', re.IGNORECASE)
EXTRA_NEWLINES_RE = re.compile(r'\n{3,}')
ESCAPE_RE = re.compile(r'\\([*_~^`#])')

MAX_CONSECUTIVE_NEWLINES = 2

# open/close pairs whose markup is kept only when the named option is set;
# None means "use the token's own markup" (* vs _, ** vs __)
MARKER_MAP: dict[str, tuple[str, str | None]] = {
    'em_open':      ('preserve_emphasis',      None),
    'em_close':     ('preserve_emphasis',      None),
    'strong_open':  ('preserve_bold',          None),
    'strong_close': ('preserve_bold',          None),
    'mark_open':    ('preserve_mark',          '=='),
    'mark_close':   ('preserve_mark',          '=='),
    'ins_open':     ('preserve_insert',        '++'),
    'ins_close':    ('preserve_insert',        '++'),
    's_open':       ('preserve_strikethrough', '~~'),
    's_close':      ('preserve_strikethrough', '~~'),
    'sub_open':     ('preserve_subscript',     '~'),
    'sub_close':    ('preserve_subscript',     '~'),
    'sup_open':     ('preserve_superscript',   '^'),
    'sup_close':    ('preserve_superscript',   '^'),
}

INLINE_TYPES = frozenset(MARKER_MAP) | {
    'text', 'softbreak', 'hardbreak', 'emoji', 'code_inline', 'link_open', 'link_close',
}


class InlineSink(Protocol):
    """Whatever accumulator is currently open (paragraph, heading, fragment)."""

    def append_text(self, text: str) -> None:
        ...

    def append_break(self) -> None:
        ...


def collapse_blank_lines(text: str) -> str:
    """Collapse runs of 3+ newlines down to exactly two."""
    return EXTRA_NEWLINES_RE.sub('\n' * MAX_CONSECUTIVE_NEWLINES, text)


def unescape(text: str) -> str:
    """Remove markdown backslash escapes for * _ ~ ^ ` #."""
    return ESCAPE_RE.sub(r'\1', text)


def rewrite_footnotes(text: str) -> str:
    """[^x] -> [x] and [^x]: -> [x]:"""
    return FOOTNOTE_DEF_RE.sub(r'[\1]:', FOOTNOTE_REF_RE.sub(r'[\1]', text))


def render_text(content: str, links: LinkStack) -> str:
    """Return what a text token contributes to the output stream."""
    content = rewrite_footnotes(content)
    routed = links.text(content)
    if routed is not None:
        return routed
    content = IMG_TAG_RE.sub('', content)
    content = collapse_blank_lines(content)
    return unescape(content)


def process_inline_token(token, sink: InlineSink, links: LinkStack, options: PlainTextOptions) -> None:
    """Render one inline token into sink. Unknown types contribute nothing."""
    t = token.type
    if t == 'text':
        sink.append_text(render_text(token.content, links))
    elif t in ('softbreak', 'hardbreak'):
        sink.append_break()
    elif t in MARKER_MAP:
        flag, marker = MARKER_MAP[t]
        if getattr(options, flag):
            sink.append_text(token.markup if marker is None else marker)
    elif t == 'emoji':
        if options.display_emojis:
            sink.append_text(token.content)
    elif t == 'code_inline':
        sink.append_text(token.content)
    elif t == 'link_open':
        links.open(token.attrs.get('href') if token.attrs else None)
    elif t == 'link_close':
        sink.append_text(links.close())


def process_inline(tokens: Iterable | None, sink: InlineSink, links: LinkStack, options: PlainTextOptions) -> None:
    """Render the children of an `inline` token, in order, into sink."""
    for token in tokens or ():
        process_inline_token(token, sink, links, options)
