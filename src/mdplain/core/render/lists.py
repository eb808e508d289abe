"""List assembly: token span -> ListItems -> indented, numbered plain text"""

from typing import Callable

from mdplain.core.models import ListItem
from mdplain.options import PlainTextOptions


SPACES_PER_INDENT = 4
BULLET_PREFIX = '- '
ORDERED_SUFFIX = '. '

FragmentRenderer = Callable[[list, int], str]


def indent_unit(options: PlainTextOptions) -> str:
    return '\t' if options.indent_type == "tabs" else ' ' * SPACES_PER_INDENT


def parse_list_tokens(
    tokens: list,
    ordered: bool,
    start: int,
    indent_level: int,
    render_fragment: FragmentRenderer,
    ) -> list[ListItem]:
    """Turn each list_item_open..list_item_close span into a ListItem.

    Nested lists inside an item stay in its span and are rendered by the
    fragment renderer; numbering only advances for items of this list.
    """
    items: list[ListItem] = []
    index = start
    i = 0
    while i < len(tokens):
        if tokens[i].type != 'list_item_open':
            i += 1
            continue
        body: list = []
        depth = 1
        i += 1
        while i < len(tokens) and depth > 0:
            t = tokens[i].type
            if t == 'list_item_open':
                depth += 1
            elif t == 'list_item_close':
                depth -= 1
            if depth > 0:
                body.append(tokens[i])
            i += 1
        items.append(ListItem(
            content=render_fragment(body, indent_level).strip(),
            ordered=ordered,
            indent_level=indent_level,
            index=index if ordered else None,
        ))
        if ordered:
            index += 1
    return items


def format_list(items: list[ListItem], options: PlainTextOptions) -> str:
    """Render items with indentation, prefixes and a blank line after each."""
    unit = indent_unit(options)
    lines: list[str] = []
    for item in items:
        indent = unit * (item.indent_level - 1) if item.indent_level > 1 else ''
        prefix = f"{item.index}{ORDERED_SUFFIX}" if item.ordered else BULLET_PREFIX
        first, *rest = item.content.split('\n')
        lines.append(indent + prefix + first)
        lines.extend(rest)
        lines.append('')
    while len(lines) > 1 and lines[-1] == '' and lines[-2] == '':
        lines.pop()
    return '\n'.join(lines)
