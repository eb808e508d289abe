"""Block formatting: ordered Block sequence -> final plain text string"""

import re
from typing import Mapping

from mdplain.core.models import (
    Block,
    BlockKind,
    BlockquoteBlock,
    CodeBlock,
    HeadingBlock,
    ListBlock,
    ParagraphBlock,
    RawBlock,
    TableBlock,
)
from mdplain.core.render.lists import format_list
from mdplain.core.render.tables import calculate_column_widths, format_table
from mdplain.options import PlainTextOptions


SpacingRules = Mapping[BlockKind, Mapping[BlockKind, bool]]

HEADING_PREFIX_CHAR = '#'
TRAILING_NEWLINES_RE = re.compile(r'\n+$')

_ALL_KINDS = tuple(BlockKind)

# True = blank line before `current` when it follows `previous`.
# raw->raw, list->list and table->table are deliberately absent.
DEFAULT_SPACING_RULES: dict[BlockKind, dict[BlockKind, bool]] = {
    previous: {
        current: True
        for current in _ALL_KINDS
        if not (current == previous and previous in (BlockKind.raw, BlockKind.list, BlockKind.table))
    }
    for previous in _ALL_KINDS
}


def merge_spacing_rules(
    overrides: SpacingRules,
    base: SpacingRules = DEFAULT_SPACING_RULES,
    ) -> dict[BlockKind, dict[BlockKind, bool]]:
    """Return a copy of base with per-pair overrides applied."""
    merged = {prev: dict(row) for prev, row in base.items()}
    for prev, row in overrides.items():
        merged.setdefault(BlockKind(prev), {}).update({BlockKind(k): v for k, v in row.items()})
    return merged


def needs_blank_line(previous: Block | None, current: Block, rules: SpacingRules) -> bool:
    if previous is None:
        return False
    return bool(rules.get(previous.kind, {}).get(current.kind, False))


def _push_blank_line(lines: list[str]) -> None:
    if lines and lines[-1] != '':
        lines.append('')


def _strip_trailing_newlines(text: str) -> str:
    return TRAILING_NEWLINES_RE.sub('', text)


def _render_heading(block: HeadingBlock, options: PlainTextOptions) -> str:
    if not options.preserve_heading:
        return block.text
    level = max(1, min(block.level, 6))
    return f"{HEADING_PREFIX_CHAR * level} {block.text}".strip()


def render_block(block: Block, options: PlainTextOptions) -> list[str]:
    """Lines contributed by a single block, without surrounding spacing."""
    match block:
        case ParagraphBlock(lines=lines):
            return list(lines)
        case HeadingBlock():
            return [_render_heading(block, options)]
        case RawBlock(text=text):
            return [text]
        case ListBlock(items=items):
            formatted = _strip_trailing_newlines(format_list(items, options))
            return formatted.split('\n') if formatted else []
        case TableBlock(rows=rows):
            formatted = _strip_trailing_newlines(format_table(rows, calculate_column_widths(rows)))
            return formatted.split('\n') if formatted else []
        case CodeBlock(lines=lines):
            return list(lines) if lines else ['']
        case BlockquoteBlock(lines=lines):
            return list(lines)
    return []


def format_blocks(
    blocks: list[Block],
    options: PlainTextOptions,
    spacing_rules: SpacingRules | None = None,
    ) -> str:
    """Join blocks into text, inserting one blank line where the spacing table asks for it.

    The result never ends in blank lines or trailing whitespace.
    """
    rules = DEFAULT_SPACING_RULES if spacing_rules is None else spacing_rules
    lines: list[str] = []
    previous: Block | None = None
    for block in blocks:
        if needs_blank_line(previous, block, rules):
            _push_blank_line(lines)
        lines.extend(render_block(block, options))
        previous = block
    return TRAILING_NEWLINES_RE.sub('\n', '\n'.join(lines)).rstrip()
