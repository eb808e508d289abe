"""Recursive-descent block collection over a markdown-it token stream.

The collector walks one token slice, keeps a paragraph accumulator, a link
stack and the current list depth, and emits an ordered list of Blocks. Nested
containers (list items, table cells, blockquotes) are rendered through
``render_fragment``, which collects and formats the sub-span with fresh state
and hands back a finished string, so spacing decisions never cross a
container boundary.
"""

import logging

from mdplain.core.models import (
    Block,
    BlockquoteBlock,
    CodeBlock,
    HeadingBlock,
    ListBlock,
    ParagraphBlock,
    RawBlock,
    TableBlock,
)
from mdplain.core.render.formatter import SpacingRules, format_blocks
from mdplain.core.render.inline import INLINE_TYPES, collapse_blank_lines, process_inline, process_inline_token
from mdplain.core.render.links import LinkStack
from mdplain.core.render.lists import parse_list_tokens
from mdplain.core.render.tables import parse_table_tokens
from mdplain.core.utils.tokens import extract_block_tokens, heading_level, list_start
from mdplain.options import PlainTextOptions


logger = logging.getLogger(__name__)

HORIZONTAL_RULE_MARKER = '---'
HORIZONTAL_RULE_PLACEHOLDER = '\u00a0'    # nbsp: an unpreserved rule still occupies a block slot


def _code_lines(content: str) -> list[str]:
    body = content.rstrip('\n')
    return body.split('\n') if body else []


class _Collector:
    """Accumulator state for a single collect call; never shared."""

    def __init__(self, options: PlainTextOptions, indent_level: int, spacing_rules: SpacingRules | None):
        self.options = options
        self.depth = indent_level
        self.spacing_rules = spacing_rules
        self.blocks: list[Block] = []
        self.paragraph: str | None = None
        self.links = LinkStack(options.hyperlink_behavior)

    # -- InlineSink --

    def append_text(self, text: str) -> None:
        if not text:
            return
        if self.paragraph is not None:
            self.paragraph += text
            return
        last = self.blocks[-1] if self.blocks else None
        if isinstance(last, HeadingBlock):
            last.text += text
        elif isinstance(last, ParagraphBlock) and last.lines:
            last.lines[-1] += text
        else:
            self.paragraph = text

    def append_break(self) -> None:
        if self.paragraph is not None:
            self.paragraph += '\n'

    # -- helpers --

    def fragment(self, tokens: list, indent_level: int) -> str:
        return render_fragment(tokens, self.options, indent_level, self.spacing_rules)

    def flush_paragraph(self) -> None:
        if self.paragraph:
            self.blocks.append(ParagraphBlock(lines=self.paragraph.split('\n')))
        self.paragraph = None

    # -- driver --

    def collect(self, tokens: list) -> list[Block]:
        i = 0
        while i < len(tokens):
            i = self.visit(tokens, i) + 1
        self.flush_paragraph()
        return self.blocks

    def visit(self, tokens: list, i: int) -> int:
        """Handle tokens[i]; return the index of the last token consumed."""
        tok = tokens[i]
        t = tok.type

        if t == 'paragraph_open':
            self.flush_paragraph()
            self.paragraph = ''
        elif t == 'paragraph_close':
            if self.paragraph is not None:
                self.blocks.append(ParagraphBlock(lines=self.paragraph.split('\n')))
                self.paragraph = None
        elif t == 'inline':
            process_inline(tok.children, self, self.links, self.options)
        elif t == 'heading_open':
            self.flush_paragraph()
            self.blocks.append(HeadingBlock(level=heading_level(tok)))
        elif t in ('fence', 'code_block'):
            self.flush_paragraph()
            self.blocks.append(CodeBlock(lines=_code_lines(tok.content)))
        elif t in ('hr', 'thematic_break'):
            self.flush_paragraph()
            marker = HORIZONTAL_RULE_MARKER if self.options.preserve_horizontal_rule else HORIZONTAL_RULE_PLACEHOLDER
            self.blocks.append(RawBlock(text=marker))
        elif t == 'blockquote_open':
            self.flush_paragraph()
            inner, i = extract_block_tokens(tokens, i)
            text = collapse_blank_lines(self.fragment(inner, self.depth)).strip('\n')
            if text:
                self.blocks.append(BlockquoteBlock(lines=text.split('\n')))
        elif t in ('bullet_list_open', 'ordered_list_open'):
            self.flush_paragraph()
            ordered = t == 'ordered_list_open'
            inner, i = extract_block_tokens(tokens, i)
            items = parse_list_tokens(
                inner,
                ordered=ordered,
                start=list_start(tok) if ordered else 1,
                indent_level=self.depth + 1,
                render_fragment=self.fragment,
            )
            self.blocks.append(ListBlock(items=items))
        elif t == 'table_open':
            self.flush_paragraph()
            inner, i = extract_block_tokens(tokens, i)
            self.blocks.append(TableBlock(rows=parse_table_tokens(inner, self.fragment, self.depth)))
        elif t in INLINE_TYPES:
            # table cells hand over inline children directly
            process_inline_token(tok, self, self.links, self.options)
        return i


def collect_blocks(
    tokens: list,
    options: PlainTextOptions,
    indent_level: int = 0,
    spacing_rules: SpacingRules | None = None,
    ) -> list[Block]:
    """Collect the ordered Block sequence for a token slice at the given list depth."""
    blocks = _Collector(options, indent_level, spacing_rules).collect(tokens)
    logger.debug("Collected %d block(s) from %d token(s) at depth %d", len(blocks), len(tokens), indent_level)
    return blocks


def render_fragment(
    tokens: list,
    options: PlainTextOptions,
    indent_level: int,
    spacing_rules: SpacingRules | None = None,
    ) -> str:
    """Collect and format a bounded sub-span with fresh, isolated state."""
    return format_blocks(collect_blocks(tokens, options, indent_level, spacing_rules), options, spacing_rules)
