"""Unit tests for core/render/collector.py"""

from mdplain.core.models import (
    BlockquoteBlock,
    CodeBlock,
    HeadingBlock,
    ListBlock,
    ParagraphBlock,
    RawBlock,
    TableBlock,
)
from mdplain.core.render.collector import collect_blocks, render_fragment
from mdplain.options import PlainTextOptions


def _collect(parser, md: str, **opts):
    return collect_blocks(parser.parse(md), PlainTextOptions(**opts))


def test_block_order_matches_document(parser):
    md = "# H\n\npara\n\n- a\n\n| A |\n|---|\n| 1 |\n\n```\ncode\n```\n\n> q\n\n---\n"
    kinds = [type(b) for b in _collect(parser, md)]
    assert kinds == [HeadingBlock, ParagraphBlock, ListBlock, TableBlock, CodeBlock, BlockquoteBlock, RawBlock]


def test_heading_text_routed_into_heading(parser):
    blocks = _collect(parser, "## Some *styled* title\n")
    assert blocks == [HeadingBlock(level=2, text="Some styled title")]


def test_soft_break_stays_in_one_paragraph(parser):
    blocks = _collect(parser, "Line one\nLine two\n")
    assert blocks == [ParagraphBlock(lines=["Line one", "Line two"])]


def test_hard_break_splits_lines(parser):
    blocks = _collect(parser, "Line one  \nLine two\n")
    assert blocks == [ParagraphBlock(lines=["Line one", "Line two"])]


def test_code_block_strips_trailing_newlines_only(parser):
    blocks = _collect(parser, "```\n  indented *x*\n\n\n```\n")
    assert blocks == [CodeBlock(lines=["  indented *x*"])]


def test_indented_code_block(parser):
    blocks = _collect(parser, "    a = 1\n    b = 2\n")
    assert blocks == [CodeBlock(lines=["a = 1", "b = 2"])]


def test_horizontal_rule_placeholder_and_marker(parser):
    assert _collect(parser, "---\n") == [RawBlock(text="\u00a0")]
    assert _collect(parser, "---\n", preserve_horizontal_rule=True) == [RawBlock(text="---")]


def test_blockquote_rendered_as_fragment(parser):
    blocks = _collect(parser, "> first\n>\n> second\n")
    assert blocks == [BlockquoteBlock(lines=["first", "", "second"])]


def test_blockquote_with_list(parser):
    blocks = _collect(parser, "> - a\n> - b\n")
    assert blocks == [BlockquoteBlock(lines=["- a", "", "- b"])]


def test_ordered_list_reads_start(parser):
    (block,) = _collect(parser, "3. three\n4. four\n")
    assert [(i.index, i.content) for i in block.items] == [(3, "three"), (4, "four")]


def test_nested_list_depths(parser):
    (block,) = _collect(parser, "- a\n- b\n  - c\n")
    assert [i.indent_level for i in block.items] == [1, 1]
    assert block.items[1].content == "b\n\n    - c"


def test_depth_restored_after_nested_list(parser):
    """A sibling list after a deeply nested one starts again at the caller's depth."""
    blocks = _collect(parser, "- a\n  - b\n    - c\n\npara\n\n- d\n")
    lists = [b for b in blocks if isinstance(b, ListBlock)]
    assert [i.indent_level for i in lists[-1].items] == [1]


def test_fragment_depth_offsets_list_indent(parser):
    """A fragment rendered at depth 2 indents its lists at level 3."""
    text = render_fragment(parser.parse("- x\n"), PlainTextOptions(), 2)
    assert text == "        - x"


def test_link_state_isolated_between_items(tok):
    """An unclosed external link inside one item never swallows text of the next."""
    tokens = [
        tok("bullet_list_open", "ul", 1),
        tok("list_item_open", "li", 1),
        tok("inline", children=[tok("link_open", "a", 1, attrs={"href": "https://x.org"}), tok("text", content="a")]),
        tok("list_item_close", "li", -1),
        tok("list_item_open", "li", 1),
        tok("inline", children=[tok("text", content="b")]),
        tok("list_item_close", "li", -1),
        tok("bullet_list_close", "ul", -1),
    ]
    (block,) = collect_blocks(tokens, PlainTextOptions(hyperlink_behavior="url"))
    assert [i.content for i in block.items] == ["", "b"]


def test_heading_level_clamped(tok):
    tokens = [tok("heading_open", "h9", 1), tok("inline", children=[tok("text", content="T")]), tok("heading_close", "h9", -1)]
    assert collect_blocks(tokens, PlainTextOptions()) == [HeadingBlock(level=6, text="T")]


def test_unknown_tokens_ignored(tok):
    tokens = [
        tok("paragraph_open", "p", 1),
        tok("inline", children=[tok("text", content="kept")]),
        tok("paragraph_close", "p", -1),
        tok("math_block", content="x^2"),
        tok("html_block", content="<div></div>"),
    ]
    assert collect_blocks(tokens, PlainTextOptions()) == [ParagraphBlock(lines=["kept"])]


def test_top_level_inline_tokens_form_paragraph(tok):
    """Bare inline tokens (table-cell children) collect into one paragraph."""
    tokens = [tok("strong_open", "strong", 1, markup="**"), tok("text", content="x"), tok("strong_close", "strong", -1, markup="**")]
    assert collect_blocks(tokens, PlainTextOptions(preserve_bold=True)) == [ParagraphBlock(lines=["**x**"])]


def test_text_after_paragraph_extends_last_line(tok):
    tokens = [
        tok("paragraph_open", "p", 1),
        tok("inline", children=[tok("text", content="a")]),
        tok("paragraph_close", "p", -1),
        tok("text", content="b"),
    ]
    assert collect_blocks(tokens, PlainTextOptions()) == [ParagraphBlock(lines=["ab"])]


def test_empty_paragraph_not_pushed_on_flush(tok):
    tokens = [tok("paragraph_open", "p", 1), tok("heading_open", "h1", 1), tok("heading_close", "h1", -1)]
    assert collect_blocks(tokens, PlainTextOptions()) == [HeadingBlock(level=1, text="")]
