"""Table assembly: token span -> rows -> aligned plain text"""

from typing import Callable

from mdplain.core.models import TableRow
from mdplain.core.utils.width import display_width, pad_to_width


MIN_COLUMN_WIDTH = 3
CELL_GAP = 2

FragmentRenderer = Callable[[list, int], str]


def _cell_text(tokens: list, start: int, render_fragment: FragmentRenderer, indent_level: int) -> tuple[str, int]:
    """Collect a cell opened at tokens[start]; return (trimmed text, index of its close)."""
    parts: list[str] = []
    i = start + 1
    while i < len(tokens) and tokens[i].type not in ('th_close', 'td_close'):
        tok = tokens[i]
        if tok.type == 'inline' and tok.children:
            parts.append(render_fragment(tok.children, indent_level))
        elif tok.type == 'text':
            parts.append(tok.content)
        i += 1
    return ''.join(parts).strip(), i


def parse_table_tokens(tokens: list, render_fragment: FragmentRenderer, indent_level: int) -> list[TableRow]:
    """Build TableRows from the tokens between table_open and table_close.

    Rows shorter than the widest row are padded with empty cells so every row
    has the same column count.
    """
    rows: list[TableRow] = []
    current: list[str] = []
    in_header = False
    i = 0
    while i < len(tokens):
        t = tokens[i].type
        if t == 'thead_open':
            in_header = True
        elif t == 'thead_close':
            in_header = False
        elif t == 'tr_open':
            current = []
        elif t in ('th_open', 'td_open'):
            text, i = _cell_text(tokens, i, render_fragment, indent_level)
            current.append(text)
        elif t == 'tr_close':
            rows.append(TableRow(cells=current, is_header=in_header))
        i += 1

    columns = max((len(r.cells) for r in rows), default=0)
    for r in rows:
        r.cells.extend([''] * (columns - len(r.cells)))
    return rows


def calculate_column_widths(rows: list[TableRow]) -> list[int]:
    """Max display width of each column over all rows."""
    widths: list[int] = []
    for row in rows:
        for c, cell in enumerate(row.cells):
            if c == len(widths):
                widths.append(0)
            widths[c] = max(widths[c], display_width(cell))
    return widths


def format_table(rows: list[TableRow], widths: list[int] | None = None) -> str:
    """Render rows as left-aligned, space-padded columns.

    A dash separator follows the first header row unless the table is that
    header row alone.
    """
    if widths is None:
        widths = calculate_column_widths(rows)
    gap = ' ' * CELL_GAP
    lines: list[str] = []
    header_done = False
    for row in rows:
        lines.append(gap.join(pad_to_width(cell, widths[c]) for c, cell in enumerate(row.cells)))
        if row.is_header and not header_done and len(rows) > 1:
            lines.append(gap.join('-' * max(MIN_COLUMN_WIDTH, w) for w in widths))
            header_done = True
    return '\n'.join(lines) + '\n' if lines else ''
