"""Terminal display width of text (wide and combining characters aware)"""

import unicodedata

import wcwidth


def display_width(text: str) -> int:
    """Return the rendered column width of text.

    East Asian wide characters and emoji sequences (ZWJ families, flags)
    count as two columns, combining marks as zero. Control characters are
    dropped before measuring since wcswidth reports -1 for them.
    """
    printable = ''.join(c for c in text if unicodedata.category(c) != 'Cc')
    return max(0, wcwidth.wcswidth(printable))


def pad_to_width(text: str, width: int) -> str:
    """Right-pad text with spaces up to the given display width."""
    return text + ' ' * max(0, width - display_width(text))
