"""Semantic block model shared by the collector and the formatter"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, ClassVar, Optional, Union


class BlockKind(str, Enum):
    paragraph  = "paragraph"
    heading    = "heading"
    list       = "list"
    table      = "table"
    code       = "code"
    blockquote = "blockquote"
    raw        = "raw"


@dataclass
class ListItem:
    """One rendered list entry; index is only set for ordered lists."""
    content: str
    ordered: bool
    indent_level: int = 1           # nesting depth of the list, not of the token tree
    index: Optional[int] = None


@dataclass
class TableRow:
    cells: list[str]
    is_header: bool = False


@dataclass
class LinkStackItem:
    href: str                       # empty = not a tracked external link
    title: str = ""


@dataclass
class ParagraphBlock:
    kind: ClassVar[BlockKind] = BlockKind.paragraph
    lines: list[str] = field(default_factory=list)


@dataclass
class HeadingBlock:
    kind: ClassVar[BlockKind] = BlockKind.heading
    level: int = 1
    text: str = ""


@dataclass
class ListBlock:
    kind: ClassVar[BlockKind] = BlockKind.list
    items: list[ListItem] = field(default_factory=list)


@dataclass
class TableBlock:
    kind: ClassVar[BlockKind] = BlockKind.table
    rows: list[TableRow] = field(default_factory=list)


@dataclass
class CodeBlock:
    kind: ClassVar[BlockKind] = BlockKind.code
    lines: list[str] = field(default_factory=list)


@dataclass
class BlockquoteBlock:
    kind: ClassVar[BlockKind] = BlockKind.blockquote
    lines: list[str] = field(default_factory=list)


@dataclass
class RawBlock:
    kind: ClassVar[BlockKind] = BlockKind.raw
    text: str = ""


Block = Union[ParagraphBlock, HeadingBlock, ListBlock, TableBlock, CodeBlock, BlockquoteBlock, RawBlock]


@dataclass
class ParsedDoc:
    """Internal parse result carrying markdown-it tokens; not persisted."""
    path:        Optional[Path]
    slug:        str
    markdown:    str            # body only (frontmatter stripped)
    frontmatter: dict[str, Any]
    tokens:      list           # markdown-it Token objects
