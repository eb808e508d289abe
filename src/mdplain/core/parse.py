"""File discovery, frontmatter extraction, and markdown-it tokenization

The parser enables ~sub~ and ^sup^ through mdit-py-plugins. There is no
plugin for ==mark== or ++insert++ syntax, so those pass through as literal
text; mark_open/ins_open tokens are still honoured when another parser emits them.
"""

import logging
import re
from pathlib import Path
from typing import Any, Optional

import yaml
from markdown_it import MarkdownIt
from mdit_py_plugins.subscript import sub_plugin
from mdit_py_plugins.superscript import superscript_plugin

from mdplain.core.models import ParsedDoc
from mdplain.core.utils.slug import slugify


logger = logging.getLogger(__name__)

FRONTMATTER_RE = re.compile(r'^---\s*\n(.*?)\n---\s*\n', re.DOTALL)
MD_EXTENSIONS = {'.md', '.mdx', '.markdown'}


def make_parser(preset: str = 'gfm-like') -> MarkdownIt:
    """Build a MarkdownIt instance for the given preset with sub/superscript syntax enabled."""
    return (
        MarkdownIt(preset, options_update={"linkify": False})
        .use(sub_plugin)
        .use(superscript_plugin)
    )


def _strip_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Return (frontmatter_dict, body) with YAML header removed."""
    m = FRONTMATTER_RE.match(text)
    if m:
        try:
            fm = yaml.safe_load(m.group(1)) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML frontmatter: {e}") from e
        if not isinstance(fm, dict):
            raise ValueError(f"Invalid YAML frontmatter: expected a mapping, got {type(fm).__name__}")
        return fm, text[m.end():]
    return {}, text


def discover_files(path: Path) -> list[Path]:
    """Return sorted markdown files under path, or [path] if a single file."""
    if path.is_file():
        return [path] if path.suffix in MD_EXTENSIONS else []
    return sorted(p for p in path.rglob('*') if p.is_file() and p.suffix in MD_EXTENSIONS)


def parse_text(markdown: str, preset: str = 'gfm-like', path: Optional[Path] = None) -> ParsedDoc:
    """Tokenize markdown text (frontmatter stripped) into a ParsedDoc."""
    frontmatter, body = _strip_frontmatter(markdown)
    tokens = make_parser(preset).parse(body)
    logger.debug("Parsed %d token(s) with preset %r", len(tokens), preset)
    slug = frontmatter.get('slug') or slugify(path.stem if path else 'document')
    return ParsedDoc(
        path=path,
        slug=str(slug),
        markdown=body,
        frontmatter=frontmatter,
        tokens=tokens,
    )


def parse_file(path: Path, preset: str = 'gfm-like') -> ParsedDoc:
    """Parse a single markdown file into a ParsedDoc with token stream."""
    return parse_text(path.read_text(encoding='utf-8'), preset, path)
