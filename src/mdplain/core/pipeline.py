"""Pipeline step functions: render tokens/markdown and convert files to plain text"""

import logging
from pathlib import Path
from typing import Optional

from mdplain.core.parse import discover_files, parse_file, parse_text
from mdplain.core.render.collector import collect_blocks
from mdplain.core.render.formatter import SpacingRules, format_blocks
from mdplain.options import PlainTextOptions


logger = logging.getLogger(__name__)

OUTPUT_SUFFIX = '.txt'


def render_tokens(
    tokens: list,
    options: PlainTextOptions,
    spacing_rules: Optional[SpacingRules] = None,
    ) -> str:
    """Render a full markdown-it token stream to plain text (no trailing blank lines)."""
    blocks = collect_blocks(tokens, options, 0, spacing_rules)
    return format_blocks(blocks, options, spacing_rules)


def render_markdown(
    markdown: str,
    options: Optional[PlainTextOptions] = None,
    preset: str = 'gfm-like',
    spacing_rules: Optional[SpacingRules] = None,
    ) -> str:
    """Tokenize markdown text and render it to plain text."""
    parsed = parse_text(markdown, preset)
    return render_tokens(parsed.tokens, options or PlainTextOptions(), spacing_rules)


def run_convert(
    path: str,
    options: PlainTextOptions,
    preset: str,
    output_dir: Path,
    ) -> list[tuple[Path, Path]]:
    """Render every markdown file under path into output_dir. Returns (source, output) pairs.

    Output path mirrors the source layout relative to path:
      output_dir / <relative parent> / <slug>.txt
    """
    root = Path(path)
    base = root.parent if root.is_file() else root
    results = []
    for p in discover_files(root):
        try:
            parsed = parse_file(p, preset)
            text = render_tokens(parsed.tokens, options)
            dest_dir = output_dir / p.parent.relative_to(base)
            dest_dir.mkdir(parents=True, exist_ok=True)
            out_file = dest_dir / f"{parsed.slug}{OUTPUT_SUFFIX}"
            out_file.write_text(text + '\n', encoding='utf-8')
        except Exception as e:
            raise RuntimeError(f"Failed to convert {p}: {e}") from e
        logger.debug("Converted %s -> %s", p, out_file)
        results.append((p, out_file))
    return results
