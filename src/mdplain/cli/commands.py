"""CLI command implementations"""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer

from mdplain.config import CONFIG_FILE, Settings, default_config_yaml, load_config
from mdplain.core.parse import parse_file
from mdplain.core.pipeline import render_tokens, run_convert


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling, then apply its log level."""
    try:
        settings = load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))
    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")
    return settings


def convert_cmd(
    path: Annotated[str, typer.Argument(help="Markdown file or directory to convert")],
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Write .txt files here instead of stdout")] = None,
    hyperlinks: Annotated[Optional[str], typer.Option("--hyperlinks", help="title, url or markdown")] = None,
    indent: Annotated[Optional[str], typer.Option("--indent", help="spaces or tabs")] = None,
    bold: Annotated[Optional[bool], typer.Option("--preserve-bold/--strip-bold", help="Keep **bold** markers")] = None,
    emphasis: Annotated[Optional[bool], typer.Option("--preserve-emphasis/--strip-emphasis", help="Keep *emphasis* markers")] = None,
    heading: Annotated[Optional[bool], typer.Option("--preserve-heading/--strip-heading", help="Keep # heading markers")] = None,
    rule: Annotated[Optional[bool], typer.Option("--preserve-hr/--strip-hr", help="Render horizontal rules as ---")] = None,
    emojis: Annotated[Optional[bool], typer.Option("--emojis/--no-emojis", help="Emit emoji glyphs")] = None,
    parser: Annotated[Optional[str], typer.Option("--parser-config", help="MarkdownIt preset name")] = None,
    log_level: Annotated[Optional[str], typer.Option("--log-level", help="DEBUG, INFO, WARNING or ERROR")] = None,
    ):
    """Convert markdown to structured plain text."""
    settings = _settings(overrides={
        "hyperlink_behavior": hyperlinks, "indent_type": indent,
        "preserve_bold": bold, "preserve_emphasis": emphasis, "preserve_heading": heading,
        "preserve_horizontal_rule": rule, "display_emojis": emojis,
        "parser_config": parser, "log_level": log_level,
    })
    options = settings.plain_text_options()
    src = Path(path)
    if not src.exists():
        _fail(f"No such file or directory: {path}")

    # a single file without --out-dir goes to stdout
    if src.is_file() and out is None:
        try:
            parsed = parse_file(src, settings.parser_config)
        except (OSError, ValueError) as e:
            _fail(f"Failed to read {src}", e)
        typer.echo(render_tokens(parsed.tokens, options))
        return

    output_dir = Path(out or settings.output_dir)
    try:
        results = run_convert(path, options, settings.parser_config, output_dir)
    except RuntimeError as e:
        _fail(str(e))
    for source, out_file in results:
        typer.echo(f"  {source} -> {out_file}")
    typer.echo(f"Converted {len(results)} document(s) to {output_dir}/")


def init_cmd(
    force: Annotated[bool, typer.Option("--force", help="Overwrite an existing config.yaml")] = False,
    ):
    """Write a config.yaml holding the default settings."""
    target = Path(CONFIG_FILE)
    if target.exists() and not force:
        _fail(f"{CONFIG_FILE} already exists. Use --force to overwrite.")
    target.write_text(default_config_yaml())
    typer.echo(f"Wrote default settings to {target}")
