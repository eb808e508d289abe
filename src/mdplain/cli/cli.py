"""CLI entrypoint: Typer app definition and command registration"""

import typer

from mdplain.cli.commands import convert_cmd, init_cmd


app = typer.Typer(name="mdplain", no_args_is_help=True, help="Markdown to structured plain text")

app.command(name="convert")(convert_cmd)
app.command(name="init")(init_cmd)
