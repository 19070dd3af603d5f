from __future__ import annotations

import typer
from rich.console import Console

from polyenv import __version__
from polyenv.cli.commands.info import dialects_cmd, encodings_cmd
from polyenv.cli.commands.parse import parse_cmd
from polyenv.cli.commands.run import run_cmd

app = typer.Typer(
    name="polyenv",
    help="Load .env files the way JavaScript, Node.js, Python, Ruby, Java or Go dotenv tools would.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console()


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"polyenv {__version__}")
        raise typer.Exit(0)


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", help="Show version and exit.", callback=_version_callback, is_eager=True
    ),
) -> None:
    pass


app.command("parse")(parse_cmd)
app.command(
    "run",
    context_settings={"allow_interspersed_args": False, "ignore_unknown_options": True},
)(run_cmd)
app.command("dialects")(dialects_cmd)
app.command("encodings")(encodings_cmd)
