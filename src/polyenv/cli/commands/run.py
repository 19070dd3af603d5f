from __future__ import annotations

import subprocess
from pathlib import Path
from typing import List, Optional

import typer

from polyenv.cli.ui import get_ui, render_error, render_load_summary
from polyenv.cli.utils.options import (
    DebugOption,
    DialectOption,
    EncodingOption,
    LinebreakOption,
    OverrideOption,
    StrictOption,
    build_options,
)
from polyenv.core.engine import load
from polyenv.core.env import SYSTEM_ENV, MappingEnv
from polyenv.core.errors import DotenvError, ExitCode

# shell convention for "command not found"
EXIT_NOT_FOUND = 127


def run_cmd(
    command: List[str] = typer.Argument(..., help="Command to run (put it after --)."),
    files: List[Path] = typer.Option(
        [], "--file", "-f", dir_okay=False, help="Dotenv file(s), loaded in order (default: options path)."
    ),
    dialect: Optional[str] = DialectOption,
    encoding: Optional[str] = EncodingOption,
    strict: Optional[bool] = StrictOption,
    debug: bool = DebugOption,
    override: Optional[bool] = OverrideOption,
    linebreak_mode: Optional[str] = LinebreakOption,
    verbose: bool = typer.Option(False, "--verbose", help="Print a load summary to stderr."),
) -> None:
    """Run COMMAND with the variables from the dotenv file(s) added to its environment."""
    ui = get_ui(debug=debug)

    # the child gets a copy; our own process environment stays untouched
    sink = MappingEnv(SYSTEM_ENV.snapshot())
    try:
        loaded = build_options(
            Path.cwd(),
            dialect=dialect,
            encoding=encoding,
            strict=strict,
            debug=debug,
            override=override,
            linebreak_mode=linebreak_mode,
        )
        for path in files or [Path(loaded.options.path)]:
            result = load(path, env=sink, options=loaded.options)
            if verbose:
                render_load_summary(ui.err_console, result, header=str(path))
    except DotenvError as e:
        render_error(ui.err_console, e)
        raise typer.Exit(code=int(e.exit_code))
    except OSError as e:
        render_error(ui.err_console, e)
        raise typer.Exit(code=int(ExitCode.IO))

    try:
        proc = subprocess.run(command, env=dict(sink.data), check=False)
    except FileNotFoundError as e:
        render_error(ui.err_console, e)
        raise typer.Exit(code=EXIT_NOT_FOUND)

    raise typer.Exit(code=proc.returncode)
