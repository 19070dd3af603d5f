from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Optional

import typer

from polyenv.cli.ui import (
    AssignmentsRenderOptions,
    get_ui,
    render_assignments_table,
    render_env,
    render_error,
    render_json,
    render_load_summary,
)
from polyenv.cli.utils.options import (
    DebugOption,
    DialectOption,
    EncodingOption,
    LinebreakOption,
    StrictOption,
    build_options,
)
from polyenv.core.engine import load
from polyenv.core.env import MappingEnv
from polyenv.core.errors import DotenvError, ExitCode


class OutputFormat(str, Enum):
    TABLE = "table"
    ENV = "env"
    JSON = "json"


def parse_cmd(
    file: Path = typer.Argument(
        ..., exists=True, dir_okay=False, help="Dotenv file to parse."
    ),
    dialect: Optional[str] = DialectOption,
    encoding: Optional[str] = EncodingOption,
    strict: Optional[bool] = StrictOption,
    debug: bool = DebugOption,
    linebreak_mode: Optional[str] = LinebreakOption,
    fmt: OutputFormat = typer.Option(
        OutputFormat.TABLE, "--format", "-f", help="Output format."
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Print config sources and a summary."),
) -> None:
    """Parse FILE and print the resulting variables (the environment is not touched)."""
    ui = get_ui(debug=debug)
    console = ui.console

    try:
        loaded = build_options(
            file.resolve().parent,
            dialect=dialect,
            encoding=encoding,
            strict=strict,
            debug=debug,
            linebreak_mode=linebreak_mode,
        )
        # every key is "new" in an empty sink; later duplicates replace earlier ones
        result = load(
            file, env=MappingEnv(), options=loaded.options, override=True
        )
    except DotenvError as e:
        render_error(ui.err_console, e)
        raise typer.Exit(code=int(e.exit_code))
    except OSError as e:
        render_error(ui.err_console, e)
        raise typer.Exit(code=int(ExitCode.IO))

    if verbose:
        console.print("[bold]Config sources:[/bold]")
        console.print(f"  global: {loaded.global_path or '-'}")
        console.print(f"  repo:   {loaded.repo_path or '-'}")
        console.print(f"  dialect: {loaded.options.dialect.value}  encoding: {loaded.options.encoding.value}")
        console.print()

    if fmt is OutputFormat.ENV:
        render_env(console, result.assignments)
    elif fmt is OutputFormat.JSON:
        render_json(console, result.assignments)
    else:
        render_assignments_table(
            console,
            result.assignments,
            opts=AssignmentsRenderOptions(title=f"{file} ({len(result.assignments)})"),
        )
        if verbose:
            render_load_summary(console, result)

    raise typer.Exit(code=int(ExitCode.OK))
