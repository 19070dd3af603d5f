from __future__ import annotations

import json
import shlex
from dataclasses import dataclass
from typing import Dict, Optional, Sequence, Tuple

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from polyenv.core.engine import LoadResult
from polyenv.core.errors import DotenvError, DotenvSyntaxError
from polyenv.parsers.types import Assignment


def _short(s: str, max_len: int = 140) -> str:
    s = s or ""
    if len(s) <= max_len:
        return s
    return s[:max_len] + "…"


def _visible(value: str) -> str:
    # control characters would garble the table
    return repr(value)[1:-1] if not value.isprintable() else value


# ----------------------------
# Assignment tables
# ----------------------------

@dataclass(frozen=True)
class AssignmentsRenderOptions:
    title: Optional[str] = None


def render_assignments_table(
    console: Console,
    assignments: Sequence[Assignment],
    *,
    opts: Optional[AssignmentsRenderOptions] = None,
) -> None:
    opts = opts or AssignmentsRenderOptions()

    if not assignments:
        console.print("[muted]No assignments.[/muted]")
        return

    table = Table(title=opts.title or f"Assignments ({len(assignments)})", show_lines=False)
    table.add_column("Line", justify="right", no_wrap=True)
    table.add_column("Key", style="key", no_wrap=True)
    table.add_column("Value")

    for a in assignments:
        table.add_row(str(a.line), escape(a.key), escape(_short(_visible(a.value), 120)))

    console.print(table)


def render_env(console: Console, assignments: Sequence[Assignment]) -> None:
    """KEY=value lines, shell-quoted so the output can be sourced."""
    for a in assignments:
        console.print(f"{a.key}={shlex.quote(a.value)}", markup=False, highlight=False, soft_wrap=True)


def render_json(console: Console, assignments: Sequence[Assignment]) -> None:
    data: Dict[str, str] = {}
    for a in assignments:
        data[a.key] = a.value
    console.print(json.dumps(data, indent=2, ensure_ascii=False), markup=False, highlight=False, soft_wrap=True)


# ----------------------------
# Summaries / errors
# ----------------------------

def render_load_summary(console: Console, result: LoadResult, *, header: str = "Summary") -> None:
    cols: Tuple[str, ...] = ("source", "assignments", "applied", "kept", "duration_ms")
    vals = (
        escape(result.source),
        str(len(result.assignments)),
        str(len(result.applied)),
        str(len(result.kept)),
        str(result.duration_ms),
    )

    table = Table(title=header, show_header=True, show_lines=False)
    for c in cols:
        table.add_column(c, style="bold", no_wrap=True)
    table.add_row(*vals)

    console.print()
    console.print(table)


def render_error(console: Console, error: BaseException) -> None:
    if isinstance(error, DotenvSyntaxError):
        console.print(
            f"[error]syntax error[/error] [path]{escape(error.source)}[/path]"
            f":{error.line}:{error.column}: {escape(error.message)}"
        )
    elif isinstance(error, DotenvError):
        console.print(f"[error]error:[/error] {escape(str(error))}")
    else:
        console.print(f"[error]{type(error).__name__}:[/error] {escape(str(error))}")
