from __future__ import annotations

import logging
from dataclasses import dataclass

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

from polyenv.cli.ui.formatters import (
    AssignmentsRenderOptions,
    render_assignments_table,
    render_env,
    render_error,
    render_json,
    render_load_summary,
)

THEME = Theme(
    {
        "ok": "green",
        "warn": "yellow",
        "error": "bold red",
        "muted": "dim",
        "key": "cyan",
        "path": "magenta",
    }
)


@dataclass(frozen=True)
class UI:
    console: Console
    err_console: Console
    debug: bool = False


def setup_logging(err_console: Console, *, debug: bool) -> None:
    """Route library diagnostics to stderr through rich."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False, markup=False)],
        force=True,
    )


def get_ui(*, debug: bool = False) -> UI:
    # values are printed as parsed; ":smile:" must not turn into an emoji
    console = Console(theme=THEME, emoji=False)
    err_console = Console(theme=THEME, stderr=True, emoji=False)
    setup_logging(err_console, debug=debug)
    return UI(console=console, err_console=err_console, debug=debug)


__all__ = [
    "UI",
    "AssignmentsRenderOptions",
    "get_ui",
    "render_assignments_table",
    "render_env",
    "render_error",
    "render_json",
    "render_load_summary",
    "setup_logging",
]
