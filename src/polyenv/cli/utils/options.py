from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional

import typer

from polyenv.core.config import LoadedConfig, load_options

# Shared typer options. None means "not given": config files and
# DOTENV_CONFIG_* decide.
DialectOption = typer.Option(
    None, "--dialect", "-d", help="Dialect name or alias (see `polyenv dialects`)."
)
EncodingOption = typer.Option(
    None, "--encoding", "-e", help="Encoding name or alias (see `polyenv encodings`)."
)
StrictOption = typer.Option(
    None, "--strict/--no-strict", help="Abort on malformed escapes/lines (default: strict)."
)
DebugOption = typer.Option(
    False, "--debug", help="Print diagnostics for malformed input to stderr."
)
OverrideOption = typer.Option(
    None, "--override/--no-override", help="Replace variables that are already set."
)
LinebreakOption = typer.Option(
    None, "--linebreak-mode", help="Ruby dialect only: default or legacy."
)


def build_options(
    start_dir: Path,
    *,
    dialect: Optional[str] = None,
    encoding: Optional[str] = None,
    strict: Optional[bool] = None,
    debug: bool = False,
    override: Optional[bool] = None,
    linebreak_mode: Optional[str] = None,
) -> LoadedConfig:
    cli_overrides: Dict[str, Any] = {
        "dialect": dialect,
        "encoding": encoding,
        "strict": strict,
        "debug": True if debug else None,
        "override": override,
        "linebreak_mode": linebreak_mode,
    }
    return load_options(start_dir=start_dir, overrides=cli_overrides)
