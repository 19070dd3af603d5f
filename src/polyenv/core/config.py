from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from polyenv.core.encoding import Encoding
from polyenv.core.env import SYSTEM_ENV, GetEnv
from polyenv.core.errors import OptionsError, OptionType
from polyenv.core.models import Dialect, LinebreakMode, LoadOptions

# Python 3.11+ has tomllib; for 3.9/3.10 use tomli
try:
    import tomllib  # type: ignore
except ModuleNotFoundError:  # pragma: no cover
    import tomli as tomllib  # type: ignore


# Repo-local config (closest one up the directory chain)
DEFAULT_REPO_CONFIG_FILES = (".polyenv.toml",)

# Global config (applies on this machine for all loads)
DEFAULT_GLOBAL_CONFIG_FILES = (
    "~/.config/polyenv/config.toml",
    "~/.polyenv.toml",
)

# LoadOptions field -> process variable
ENV_VARS: Dict[str, str] = {
    "path": "DOTENV_CONFIG_PATH",
    "encoding": "DOTENV_CONFIG_ENCODING",
    "dialect": "DOTENV_CONFIG_DIALECT",
    "strict": "DOTENV_CONFIG_STRICT",
    "debug": "DOTENV_CONFIG_DEBUG",
    "override": "DOTENV_CONFIG_OVERRIDE",
    "linebreak_mode": "DOTENV_LINEBREAK_MODE",
}

_BOOL_FIELDS = frozenset({"strict", "debug", "override"})


def parse_bool(value: str) -> Optional[bool]:
    v = value.strip().lower()
    if v in ("true", "1"):
        return True
    if v in ("false", "0"):
        return False
    return None


def _read_toml(path: Path) -> Dict[str, Any]:
    data = tomllib.loads(path.read_text(encoding="utf-8", errors="replace"))
    if not isinstance(data, dict):
        return {}
    section = data.get("load") or {}
    if not isinstance(section, dict):
        return {}
    return section


def _expand_paths(paths: Tuple[str, ...]) -> list[Path]:
    return [Path(p).expanduser().resolve() for p in paths]


def find_repo_config(start_dir: Path) -> Optional[Path]:
    """
    Walk upward to find a repo-local config (works even without git).
    Finds the closest config in parent chain.
    """
    cur = start_dir.resolve()
    for parent in [cur, *cur.parents]:
        for rel in DEFAULT_REPO_CONFIG_FILES:
            p = parent / rel
            if p.is_file():
                return p
    return None


def find_global_config() -> Optional[Path]:
    for p in _expand_paths(DEFAULT_GLOBAL_CONFIG_FILES):
        if p.is_file():
            return p
    return None


def options_from_env(env: GetEnv) -> Dict[str, Any]:
    """
    Read DOTENV_CONFIG_* (and DOTENV_LINEBREAK_MODE) from a variable store.

    Empty values count as unset. Errors name the offending variable.
    """
    out: Dict[str, Any] = {}
    for field, var in ENV_VARS.items():
        raw = env.get(var)
        if not raw:
            continue

        if field in _BOOL_FIELDS:
            value = parse_bool(raw)
            if value is None:
                raise OptionsError(var, raw, OptionType.BOOL)
            out[field] = value
        elif field == "encoding":
            out[field] = Encoding.from_name(raw, key=var)
        elif field == "dialect":
            out[field] = Dialect.from_name(raw, key=var)
        elif field == "linebreak_mode":
            out[field] = LinebreakMode.from_name(raw, key=var)
        else:
            out[field] = raw
    return out


@dataclass(frozen=True)
class LoadedConfig:
    options: LoadOptions
    global_path: Optional[Path]
    repo_path: Optional[Path]


def load_options(
    start_dir: Optional[Path] = None,
    *,
    env: GetEnv = SYSTEM_ENV,
    overrides: Optional[Dict[str, Any]] = None,
    use_config_files: bool = True,
) -> LoadedConfig:
    """
    Precedence (lowest -> highest):
      defaults (LoadOptions) ->
      global config ->
      repo config (closest) ->
      process variables ->
      overrides (None values are ignored)
    """
    global_path = find_global_config() if use_config_files else None
    repo_path = find_repo_config(start_dir or Path.cwd()) if use_config_files else None

    merged: Dict[str, Any] = {}

    if global_path:
        merged.update(_read_toml(global_path))

    if repo_path:
        merged.update(_read_toml(repo_path))

    merged.update(options_from_env(env))
    merged.update({k: v for k, v in (overrides or {}).items() if v is not None})

    return LoadedConfig(
        options=LoadOptions.model_validate(merged),
        global_path=global_path,
        repo_path=repo_path,
    )
