from __future__ import annotations

import logging
import time
from contextlib import nullcontext
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, BinaryIO, ContextManager, Dict, List, Optional, Union

from polyenv.core.config import load_options
from polyenv.core.env import ENV_LOCK, SYSTEM_ENV, Env, MappingEnv, SystemEnv, apply
from polyenv.core.models import LoadOptions
from polyenv.parsers import iter_assignments
from polyenv.parsers.types import Assignment

log = logging.getLogger(__name__)

PathLike = Union[str, Path]


@dataclass
class LoadResult:
    source: str
    assignments: List[Assignment] = field(default_factory=list)
    applied: List[str] = field(default_factory=list)
    kept: List[str] = field(default_factory=list)  # already set, override off
    duration_ms: int = 0


def _lock_for(env: Env) -> ContextManager[Any]:
    # only the process environment is shared between runs
    return ENV_LOCK if isinstance(env, SystemEnv) else nullcontext()


def load_stream(
    stream: BinaryIO,
    env: Env,
    options: LoadOptions,
    *,
    source: str = "<stream>",
) -> LoadResult:
    """
    Parse a byte stream and push every assignment into env, in file order.

    Assignments before a fatal error have already been applied when it is
    raised.
    """
    t0 = time.perf_counter()
    result = LoadResult(source=source)

    with _lock_for(env):
        for a in iter_assignments(stream, options, source=source):
            result.assignments.append(a)
            if apply(env, a.key, a.value, override=options.override):
                result.applied.append(a.key)
            else:
                result.kept.append(a.key)

    result.duration_ms = int((time.perf_counter() - t0) * 1000)
    log.debug(
        "%s: %d assignment(s), %d applied, %d kept (%s, %s)",
        source,
        len(result.assignments),
        len(result.applied),
        len(result.kept),
        options.dialect.value,
        options.encoding.value,
    )
    return result


def resolve_options(
    options: Optional[LoadOptions] = None,
    *,
    env: Env = SYSTEM_ENV,
    **overrides: Any,
) -> LoadOptions:
    if options is None:
        return load_options(env=env, overrides=overrides).options
    if not overrides:
        return options
    # re-validate so alias strings in overrides get resolved
    data: Dict[str, Any] = options.model_dump()
    data.update({k: v for k, v in overrides.items() if v is not None})
    return LoadOptions.model_validate(data)


def load(
    path: Optional[PathLike] = None,
    *,
    env: Optional[Env] = None,
    options: Optional[LoadOptions] = None,
    **overrides: Any,
) -> LoadResult:
    """
    Load a dotenv file into env (the process environment by default).

    Without explicit options they are assembled from config files and
    DOTENV_CONFIG_* variables (looked up in env itself).
    """
    env = SYSTEM_ENV if env is None else env
    opts = resolve_options(options, env=env, **overrides)
    file_path = Path(path) if path is not None else Path(opts.path)

    with file_path.open("rb") as fh:
        return load_stream(fh, env, opts, source=str(file_path))


def dotenv_values(path: PathLike, **overrides: Any) -> Dict[str, str]:
    """Parse a file into a dict without touching the process environment."""
    overrides.setdefault("override", True)
    sink = MappingEnv()
    load(path, env=sink, options=LoadOptions.model_validate(overrides))
    return dict(sink.data)
