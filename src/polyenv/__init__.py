from __future__ import annotations

from typing import List, Optional, Union

from polyenv.core.encoding import Encoding
from polyenv.core.engine import LoadResult, dotenv_values, load, load_stream
from polyenv.core.env import ENV_LOCK, EmptyEnv, Env, MappingEnv, SystemEnv
from polyenv.core.errors import (
    DotenvError,
    DotenvSyntaxError,
    EncodingError,
    OptionsError,
)
from polyenv.core.models import Dialect, LinebreakMode, LoadOptions, ParseOptions
from polyenv.parsers import Assignment, iter_assignments, parse_dotenv

__version__ = "0.1.0"

parse_stream = iter_assignments


def parse(
    data: Union[str, bytes],
    *,
    dialect: Union[Dialect, str, None] = None,
    encoding: Union[Encoding, str, None] = None,
    strict: bool = True,
    debug: bool = False,
    linebreak_mode: Union[LinebreakMode, str, None] = None,
    source: Optional[str] = None,
) -> List[Assignment]:
    """Parse dotenv content. bytes are decoded with encoding first."""
    opts = ParseOptions.model_validate(
        {
            k: v
            for k, v in {
                "dialect": dialect,
                "encoding": encoding,
                "strict": strict,
                "debug": debug,
                "linebreak_mode": linebreak_mode,
            }.items()
            if v is not None
        }
    )
    if isinstance(data, bytes):
        text = opts.encoding.decode(data, source=source)
    else:
        text = data
    return parse_dotenv(text, opts, source=source or "<string>")


__all__ = [
    "ENV_LOCK",
    "Assignment",
    "Dialect",
    "DotenvError",
    "DotenvSyntaxError",
    "EmptyEnv",
    "Encoding",
    "EncodingError",
    "Env",
    "LinebreakMode",
    "LoadOptions",
    "LoadResult",
    "MappingEnv",
    "OptionsError",
    "ParseOptions",
    "SystemEnv",
    "dotenv_values",
    "iter_assignments",
    "load",
    "load_stream",
    "parse",
    "parse_dotenv",
    "parse_stream",
]
