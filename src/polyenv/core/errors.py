from __future__ import annotations

from enum import Enum, IntEnum
from typing import Optional


class ExitCode(IntEnum):
    OK = 0
    SYNTAX = 1
    OPTIONS = 2
    ENCODING = 3
    IO = 4


class OptionType(str, Enum):
    BOOL = "bool"
    ENCODING = "encoding"
    DIALECT = "dialect"
    LINEBREAK_MODE = "linebreak mode"


class DotenvError(Exception):
    """Base class for every error raised by polyenv."""

    exit_code: ExitCode = ExitCode.SYNTAX


class OptionsError(DotenvError):
    """An option value could not be resolved (unknown alias, bad boolean)."""

    exit_code = ExitCode.OPTIONS

    def __init__(self, key: str, value: str, kind: OptionType) -> None:
        self.key = key
        self.value = value
        self.kind = kind
        super().__init__(f"illegal {kind.value} for {key}: {value!r}")


class EncodingError(DotenvError):
    """
    The byte stream does not match the declared encoding.

    Never downgraded by non-strict mode.
    """

    exit_code = ExitCode.ENCODING

    def __init__(self, encoding: str, reason: str, *, source: Optional[str] = None) -> None:
        self.encoding = encoding
        self.reason = reason
        self.source = source
        where = f"{source}: " if source else ""
        super().__init__(f"{where}invalid {encoding} data: {reason}")


class DotenvSyntaxError(DotenvError):
    exit_code = ExitCode.SYNTAX

    def __init__(self, source: str, line: int, column: int, message: str) -> None:
        self.source = source
        self.line = line
        self.column = column
        self.message = message
        super().__init__(f"{source}:{line}:{column}: {message}")
