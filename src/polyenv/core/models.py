from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from polyenv.core.encoding import Encoding
from polyenv.core.errors import OptionsError, OptionType


# ================================
# Enums
# ================================


class Dialect(str, Enum):
    JAVASCRIPT_DOTENV = "javascript-dotenv"
    NODEJS = "nodejs"
    PYTHON_DOTENV = "python-dotenv"
    PYTHON_DOTENV_CLI = "python-dotenv-cli"
    RUBY_DOTENV = "ruby-dotenv"
    JAVA_DOTENV = "java-dotenv"
    GODOTENV = "godotenv"

    @classmethod
    def from_name(cls, name: Optional[str], *, key: str = "dialect") -> "Dialect":
        if not name:
            return DEFAULT_DIALECT
        found = _DIALECT_ALIASES.get(name.strip().lower())
        if found is None:
            raise OptionsError(key, name, OptionType.DIALECT)
        return found


class LinebreakMode(str, Enum):
    """Ruby dotenv's DOTENV_LINEBREAK_MODE."""

    DEFAULT = "default"
    LEGACY = "legacy"

    @classmethod
    def from_name(cls, name: Optional[str], *, key: str = "linebreak_mode") -> "LinebreakMode":
        if not name:
            return cls.DEFAULT
        try:
            return cls(name.strip().lower())
        except ValueError:
            raise OptionsError(key, name, OptionType.LINEBREAK_MODE) from None


DEFAULT_DIALECT = Dialect.JAVASCRIPT_DOTENV

DIALECT_ALIASES: Dict[Dialect, Tuple[str, ...]] = {
    Dialect.JAVASCRIPT_DOTENV: ("javascript-dotenv", "javascript", "js", "dotenv"),
    Dialect.NODEJS: ("nodejs", "node", "node.js"),
    Dialect.PYTHON_DOTENV: ("python-dotenv", "python", "py"),
    Dialect.PYTHON_DOTENV_CLI: ("python-dotenv-cli", "python-cli", "dotenv-cli"),
    Dialect.RUBY_DOTENV: ("ruby-dotenv", "ruby", "rb"),
    Dialect.JAVA_DOTENV: ("java-dotenv", "java", "dotenv-java"),
    Dialect.GODOTENV: ("godotenv", "go", "go-dotenv", "golang"),
}

_DIALECT_ALIASES: Dict[str, Dialect] = {
    alias: d for d, aliases in DIALECT_ALIASES.items() for alias in aliases
}


# ================================
# Options
# ================================

DEFAULT_PATH = ".env"


class ParseOptions(BaseModel):
    """
    Knobs consumed by the parser.

    encoding/dialect accept their enum or any alias string.
    """

    model_config = ConfigDict(frozen=True)

    encoding: Encoding = Encoding.UTF8
    dialect: Dialect = DEFAULT_DIALECT
    strict: bool = True
    debug: bool = False
    linebreak_mode: LinebreakMode = LinebreakMode.DEFAULT

    @field_validator("encoding", mode="before")
    @classmethod
    def _resolve_encoding(cls, v: Any) -> Any:
        if isinstance(v, str) and not isinstance(v, Encoding):
            return Encoding.from_name(v)
        return v

    @field_validator("dialect", mode="before")
    @classmethod
    def _resolve_dialect(cls, v: Any) -> Any:
        if isinstance(v, str) and not isinstance(v, Dialect):
            return Dialect.from_name(v)
        return v

    @field_validator("linebreak_mode", mode="before")
    @classmethod
    def _resolve_linebreak_mode(cls, v: Any) -> Any:
        if isinstance(v, str) and not isinstance(v, LinebreakMode):
            return LinebreakMode.from_name(v)
        return v


class LoadOptions(ParseOptions):
    """
    Defaults live here.
    Global/repo/process overrides are merged by core/config.py.
    """

    path: str = Field(default=DEFAULT_PATH, min_length=1)
    override: bool = False
