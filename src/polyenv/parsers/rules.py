from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping, Optional, Pattern

from polyenv.parsers.escapes import EscapeTable


class InlineComment(str, Enum):
    NONE = "none"
    HASH = "hash"              # KEY=value#comment -> "value"
    SPACE_HASH = "space_hash"  # KEY=value #comment -> "value", value#x stays


class QuoteStyle(str, Enum):
    WRAPPED = "wrapped"  # quoted only if the trimmed value starts AND ends with the quote
    LEADING = "leading"  # opening quote starts the value, scan for the closing one


class Trailing(str, Enum):
    """What may follow the closing quote on its line."""

    IGNORE = "ignore"
    COMMENT = "comment"  # otherwise re-read the value as unquoted text
    STRICT = "strict"    # otherwise the line is malformed


class Unterminated(str, Enum):
    UNQUOTED = "unquoted"    # parse as an unquoted value
    RAW = "raw"              # rest of the line, verbatim
    MALFORMED = "malformed"


class Malformed(str, Enum):
    SKIP = "skip"    # never fatal; logged in debug mode
    ERROR = "error"  # fatal in strict mode


class ReadMode(str, Enum):
    TEXT = "text"    # decode the whole buffer, then split into lines
    LINES = "lines"  # stream lines through Encoding.read_line


class QuoteScan(str, Enum):
    """How the closing quote is found."""

    PLAIN = "plain"                        # first quote char closes
    BACKSLASH_BEFORE = "backslash_before"  # a quote right after any backslash does not close
    ESCAPE_PAIRS = "escape_pairs"          # a backslash consumes the next char, whatever it is


@dataclass(frozen=True)
class QuoteRule:
    escapes: Optional[EscapeTable] = None  # None -> verbatim
    multiline: bool = False
    scan: QuoteScan = QuoteScan.PLAIN


@dataclass(frozen=True)
class DialectRules:
    name: str
    separators: str = "="
    # ":" only separates when followed by a blank ("KEY: value")
    colon_needs_blank: bool = False
    key_pattern: Optional[Pattern[str]] = None
    inline_comment: InlineComment = InlineComment.NONE
    quote_style: QuoteStyle = QuoteStyle.LEADING
    quotes: Mapping[str, QuoteRule] = field(default_factory=dict)
    unquoted_escapes: Optional[EscapeTable] = None
    # strip a matching quote pair that survived as unquoted text (regex backtracking)
    unwrap_unquoted: bool = False
    trailing: Trailing = Trailing.IGNORE
    unterminated: Unterminated = Unterminated.UNQUOTED
    malformed: Malformed = Malformed.ERROR
    read_mode: ReadMode = ReadMode.LINES

    def key_ok(self, key: str) -> bool:
        return self.key_pattern is None or self.key_pattern.fullmatch(key) is not None
