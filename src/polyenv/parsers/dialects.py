"""
Rule tables for every supported dialect.

Each table mirrors the grammar of one reference tool:

  javascript-dotenv  npm "dotenv" (LINE regex + newline expansion)
  nodejs             node --env-file
  python-dotenv      PyPI "python-dotenv"
  python-dotenv-cli  PyPI "dotenv-cli"
  ruby-dotenv        RubyGems "dotenv"
  java-dotenv        io.github.cdimascio:dotenv-java
  godotenv           github.com/joho/godotenv
"""

from __future__ import annotations

import re
from dataclasses import replace
from typing import Dict

from polyenv.core.models import Dialect, LinebreakMode
from polyenv.parsers.escapes import EscapeTable, Fallback
from polyenv.parsers.rules import (
    DialectRules,
    InlineComment,
    Malformed,
    QuoteRule,
    QuoteScan,
    QuoteStyle,
    ReadMode,
    Trailing,
    Unterminated,
)

# ----------------------------
# Escape tables
# ----------------------------

PYTHON_CLI_ESCAPES = EscapeTable(
    simple={
        "\\": "\\",
        "'": "'",
        '"': '"',
        "a": "\x07",
        "b": "\x08",
        "f": "\x0c",
        "n": "\n",
        "r": "\r",
        "t": "\t",
        "v": "\x0b",
    },
    line_continuation=True,
    octal=True,
    hex=True,
    unicode=True,
    fallback=Fallback.REPORT,
)

PYTHON_DOUBLE_ESCAPES = EscapeTable(
    simple={
        "\\": "\\",
        "'": "'",
        '"': '"',
        "a": "\x07",
        "b": "\x08",
        "f": "\x0c",
        "n": "\n",
        "r": "\r",
        "t": "\t",
        "v": "\x0b",
    },
)

PYTHON_SINGLE_ESCAPES = EscapeTable(simple={"\\": "\\", "'": "'"})

JAVASCRIPT_ESCAPES = EscapeTable(simple={"n": "\n", "r": "\r"})

NODEJS_ESCAPES = EscapeTable(simple={"n": "\n"})

# \n and \r survive as two characters, everything else loses its backslash
RUBY_ESCAPES = EscapeTable(simple={"n": "\\n", "r": "\\r"}, fallback=Fallback.UNESCAPE)

RUBY_LEGACY_ESCAPES = EscapeTable(simple={"n": "\n", "r": "\r"}, fallback=Fallback.UNESCAPE)

RUBY_UNQUOTED_ESCAPES = EscapeTable(fallback=Fallback.UNESCAPE)

GO_ESCAPES = EscapeTable(simple={"n": "\n", "r": "\r"}, fallback=Fallback.UNESCAPE)

# ----------------------------
# Dialects
# ----------------------------

JAVASCRIPT_DOTENV = DialectRules(
    name=Dialect.JAVASCRIPT_DOTENV.value,
    separators="=:",
    colon_needs_blank=True,
    key_pattern=re.compile(r"[\w.-]+"),
    inline_comment=InlineComment.HASH,
    quotes={
        "'": QuoteRule(multiline=True, scan=QuoteScan.ESCAPE_PAIRS),
        '"': QuoteRule(escapes=JAVASCRIPT_ESCAPES, multiline=True, scan=QuoteScan.ESCAPE_PAIRS),
        "`": QuoteRule(multiline=True, scan=QuoteScan.ESCAPE_PAIRS),
    },
    unwrap_unquoted=True,
    trailing=Trailing.COMMENT,
    unterminated=Unterminated.UNQUOTED,
    malformed=Malformed.SKIP,
)

NODEJS = DialectRules(
    name=Dialect.NODEJS.value,
    inline_comment=InlineComment.HASH,
    quotes={
        "'": QuoteRule(multiline=True),
        '"': QuoteRule(escapes=NODEJS_ESCAPES, multiline=True),
        "`": QuoteRule(multiline=True),
    },
    trailing=Trailing.IGNORE,
    unterminated=Unterminated.RAW,
    malformed=Malformed.SKIP,
)

PYTHON_DOTENV = DialectRules(
    name=Dialect.PYTHON_DOTENV.value,
    key_pattern=re.compile(r"[^=#\s]+"),
    inline_comment=InlineComment.SPACE_HASH,
    quotes={
        "'": QuoteRule(escapes=PYTHON_SINGLE_ESCAPES, multiline=True, scan=QuoteScan.ESCAPE_PAIRS),
        '"': QuoteRule(escapes=PYTHON_DOUBLE_ESCAPES, multiline=True, scan=QuoteScan.ESCAPE_PAIRS),
    },
    trailing=Trailing.STRICT,
    unterminated=Unterminated.MALFORMED,
    # python-dotenv only warns about statements it can't parse
    malformed=Malformed.SKIP,
)

PYTHON_DOTENV_CLI = DialectRules(
    name=Dialect.PYTHON_DOTENV_CLI.value,
    quote_style=QuoteStyle.WRAPPED,
    quotes={
        "'": QuoteRule(),
        '"': QuoteRule(escapes=PYTHON_CLI_ESCAPES),
    },
    malformed=Malformed.ERROR,
    read_mode=ReadMode.TEXT,
)

RUBY_DOTENV = DialectRules(
    name=Dialect.RUBY_DOTENV.value,
    separators="=:",
    colon_needs_blank=True,
    key_pattern=re.compile(r"[\w.]+"),
    inline_comment=InlineComment.HASH,
    quotes={
        "'": QuoteRule(multiline=True, scan=QuoteScan.ESCAPE_PAIRS),
        '"': QuoteRule(escapes=RUBY_ESCAPES, multiline=True, scan=QuoteScan.ESCAPE_PAIRS),
    },
    unquoted_escapes=RUBY_UNQUOTED_ESCAPES,
    unwrap_unquoted=True,
    trailing=Trailing.COMMENT,
    unterminated=Unterminated.UNQUOTED,
    malformed=Malformed.SKIP,
)

RUBY_DOTENV_LEGACY = replace(
    RUBY_DOTENV,
    quotes={
        "'": QuoteRule(multiline=True, scan=QuoteScan.ESCAPE_PAIRS),
        '"': QuoteRule(escapes=RUBY_LEGACY_ESCAPES, multiline=True, scan=QuoteScan.ESCAPE_PAIRS),
    },
)

JAVA_DOTENV = DialectRules(
    name=Dialect.JAVA_DOTENV.value,
    key_pattern=re.compile(r"[\w.\-]+"),
    inline_comment=InlineComment.HASH,
    quotes={
        "'": QuoteRule(),
        '"': QuoteRule(multiline=True),
    },
    trailing=Trailing.STRICT,
    unterminated=Unterminated.MALFORMED,
    malformed=Malformed.ERROR,
)

GODOTENV = DialectRules(
    name=Dialect.GODOTENV.value,
    separators="=:",
    # godotenv tolerates blanks inside names ("FOO BAR=1")
    key_pattern=re.compile(r"[\w.]+(?:[^\S\n]+[\w.]+)*"),
    inline_comment=InlineComment.SPACE_HASH,
    quotes={
        "'": QuoteRule(multiline=True, scan=QuoteScan.BACKSLASH_BEFORE),
        '"': QuoteRule(escapes=GO_ESCAPES, multiline=True, scan=QuoteScan.BACKSLASH_BEFORE),
    },
    trailing=Trailing.STRICT,
    unterminated=Unterminated.MALFORMED,
    malformed=Malformed.ERROR,
)

DIALECTS: Dict[Dialect, DialectRules] = {
    Dialect.JAVASCRIPT_DOTENV: JAVASCRIPT_DOTENV,
    Dialect.NODEJS: NODEJS,
    Dialect.PYTHON_DOTENV: PYTHON_DOTENV,
    Dialect.PYTHON_DOTENV_CLI: PYTHON_DOTENV_CLI,
    Dialect.RUBY_DOTENV: RUBY_DOTENV,
    Dialect.JAVA_DOTENV: JAVA_DOTENV,
    Dialect.GODOTENV: GODOTENV,
}


def rules_for(dialect: Dialect, linebreak_mode: LinebreakMode = LinebreakMode.DEFAULT) -> DialectRules:
    if dialect is Dialect.RUBY_DOTENV and linebreak_mode is LinebreakMode.LEGACY:
        return RUBY_DOTENV_LEGACY
    return DIALECTS[dialect]
