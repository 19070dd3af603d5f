from __future__ import annotations

from typing import Dict, Optional

import pytest

from polyenv import Dialect, LoadOptions, MappingEnv, load

COMMON: Dict[str, Optional[str]] = {
    "VAR1": "FOO",
    "VAR2": "",
    "VAR3": "FOO  BAR",
    "VAR4": "EXPORT!",
    "VAR7": "single\\nquoted",
    "JSON2": '{"foo": "bar \\n single quotes"}',
    "VAR10": "after",
    "PRE_DEFINED": "not override",
}

# None -> the key must not be set
EXPECTED: Dict[Dialect, Dict[str, Optional[str]]] = {
    Dialect.JAVASCRIPT_DOTENV: {
        "VAR5": "TEXT",
        "VAR6": "TEXT",
        "VAR8": "double\nquoted",
        "VAR9": 'tab:\\tquote:\\"end',
        "JSON1": '{"foo": "bar \\n no quotes"}',
        "VAR16": (
            "double quoted backslash:\\\\double quote:\\\"single quote:\\'newline:\ntab:\\tbackspace:\\b"
            "formfeed:\\fcarrige return:\runicode ä:\\u00e4"
        ),
        "UNTERMINATED": '"abc',
    },
    Dialect.NODEJS: {
        "VAR5": "TEXT",
        "VAR6": "TEXT",
        "VAR8": "double\nquoted",
        "VAR9": "tab:\\tquote:\\",
        "JSON1": '{"foo": "bar \\n no quotes"}',
        "VAR16": "double quoted backslash:\\\\double quote:\\",
        "UNTERMINATED": '"abc',
    },
    Dialect.PYTHON_DOTENV: {
        "VAR5": "TEXT#COMMENT",
        "VAR6": "TEXT",
        "VAR8": "double\nquoted",
        "VAR9": 'tab:\tquote:"end',
        "JSON1": '{"foo": "bar \\n no quotes"}',
        "VAR16": (
            "double quoted backslash:\\double quote:\"single quote:'newline:\ntab:\tbackspace:\b"
            "formfeed:\fcarrige return:\runicode ä:\\u00e4"
        ),
        "UNTERMINATED": None,
    },
    Dialect.PYTHON_DOTENV_CLI: {
        "VAR5": "TEXT#COMMENT",
        "VAR6": "TEXT # COMMENT",
        "VAR8": "double\nquoted",
        "VAR9": 'tab:\tquote:"end',
        "JSON1": '{"foo": "bar \\n no quotes"}',
        "VAR16": (
            "double quoted backslash:\\double quote:\"single quote:'newline:\ntab:\tbackspace:\b"
            "formfeed:\fcarrige return:\runicode ä:ä"
        ),
        "UNTERMINATED": '"abc',
    },
    Dialect.RUBY_DOTENV: {
        "VAR5": "TEXT",
        "VAR6": "TEXT",
        "VAR8": "double\\nquoted",
        "VAR9": 'tab:tquote:"end',
        "JSON1": '{"foo": "bar n no quotes"}',
        "VAR16": (
            "double quoted backslash:\\double quote:\"single quote:'newline:\\ntab:tbackspace:b"
            "formfeed:fcarrige return:\\runicode ä:u00e4"
        ),
        "UNTERMINATED": '"abc',
    },
    Dialect.JAVA_DOTENV: {
        "VAR5": "TEXT",
        "VAR6": "TEXT",
        "VAR8": "double\\nquoted",
        "VAR9": None,
        "JSON1": '{"foo": "bar \\n no quotes"}',
        "VAR16": None,
        "UNTERMINATED": None,
    },
    Dialect.GODOTENV: {
        "VAR5": "TEXT#COMMENT",
        "VAR6": "TEXT",
        "VAR8": "double\nquoted",
        "VAR9": 'tab:tquote:"end',
        "JSON1": '{"foo": "bar \\n no quotes"}',
        "VAR16": (
            "double quoted backslash:\\double quote:\"single quote:'newline:\ntab:tbackspace:b"
            "formfeed:fcarrige return:\runicode ä:u00e4"
        ),
        "UNTERMINATED": None,
    },
}


def load_fixture(fixtures_dir, name: str, dialect: Dialect) -> MappingEnv:
    env = MappingEnv({"PRE_DEFINED": "not override"})
    load(
        fixtures_dir / name,
        env=env,
        options=LoadOptions(dialect=dialect, strict=False),
    )
    return env


def check(env: MappingEnv, expected: Dict[str, Optional[str]]) -> None:
    for key, value in expected.items():
        if value is None:
            assert key not in env.data, f"{key} is expected to be unset"
        else:
            assert env.get(key) == value, f"{key}: {env.get(key)!r} != {value!r}"


@pytest.mark.parametrize("dialect", list(Dialect), ids=lambda d: d.value)
def test_edge_cases(dialect, fixtures_dir):
    env = load_fixture(fixtures_dir, "edge-cases.env", dialect)
    check(env, {**COMMON, **EXPECTED[dialect]})


def test_every_dialect_has_expectations():
    assert set(EXPECTED) == set(Dialect)


# ----------------------------
# godotenv
# ----------------------------

GO_MIXED_ESCAPES = (
    "backslash:\\\\double quote:\\\"single quote:\\'newline:\\ntab:\\tbackspace:\\b"
    "formfeed:\\fcarrige return:\\runicode ä:\\u00e4"
)

GODOTENV_VALUES: Dict[str, Optional[str]] = {
    "VAR2": "",
    "VAR5": "FOO  BAR",
    "VAR6": "FOO  BAR",
    "VAR9": "FOO\nBAR2=BAZ",
    "BAR2": None,
    "VAR12": "#COMMENT",
    "VAR13": "TEXT#COMMENT",
    "VAR14": "#NO COMMNET",
    "VAR15": "#NO COMMNET",
    "VAR16": (
        "double quoted backslash:\\double quote:\"single quote:'newline:\ntab:tbackspace:b"
        "formfeed:fcarrige return:\runicode ä:u00e4"
    ),
    "VAR18": "no quote " + GO_MIXED_ESCAPES,
    "VAR19": "FOO",
    "VAR20": "FOO\\nBAR",
    "VAR21": "FOO\nBAR",
    "VAR23": "double\nquoted",
    "VAR25": "double\nquoted",
    "VAR28": "single-quoted",
    "VAR29": "single-quoted",
    "VAR30": "single-quoted",
    "VAR31": "single-quoted",
    "VAR32": "single\nquoted",
    "VAR35": 'FOO" BAR BAZ"',
    "VAR37": "EXPORT!",
    "JSON1": '{"foo": "bar \\n no quotes',
    "JSON3": '{"foo": "bar \\n single quotes #"}',
    "JSON4": '`{"foo": "bar \\n backticks',
    "PRE_DEFINED": "not override",
}


def test_godotenv_fixture(fixtures_dir):
    env = load_fixture(fixtures_dir, "godotenv.env", Dialect.GODOTENV)
    check(env, GODOTENV_VALUES)


# ----------------------------
# ruby-dotenv escapes
# ----------------------------

RUBY_ESCAPE_VALUES: Dict[str, Optional[str]] = {
    "BASIC": "\\r,\\n,t,v,f,a,b",
    "BACKSLASH": "\\",
    "QUOTES": "\",'",
    "SINGLE_QUOTED1": "\\'",
    "SINGLE_QUOTED2": "\\'",
    "OCT1": "90090",
    "OCT2": "53053",
    "OCT3": "157143164",
    "OCT4": "015701430164",
    "HEX": "x48x45x58x2E",
    "UTF16": "u00e4",
    "UTF16_PAIR": "uD83DuDE03",
    "UTF32_6": "U01F603",
    "UTF32_8": "U0001F603",
    "NAMED1": "u{Latin Capital Letter O with macron}",
    "NAMED2": "u{LATIN CAPITAL LETTER O WITH MACRON}",
    "NAMED3": "u{LATIN_CAPITAL_LETTER_O_WITH_MACRON}",
    "UNKNOWN": "/,z, ",
    "ESCAPED_NEWLINE": "\n",
}


def test_ruby_escapes(fixtures_dir):
    env = load_fixture(fixtures_dir, "ruby-escapes.env", Dialect.RUBY_DOTENV)
    check(env, RUBY_ESCAPE_VALUES)
