from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from polyenv import Dialect, Encoding, LinebreakMode, LoadOptions, MappingEnv, OptionsError
from polyenv.core.config import load_options, options_from_env, parse_bool


@pytest.mark.parametrize(
    "raw, expected",
    [("true", True), ("TRUE", True), ("1", True), ("false", False), (" 0 ", False), ("yes", None)],
)
def test_parse_bool(raw, expected):
    assert parse_bool(raw) is expected


def test_options_from_env_reads_every_variable():
    env = MappingEnv(
        {
            "DOTENV_CONFIG_PATH": "config/.env",
            "DOTENV_CONFIG_ENCODING": "windows-1200",
            "DOTENV_CONFIG_DIALECT": "Ruby",
            "DOTENV_CONFIG_STRICT": "false",
            "DOTENV_CONFIG_DEBUG": "1",
            "DOTENV_CONFIG_OVERRIDE": "true",
            "DOTENV_LINEBREAK_MODE": "legacy",
        }
    )
    assert options_from_env(env) == {
        "path": "config/.env",
        "encoding": Encoding.UTF16LE,
        "dialect": Dialect.RUBY_DOTENV,
        "strict": False,
        "debug": True,
        "override": True,
        "linebreak_mode": LinebreakMode.LEGACY,
    }


def test_empty_variables_count_as_unset():
    env = MappingEnv({"DOTENV_CONFIG_DIALECT": "", "DOTENV_CONFIG_STRICT": ""})
    assert options_from_env(env) == {}


@pytest.mark.parametrize(
    "var, raw",
    [
        ("DOTENV_CONFIG_STRICT", "yes"),
        ("DOTENV_CONFIG_DIALECT", "cobol"),
        ("DOTENV_CONFIG_ENCODING", "ebcdic"),
        ("DOTENV_LINEBREAK_MODE", "modern"),
    ],
)
def test_bad_variable_is_named_in_error(var, raw):
    with pytest.raises(OptionsError) as exc:
        options_from_env(MappingEnv({var: raw}))
    assert exc.value.key == var
    assert var in str(exc.value)


def test_load_options_defaults(tmp_path: Path):
    loaded = load_options(tmp_path, env=MappingEnv())
    assert loaded.options == LoadOptions()
    assert loaded.repo_path is None
    assert loaded.global_path is None


def test_load_options_precedence(tmp_path: Path):
    home = Path.home()
    (home / ".polyenv.toml").write_text(
        '[load]\nencoding = "latin1"\ndialect = "node"\n', encoding="utf-8"
    )
    repo = tmp_path / "repo"
    (repo / "sub").mkdir(parents=True)
    (repo / ".polyenv.toml").write_text(
        '[load]\ndialect = "go"\nstrict = false\n', encoding="utf-8"
    )

    loaded = load_options(repo / "sub", env=MappingEnv())
    assert loaded.repo_path == (repo / ".polyenv.toml").resolve()
    assert loaded.global_path == (home / ".polyenv.toml").resolve()
    assert loaded.options.encoding is Encoding.LATIN1
    assert loaded.options.dialect is Dialect.GODOTENV
    assert loaded.options.strict is False

    env = MappingEnv({"DOTENV_CONFIG_DIALECT": "ruby"})
    assert load_options(repo, env=env).options.dialect is Dialect.RUBY_DOTENV

    loaded = load_options(repo, env=env, overrides={"dialect": "java", "strict": None})
    assert loaded.options.dialect is Dialect.JAVA_DOTENV
    assert loaded.options.strict is False


def test_config_files_can_be_skipped(tmp_path: Path):
    (tmp_path / ".polyenv.toml").write_text('[load]\ndialect = "go"\n', encoding="utf-8")
    loaded = load_options(tmp_path, env=MappingEnv(), use_config_files=False)
    assert loaded.options.dialect is Dialect.JAVASCRIPT_DOTENV
    assert loaded.repo_path is None


def test_bad_value_in_config_file(tmp_path: Path):
    (tmp_path / ".polyenv.toml").write_text('[load]\nencoding = "ebcdic"\n', encoding="utf-8")
    with pytest.raises(OptionsError):
        load_options(tmp_path, env=MappingEnv())


def test_load_options_model():
    opts = LoadOptions()
    assert opts.path == ".env"
    assert opts.override is False
    assert opts.strict is True
    assert opts.dialect is Dialect.JAVASCRIPT_DOTENV
    assert opts.encoding is Encoding.UTF8

    opts = LoadOptions(dialect="py", encoding="ISO-8859-1", linebreak_mode="LEGACY")
    assert opts.dialect is Dialect.PYTHON_DOTENV
    assert opts.encoding is Encoding.LATIN1
    assert opts.linebreak_mode is LinebreakMode.LEGACY


def test_load_options_rejects_bad_values():
    with pytest.raises(OptionsError):
        LoadOptions(dialect="cobol")
    with pytest.raises(ValidationError):
        LoadOptions(path="")
