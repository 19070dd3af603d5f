"""Pytest configuration.

Every test runs with the DOTENV_CONFIG_* variables cleared and HOME pointed
at an empty directory, so a developer's own settings or global config file
can't leak into option assembly.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from polyenv.core.config import ENV_VARS

FIXTURES = Path(__file__).resolve().parent / "fixtures"


@pytest.fixture(autouse=True)
def _isolated_options(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    for var in ENV_VARS.values():
        monkeypatch.delenv(var, raising=False)
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES
