# ABOUTME: Shared pytest fixtures for gamemeta tests.
# ABOUTME: Provides an isolated data directory, a manual clock, and a clean environment.

from pathlib import Path

import pytest

from tests.fixtures.fakes import ManualClock


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    """An empty per-test data directory for cache documents."""
    return tmp_path / "gamemeta-data"


@pytest.fixture
def clock() -> ManualClock:
    """A manual clock starting at a fixed Unix time."""
    return ManualClock()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's real credentials and data directory out of tests."""
    for var in ("OPENCRITIC_API_KEY", "OPENCRITIC_HOST", "GAMEMETA_DATA_DIR", "GAMEMETA_DEBUG"):
        monkeypatch.delenv(var, raising=False)
