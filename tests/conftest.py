# tests/conftest.py

"""Shared pytest fixtures for all basketcheck tests."""

from collections.abc import Generator
from pathlib import Path

import pytest

from basketcheck.config.settings import Settings


@pytest.fixture(autouse=True)
def isolated_data_dir(tmp_path: Path) -> Generator[Path, None, None]:
    """Point the data directory at a temp dir so tests never touch data/."""
    data_dir = tmp_path / "data"
    with pytest.MonkeyPatch.context() as mp:
        mp.setattr(Settings, "DATA_DIR", data_dir)
        mp.setattr(Settings, "DB_PATH", data_dir / "basketcheck.db")
        mp.setattr(Settings, "EXPORTS_DIR", data_dir / "exports")
        yield data_dir
