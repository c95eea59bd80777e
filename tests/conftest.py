"""Shared pytest fixtures for the iniload test suite."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest


@pytest.fixture
def fixtures_dir() -> Path:
    """Returns the absolute path to the tests/fixtures/ directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def write_ini(tmp_path: Path) -> Callable[[str | bytes, str], Path]:
    """Factory that writes INI content to a temp file and returns its path."""

    def factory(content: str | bytes, name: str = "test.ini") -> Path:
        path = tmp_path / name
        if isinstance(content, str):
            path.write_bytes(content.encode("utf-8"))
        else:
            path.write_bytes(content)
        return path

    return factory
