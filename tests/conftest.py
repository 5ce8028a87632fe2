"""Pytest configuration for repository test runs."""

from __future__ import annotations

import io
import sys
from pathlib import Path
from typing import Any

import pytest


def pytest_sessionstart() -> None:
    """Add src directory to sys.path for test imports."""
    project_root = Path(__file__).resolve().parent.parent
    src_path = project_root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


@pytest.fixture
def quiet_logger() -> Any:
    """Logger that keeps events out of the captured stderr."""
    from core.logging_config import get_logger

    return get_logger("tests", "error", stream=io.StringIO())
