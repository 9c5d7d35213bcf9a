"""Pytest Configuration and Fixtures.

Defines common fixtures used in pytest.
Provides fake collaborators, temporary project trees, etc.
"""

import os
import stat
from pathlib import Path
from typing import Any, Callable, Generator

import pytest

# Config
from config.settings import reset_settings

# Core
from core.protocols import ILogger

# Infrastructure (Fake implementations)
from infrastructure.script_loader import FakeScriptLoader
from infrastructure.window_enumerator import FakeWindowEnumerator

# Utils
from utils.logging import clear_logger_registry


# ============================================================
# Fake Logger
# ============================================================


class FakeLogger(ILogger):
    """Fake logger for testing.

    Stores log messages in memory.
    """

    def __init__(self) -> None:
        self.logs: list[dict[str, Any]] = []

    def debug(self, message: str, **kwargs: Any) -> None:
        self.logs.append({"level": "debug", "message": message, **kwargs})

    def info(self, message: str, **kwargs: Any) -> None:
        self.logs.append({"level": "info", "message": message, **kwargs})

    def warning(self, message: str, **kwargs: Any) -> None:
        self.logs.append({"level": "warning", "message": message, **kwargs})

    def error(self, message: str, **kwargs: Any) -> None:
        self.logs.append({"level": "error", "message": message, **kwargs})

    def clear(self) -> None:
        self.logs.clear()

    def get_logs(self, level: str | None = None) -> list[dict[str, Any]]:
        if level is None:
            return self.logs
        return [log for log in self.logs if log["level"] == level]


# ============================================================
# Global State
# ============================================================


@pytest.fixture(autouse=True)
def _reset_global_state() -> Generator[None, None, None]:
    """Reset cached settings and the logger registry around each test."""
    reset_settings()
    clear_logger_registry()
    yield
    reset_settings()
    clear_logger_registry()


# ============================================================
# Core Fixtures
# ============================================================


@pytest.fixture
def fake_logger() -> FakeLogger:
    """Fake logger fixture.

    Allows verification of log messages.
    """
    return FakeLogger()


@pytest.fixture
def fake_window_enumerator() -> FakeWindowEnumerator:
    """Fake window enumerator fixture."""
    return FakeWindowEnumerator()


@pytest.fixture
def fake_script_loader() -> FakeScriptLoader:
    """Fake script loader fixture."""
    return FakeScriptLoader()


# ============================================================
# Filesystem Fixtures
# ============================================================


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """Empty project root directory."""
    root = tmp_path / "project"
    root.mkdir()
    return root


@pytest.fixture
def write_file(project_root: Path) -> Callable[..., Path]:
    """Write a file under the project root.

    Example:
        ```python
        def test_read(write_file):
            path = write_file("app.config.json", '{"a": 1}')
        ```
    """

    def _write(relative_path: str, content: str = "", mode: int | None = None) -> Path:
        path = project_root / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        if mode is not None:
            os.chmod(path, mode)
        return path

    return _write


@pytest.fixture
def make_executable(project_root: Path) -> Callable[[str], Path]:
    """Create an executable file under the project root."""

    def _make(relative_path: str) -> Path:
        path = project_root / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("#!/bin/sh\n", encoding="utf-8")
        path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return path

    return _make
