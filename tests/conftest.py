"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import io
import stat
from pathlib import Path
from typing import Callable

import pytest

from mozmillci.ui.console import Console, set_console


@pytest.fixture
def make_script(tmp_path: Path) -> Callable[..., Path]:
    """Write an executable /bin/sh script into tmp_path and return its path."""

    def _make(name: str, body: str) -> Path:
        path = tmp_path / name
        path.write_text("#!/bin/sh\n" + body + "\n")
        path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return path

    return _make


@pytest.fixture
def log() -> io.StringIO:
    """In-memory build log."""
    return io.StringIO()


@pytest.fixture
def console(log: io.StringIO) -> Console:
    c = Console(stream=log)
    set_console(c)
    return c
