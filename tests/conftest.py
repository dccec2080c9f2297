"""Pytest configuration and fixtures for infra-stages tests."""

import os

import pytest
from pathlib import Path

from infra_stages.logsink import LogSink
from infra_stages.state.file_store import NamedFileStore
from infra_stages.state.typed_values import StageValues


class StringSink(LogSink):
    """Log sink that keeps every formatted message."""

    def __init__(self):
        self.lines = []

    def logf(self, fmt, *args):
        self.lines.append(fmt % args if args else fmt)

    @property
    def text(self) -> str:
        return "\n".join(self.lines)


@pytest.fixture
def sink():
    """Capturing log sink."""
    return StringSink()


@pytest.fixture
def working_dir(tmp_path: Path) -> Path:
    """A fresh Working Directory for one test run."""
    path = tmp_path / "work"
    path.mkdir()
    return path


@pytest.fixture
def store(sink):
    """Named file store logging into the capturing sink."""
    return NamedFileStore(logger=sink)


@pytest.fixture
def values(store):
    """Typed helpers over the capturing store."""
    return StageValues(store)


@pytest.fixture(autouse=True)
def clear_skip_vars(monkeypatch):
    """Make sure SKIP_* variables from the developer's shell don't leak in."""
    for key in list(os.environ):
        if key.startswith("SKIP_") or key.startswith("INFRA_STAGES_"):
            monkeypatch.delenv(key, raising=False)
