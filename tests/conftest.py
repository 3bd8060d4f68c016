# File: tests/conftest.py

import io
import os
from datetime import datetime

import pytest

from textsearch import cli
from textsearch.engine.report import Reporter


FIXED_NOW = datetime(2024, 3, 5, 14, 7)
FIXED_LOG_NAME = "2024_03_05_14_07.log"


running_as_root = hasattr(os, "geteuid") and os.geteuid() == 0

requires_permissions = pytest.mark.skipif(
    running_as_root or os.name == "nt",
    reason="file permission bits are not enforced for this user",
)


class MemoryReporter(Reporter):
    """Reporter over in-memory streams, for unit tests."""

    def __init__(self):
        self.log = io.StringIO()
        self.out = io.StringIO()
        self.err = io.StringIO()
        super().__init__(self.log, stdout=self.out, stderr=self.err)

    def close(self):
        # Keep the buffers readable after close.
        if not self.closed:
            self.log_text = self.log.getvalue()
        super().close()

    def log_lines(self):
        text = self.log_text if self.closed else self.log.getvalue()
        return text.splitlines()


@pytest.fixture
def reporter():
    r = MemoryReporter()
    yield r
    r.close()


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """
    Run the CLI from an empty working directory with a pinned clock.
    """
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.chdir(work)
    monkeypatch.setattr(cli, "_now", lambda: FIXED_NOW)
    return work


@pytest.fixture
def root(tmp_path):
    """Empty directory to search."""
    d = tmp_path / "root"
    d.mkdir()
    return d
