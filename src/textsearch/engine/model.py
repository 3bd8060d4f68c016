# src/textsearch/engine/model.py

"""
Core domain models.

This module defines the in-memory representations of a search request,
the per-file work unit handed to the worker pool, and the records that
end up in the report, along with the run-wide constants.

No filesystem access should happen here.
"""

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Final


# ---------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------

WORKER_COUNT: Final[int] = 10
DRAIN_TIMEOUT: Final[float] = 60.0 * 60.0  # seconds

LOG_DIR_NAME: Final[str] = "logs"
LOG_TIME_FORMAT: Final[str] = "%Y_%m_%d_%H_%M"
LOG_SUFFIX: Final[str] = ".log"

ENCODING: Final[str] = "utf-8"


# ---------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------

def display_path(path: Path) -> str:
    """
    Absolute form of `path` that is always valid UTF-8 text.

    Name bytes that are not UTF-8 are shown as `\\xNN` escapes.
    """
    return os.fsencode(path.absolute()).decode(ENCODING, "backslashreplace")


# ---------------------------------------------------------------------
# Request
# ---------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class SearchRequest:
    """
    What to look for and where.

    Created once at startup and shared (read-only) by every scan task.
    """

    needle: str
    root: Path

    def __post_init__(self) -> None:
        if not self.needle:
            raise ValueError("needle must be a non-empty string")


@dataclass(frozen=True, slots=True)
class ScanTask:
    """
    A pending unit of work: one file to scan for the request's needle.
    """

    path: Path
    request: SearchRequest


# ---------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------

class ErrorKind(str, Enum):
    """
    Where an error record came from.

    TRAVERSAL: the entry could not be listed or inspected during the walk.
    READ:      the file was found but could not be opened, read or decoded.
    """

    TRAVERSAL = "traversal"
    READ = "read"


@dataclass(frozen=True, slots=True)
class MatchRecord:
    path: Path
    count: int

    def __post_init__(self) -> None:
        if self.count <= 0:
            raise ValueError("count must be positive")

    def render(self) -> str:
        return f"Found in file: {display_path(self.path)}. Count: {self.count}"


@dataclass(frozen=True, slots=True)
class ErrorRecord:
    """
    A per-path failure.

    `cause` is the message of the underlying exception.
    """

    kind: ErrorKind
    path: Path
    cause: str

    def render(self) -> str:
        if self.kind is ErrorKind.TRAVERSAL:
            return f"Cannot read file {display_path(self.path)}: {self.cause}"
        return f"Cannot read the file {display_path(self.path)}: {self.cause}"
