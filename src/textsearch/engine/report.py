# src/textsearch/engine/report.py

"""
Report sink shared by every worker.

This module:
- names and creates the per-run log file under `logs/`,
- serialises match and error records coming from many threads
  into stdout (matches only) and the log file (everything).

One lock guards the pair of writes for a record, so a line is never
split or interleaved with another record's line.
"""

from __future__ import annotations

import logging
import sys
import threading
from datetime import datetime
from pathlib import Path
from typing import TextIO

from .model import (
    ENCODING,
    LOG_DIR_NAME,
    LOG_SUFFIX,
    LOG_TIME_FORMAT,
    ErrorKind,
    ErrorRecord,
    MatchRecord,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------

class ReporterClosedError(RuntimeError):
    """
    Raised when a record is reported after the sink has been closed.
    """


# ---------------------------------------------------------------------
# Log file location
# ---------------------------------------------------------------------

def log_file_name(now: datetime) -> str:
    """Return the log file name for a run started at `now`."""
    return now.strftime(LOG_TIME_FORMAT) + LOG_SUFFIX


def ensure_log_dir(base: str | Path) -> Path:
    """
    Ensure `<base>/logs` exists and is a directory.

    Raises NotADirectoryError when something else already occupies
    that path.
    """
    log_dir = Path(base) / LOG_DIR_NAME
    if log_dir.exists() and not log_dir.is_dir():
        raise NotADirectoryError(f"Log path exists and is not a directory: {log_dir}")

    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir


# ---------------------------------------------------------------------
# Reporter
# ---------------------------------------------------------------------

def _printable(line: str) -> str:
    """Replace characters UTF-8 cannot carry (lone surrogates) with escapes."""
    return line.encode(ENCODING, "backslashreplace").decode(ENCODING)


class Reporter:
    """
    Thread-safe writer of report records.

    `sink` receives every record. Match records also go to stdout,
    read errors are echoed to stderr. The standard streams are looked
    up at write time unless given explicitly.
    """

    def __init__(
        self,
        sink: TextIO,
        *,
        stdout: TextIO | None = None,
        stderr: TextIO | None = None,
    ) -> None:
        self._sink = sink
        self._stdout = stdout
        self._stderr = stderr
        self._lock = threading.Lock()
        self._closed = False

        self.matches = 0
        self.errors = 0

    @classmethod
    def open(cls, path: str | Path, **kwargs) -> "Reporter":
        """
        Open (or append to) the log file at `path`.

        Two runs started in the same minute share a file name;
        the later one appends.
        """
        sink = Path(path).open("a", encoding=ENCODING, errors="backslashreplace")
        logger.debug("Opened log file %s", path)
        return cls(sink, **kwargs)

    # -----------------------------------------------------------------
    # Records
    # -----------------------------------------------------------------

    def report_match(self, record: MatchRecord) -> None:
        line = _printable(record.render())
        with self._lock:
            self._check_open()
            self._sink.write(line + "\n")
            self.matches += 1
            self._echo(self._stdout or sys.stdout, line)

    def report_error(self, record: ErrorRecord) -> None:
        line = _printable(record.render())
        with self._lock:
            self._check_open()
            self._sink.write(line + "\n")
            if record.kind is ErrorKind.READ:
                self._echo(self._stderr or sys.stderr, line)
            self.errors += 1

    def _echo(self, stream: TextIO, line: str) -> None:
        # Terminal copy only; the log line is already written.
        try:
            stream.write(line + "\n")
            stream.flush()
        except (OSError, UnicodeError) as e:
            logger.debug("Cannot echo record to %s: %s", getattr(stream, "name", stream), e)

    # -----------------------------------------------------------------
    # Lifecycle
    # -----------------------------------------------------------------

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._sink.close()

    def _check_open(self) -> None:
        if self._closed:
            raise ReporterClosedError("Report sink is already closed")

    def __enter__(self) -> "Reporter":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
