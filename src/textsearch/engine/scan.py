# src/textsearch/engine/scan.py

"""
Per-file scanning.

Reads one file as strict UTF-8, counts the needle line by line and
hands exactly one outcome (or none) to the reporter.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .count import count_occurrences
from .model import ENCODING, ErrorKind, ErrorRecord, MatchRecord, ScanTask

if TYPE_CHECKING:
    from .report import Reporter


def _strip_newline(line: str) -> str:
    # Universal newline mode has already turned CRLF and CR into LF.
    if line.endswith("\n"):
        return line[:-1]
    return line


def count_in_file(task: ScanTask) -> int:
    """
    Return the needle count for the file in `task`.

    Matches spanning a line break are not counted.
    Raises OSError or UnicodeDecodeError on read failure.
    """
    needle = task.request.needle
    total = 0

    with task.path.open("r", encoding=ENCODING, errors="strict") as f:
        for line in f:
            total += count_occurrences(_strip_newline(line), needle)

    return total


def scan_file(task: ScanTask, reporter: "Reporter") -> int | None:
    """
    Scan one file and report the outcome.

    - count > 0: a MatchRecord,
    - count == 0: nothing,
    - open/read/decode failure: a READ ErrorRecord (partial count dropped).

    Returns the count, or None when the file could not be read.
    """
    try:
        total = count_in_file(task)
    except (OSError, UnicodeDecodeError) as e:
        reporter.report_error(ErrorRecord(kind=ErrorKind.READ, path=task.path, cause=str(e)))
        return None

    if total > 0:
        reporter.report_match(MatchRecord(path=task.path, count=total))

    return total
