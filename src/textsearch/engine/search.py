# src/textsearch/engine/search.py

"""
Search pipeline wiring.

Connects the walker to the worker pool: every discovered file becomes a
ScanTask running on the pool, every traversal failure becomes a record.
"""

from pathlib import Path

from .model import ErrorKind, ErrorRecord, ScanTask, SearchRequest
from .pool import WorkerPool
from .report import Reporter
from .scan import scan_file
from .walk import walk_tree


def search(request: SearchRequest, reporter: Reporter, pool: WorkerPool) -> int:
    """
    Walk `request.root` and queue one scan per regular file.

    Returns once the walk is done; it does not wait for the queued scans.
    The caller drains the pool before closing the reporter.
    """

    def submit(path: Path) -> None:
        pool.submit(scan_file, ScanTask(path=path, request=request), reporter)

    def traversal_failed(path: Path, exc: OSError) -> None:
        reporter.report_error(ErrorRecord(kind=ErrorKind.TRAVERSAL, path=path, cause=str(exc)))

    return walk_tree(request.root, submit, traversal_failed)
