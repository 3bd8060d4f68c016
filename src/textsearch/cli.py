# src/textsearch/cli.py

"""
Command-line interface for textsearch.

    textsearch <textToSearch> <directory>

This module:
- validates the two positional arguments,
- sets up the log file and the worker pool,
- runs the search and drains the pool before the log file is closed.

Per-file failures end up in the log; they do not change the exit code.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path

from textsearch.engine.model import DRAIN_TIMEOUT, WORKER_COUNT, SearchRequest
from textsearch.engine.pool import WorkerPool
from textsearch.engine.report import Reporter, ensure_log_dir, log_file_name
from textsearch.engine.search import search

logger = logging.getLogger("textsearch")

USAGE = "Usage: textsearch <textToSearch> <directory>"

EXIT_OK = 0
EXIT_USAGE = 1
EXIT_STARTUP = 2


# ---------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------

def _now() -> datetime:
    """Return the current local time (isolated for testability)."""
    return datetime.now()


def _error(message: str) -> None:
    print(message, file=sys.stderr)


# ---------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------

def run(
    request: SearchRequest,
    log_path: Path,
    *,
    workers: int = WORKER_COUNT,
    drain_timeout: float = DRAIN_TIMEOUT,
) -> int:
    """
    Search with an already validated request, logging to `log_path`.

    The reporter is closed only after the pool has drained (or the
    drain deadline has passed).
    """
    with Reporter.open(log_path) as reporter:
        pool = WorkerPool(workers)
        try:
            files = search(request, reporter, pool)
        finally:
            pool.shutdown()
            drained = pool.await_termination(drain_timeout)

        if not drained:
            logger.warning("Gave up waiting for scans after %.0f s; results are incomplete", drain_timeout)

        logger.debug(
            "Scanned %d file(s): %d match(es), %d error(s), %d failed task(s)",
            files,
            reporter.matches,
            reporter.errors,
            pool.failed,
        )

    return EXIT_OK


# ---------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)

    if len(args) != 2:
        _error(USAGE)
        return EXIT_USAGE

    needle, directory = args
    try:
        request = SearchRequest(needle=needle, root=Path(directory))
    except ValueError:
        _error("Error: text to search must not be empty")
        return EXIT_USAGE

    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    try:
        log_dir = ensure_log_dir(Path.cwd())
        log_path = log_dir / log_file_name(_now())
        return run(request, log_path)
    except OSError as e:
        _error(f"Error: {e}")
        return EXIT_STARTUP


if __name__ == "__main__":
    raise SystemExit(main())
