# src/textsearch/engine/pool.py

"""
Fixed-size worker pool.

Thin layer over ThreadPoolExecutor that adds the lifecycle the search
needs: refuse work after shutdown, drain with a deadline, and keep
workers alive when a task blows up.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor, wait
from typing import Any, Callable

from .model import WORKER_COUNT

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------

class PoolShutdownError(RuntimeError):
    """
    Raised when a task is submitted after shutdown().
    """


# ---------------------------------------------------------------------
# Pool
# ---------------------------------------------------------------------

class WorkerPool:
    """
    Bounded pool of worker threads with an unbounded task queue.

    Lifecycle:
    - submit() while accepting,
    - shutdown() to stop accepting,
    - await_termination() to wait for accepted work to finish.
    """

    def __init__(self, workers: int = WORKER_COUNT) -> None:
        if workers < 1:
            raise ValueError("workers must be >= 1")

        self.workers = workers
        self.failed = 0

        self._executor = ThreadPoolExecutor(
            max_workers=workers,
            thread_name_prefix="textsearch-worker",
        )
        self._lock = threading.Lock()
        self._pending: set[Future] = set()
        self._accepting = True

    # -----------------------------------------------------------------
    # Submission
    # -----------------------------------------------------------------

    def submit(self, fn: Callable[..., Any], *args: Any) -> Future:
        """
        Queue `fn(*args)` for execution on a worker thread.

        Never blocks on queue capacity.
        """
        with self._lock:
            if not self._accepting:
                raise PoolShutdownError("Pool is shut down; no new tasks accepted")
            future = self._executor.submit(self._run, fn, args)
            self._pending.add(future)

        future.add_done_callback(self._discard)
        return future

    def _run(self, fn: Callable[..., Any], args: tuple[Any, ...]) -> Any:
        # Anything that escapes a task stops here; the worker thread keeps going.
        try:
            return fn(*args)
        except Exception:
            logger.exception("Task %r failed", getattr(fn, "__name__", fn))
            with self._lock:
                self.failed += 1
            return None

    def _discard(self, future: Future) -> None:
        with self._lock:
            self._pending.discard(future)

    # -----------------------------------------------------------------
    # Shutdown
    # -----------------------------------------------------------------

    @property
    def accepting(self) -> bool:
        return self._accepting

    def shutdown(self) -> None:
        """Stop accepting tasks. Already accepted tasks still run."""
        with self._lock:
            if not self._accepting:
                return
            self._accepting = False

        self._executor.shutdown(wait=False)

    def await_termination(self, timeout: float | None) -> bool:
        """
        Wait for accepted tasks to finish, at most `timeout` seconds.

        Returns True if everything finished. On expiry, tasks that have
        not started yet are cancelled and False is returned; tasks
        already running are abandoned, not interrupted.
        """
        with self._lock:
            if self._accepting:
                raise RuntimeError("await_termination() called before shutdown()")
            pending = set(self._pending)

        _, not_done = wait(pending, timeout=timeout)
        if not not_done:
            logger.debug("Pool drained")
            return True

        cancelled = sum(1 for f in not_done if f.cancel())
        logger.warning(
            "Pool drain timed out: %d task(s) unfinished, %d cancelled before start",
            len(not_done),
            cancelled,
        )
        return False

    def __enter__(self) -> "WorkerPool":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown()
