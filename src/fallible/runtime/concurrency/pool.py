"""Shared worker pool for running attempts off the caller's thread.

The pool is created lazily on first use, exactly once per process, and is
never shut down by fallible. Failures raised inside a worker are logged and
re-raised wrapped in PropagatedError, so they reach whoever waits on the
future.

Example:
    >>> pool = get_worker_pool()
    >>> submit_and_wait(pool, lambda: 6 * 7)
    42
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import CancelledError, Executor, Future, ThreadPoolExecutor
from typing import Callable, ParamSpec, TypeVar

from fallible.foundation.config import get_settings
from fallible.foundation.errors import PropagatedError, SubmissionError

T = TypeVar("T")
P = ParamSpec("P")

logger = logging.getLogger("fallible.pool")

_worker_pool: WorkerPool | None = None
_pool_lock = threading.Lock()


class WorkerPool(ThreadPoolExecutor):
    """ThreadPoolExecutor that wraps worker failures in PropagatedError."""

    def submit(self, fn: Callable[P, T], /, *args: P.args, **kwargs: P.kwargs) -> Future[T]:
        return super().submit(_guarded, fn, *args, **kwargs)


def _guarded(fn: Callable[P, T], *args: P.args, **kwargs: P.kwargs) -> T:
    try:
        return fn(*args, **kwargs)
    except Exception as exc:
        thread = threading.current_thread()
        logger.error(
            "Encountered uncaught exception in thread[%s-%s]", thread.ident, thread.name, exc_info=True
        )
        raise PropagatedError(exc) from exc


def get_worker_pool() -> WorkerPool:
    """Get or create the process-wide worker pool."""
    global _worker_pool
    if _worker_pool is None:
        with _pool_lock:
            if _worker_pool is None:
                settings = get_settings().pool
                _worker_pool = WorkerPool(
                    max_workers=settings.max_workers,
                    thread_name_prefix=settings.thread_name_prefix,
                )
                logger.info("Created shared worker pool (prefix=%s)", settings.thread_name_prefix)
    return _worker_pool


def submit_and_wait(pool: Executor, operation: Callable[[], T]) -> T:
    """Submit ``operation`` to ``pool`` once and block for its outcome.

    Raises:
        SubmissionError: The pool refused the work (e.g. after shutdown) or
            the future was cancelled.
        Exception: Whatever the operation raised; PropagatedError when the
            pool is a WorkerPool.
    """
    try:
        future = pool.submit(operation)
    except RuntimeError as exc:
        raise SubmissionError.from_exc(exc) from exc
    try:
        return future.result()
    except CancelledError as exc:
        raise SubmissionError.from_exc(exc) from exc
