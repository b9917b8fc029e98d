"""Worker pool used to run attempts on background threads."""

from .pool import WorkerPool, get_worker_pool, submit_and_wait

__all__ = [
    "WorkerPool",
    "get_worker_pool",
    "submit_and_wait",
]
