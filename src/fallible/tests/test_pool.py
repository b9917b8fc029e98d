"""Tests for the shared worker pool."""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import TYPE_CHECKING
from unittest.mock import Mock

import pytest

from fallible.foundation.errors import PropagatedError, SubmissionError
from fallible.runtime.concurrency import WorkerPool, get_worker_pool, pool as pool_module, submit_and_wait

if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture
def fresh_pool(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Start without a shared pool; shut down whatever the test creates."""
    monkeypatch.setattr(pool_module, "_worker_pool", None)
    yield
    if pool_module._worker_pool is not None:
        pool_module._worker_pool.shutdown(wait=True)


def test_shared_pool_is_a_singleton() -> None:
    assert get_worker_pool() is get_worker_pool()
    assert isinstance(get_worker_pool(), WorkerPool)


def test_concurrent_first_use_creates_one_pool(fresh_pool: None) -> None:
    barrier = threading.Barrier(8)
    seen: list[WorkerPool] = []

    def grab() -> None:
        barrier.wait()
        seen.append(get_worker_pool())

    threads = [threading.Thread(target=grab) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(seen) == 8
    assert len({id(p) for p in seen}) == 1


def test_pool_uses_configured_thread_prefix(fresh_pool: None, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FALLIBLE_POOL_THREAD_NAME_PREFIX", "billing-retry")

    name = submit_and_wait(get_worker_pool(), lambda: threading.current_thread().name)

    assert name.startswith("billing-retry")


def test_submit_and_wait_returns_value() -> None:
    assert submit_and_wait(get_worker_pool(), lambda: "done") == "done"


def test_worker_failure_is_wrapped() -> None:
    error = ValueError("inside worker")

    with pytest.raises(PropagatedError) as exc_info:
        submit_and_wait(get_worker_pool(), Mock(side_effect=error))

    assert exc_info.value.cause is error
    assert exc_info.value.__cause__ is error
    assert PropagatedError.unwrap(exc_info.value) is error


def test_worker_failure_is_logged_as_error(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.ERROR, logger="fallible.pool"), pytest.raises(PropagatedError):
        submit_and_wait(get_worker_pool(), Mock(side_effect=OSError("disk full")))

    [record] = [r for r in caplog.records if r.name == "fallible.pool"]
    assert record.levelno == logging.ERROR
    assert "uncaught exception" in record.getMessage()
    assert record.exc_info is not None and isinstance(record.exc_info[1], OSError)


def test_plain_executor_failures_are_not_wrapped() -> None:
    with ThreadPoolExecutor(max_workers=1) as pool, pytest.raises(KeyError):
        submit_and_wait(pool, Mock(side_effect=KeyError("k")))


def test_rejected_submission() -> None:
    pool = ThreadPoolExecutor(max_workers=1)
    pool.shutdown()

    with pytest.raises(SubmissionError) as exc_info:
        submit_and_wait(pool, lambda: 1)

    assert isinstance(exc_info.value.cause, RuntimeError)


def test_cancelled_submission() -> None:
    future: Future[int] = Future()
    future.cancel()
    pool = Mock(submit=Mock(return_value=future))

    with pytest.raises(SubmissionError):
        submit_and_wait(pool, lambda: 1)
