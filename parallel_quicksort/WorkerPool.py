import atexit
import logging
from collections.abc import Callable
from multiprocessing import Pool
from multiprocessing.pool import AsyncResult, ThreadPool
from multiprocessing.pool import Pool as BasePool
from threading import Lock
from typing import Any, Optional, Union

from .Config import *

logger = logging.getLogger(__name__)

POOL_KINDS = ("thread", "process")


class WorkerPool:
    """A bounded pool of workers that partition tasks are submitted to.

    The underlying `multiprocessing` pool is started on the first `submit` and
    lives until `close`. With `kind="process"` every task and its arguments
    must be picklable. Once a task has been given up on (see
    `mark_abandoned`), `close` terminates the pool instead of waiting for it.
    """

    def __init__(self, processes: Optional[int] = None, kind: str = POOL_KIND) -> None:
        if kind not in POOL_KINDS:
            raise ValueError(f"unknown pool kind {kind!r}, expected one of {POOL_KINDS}")
        if processes is not None and processes < 1:
            raise ValueError(f"processes must be at least 1, got {processes}")
        self.kind = kind
        self.processes = MAX_WORKERS if processes is None else processes
        self._pool: Optional[BasePool] = None
        self._closed = False
        self._abandoned = False
        self._lock = Lock()

    @property
    def shares_memory(self) -> bool:
        return self.kind == "thread"

    def _get_pool(self) -> BasePool:
        with self._lock:
            if self._closed:
                raise RuntimeError("worker pool is closed")
            if self._pool is None:
                factory = ThreadPool if self.kind == "thread" else Pool
                self._pool = factory(self.processes)
                logger.debug("started %s pool with %d workers", self.kind, self.processes)
            return self._pool

    def submit(self, func: Callable, *args: Any) -> AsyncResult:
        return self._get_pool().apply_async(func, args)

    def mark_abandoned(self) -> None:
        "Record that a submitted task will never be waited for."
        with self._lock:
            self._abandoned = True

    def close(self) -> None:
        with self._lock:
            self._closed = True
            pool, self._pool = self._pool, None
            abandoned = self._abandoned
        if pool is None:
            return
        if abandoned:
            # running tasks are not waited for
            pool.terminate()
            logger.debug("terminated %s pool with abandoned tasks", self.kind)
        else:
            pool.close()
            pool.join()
            logger.debug("stopped %s pool", self.kind)

    def __enter__(self) -> "WorkerPool":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


class _InlineResult:
    def __init__(self, func: Callable, args: tuple) -> None:
        self._value = None
        self._error: Optional[Exception] = None
        try:
            self._value = func(*args)
        except Exception as e:
            self._error = e

    def ready(self) -> bool:
        return True

    def successful(self) -> bool:
        return self._error is None

    def get(self, timeout: Optional[float] = None):
        if self._error is not None:
            raise self._error
        return self._value


class InlinePool:
    "Runs each task on the calling thread as soon as it is submitted."

    kind = "inline"
    shares_memory = True

    def submit(self, func: Callable, *args: Any) -> _InlineResult:
        return _InlineResult(func, args)

    def mark_abandoned(self) -> None:
        pass

    def close(self) -> None:
        pass

    def __enter__(self) -> "InlinePool":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


AnyPool = Union[WorkerPool, InlinePool]

_default_pool: Optional[WorkerPool] = None
_default_pool_lock = Lock()


def default_pool() -> WorkerPool:
    global _default_pool
    with _default_pool_lock:
        if _default_pool is None:
            _default_pool = WorkerPool()
            atexit.register(_default_pool.close)
        return _default_pool


def shutdown_default_pool() -> None:
    global _default_pool
    with _default_pool_lock:
        pool, _default_pool = _default_pool, None
    if pool is not None:
        atexit.unregister(pool.close)
        pool.close()
