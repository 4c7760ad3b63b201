import logging
from collections.abc import Callable, Sequence
from multiprocessing import TimeoutError
from typing import Any, Optional

from .Config import *
from .PartitionResult import PartitionResult, WorkChunk
from .WorkerPool import AnyPool, default_pool

logger = logging.getLogger(__name__)

Comparator = Callable[[Any, Any], int]


class TaskFailureError(Exception):
    def __init__(self, failures: list[tuple[WorkChunk, Exception]]) -> None:
        self.failures = failures
        chunks = ", ".join(f"[{chunk.start}, {chunk.end})" for chunk, _ in failures)
        super().__init__(f"{len(failures)} partition task(s) failed for chunks {chunks}")


def classify(values: Sequence, pivot: Any, start: int = 0, end: Optional[int] = None, cmp: Optional[Comparator] = None) -> PartitionResult:
    less, equal, greater = [], [], []
    if cmp is None:
        for x in values[start:end]:
            if x < pivot:
                less.append(x)
            elif x > pivot:
                greater.append(x)
            else:
                equal.append(x)
    else:
        for x in values[start:end]:
            c = cmp(x, pivot)
            if c < 0:
                less.append(x)
            elif c > 0:
                greater.append(x)
            else:
                equal.append(x)
    return PartitionResult(less, equal, greater)


def chunk_ranges(n: int, chunk_size: int) -> list[WorkChunk]:
    chunk_count = (n + chunk_size - 1) // chunk_size
    if chunk_count <= 1:
        return [WorkChunk(0, n)]
    chunk_length = (n + chunk_count - 1) // chunk_count
    chunks = []
    for i in range(chunk_count):
        start, end = i * chunk_length, min((i + 1) * chunk_length, n)
        if start < end:
            chunks.append(WorkChunk(start, end))
    return chunks


def partition(
    values: Sequence,
    pivot: Any,
    pool: Optional[AnyPool] = None,
    chunk_size: int = CHUNK_SIZE,
    cmp: Optional[Comparator] = None,
    timeout: Optional[float] = TASK_TIMEOUT,
) -> PartitionResult:
    """Split `values` into the elements less than, equal to and greater than `pivot`.

    A slice that fits in one chunk is classified on the calling thread. Larger
    slices are cut into chunks, each classified by its own pool task; the
    per-chunk groups are concatenated in chunk order regardless of which task
    finished first. If any task fails, every task is still awaited and a
    single `TaskFailureError` is raised.
    """
    chunks = chunk_ranges(len(values), chunk_size)
    if len(chunks) <= 1:
        return classify(values, pivot, cmp=cmp)

    if pool is None:
        pool = default_pool()
    logger.debug("partitioning %d elements in %d chunks", len(values), len(chunks))
    if pool.shares_memory:
        pending = [pool.submit(classify, values, pivot, chunk.start, chunk.end, cmp) for chunk in chunks]
    else:
        pending = [pool.submit(classify, values[chunk.start : chunk.end], pivot, 0, None, cmp) for chunk in chunks]

    results: list[PartitionResult] = []
    failures: list[tuple[WorkChunk, Exception]] = []
    for chunk, async_result in zip(chunks, pending):
        try:
            results.append(async_result.get(timeout))
        except Exception as e:
            if isinstance(e, TimeoutError):
                pool.mark_abandoned()
            logger.error("partition task for chunk [%d, %d) failed: %r", chunk.start, chunk.end, e)
            failures.append((chunk, e))
    if failures:
        raise TaskFailureError(failures) from failures[0][1]
    return PartitionResult.merge(results)
