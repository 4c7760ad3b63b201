from collections.abc import MutableSequence
from typing import Optional

from .Config import *
from .partition import Comparator, partition
from .WorkerPool import AnyPool


class InvalidInputError(Exception):
    def __init__(self, msg: str) -> None:
        super().__init__("Invalid quicksort input: " + msg)


class Quicksort:
    """Three-way quicksort of a mutable sequence, partitioning large slices on a worker pool.

    `pool` defaults to the shared `default_pool()`, which is only started once
    a slice spans more than one chunk. Pass an `InlinePool` for a fully
    deterministic, single-threaded run.
    """

    def __init__(
        self,
        seq: Optional[MutableSequence],
        chunk_size: int = CHUNK_SIZE,
        pool: Optional[AnyPool] = None,
        cmp: Optional[Comparator] = None,
        timeout: Optional[float] = TASK_TIMEOUT,
    ) -> None:
        if not isinstance(chunk_size, int) or isinstance(chunk_size, bool) or chunk_size < 1:
            raise InvalidInputError(f"chunk_size must be a positive integer, got {chunk_size!r}")
        self.seq = seq
        self.chunk_size = chunk_size
        self.pool = pool
        self.cmp = cmp
        self.timeout = timeout

    def sort(self) -> None:
        seq = self.seq
        if seq is None:
            raise InvalidInputError("sequence is None")
        if not isinstance(seq, MutableSequence):
            raise InvalidInputError(f"{type(seq).__name__} is not a mutable sequence")
        if len(seq) < 2:
            return

        # the caller's sequence is only touched once every level succeeded
        ordered = self._qsort(list(seq))
        if isinstance(seq, list):
            seq[:] = ordered
        else:
            for i, x in enumerate(ordered):
                seq[i] = x

    def _qsort(self, values: list) -> list:
        if len(values) < 2:
            return values
        pivot = values[len(values) // 2]
        less, equal, greater = partition(values, pivot, self.pool, self.chunk_size, self.cmp, self.timeout)
        ordered = self._qsort(less)
        ordered += equal
        ordered += self._qsort(greater)
        return ordered


def sort(
    seq: Optional[MutableSequence],
    chunk_size: int = CHUNK_SIZE,
    pool: Optional[AnyPool] = None,
    cmp: Optional[Comparator] = None,
    timeout: Optional[float] = TASK_TIMEOUT,
) -> None:
    Quicksort(seq, chunk_size, pool, cmp, timeout).sort()
