from collections.abc import Iterable
from typing import NamedTuple


class WorkChunk(NamedTuple):
    start: int
    end: int

    @property
    def length(self) -> int:
        return self.end - self.start


class PartitionResult(NamedTuple):
    less: list
    equal: list
    greater: list

    @classmethod
    def merge(cls, results: Iterable["PartitionResult"]) -> "PartitionResult":
        "Concatenate group by group, keeping the order of `results`."
        less, equal, greater = [], [], []
        for result in results:
            less += result.less
            equal += result.equal
            greater += result.greater
        return cls(less, equal, greater)
