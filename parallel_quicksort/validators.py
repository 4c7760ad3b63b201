from collections import Counter
from collections.abc import Iterable, Sequence
from itertools import pairwise
from typing import Optional

from .partition import Comparator


def is_sorted(seq: Sequence, cmp: Optional[Comparator] = None) -> bool:
    if cmp is None:
        return all(not b < a for a, b in pairwise(seq))
    return all(cmp(a, b) <= 0 for a, b in pairwise(seq))


def is_permutation(before: Iterable, after: Iterable) -> bool:
    "Elements must be hashable."
    return Counter(before) == Counter(after)
