import logging
from collections.abc import Sequence
from itertools import product
from pathlib import Path
from time import perf_counter

import numpy as np
import pandas as pd
from tqdm import tqdm

from .Config import *
from .partition import chunk_ranges
from .quicksort import sort
from .validators import is_permutation, is_sorted
from .WorkerPool import InlinePool, WorkerPool

logger = logging.getLogger(__name__)

RESULT_DIR = Path("logs/statistics.csv")


class InvalidSortResultError(Exception):
    def __init__(self, N: int, chunk_size: int, kind: str) -> None:
        super().__init__(f"Invalid sort result: N={N}, chunk_size={chunk_size}, pool={kind}")


def random_values(N: int, rng: np.random.Generator) -> list[int]:
    return rng.integers(0, VALUE_RANGE, N).tolist()


def time_sort(values: Sequence[int], chunk_size: int, pool) -> float:
    arr = list(values)
    start = perf_counter()
    sort(arr, chunk_size=chunk_size, pool=pool)
    elapsed = perf_counter() - start
    if not (is_sorted(arr) and is_permutation(values, arr)):
        raise InvalidSortResultError(len(arr), chunk_size, pool.kind)
    return elapsed


def _make_pool(kind: str):
    return InlinePool() if kind == "inline" else WorkerPool(kind=kind)


def generate_statistics(
    Ns: Sequence[int] = STATISTICS_NS,
    chunk_sizes: Sequence[int] = STATISTICS_CHUNK_SIZES,
    kinds: Sequence[str] = STATISTICS_POOL_KINDS,
    repeat: int = STATISTICS_REPEAT,
    result_path: Path = RESULT_DIR,
) -> None:
    rng = np.random.default_rng(SAMPLE_SEED)
    inputs = {N: random_values(N, rng) for N in Ns}
    tasks = list(product(kinds, Ns, chunk_sizes))
    pools = {kind: _make_pool(kind) for kind in kinds}
    result_path.parent.mkdir(parents=True, exist_ok=True)
    try:
        with open(result_path, "w") as f:
            f.write("kind,N,chunk_size,chunks,best,worst,avg\n")
            for kind, N, chunk_size in tqdm(tasks):
                times = [time_sort(inputs[N], chunk_size, pools[kind]) for _ in range(repeat)]
                chunks = len(chunk_ranges(N, chunk_size))
                f.write(",".join(map(str, (kind, N, chunk_size, chunks, min(times), max(times), sum(times) / len(times)))) + "\n")
                f.flush()
    finally:
        for pool in pools.values():
            pool.close()
    logger.info("wrote %d rows to %s", len(tasks), result_path)


def sort_result(result_path: Path = RESULT_DIR) -> pd.DataFrame:
    df = pd.read_csv(result_path)
    df = df.sort_values(["kind", "N", "chunk_size"])
    df.to_csv(result_path, index=False)
    for kind, group in df.groupby("kind"):
        group.drop(columns=["kind"]).to_csv(result_path.parent / f"{kind}.csv", index=False)
    return df


def best_chunk_sizes(df: pd.DataFrame) -> pd.DataFrame:
    "Fastest chunk size, by average time, for every pool kind and input size."
    best = df.loc[df.groupby(["kind", "N"])["avg"].idxmin()]
    return best[["kind", "N", "chunk_size", "avg"]].reset_index(drop=True)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    generate_statistics()
    print(best_chunk_sizes(sort_result()).to_string(index=False))
