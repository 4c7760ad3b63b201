from os import cpu_count

__all__ = [
    "CHUNK_SIZE",
    "MAX_WORKERS",
    "POOL_KIND",
    "TASK_TIMEOUT",
    "SAMPLE_SEED",
    "VALUE_RANGE",
    "STATISTICS_NS",
    "STATISTICS_CHUNK_SIZES",
    "STATISTICS_POOL_KINDS",
    "STATISTICS_REPEAT",
]

# slices longer than this are partitioned concurrently, one task per chunk
CHUNK_SIZE = 1024
MAX_WORKERS = cpu_count() or 1
POOL_KIND = "thread"
# seconds, None waits forever
TASK_TIMEOUT = None

SAMPLE_SEED = 20231019
VALUE_RANGE = 1_000_000
STATISTICS_NS = (1_000, 10_000, 100_000, 1_000_000)
STATISTICS_CHUNK_SIZES = (256, 1024, 4096, 16384, 65536)
STATISTICS_POOL_KINDS = ("inline", "thread")
STATISTICS_REPEAT = 3
