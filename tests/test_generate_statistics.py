import tempfile
import unittest
from pathlib import Path

import numpy as np

from parallel_quicksort.generate_statistics import best_chunk_sizes, generate_statistics, random_values, sort_result, time_sort
from parallel_quicksort.WorkerPool import InlinePool


class GenerateStatisticsTestCase(unittest.TestCase):
    def setUp(self):
        self.tmp_dir = tempfile.TemporaryDirectory(prefix="quicksort-statistics-")
        self.result_path = Path(self.tmp_dir.name) / "logs" / "statistics.csv"

    def tearDown(self):
        self.tmp_dir.cleanup()

    def test_random_values(self):
        a = random_values(100, np.random.default_rng(1))
        b = random_values(100, np.random.default_rng(1))
        self.assertEqual(a, b)
        self.assertEqual(len(a), 100)
        self.assertIsInstance(a[0], int)

    def test_time_sort_leaves_input(self):
        values = [3, 2, 1]
        self.assertGreaterEqual(time_sort(values, 1, InlinePool()), 0)
        self.assertEqual(values, [3, 2, 1])

    def test_report(self):
        generate_statistics(Ns=(50, 300), chunk_sizes=(16, 1024), kinds=("inline", "thread"), repeat=1, result_path=self.result_path)
        df = sort_result(self.result_path)
        self.assertEqual(len(df), 8)
        self.assertEqual(list(df.columns), ["kind", "N", "chunk_size", "chunks", "best", "worst", "avg"])
        self.assertEqual(df[(df.N == 300) & (df.chunk_size == 16)].chunks.tolist(), [19, 19])
        self.assertEqual(df[df.chunk_size == 1024].chunks.tolist(), [1, 1, 1, 1])
        for kind in ("inline", "thread"):
            self.assertTrue((self.result_path.parent / f"{kind}.csv").exists())

        best = best_chunk_sizes(df)
        self.assertEqual(len(best), 4)
        self.assertTrue(set(best.chunk_size) <= {16, 1024})


if __name__ == "__main__":
    unittest.main()
