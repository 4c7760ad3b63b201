import unittest
from operator import add

from parallel_quicksort.partition import classify
from parallel_quicksort.PartitionResult import PartitionResult
from parallel_quicksort.quicksort import sort
from parallel_quicksort.WorkerPool import InlinePool, WorkerPool, default_pool, shutdown_default_pool


class WorkerPoolTestCase(unittest.TestCase):
    def test_invalid_arguments(self):
        with self.assertRaises(ValueError):
            WorkerPool(kind="fiber")
        with self.assertRaises(ValueError):
            WorkerPool(processes=0)

    def test_submit(self):
        with WorkerPool(processes=2) as pool:
            self.assertTrue(pool.shares_memory)
            self.assertEqual(pool.submit(add, 2, 3).get(), 5)

    def test_submit_after_close(self):
        pool = WorkerPool(processes=1)
        pool.close()
        with self.assertRaises(RuntimeError):
            pool.submit(add, 1, 1)

    def test_close_is_idempotent(self):
        pool = WorkerPool(processes=1)
        pool.submit(add, 1, 1).get()
        pool.close()
        pool.close()

    def test_process_pool(self):
        values = [(i * 104729) % 5003 for i in range(3000)]
        with WorkerPool(processes=2, kind="process") as pool:
            self.assertFalse(pool.shares_memory)
            self.assertEqual(pool.submit(classify, values, 2500).get(), classify(values, 2500))
            sort(values, chunk_size=256, pool=pool)
        self.assertEqual(values, sorted(values))


class InlinePoolTestCase(unittest.TestCase):
    def test_runs_at_submission_in_order(self):
        calls = []
        pool = InlinePool()
        first = pool.submit(calls.append, 1)
        self.assertEqual(calls, [1])
        pool.submit(calls.append, 2)
        self.assertEqual(calls, [1, 2])
        self.assertTrue(first.ready())
        self.assertTrue(first.successful())

    def test_get_reraises(self):
        result = InlinePool().submit(int, "not a number")
        self.assertFalse(result.successful())
        with self.assertRaises(ValueError):
            result.get()

    def test_returns_value(self):
        self.assertEqual(InlinePool().submit(classify, [2, 1, 3], 2).get(), PartitionResult([1], [2], [3]))


class DefaultPoolTestCase(unittest.TestCase):
    def tearDown(self):
        shutdown_default_pool()

    def test_shared(self):
        self.assertIs(default_pool(), default_pool())

    def test_recreated_after_shutdown(self):
        pool = default_pool()
        shutdown_default_pool()
        self.assertIsNot(default_pool(), pool)


if __name__ == "__main__":
    unittest.main()
