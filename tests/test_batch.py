import unittest

from pachinko_simulator.batch import (
    day_generators,
    default_chunk_size,
    iter_batches,
    run_simulation,
)

from .helpers import make_config


class TestBatchRunner(unittest.TestCase):
    """Tests for run_simulation / iter_batches."""

    def test_runs_configured_days(self):
        results = run_simulation(make_config(days=12), seed=1)
        self.assertEqual(len(results), 12)

    def test_same_seed_same_results(self):
        config = make_config(days=5)
        self.assertEqual(run_simulation(config, seed=99), run_simulation(config, seed=99))

    def test_chunking_does_not_change_results(self):
        config = make_config(days=7)
        whole = run_simulation(config, seed=3)
        chunked = run_simulation(config, seed=3, chunk_size=2)
        self.assertEqual(whole, chunked)

    def test_chunk_sizes(self):
        chunks = list(iter_batches(make_config(days=7), seed=3, chunk_size=3))
        self.assertEqual([len(c) for c in chunks], [3, 3, 1])

    def test_progress_callback(self):
        calls = []
        run_simulation(make_config(days=5), seed=0, chunk_size=2,
                       progress=lambda done, total: calls.append((done, total)))
        self.assertEqual(calls, [(2, 5), (4, 5), (5, 5)])

    def test_invalid_chunk_size(self):
        with self.assertRaises(ValueError):
            list(iter_batches(make_config(days=3), chunk_size=0))

    def test_default_chunk_size(self):
        self.assertEqual(default_chunk_size(1000), 1000)
        self.assertEqual(default_chunk_size(1001), 100)

    def test_day_generators_are_independent(self):
        first, second = day_generators(2, seed=5)
        self.assertNotEqual(first.random(), second.random())
        _, again = day_generators(2, seed=5)
        self.assertEqual(again.random(), day_generators(2, seed=5)[1].random())


if __name__ == "__main__":
    unittest.main()
