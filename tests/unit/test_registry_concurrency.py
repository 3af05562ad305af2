"""Concurrency tests: the check-then-insert sequence is atomic."""

import threading
import time

import pytest

from flyx import FlyweightRegistry


class SlowFactory:
    """Factory that widens the race window between lookup and insert."""

    def __init__(self, delay=0.01):
        self.delay = delay
        self.calls = 0
        self._lock = threading.Lock()

    def __call__(self, key):
        with self._lock:
            self.calls += 1
        time.sleep(self.delay)
        return object()


def _run_concurrently(target, n_threads):
    barrier = threading.Barrier(n_threads)

    def worker(i):
        barrier.wait()
        target(i)

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(n_threads)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()


@pytest.mark.unit
class TestConcurrentAccess:
    """Concurrent callers never build duplicate flyweights."""

    def test_same_unseen_key_built_once(self):
        """Simultaneous requests for one key share a single flyweight."""
        factory = SlowFactory()
        registry = FlyweightRegistry(factory)
        results = [None] * 16

        def request(i):
            results[i] = registry.get_or_create("contested")

        _run_concurrently(request, len(results))

        assert registry.count() == 1
        assert factory.calls == 1
        assert all(r is results[0] for r in results)

    def test_many_keys_from_many_threads(self):
        """Each distinct key is built exactly once across threads."""
        factory = SlowFactory(delay=0.001)
        registry = FlyweightRegistry(factory)
        seen = [dict() for _ in range(8)]

        def request(i):
            for key in range(20):
                seen[i][key] = registry.get_or_create(key)

        _run_concurrently(request, len(seen))

        assert registry.count() == 20
        assert factory.calls == 20
        for key in range(20):
            assert all(s[key] is seen[0][key] for s in seen)

    def test_stats_consistent_under_contention(self):
        """Every call is counted exactly once as a hit or a miss."""
        registry = FlyweightRegistry(SlowFactory(delay=0.0))
        n_threads, per_thread = 8, 50

        def request(i):
            for j in range(per_thread):
                registry.get_or_create(j % 5)

        _run_concurrently(request, n_threads)

        stats = registry.stats()
        assert stats.misses == 5
        assert stats.hits + stats.misses == n_threads * per_thread
