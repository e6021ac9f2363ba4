"""Unit tests for EpisodeDedupCache."""

import threading

from mikanfeed.services.feed.dedup_cache import CacheClearRequest, EpisodeDedupCache


class TestEpisodeDedupCache:
    """Tests for per-series episode marking."""

    def test_check_and_mark(self):
        cache = EpisodeDedupCache()

        assert cache.check_and_mark('3141', '01') is True
        assert cache.check_and_mark('3141', '01') is False
        assert cache.check_and_mark('3141', '02') is True

    def test_series_are_independent(self):
        cache = EpisodeDedupCache()
        cache.mark_seen('3141', '01')

        assert cache.seen('3141', '01') is True
        assert cache.seen('3143', '01') is False

    def test_series_id_coerced_to_str(self):
        cache = EpisodeDedupCache()
        cache.mark_seen(3141, '01')

        assert cache.seen('3141', '01') is True

    def test_clear(self):
        cache = EpisodeDedupCache()
        cache.mark_seen('3141', '01')
        cache.mark_seen('3143', '05')

        cache.clear()

        assert cache.get_stats() == {'series': 0, 'episodes': 0}
        assert cache.check_and_mark('3141', '01') is True

    def test_clear_series(self):
        cache = EpisodeDedupCache()
        cache.mark_seen('3141', '01')
        cache.mark_seen('3143', '05')

        cache.clear_series('3141')

        assert cache.seen('3141', '01') is False
        assert cache.seen('3143', '05') is True

    def test_stats(self):
        cache = EpisodeDedupCache()
        cache.mark_seen('3141', '01')
        cache.mark_seen('3141', '02')
        cache.mark_seen('3143', '01')

        assert cache.get_stats() == {'series': 2, 'episodes': 3}
        assert cache.get_stats('3141') == {'episodes': 2}

    def test_concurrent_check_and_mark(self):
        """Only one of many concurrent callers may mark the same episode."""
        cache = EpisodeDedupCache()
        results = []
        results_lock = threading.Lock()
        barrier = threading.Barrier(16)

        def worker():
            barrier.wait()
            marked = cache.check_and_mark('3141', '07')
            with results_lock:
                results.append(marked)

        threads = [threading.Thread(target=worker) for _ in range(16)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert results.count(True) == 1
        assert len(results) == 16

    def test_discard(self):
        cache = EpisodeDedupCache()
        cache.mark_seen('3141', '01')
        cache.mark_seen('3141', '02')

        cache.discard('3141', '01')
        cache.discard('3143', '01')

        assert cache.seen('3141', '01') is False
        assert cache.seen('3141', '02') is True
        assert cache.check_and_mark('3141', '01') is True

    def test_clear_waits_for_series_lock(self):
        """clear() must not interleave with a check-and-mark in progress."""
        cache = EpisodeDedupCache()
        cache.mark_seen('3141', '01')
        lock = cache._series_lock('3141')
        lock.acquire()

        cleared = threading.Event()

        def run_clear():
            cache.clear()
            cleared.set()

        thread = threading.Thread(target=run_clear)
        thread.start()
        assert cleared.wait(0.2) is False

        lock.release()
        thread.join()

        assert cleared.is_set()
        assert cache.get_stats() == {'series': 0, 'episodes': 0}


class TestCacheClearRequest:
    """Tests for the file-based clear request."""

    def test_apply_clears_and_consumes(self, tmp_path):
        cache = EpisodeDedupCache()
        cache.mark_seen('3141', '01')
        clear_request = CacheClearRequest(str(tmp_path / 'run' / 'clean-cache.request'))

        clear_request.request()

        assert clear_request.pending() is True
        assert clear_request.apply(cache) is True
        assert clear_request.pending() is False
        assert cache.seen('3141', '01') is False

    def test_apply_without_request(self, tmp_path):
        cache = EpisodeDedupCache()
        cache.mark_seen('3141', '01')
        clear_request = CacheClearRequest(str(tmp_path / 'clean-cache.request'))

        assert clear_request.apply(cache) is False
        assert cache.seen('3141', '01') is True
