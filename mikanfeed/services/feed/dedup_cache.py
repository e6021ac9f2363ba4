"""
Episode dedup cache module.

Remembers, per series, which episode numbers the validator has already
evaluated in this process. The cache is volatile and best-effort; the
episode store remains the authoritative duplicate check.
"""

import logging
import os
import threading
from contextlib import contextmanager
from datetime import datetime
from typing import Dict, Optional, Set

logger = logging.getLogger(__name__)


class EpisodeDedupCache:
    """
    In-memory per-series set of evaluated episode numbers.

    Check-then-mark is serialized per series: each series id owns a lock,
    so different series never contend.

    Example:
        >>> cache = EpisodeDedupCache()
        >>> cache.check_and_mark('3519', '07')
        True
        >>> cache.check_and_mark('3519', '07')
        False
    """

    def __init__(self):
        self._entries: Dict[str, Set[str]] = {}
        self._locks: Dict[str, threading.Lock] = {}
        self._registry_lock = threading.Lock()

    def _series_lock(self, series_id: str) -> threading.Lock:
        with self._registry_lock:
            lock = self._locks.get(series_id)
            if lock is None:
                lock = threading.Lock()
                self._locks[series_id] = lock
            return lock

    def seen(self, series_id: str, episode_no: str) -> bool:
        """Check whether an episode number was already evaluated."""
        series_id = str(series_id)
        with self._series_lock(series_id):
            return episode_no in self._entries.get(series_id, ())

    def mark_seen(self, series_id: str, episode_no: str) -> None:
        """Record an episode number as evaluated."""
        series_id = str(series_id)
        with self._series_lock(series_id):
            self._entries.setdefault(series_id, set()).add(episode_no)

    def check_and_mark(self, series_id: str, episode_no: str) -> bool:
        """
        Atomically mark an episode number unless it is already present.

        Returns:
            True if the number was newly marked, False if it was seen before.
        """
        series_id = str(series_id)
        with self._series_lock(series_id):
            numbers = self._entries.setdefault(series_id, set())
            if episode_no in numbers:
                return False
            numbers.add(episode_no)
            return True

    def discard(self, series_id: str, episode_no: str) -> None:
        """Forget a single episode number so it can be evaluated again."""
        series_id = str(series_id)
        with self._series_lock(series_id):
            self._entries.get(series_id, set()).discard(episode_no)

    @contextmanager
    def _all_series_locked(self):
        # 持有注册锁期间不会有新的番剧锁产生
        with self._registry_lock:
            locks = list(self._locks.values())
            for lock in locks:
                lock.acquire()
            try:
                yield
            finally:
                for lock in locks:
                    lock.release()

    def clear(self) -> None:
        """Forget every series."""
        with self._all_series_locked():
            self._entries.clear()
        logger.info('🧹 下载缓存已清空')

    def clear_series(self, series_id: str) -> None:
        """Forget one series."""
        series_id = str(series_id)
        with self._series_lock(series_id):
            self._entries.pop(series_id, None)
        logger.debug(f'🧹 已清除番剧缓存: {series_id}')

    def get_stats(self, series_id: Optional[str] = None) -> Dict[str, int]:
        """获取缓存统计信息。"""
        if series_id is not None:
            series_id = str(series_id)
            with self._series_lock(series_id):
                return {'episodes': len(self._entries.get(series_id, ()))}
        with self._all_series_locked():
            return {
                'series': len(self._entries),
                'episodes': sum(len(numbers) for numbers in self._entries.values()),
            }


class CacheClearRequest:
    """
    File-based request to clear the dedup cache of a running poller.

    ``clean-cache`` runs in its own process, so it leaves a marker file
    that the poll loop picks up and consumes.
    """

    def __init__(self, path: str):
        self._path = path

    @property
    def path(self) -> str:
        return self._path

    def request(self) -> None:
        """Leave a clear request for the poll loop."""
        directory = os.path.dirname(self._path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(self._path, 'w', encoding='utf-8') as f:
            f.write(datetime.now().isoformat())
        logger.info(f'📨 已提交缓存清理请求: {self._path}')

    def pending(self) -> bool:
        return os.path.exists(self._path)

    def apply(self, cache: EpisodeDedupCache) -> bool:
        """
        Clear the cache if a request is pending.

        Returns:
            True if a request was consumed.
        """
        try:
            os.remove(self._path)
        except FileNotFoundError:
            return False
        stats = cache.get_stats()
        cache.clear()
        logger.info(
            f'🧹 按请求清空缓存: {stats["series"]} 部番剧, {stats["episodes"]} 条记录'
        )
        return True
