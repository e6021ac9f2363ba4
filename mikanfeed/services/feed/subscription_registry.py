"""
Subscription registry module.

Keeps the set of subscribed series, keyed by Mikan bangumi id, and syncs
it with the ``subscriptions`` section of the application config.
"""

import logging
import threading
from typing import Dict, List, Optional

from mikanfeed.core.config import AppConfig, SubscriptionConfig
from mikanfeed.core.domain.entities import SeriesSubscription

logger = logging.getLogger(__name__)


def feed_url_for(base: str, bangumi_id: str) -> str:
    """Return the RSS feed URL of a Mikan series."""
    return f'{base}/RSS/Bangumi?bangumiId={bangumi_id}'


def site_url_for(base: str, bangumi_id: str) -> str:
    """Return the Mikan page URL of a series."""
    return f'{base}/Home/Bangumi/{bangumi_id}'


class SubscriptionRegistry:
    """
    Thread-safe registry of series subscriptions.

    Example:
        >>> registry = SubscriptionRegistry('https://mikanime.tv')
        >>> registry.register(SeriesSubscription(id='3519', name='葬送的芙莉莲'))
        >>> registry.get('3519').feed_url
        'https://mikanime.tv/RSS/Bangumi?bangumiId=3519'
    """

    def __init__(self, base: str):
        """
        Initialize the registry.

        Args:
            base: Mikan base URL used to fill in missing feed URLs.
        """
        self._base = base
        self._subscriptions: Dict[str, SeriesSubscription] = {}
        self._lock = threading.Lock()

    def register(self, subscription: SeriesSubscription) -> SeriesSubscription:
        """
        Add or replace a subscription.

        Returns:
            The stored subscription (with its feed URL filled in).
        """
        if not subscription.feed_url:
            subscription.feed_url = feed_url_for(self._base, subscription.id)
        with self._lock:
            replaced = subscription.id in self._subscriptions
            self._subscriptions[subscription.id] = subscription
        action = '更新' if replaced else '添加'
        logger.info(f'📌 {action}订阅: [{subscription.id}] {subscription.identity.display_name}')
        return subscription

    def unregister(self, series_id: str) -> bool:
        """Remove a subscription. Returns False if it was not registered."""
        with self._lock:
            removed = self._subscriptions.pop(str(series_id), None)
        if removed:
            logger.info(f'🗑️ 已取消订阅: [{series_id}] {removed.name}')
        return removed is not None

    def get(self, series_id: str) -> Optional[SeriesSubscription]:
        with self._lock:
            return self._subscriptions.get(str(series_id))

    def all(self) -> List[SeriesSubscription]:
        """Return every subscription, ordered by series id."""
        with self._lock:
            return [self._subscriptions[k] for k in sorted(self._subscriptions)]

    def __len__(self) -> int:
        with self._lock:
            return len(self._subscriptions)

    def load_from_config(self, config: AppConfig) -> int:
        """
        Replace the registry contents with ``config.subscriptions``.

        Returns:
            Number of loaded subscriptions.
        """
        loaded = {
            item.id: SeriesSubscription(
                id=item.id,
                name=item.name,
                season=item.season,
                include=list(item.include),
                exclude=list(item.exclude),
                feed_url=feed_url_for(self._base, item.id),
            )
            for item in config.subscriptions
        }
        with self._lock:
            self._subscriptions = loaded
        logger.debug(f'📋 已加载 {len(loaded)} 个订阅')
        return len(loaded)

    def dump_to_config(self, config: AppConfig) -> None:
        """Write the registry contents back into ``config.subscriptions``."""
        config.subscriptions = [
            SubscriptionConfig(
                id=sub.id,
                name=sub.name,
                season=sub.season,
                include=list(sub.include),
                exclude=list(sub.exclude),
            )
            for sub in self.all()
        ]
