"""
Feed poller module.

Reads the RSS feed of each subscribed series and runs every entry
through the validator.
"""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import List, Optional

from mikanfeed.core.domain.entities import FeedEntry, SeriesSubscription
from mikanfeed.core.exceptions import MikanFeedError
from mikanfeed.core.interfaces.adapters import IFeedReader
from mikanfeed.services.feed.feed_validator import FeedEntryValidator
from mikanfeed.services.feed.subscription_registry import SubscriptionRegistry

logger = logging.getLogger(__name__)


@dataclass
class PollResult:
    """
    Result of polling one subscription.

    Attributes:
        series_id: Polled series id.
        total_items: Entries found in the feed.
        accepted: Entries accepted as new episodes.
        skipped_items: Entries rejected by the validator.
        error: Failure message if the poll was aborted.
    """
    series_id: str
    total_items: int = 0
    accepted: List[FeedEntry] = field(default_factory=list)
    skipped_items: int = 0
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.error is None


class FeedPoller:
    """
    Polls subscribed series feeds.

    A failure while polling one subscription is recorded in its
    PollResult and does not affect the others.
    """

    def __init__(
        self,
        feed_reader: IFeedReader,
        validator: FeedEntryValidator,
        registry: SubscriptionRegistry,
        max_workers: int = 4
    ):
        """
        Initialize the poller.

        Args:
            feed_reader: RSS/Atom reader.
            validator: Feed entry validator.
            registry: Subscriptions to poll.
            max_workers: Number of subscriptions polled concurrently.
        """
        self._feed_reader = feed_reader
        self._validator = validator
        self._registry = registry
        self._max_workers = max_workers

    def poll(self, subscription: SeriesSubscription) -> PollResult:
        """
        Poll a single subscription.

        Args:
            subscription: Subscription to poll.

        Returns:
            PollResult with the accepted entries.
        """
        result = PollResult(series_id=subscription.id)
        try:
            entries = self._feed_reader.read(subscription.feed_url)
            result.total_items = len(entries)
            for entry in entries:
                if self._validator.is_valid(entry, subscription):
                    result.accepted.append(entry)
                else:
                    result.skipped_items += 1
        except MikanFeedError as e:
            logger.error(f'❌ 订阅轮询失败 [{subscription.id}] {subscription.name}: {e}')
            result.error = str(e)
            return result

        logger.info(
            f'📦 [{subscription.id}] {subscription.name}: '
            f'{result.total_items} 个项目，新剧集 {len(result.accepted)} 个'
        )
        return result

    def poll_all(self) -> List[PollResult]:
        """
        Poll every registered subscription concurrently.

        Returns:
            One PollResult per subscription, ordered by series id.
        """
        subscriptions = self._registry.all()
        if not subscriptions:
            logger.info('📭 没有订阅需要轮询')
            return []

        logger.info(f'🚀 开始轮询 {len(subscriptions)} 个订阅...')
        results = {}
        with ThreadPoolExecutor(max_workers=self._max_workers) as executor:
            future_to_sub = {
                executor.submit(self.poll, sub): sub
                for sub in subscriptions
            }
            for future in as_completed(future_to_sub):
                sub = future_to_sub[future]
                try:
                    results[sub.id] = future.result()
                except Exception as e:
                    logger.error(f'❌ 订阅轮询异常 [{sub.id}]: {e}')
                    results[sub.id] = PollResult(series_id=sub.id, error=str(e))

        ordered = [results[sub.id] for sub in subscriptions]
        accepted = sum(len(r.accepted) for r in ordered)
        failed = sum(1 for r in ordered if not r.success)
        logger.info(f'✅ 轮询完成: 新剧集 {accepted} 个，失败 {failed} 个订阅')
        return ordered
