"""
Feed services package.

Contains the feed entry pipeline: keyword filtering, the per-series
dedup cache, the episode existence check, the validator built on top
of them, the download descriptor builder and the subscription poller.
"""

from mikanfeed.services.feed.dedup_cache import CacheClearRequest, EpisodeDedupCache
from mikanfeed.services.feed.descriptor_builder import DownloadDescriptorBuilder
from mikanfeed.services.feed.episode_resolver import EpisodeResolver
from mikanfeed.services.feed.feed_poller import FeedPoller, PollResult
from mikanfeed.services.feed.feed_validator import FeedEntryValidator, ValidationResult
from mikanfeed.services.feed.filter_service import FilterService
from mikanfeed.services.feed.subscription_registry import (
    SubscriptionRegistry,
    feed_url_for,
    site_url_for,
)

__all__ = [
    'CacheClearRequest',
    'EpisodeDedupCache',
    'DownloadDescriptorBuilder',
    'EpisodeResolver',
    'FeedPoller',
    'PollResult',
    'FeedEntryValidator',
    'ValidationResult',
    'FilterService',
    'SubscriptionRegistry',
    'feed_url_for',
    'site_url_for',
]
