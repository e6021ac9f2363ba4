"""
Services layer module.

Contains business logic services that orchestrate domain operations.
Services coordinate between adapters, repositories, and domain entities.

Directory structure:
- feed/        : Feed entry validation, descriptors and polling
"""

# Feed services
from mikanfeed.services.feed import (
    DownloadDescriptorBuilder,
    EpisodeDedupCache,
    EpisodeResolver,
    FeedEntryValidator,
    FeedPoller,
    FilterService,
    PollResult,
    SubscriptionRegistry,
    ValidationResult,
)

# Series services
from mikanfeed.services.series_service import SeriesService

__all__ = [
    'DownloadDescriptorBuilder',
    'EpisodeDedupCache',
    'EpisodeResolver',
    'FeedEntryValidator',
    'FeedPoller',
    'FilterService',
    'PollResult',
    'SubscriptionRegistry',
    'ValidationResult',
    'SeriesService',
]
