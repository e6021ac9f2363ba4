"""
Domain layer module.

Contains value objects and entities that represent the core business concepts.
"""

from mikanfeed.core.domain.entities import (
    CalendarDay,
    DownloadDescriptor,
    DownloadedFile,
    Episode,
    FeedEntry,
    PaginatedResult,
    Series,
    SeriesPage,
    SeriesSource,
    SeriesStub,
    SeriesSubscription,
)
from mikanfeed.core.domain.value_objects import (
    DownloadLink,
    EpisodeIdentity,
    RejectReason,
    SeriesIdentity,
    ValidationState,
)

__all__ = [
    # Value Objects - Enums
    'ValidationState',
    'RejectReason',
    # Value Objects - Data Classes
    'DownloadLink',
    'SeriesIdentity',
    'EpisodeIdentity',
    # Entities
    'SeriesStub',
    'Series',
    'Episode',
    'CalendarDay',
    'SeriesPage',
    'PaginatedResult',
    'SeriesSource',
    'SeriesSubscription',
    'FeedEntry',
    'DownloadedFile',
    'DownloadDescriptor',
]
