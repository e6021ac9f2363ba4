"""
Core layer module.

Contains domain models, interfaces, and exception definitions.
"""

from mikanfeed.core.exceptions import (
    ConfigError,
    ConfigValidationError,
    DatabaseError,
    FeedParseError,
    FetchError,
    MikanFeedError,
    PageParseError,
    ParseError,
    StoreError,
    TitleParseError,
)

__all__ = [
    # Exceptions
    'MikanFeedError',
    'FetchError',
    'ConfigError',
    'ConfigValidationError',
    'DatabaseError',
    'StoreError',
    'ParseError',
    'TitleParseError',
    'PageParseError',
    'FeedParseError',
]
