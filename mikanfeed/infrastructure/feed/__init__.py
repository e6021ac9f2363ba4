"""
Feed module.

Provides the RSS/Atom release feed reader.
"""

from mikanfeed.infrastructure.feed.rss_reader import RSSReader

__all__ = [
    'RSSReader',
]
