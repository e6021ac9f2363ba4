"""
Metadata module.

Provides the Bangumi metadata adapter.
"""

from mikanfeed.infrastructure.metadata.bangumi_adapter import BangumiAdapter

__all__ = [
    'BangumiAdapter',
]
