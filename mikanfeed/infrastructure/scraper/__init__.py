"""
Scraper module.

Provides Mikan HTML page parsing and poster URL normalization.
"""

from mikanfeed.infrastructure.scraper.image_url import ImageUrlNormalizer
from mikanfeed.infrastructure.scraper.mikan_parser import MikanPageParser

__all__ = [
    'MikanPageParser',
    'ImageUrlNormalizer',
]
