"""
Utility functions module.

Provides episode number parsing and time handling helpers.
"""

from mikanfeed.core.utils.episode_parser import (
    episode_key,
    extract_episode_no,
    format_episode_no,
    pad_episode_no,
    parse_episode,
)
from mikanfeed.core.utils.timezone_utils import (
    get_utc_now,
    parse_datetime,
    to_utc,
)

__all__ = [
    'parse_episode',
    'format_episode_no',
    'extract_episode_no',
    'pad_episode_no',
    'episode_key',
    'get_utc_now',
    'to_utc',
    'parse_datetime',
]
