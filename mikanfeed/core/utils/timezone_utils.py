"""
Timezone utilities module.

Provides unified time handling functions for the application.

Features:
1. All stored times are UTC
2. Lenient parsing of feed and API date strings
3. Unparsable input yields None, never a default epoch
"""

import re
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Optional

# Python 3.10 的 fromisoformat 只接受 3 位或 6 位小数秒
_FRACTION_RE = re.compile(r'\.(\d+)(?=$|[+-]\d{2}:?\d{2}$)')


def get_utc_now() -> datetime:
    """
    Get the current UTC time.

    Returns:
        datetime: Current time with UTC timezone info.
    """
    return datetime.now(timezone.utc)


def to_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """
    Convert a datetime object to UTC time.

    Args:
        dt: The datetime object to convert.

    Returns:
        datetime: UTC time, or None if input is None.
    """
    if dt is None:
        return None

    # If already has timezone info, convert to UTC
    if dt.tzinfo is not None:
        return dt.astimezone(timezone.utc)

    # If no timezone info, assume it's UTC
    return dt.replace(tzinfo=timezone.utc)


def parse_datetime(value: Optional[str]) -> Optional[datetime]:
    """
    Parse a date string from a feed or API response.

    Accepts ISO 8601 (``2025-01-01``, ``2025-01-01T12:00:00Z``,
    ``2025-01-01T12:00:00.4`` with a fraction of any length) and RFC 822
    (``Sat, 01 Jan 2025 12:00:00 +0800``). Naive values are treated as UTC.

    Args:
        value: The raw date string.

    Returns:
        datetime: UTC time, or None if the value is empty or unparsable.
    """
    if not value or not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None

    # ISO 8601 (Python < 3.11 does not accept a trailing 'Z')
    iso_text = text[:-1] + '+00:00' if text.endswith('Z') else text
    iso_text = _FRACTION_RE.sub(lambda m: '.' + m.group(1)[:6].ljust(6, '0'), iso_text)
    try:
        return to_utc(datetime.fromisoformat(iso_text))
    except ValueError:
        pass

    # RFC 822 (RSS pubDate)
    try:
        return to_utc(parsedate_to_datetime(text))
    except (TypeError, ValueError, IndexError):
        return None

