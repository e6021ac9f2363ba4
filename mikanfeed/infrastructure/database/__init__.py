"""
Database module.

Provides SQLAlchemy models and session management.
"""

from mikanfeed.infrastructure.database.models import Base, EpisodeRecord, SeriesRecord
from mikanfeed.infrastructure.database.session import DatabaseSessionManager

__all__ = [
    'Base',
    'SeriesRecord',
    'EpisodeRecord',
    'DatabaseSessionManager',
]
