"""
Repositories module.

Provides data access layer implementations.
"""

from mikanfeed.infrastructure.repositories.episode_repository import EpisodeRepository

__all__ = [
    'EpisodeRepository',
]
