"""
Episode resolver module.

Checks whether an episode is already known to the persisted store.
"""

import logging
from typing import Optional

from mikanfeed.core.interfaces.repositories import IEpisodeRepository

logger = logging.getLogger(__name__)


class EpisodeResolver:
    """
    Existence check against the episode store.

    Store failures propagate as StoreError; a failed lookup is never
    reported as "does not exist".
    """

    def __init__(self, episode_repo: IEpisodeRepository):
        """
        Initialize the resolver.

        Args:
            episode_repo: Episode existence store.
        """
        self._episode_repo = episode_repo

    def exists(
        self,
        series_name: str,
        season: Optional[str],
        episode_no: str
    ) -> bool:
        """
        Check whether an episode exists.

        Args:
            series_name: Series name.
            season: Season label; None or empty means match by name alone.
            episode_no: Zero-padded episode number.

        Returns:
            True if the store already holds the episode.

        Raises:
            StoreError: If the store lookup fails.
        """
        return self._episode_repo.exists(series_name, season or None, episode_no)
