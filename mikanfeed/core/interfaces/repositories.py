"""
Repository interfaces module.

Contains abstract base classes defining contracts for data access operations.
"""

from abc import ABC, abstractmethod

from mikanfeed.core.domain.entities import DownloadDescriptor


class IEpisodeRepository(ABC):
    """
    Episode existence store interface.

    Defines the contract the episode resolver consumes.
    """

    @abstractmethod
    def exists(
        self,
        series_name: str,
        season: str | None,
        episode_no: str
    ) -> bool:
        """
        Check whether an episode is already known.

        Args:
            series_name: Series name (exact match).
            season: Season label; None means no season constraint.
            episode_no: Zero-padded episode number.

        Returns:
            True if a matching episode exists.

        Raises:
            StoreError: If the underlying query fails.
        """
        pass

    @abstractmethod
    def apply_descriptor(self, descriptor: DownloadDescriptor) -> int:
        """
        Record the episode described by a download descriptor.

        Args:
            descriptor: Descriptor produced for a downloaded file.

        Returns:
            ID of the created or updated episode record.

        Raises:
            StoreError: If the write fails.
        """
        pass
