"""
Adapter interfaces module.

Contains abstract base classes defining contracts for external service adapters.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from mikanfeed.core.domain.entities import (
    Episode,
    FeedEntry,
    PaginatedResult,
    Series,
)


class IHttpClient(ABC):
    """
    HTTP client interface.

    Every call is bounded by a timeout and raises FetchError on failure.
    """

    @abstractmethod
    def get_text(self, url: str, params: Optional[Dict[str, Any]] = None) -> str:
        """
        Fetch a URL and return the decoded body.

        Args:
            url: URL to fetch.
            params: Optional query parameters.

        Returns:
            Response body as text.
        """
        pass

    @abstractmethod
    def get_bytes(self, url: str, params: Optional[Dict[str, Any]] = None) -> bytes:
        """
        Fetch a URL and return the raw body.

        Args:
            url: URL to fetch.
            params: Optional query parameters.

        Returns:
            Response body as bytes.
        """
        pass

    @abstractmethod
    def get_json(self, url: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """
        Fetch a URL and decode the JSON body.

        Args:
            url: URL to fetch.
            params: Optional query parameters.

        Returns:
            Decoded JSON value.
        """
        pass


class IMetadataClient(ABC):
    """
    Metadata client interface.

    Defines the contract for fetching series metadata.
    """

    @abstractmethod
    def get_subject(self, subject_id: str) -> Series:
        """
        Get series details by subject ID.

        Args:
            subject_id: Metadata subject ID.

        Returns:
            Series record.
        """
        pass

    @abstractmethod
    def get_episodes(
        self,
        subject_id: str,
        page: int = 0,
        size: int = 100
    ) -> PaginatedResult[Episode]:
        """
        Get one page of a subject's episodes.

        Args:
            subject_id: Metadata subject ID.
            page: Zero-based page index.
            size: Page size.

        Returns:
            Paginated episode list.
        """
        pass


class IFeedReader(ABC):
    """
    Feed reader interface.

    Defines the contract for reading release feeds.
    """

    @abstractmethod
    def read(self, feed_url: str) -> List[FeedEntry]:
        """
        Read a feed.

        Args:
            feed_url: URL of the RSS/Atom feed.

        Returns:
            Entries in feed order.
        """
        pass
