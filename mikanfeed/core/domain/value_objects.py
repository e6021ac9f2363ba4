"""
Value objects module.

Contains immutable value objects representing domain concepts without identity.
Value objects are compared by their attributes, not by identity.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class ValidationState(Enum):
    """Feed entry validation state."""
    RECEIVED = 'received'
    NUMBER_EXTRACTED = 'number_extracted'
    UNRESOLVED = 'unresolved'
    FILTER_CHECKED = 'filter_checked'
    CACHE_CHECKED = 'cache_checked'
    RESOLVED = 'resolved'
    ACCEPTED = 'accepted'
    REJECTED = 'rejected'


class RejectReason(Enum):
    """Why a feed entry was rejected."""
    MISSING_METADATA = 'missing_metadata'
    UNRESOLVED_EPISODE = 'unresolved_episode'
    FILTERED = 'filtered'
    DUPLICATE = 'duplicate'
    EXISTS = 'exists'


@dataclass(frozen=True)
class DownloadLink:
    """
    Download link value object.

    Attributes:
        label: Display label, usually the release title on the page.
        url: Retrieval URL (e.g. a magnet URI).
    """
    label: str
    url: str


@dataclass(frozen=True)
class SeriesIdentity:
    """
    Human-facing series identity.

    The persisted store indexes series on (name, season), not on the
    provider identifier. A season of None means "any season".
    """
    name: str
    season: Optional[str] = None

    @property
    def display_name(self) -> str:
        """Return name with season label, if any."""
        if self.season:
            return f'{self.name} {self.season}'
        return self.name


@dataclass(frozen=True)
class EpisodeIdentity:
    """
    Episode identity inside a download descriptor.

    Attributes:
        title: Episode title (the matched file name).
        no: Zero-padded episode number.
        pub_at: Publish time, None when unknown.
    """
    title: str
    no: str
    pub_at: Optional[datetime] = None
