"""
Entities module.

Contains the domain records produced by scraping, the metadata API and
feed processing. Series and episodes are read-only projections created
fresh on every fetch.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Generic, List, Optional, TypeVar

from mikanfeed.core.domain.value_objects import (
    DownloadLink,
    EpisodeIdentity,
    SeriesIdentity,
)

T = TypeVar('T')


@dataclass
class SeriesStub:
    """
    Series summary as listed on calendar and search pages.

    Attributes:
        id: Mikan bangumi id.
        name: Series name.
        poster_url: Poster URL (raw path from the page until normalized).
    """
    id: str
    name: str
    poster_url: Optional[str] = None


@dataclass
class Series:
    """
    Series entity.

    Attributes:
        id: Provider-scoped identifier.
        name: Canonical (preferably localized) name.
        season: Optional season label.
        description: Synopsis.
        poster_url: Poster image URL.
        tags: Tag names.
        count: Total episode count (0 if unknown).
        pub_at: Publication date, None if unknown.
    """
    id: str
    name: str
    season: Optional[str] = None
    description: str = ''
    poster_url: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    count: int = 0
    pub_at: Optional[datetime] = None

    @property
    def identity(self) -> SeriesIdentity:
        """Return the (name, season) identity used for resolution."""
        return SeriesIdentity(name=self.name, season=self.season)


@dataclass
class Episode:
    """
    Episode entity.

    Attributes:
        no: Episode number, zero-padded to at least two digits.
        title: Episode title.
        pub_at: Publication time, None if unparsable.
        download_links: Ordered download links for this episode.
    """
    no: str
    title: str = ''
    pub_at: Optional[datetime] = None
    download_links: List[DownloadLink] = field(default_factory=list)

    @property
    def download_url(self) -> Optional[str]:
        """Return the first download URL, if any."""
        if self.download_links:
            return self.download_links[0].url
        return None


@dataclass
class CalendarDay:
    """Series scheduled on a weekday (0 = Sunday .. 6 = Saturday)."""
    weekday: int
    items: List[SeriesStub] = field(default_factory=list)


@dataclass
class SeriesPage:
    """
    Parsed Mikan series detail page.

    Attributes:
        bangumi_id: Bangumi subject id referenced by the page, if present.
        name: Series title shown on the page.
        poster_url: Poster path shown on the page.
        links: Episode number to download links, in arrival order.
    """
    bangumi_id: Optional[str] = None
    name: str = ''
    poster_url: Optional[str] = None
    links: dict[int, List[DownloadLink]] = field(default_factory=dict)


@dataclass
class PaginatedResult(Generic[T]):
    """
    One page of a paginated listing.

    Attributes:
        items: Items in this page.
        total: Total number of items across all pages.
        page: Zero-based page index.
        size: Page size.
    """
    items: List[T]
    total: int
    page: int = 0
    size: int = 0

    @property
    def has_more(self) -> bool:
        """Check whether more pages follow this one."""
        return (self.page + 1) * self.size < self.total


@dataclass
class SeriesSource:
    """Feed and site locations for a series."""
    name: str
    url: str
    site: str


@dataclass
class SeriesSubscription:
    """
    Provider metadata attached to feed entries by the caller.

    The validator never infers any of these fields itself.

    Attributes:
        id: Mikan bangumi id.
        name: Series name used for existence checks.
        season: Optional season label; None means no season constraint.
        include: Keywords that must all appear in a title.
        exclude: Keywords any of which rejects a title.
        feed_url: Series RSS feed URL, used by the poller.
    """
    id: str
    name: str
    season: Optional[str] = None
    include: List[str] = field(default_factory=list)
    exclude: List[str] = field(default_factory=list)
    feed_url: str = ''

    @property
    def identity(self) -> SeriesIdentity:
        """Return the (name, season) identity."""
        return SeriesIdentity(name=self.name, season=self.season)


@dataclass
class FeedEntry:
    """
    One item of a release feed.

    Attributes:
        title: Release title; the only field episode extraction reads.
        published: Raw publish date string, if present.
        link: Item page link.
        torrent_url: Enclosure URL (torrent or magnet).
    """
    title: str
    published: Optional[str] = None
    link: str = ''
    torrent_url: str = ''


@dataclass
class DownloadedFile:
    """A concrete file produced by downloading a feed entry."""
    name: str
    path: str = ''
    size: int = 0


@dataclass
class DownloadDescriptor:
    """
    Describes which series/episode a downloaded file belongs to.

    Attributes:
        series: Series identity (name, season).
        episode: Episode identity (title, number, publish time).
        overwrite_episode: Always True; the descriptor supersedes any
            placeholder episode record with the same number.
        source_id: Mikan bangumi id of the subscription, if known.
    """
    series: SeriesIdentity
    episode: EpisodeIdentity
    overwrite_episode: bool = True
    source_id: Optional[str] = None
