"""
Series service module.

Browses Mikan (calendar, search, series pages) and joins series pages with
Bangumi metadata.
"""

import logging
from typing import List, Optional

from mikanfeed.core.config import MikanConfig
from mikanfeed.core.domain.entities import (
    CalendarDay,
    Episode,
    PaginatedResult,
    Series,
    SeriesPage,
    SeriesSource,
    SeriesStub,
    SeriesSubscription,
)
from mikanfeed.core.interfaces.adapters import IHttpClient, IMetadataClient
from mikanfeed.core.utils.episode_parser import episode_key, pad_episode_no
from mikanfeed.infrastructure.scraper.image_url import ImageUrlNormalizer
from mikanfeed.infrastructure.scraper.mikan_parser import MikanPageParser
from mikanfeed.services.feed.subscription_registry import feed_url_for, site_url_for

logger = logging.getLogger(__name__)


class SeriesService:
    """
    Series browsing service.

    Example:
        >>> service = container.series_service()
        >>> days = service.get_calendar()
        >>> series = service.get_series('3519')
    """

    def __init__(
        self,
        http_client: IHttpClient,
        page_parser: MikanPageParser,
        metadata_client: IMetadataClient,
        image_normalizer: ImageUrlNormalizer,
        mikan_config: MikanConfig
    ):
        """
        Initialize the series service.

        Args:
            http_client: Shared HTTP client.
            page_parser: Mikan HTML parser.
            metadata_client: Bangumi metadata client.
            image_normalizer: Poster URL rewriter.
            mikan_config: Mikan site settings.
        """
        self._http = http_client
        self._parser = page_parser
        self._metadata = metadata_client
        self._images = image_normalizer
        self._config = mikan_config

    @property
    def base(self) -> str:
        return self._config.base

    def get_calendar(self) -> List[CalendarDay]:
        """
        Get the weekly release calendar.

        Returns:
            Calendar days sorted by weekday, posters normalized.

        Raises:
            FetchError: If the home page cannot be fetched.
        """
        logger.info('📅 获取放送日历...')
        calendar = self._parser.parse_calendar(self._http.get_text(self.base))
        for day in calendar:
            self._normalize_posters(day.items)
        logger.info(f'✅ 放送日历: {sum(len(d.items) for d in calendar)} 部番剧')
        return calendar

    def search_series(self, keyword: str) -> PaginatedResult[SeriesStub]:
        """
        Search series by keyword.

        The site does not paginate search results; the whole list is one page.
        """
        logger.info(f'🔍 搜索番剧: {keyword}')
        html = self._http.get_text(f'{self.base}/Home/Search', params={'searchstr': keyword})
        items = self._normalize_posters(self._parser.parse_search_results(html))
        return PaginatedResult(items=items, total=len(items), page=0, size=len(items))

    def get_series(self, series_id: str) -> Series:
        """
        Get series details.

        Metadata comes from the Bangumi subject referenced by the series
        page; the returned id is always the Mikan id. A page without a
        Bangumi reference falls back to the page's own title and poster.

        Raises:
            FetchError: If a page or API request fails.
        """
        page = self._fetch_series_page(series_id)
        if page.bangumi_id is None:
            logger.warning(f'⚠️ 番剧页面缺少 Bangumi 条目链接，使用页面信息: {series_id}')
            return Series(
                id=str(series_id),
                name=page.name,
                poster_url=self._images.normalize(page.poster_url),
            )

        series = self._metadata.get_subject(page.bangumi_id)
        series.id = str(series_id)
        series.poster_url = self._images.proxy(series.poster_url)
        return series

    def get_episodes(
        self,
        series_id: str,
        page: int = 0,
        size: Optional[int] = None
    ) -> PaginatedResult[Episode]:
        """
        Get one page of episodes with their download links.

        Episodes are listed from Bangumi and joined with the series page's
        download links by numeric episode number.

        Args:
            series_id: Mikan bangumi id.
            page: Zero-based page index.
            size: Page size (Bangumi default if omitted).

        Raises:
            FetchError: If a page or API request fails.
        """
        series_page = self._fetch_series_page(series_id)
        if series_page.bangumi_id is None:
            return self._episodes_from_page(series_page, page, size)

        result = self._metadata.get_episodes(series_page.bangumi_id, page, size)
        matched = 0
        for episode in result.items:
            links = series_page.links.get(episode_key(episode.no))
            if links:
                episode.download_links = list(links)
                matched += 1
        logger.debug(f'🔗 下载链接匹配: {matched}/{len(result.items)}')
        return result

    def build_source(self, series: Series | SeriesStub) -> SeriesSource:
        """Build the RSS source descriptor of a series."""
        return SeriesSource(
            name=series.name,
            url=feed_url_for(self.base, series.id),
            site=site_url_for(self.base, series.id),
        )

    def build_subscription(self, series: Series) -> SeriesSubscription:
        """
        Build a subscription for a series.

        The configured global include/exclude keywords are copied into it.
        """
        return SeriesSubscription(
            id=str(series.id),
            name=series.name,
            season=series.season,
            include=list(self._config.include),
            exclude=list(self._config.exclude),
            feed_url=feed_url_for(self.base, series.id),
        )

    def _fetch_series_page(self, series_id: str) -> SeriesPage:
        html = self._http.get_text(site_url_for(self.base, series_id))
        return self._parser.parse_series_page(html)

    def _normalize_posters(self, items: List[SeriesStub]) -> List[SeriesStub]:
        for item in items:
            item.poster_url = self._images.normalize(item.poster_url)
        return items

    @staticmethod
    def _episodes_from_page(
        series_page: SeriesPage,
        page: int,
        size: Optional[int]
    ) -> PaginatedResult[Episode]:
        episodes = [
            Episode(no=pad_episode_no(no), title=links[0].label, download_links=list(links))
            for no, links in sorted(series_page.links.items())
        ]
        total = len(episodes)
        page = max(page or 0, 0)
        size = size or total
        start = page * size
        return PaginatedResult(items=episodes[start:start + size], total=total, page=page, size=size)
