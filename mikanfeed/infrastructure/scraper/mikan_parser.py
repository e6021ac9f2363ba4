"""
Mikan page parser module.

Turns fetched Mikan HTML pages into structured records using BeautifulSoup.
Three page shapes are understood: the weekly calendar (home page), the
series detail page, and the search results page.

A listing item that lacks an expected element is skipped; it never fails
the whole page.
"""

import logging
import re
from typing import List, Optional

from bs4 import BeautifulSoup, Tag

from mikanfeed.core.domain.entities import CalendarDay, SeriesPage, SeriesStub
from mikanfeed.core.domain.value_objects import DownloadLink
from mikanfeed.core.utils.episode_parser import parse_episode

logger = logging.getLogger(__name__)

BANGUMI_SUBJECT_RE = re.compile(r'(?:bgm|bangumi|chii)\.tv/subject/(\d+)')
_BACKGROUND_URL_RE = re.compile(r'url\(\s*[\'"]?([^\'")]+)[\'"]?\s*\)')


class MikanPageParser:
    """
    Mikan HTML page parser.

    Example:
        >>> parser = MikanPageParser()
        >>> days = parser.parse_calendar(html)
        >>> [day.weekday for day in days]
        [0, 1, 2, 3, 4, 5, 6]
    """

    HTML_PARSER = 'html.parser'

    def __init__(self, collect_all_links: bool = False):
        """
        Initialize the parser.

        Args:
            collect_all_links: Keep every download link per episode instead
                of only the first one.
        """
        self._collect_all_links = collect_all_links

    def parse_calendar(self, html: str | bytes) -> List[CalendarDay]:
        """
        Parse the weekly calendar.

        Blocks whose weekday is missing, non-numeric or outside [0, 6]
        are dropped. The result is sorted ascending by weekday.

        Args:
            html: Home page HTML.

        Returns:
            Calendar days with raw (un-normalized) poster paths.
        """
        soup = BeautifulSoup(html, self.HTML_PARSER)
        calendar: List[CalendarDay] = []

        for block in soup.select('.sk-bangumi'):
            weekday = self._parse_weekday(block.get('data-dayofweek'))
            if weekday is None:
                continue

            items = []
            for item in block.select('li'):
                stub = self._parse_calendar_item(item)
                if stub:
                    items.append(stub)
            calendar.append(CalendarDay(weekday=weekday, items=items))

        calendar.sort(key=lambda day: day.weekday)
        logger.debug(f'📅 解析放送日历: {len(calendar)} 天')
        return calendar

    def parse_series_page(
        self,
        html: str | bytes,
        collect_all_links: Optional[bool] = None
    ) -> SeriesPage:
        """
        Parse a series detail page.

        Download links are keyed by the episode number read from each
        release title; batch and unresolved titles are skipped. The first
        link per number wins unless multi-link collection is enabled, in
        which case all links are kept in arrival order.

        Args:
            html: Series page HTML.
            collect_all_links: Override the parser-wide setting.

        Returns:
            SeriesPage with the Bangumi cross-reference (None if absent).
        """
        if collect_all_links is None:
            collect_all_links = self._collect_all_links

        soup = BeautifulSoup(html, self.HTML_PARSER)
        page = SeriesPage(
            bangumi_id=self._find_bangumi_id(soup),
            name=self._find_title(soup),
            poster_url=self._find_poster(soup),
        )

        for anchor in soup.select('a.magnet-link-wrap'):
            label = anchor.get_text(strip=True)
            no = parse_episode(label)
            if not isinstance(no, int):
                continue

            sibling = anchor.find_next_sibling()
            url = sibling.get('data-clipboard-text') if isinstance(sibling, Tag) else None
            if not url:
                logger.debug(f'⚠️ 缺少下载链接，跳过: {label[:60]}')
                continue

            if no in page.links and not collect_all_links:
                continue
            page.links.setdefault(no, []).append(DownloadLink(label=label, url=url))

        logger.debug(
            f'📄 解析番剧页面: bangumi={page.bangumi_id} '
            f'集数={len(page.links)}'
        )
        return page

    def parse_search_results(self, html: str | bytes) -> List[SeriesStub]:
        """
        Parse a search results page.

        Args:
            html: Search page HTML.

        Returns:
            Matching series stubs with raw poster paths.
        """
        soup = BeautifulSoup(html, self.HTML_PARSER)
        items = []

        for item in soup.select('.an-ul > li'):
            anchor = item.find('a', href=True)
            series_id = self._last_path_segment(anchor['href']) if anchor else None
            name_el = item.select_one('.an-text[title]')
            name = name_el['title'].strip() if name_el else ''
            if not series_id or not name:
                continue

            poster_el = item.select_one('span[data-src]')
            items.append(SeriesStub(
                id=series_id,
                name=name,
                poster_url=poster_el['data-src'] if poster_el else None
            ))

        logger.debug(f'🔍 解析搜索结果: {len(items)} 项')
        return items

    @staticmethod
    def _parse_weekday(value) -> Optional[int]:
        try:
            weekday = int(str(value).strip())
        except (TypeError, ValueError):
            return None
        if weekday < 0 or weekday > 6:
            return None
        return weekday

    @staticmethod
    def _parse_calendar_item(item: Tag) -> Optional[SeriesStub]:
        id_el = item.select_one('span[data-bangumiid]')
        name_el = item.select_one('.an-text[title]')
        if not id_el or not name_el:
            return None

        series_id = id_el['data-bangumiid'].strip()
        name = name_el['title'].strip()
        if not series_id or not name:
            return None

        poster_el = item.select_one('span[data-src]')
        return SeriesStub(
            id=series_id,
            name=name,
            poster_url=poster_el['data-src'] if poster_el else None
        )

    @staticmethod
    def _find_bangumi_id(soup: BeautifulSoup) -> Optional[str]:
        for anchor in soup.select('.w-other-c'):
            match = BANGUMI_SUBJECT_RE.search(anchor.get('href') or '')
            if match:
                return match.group(1)
        return None

    @staticmethod
    def _find_title(soup: BeautifulSoup) -> str:
        title_el = soup.select_one('.bangumi-title')
        return title_el.get_text(strip=True) if title_el else ''

    @staticmethod
    def _find_poster(soup: BeautifulSoup) -> Optional[str]:
        poster_el = soup.select_one('.bangumi-poster')
        if not poster_el:
            return None
        match = _BACKGROUND_URL_RE.search(poster_el.get('style') or '')
        return match.group(1) if match else None

    @staticmethod
    def _last_path_segment(href: str) -> Optional[str]:
        path = href.split('#', 1)[0].split('?', 1)[0].rstrip('/')
        segment = path.rsplit('/', 1)[-1]
        return segment or None
