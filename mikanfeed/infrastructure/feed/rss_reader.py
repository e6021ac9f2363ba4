"""
RSS reader module.

Fetches and parses RSS 2.0 / Atom release feeds into FeedEntry records.
"""

import logging
import xml.etree.ElementTree as ET
from typing import List

from mikanfeed.core.domain.entities import FeedEntry
from mikanfeed.core.exceptions import FeedParseError
from mikanfeed.core.interfaces.adapters import IFeedReader, IHttpClient

logger = logging.getLogger(__name__)


class RSSReader(IFeedReader):
    """
    RSS/Atom feed reader.

    Example:
        >>> reader = RSSReader(http_client)
        >>> entries = reader.read('https://mikanime.tv/RSS/Bangumi?bangumiId=3519')
    """

    # XML namespaces for various RSS formats
    NAMESPACES = {
        'atom': 'http://www.w3.org/2005/Atom',
        'mikan': 'https://mikanani.me/0.1/',
    }

    def __init__(self, http_client: IHttpClient):
        """
        Initialize the RSS reader.

        Args:
            http_client: Shared HTTP client.
        """
        self._http = http_client

    def read(self, feed_url: str) -> List[FeedEntry]:
        """
        Fetch and parse a feed.

        Supports both RSS 2.0 and Atom formats. Automatically detects
        the format based on the root element.

        Raises:
            FetchError: If fetching fails.
            FeedParseError: If the body is not a valid feed.
        """
        logger.info(f'🔍 正在解析RSS链接: {feed_url}')
        content = self._http.get_bytes(feed_url)
        entries = self.parse(content, feed_url)
        logger.info(f'✅ RSS解析完成，获取到{len(entries)}个项目')
        return entries

    def parse(self, content: bytes | str, feed_url: str = '') -> List[FeedEntry]:
        """Parse feed XML into entries."""
        try:
            root = ET.fromstring(content)
        except ET.ParseError as e:
            logger.error(f'❌ RSS XML解析异常: {e}')
            raise FeedParseError(f'Failed to parse feed XML: {e}', feed_url=feed_url)

        if root.tag == 'feed' or root.tag.endswith('}feed'):
            return self._parse_atom_feed(root)
        return self._parse_rss_feed(root)

    def _parse_rss_feed(self, root: ET.Element) -> List[FeedEntry]:
        entries = []
        for item in root.findall('.//item'):
            title = self._get_text(item, 'title')
            if not title:
                continue

            torrent_url = ''
            enclosure = item.find('enclosure')
            if enclosure is not None:
                torrent_url = enclosure.get('url', '')

            # Mikan 把发布时间放在自有命名空间的 torrent 节点里
            published = self._get_text(item, 'pubDate')
            if not published:
                published = self._get_text(item, 'mikan:torrent/mikan:pubDate')

            entries.append(FeedEntry(
                title=title,
                published=published or None,
                link=self._get_text(item, 'link'),
                torrent_url=torrent_url,
            ))
        return entries

    def _parse_atom_feed(self, root: ET.Element) -> List[FeedEntry]:
        entries = []
        for entry in root.findall('atom:entry', self.NAMESPACES) or root.findall('entry'):
            title = self._get_text(entry, 'atom:title') or self._get_text(entry, 'title')
            if not title:
                continue

            link = ''
            torrent_url = ''
            for link_el in entry.findall('atom:link', self.NAMESPACES) + entry.findall('link'):
                href = link_el.get('href', '')
                if link_el.get('rel') == 'enclosure':
                    torrent_url = href
                elif not link:
                    link = href

            published = (
                self._get_text(entry, 'atom:published')
                or self._get_text(entry, 'atom:updated')
                or self._get_text(entry, 'published')
            )
            entries.append(FeedEntry(
                title=title,
                published=published or None,
                link=link,
                torrent_url=torrent_url,
            ))
        return entries

    def _get_text(self, element: ET.Element, path: str) -> str:
        child = element.find(path, self.NAMESPACES)
        if child is not None and child.text:
            return child.text.strip()
        return ''
