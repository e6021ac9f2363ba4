"""
Bangumi adapter module.

Provides integration with the Bangumi API v0 for fetching series metadata.
"""

import logging
from typing import Any

from mikanfeed.core.config import BangumiConfig
from mikanfeed.core.domain.entities import Episode, PaginatedResult, Series
from mikanfeed.core.exceptions import FetchError
from mikanfeed.core.interfaces.adapters import IHttpClient, IMetadataClient
from mikanfeed.core.utils.episode_parser import pad_episode_no
from mikanfeed.core.utils.timezone_utils import parse_datetime

logger = logging.getLogger(__name__)


class BangumiAdapter(IMetadataClient):
    """
    Bangumi API v0 adapter.

    Implements IMetadataClient interface for fetching subject details and
    paginated episode lists.
    """

    # 0 = 本篇
    MAIN_EPISODE_TYPE = 0

    def __init__(self, http_client: IHttpClient, bangumi_config: BangumiConfig | None = None):
        """
        Initialize the Bangumi adapter.

        Args:
            http_client: Shared HTTP client (carries timeout and proxy).
            bangumi_config: API base URL and default page size.
        """
        self._http = http_client
        self._config = bangumi_config or BangumiConfig()
        self._api_base = self._config.api_base.rstrip('/')

    @property
    def default_page_size(self) -> int:
        """Default episode page size."""
        return self._config.page_size

    def get_subject(self, subject_id: str) -> Series:
        """
        Get subject details.

        Prefers the localized (Chinese) name when present.

        Args:
            subject_id: Bangumi subject ID.

        Returns:
            Series record.

        Raises:
            FetchError: If the request fails or the payload is not a subject.
        """
        url = f'{self._api_base}/v0/subjects/{subject_id}'
        item = self._expect_dict(self._http.get_json(url), url)

        images = item.get('images') or {}
        tags = [tag['name'] for tag in (item.get('tags') or []) if tag.get('name')]
        series = Series(
            id=str(item.get('id', subject_id)),
            name=item.get('name_cn') or item.get('name') or '',
            description=item.get('summary') or '',
            poster_url=images.get('common') or None,
            tags=tags,
            count=item.get('total_episodes') or item.get('eps') or 0,
            pub_at=parse_datetime(item.get('date')),
        )
        logger.info(f'📺 Bangumi 条目: {series.name} (ID={subject_id})')
        return series

    def get_episodes(
        self,
        subject_id: str,
        page: int = 0,
        size: int | None = None
    ) -> PaginatedResult[Episode]:
        """
        Get one page of a subject's main episodes.

        Args:
            subject_id: Bangumi subject ID.
            page: Zero-based page index.
            size: Page size (defaults to the configured page size).

        Returns:
            Paginated episodes with zero-padded numbers; invalid air dates
            are left empty.

        Raises:
            FetchError: If the request fails or the payload is malformed.
        """
        page = max(page or 0, 0)
        size = size or self._config.page_size
        url = f'{self._api_base}/v0/episodes'
        params = {
            'subject_id': subject_id,
            'type': self.MAIN_EPISODE_TYPE,
            'offset': page * size,
            'limit': size,
        }
        result = self._expect_dict(self._http.get_json(url, params=params), url)

        episodes = []
        for item in result.get('data') or []:
            number = item.get('ep')
            if number is None:
                number = item.get('sort')
            if number is None:
                continue
            episodes.append(Episode(
                no=pad_episode_no(number),
                title=item.get('name_cn') or item.get('name') or '',
                pub_at=parse_datetime(item.get('airdate')),
            ))

        total = result.get('total')
        if not isinstance(total, int):
            total = len(episodes)

        logger.debug(
            f'📋 Bangumi 剧集: subject={subject_id} page={page} '
            f'获取 {len(episodes)}/{total}'
        )
        return PaginatedResult(items=episodes, total=total, page=page, size=size)

    @staticmethod
    def _expect_dict(payload: Any, url: str) -> dict:
        if not isinstance(payload, dict):
            raise FetchError('Unexpected Bangumi response payload', url=url)
        return payload
