"""Unit tests for SeriesService."""

from unittest.mock import MagicMock

import pytest

from mikanfeed.core.config import MikanConfig
from mikanfeed.core.domain.entities import Series
from mikanfeed.core.exceptions import FetchError
from mikanfeed.infrastructure.scraper.image_url import ImageUrlNormalizer
from mikanfeed.infrastructure.scraper.mikan_parser import MikanPageParser
from mikanfeed.services.series_service import SeriesService
from tests.fixtures.test_data import (
    CALENDAR_HTML,
    SEARCH_HTML,
    SERIES_PAGE_HTML,
    SERIES_PAGE_WITHOUT_BANGUMI_HTML,
)


class TestSeriesService:
    """Tests for SeriesService with mocked HTTP and Bangumi clients."""

    @pytest.fixture
    def mikan_config(self):
        return MikanConfig(include=['1080p'], exclude=['CR'])

    @pytest.fixture
    def service(self, mock_http_client, mock_bangumi_client, mikan_config):
        return SeriesService(
            http_client=mock_http_client,
            page_parser=MikanPageParser(),
            metadata_client=mock_bangumi_client,
            image_normalizer=ImageUrlNormalizer(
                mikan_config.base, mikan_config.image_base, 'https://img.example/proxy'
            ),
            mikan_config=mikan_config
        )

    def test_get_calendar(self, service, mock_http_client):
        mock_http_client.get_text.return_value = CALENDAR_HTML

        calendar = service.get_calendar()

        mock_http_client.get_text.assert_called_once_with('https://mikanime.tv')
        assert [day.weekday for day in calendar] == [0, 3, 5, 6]
        frieren = calendar[1].items[0]
        assert frieren.poster_url == (
            'https://img.example/proxy?url='
            'https://mikanani.me/images/Bangumi/202310/b1a3d7a7.jpg'
        )
        assert calendar[2].items[0].poster_url is None

    def test_get_calendar_fetch_failure(self, service, mock_http_client):
        mock_http_client.get_text.side_effect = FetchError('timeout', url='https://mikanime.tv')

        with pytest.raises(FetchError):
            service.get_calendar()

    def test_search_series(self, service, mock_http_client):
        mock_http_client.get_text.return_value = SEARCH_HTML

        result = service.search_series('芙莉莲')

        mock_http_client.get_text.assert_called_once_with(
            'https://mikanime.tv/Home/Search', params={'searchstr': '芙莉莲'}
        )
        assert result.total == 2
        assert result.page == 0
        assert result.size == 2
        assert result.has_more is False
        assert [item.id for item in result.items] == ['3141', '3388']

    def test_get_series_uses_bangumi_metadata(self, service, mock_http_client):
        mock_http_client.get_text.return_value = SERIES_PAGE_HTML

        series = service.get_series('3141')

        mock_http_client.get_text.assert_called_once_with('https://mikanime.tv/Home/Bangumi/3141')
        assert series.id == '3141'
        assert series.name == '葬送的芙莉莲'
        assert series.count == 28
        assert series.poster_url == (
            'https://img.example/proxy?url='
            'https://lain.bgm.tv/pic/cover/c/13/c5/400602_ZI8Y9.jpg'
        )

    def test_get_series_without_cross_reference(self, service, mock_http_client):
        mock_http_client.get_text.return_value = SERIES_PAGE_WITHOUT_BANGUMI_HTML

        series = service.get_series('3205')

        assert series.id == '3205'
        assert series.name == '迷宫饭'
        assert series.poster_url.endswith('https://mikanani.me/images/Bangumi/202401/ffeeddcc.jpg')

    def test_get_episodes_joins_links(self, service, mock_http_client):
        mock_http_client.get_text.return_value = SERIES_PAGE_HTML

        result = service.get_episodes('3141', page=0, size=3)

        assert [ep.no for ep in result.items] == ['01', '02', '03']
        assert result.items[0].download_url == 'magnet:?xt=urn:btih:aaaa'
        assert result.items[1].download_url == 'magnet:?xt=urn:btih:cccc'
        assert result.items[2].download_url is None
        assert result.total == 28

    def test_get_episodes_from_page_only(self, service, mock_http_client):
        mock_http_client.get_text.return_value = SERIES_PAGE_WITHOUT_BANGUMI_HTML

        result = service.get_episodes('3205')

        assert [ep.no for ep in result.items] == ['01', '02']
        assert result.items[0].download_url == 'magnet:?xt=urn:btih:m001'
        assert result.total == 2

    def test_get_episodes_page_only_pagination(self, service, mock_http_client):
        mock_http_client.get_text.return_value = SERIES_PAGE_WITHOUT_BANGUMI_HTML

        result = service.get_episodes('3205', page=1, size=1)

        assert [ep.no for ep in result.items] == ['02']
        assert result.has_more is False

    def test_build_source(self, service):
        source = service.build_source(Series(id='3141', name='葬送的芙莉莲'))

        assert source.name == '葬送的芙莉莲'
        assert source.url == 'https://mikanime.tv/RSS/Bangumi?bangumiId=3141'
        assert source.site == 'https://mikanime.tv/Home/Bangumi/3141'

    def test_build_subscription(self, service):
        sub = service.build_subscription(Series(id='3141', name='葬送的芙莉莲', season='S1'))

        assert sub.id == '3141'
        assert sub.identity.display_name == '葬送的芙莉莲 S1'
        assert sub.include == ['1080p']
        assert sub.exclude == ['CR']
        assert sub.feed_url == 'https://mikanime.tv/RSS/Bangumi?bangumiId=3141'

    def test_base_follows_config(self, service, mikan_config):
        mikan_config.base = 'https://mikanani.me/'

        assert service.build_source(Series(id='1', name='x')).site == (
            'https://mikanani.me/Home/Bangumi/1'
        )
