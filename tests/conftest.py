"""
Test configuration and fixtures for MikanFeed tests.

This module provides:
- Test configuration written to a temporary file
- Pytest fixtures for common test scenarios
- Mock objects for external dependencies
"""

import json
import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from tests.fixtures.test_data import (  # noqa: E402
    BANGUMI_EPISODES,
    BANGUMI_SUBJECT,
    MIKAN_RSS_XML,
)


def pytest_configure(config):
    config.addinivalue_line('markers', 'integration: multi-component workflow tests')


# ==================== Test Configuration ====================

@pytest.fixture
def test_config_path(tmp_path) -> Path:
    """Create a temporary test configuration file."""
    config_path = tmp_path / 'test_config.json'

    test_config = {
        'mikan': {
            'base': 'https://mikanime.tv',
            'image_base': 'https://mikanani.me',
            'image_proxy': None,
            'include': [],
            'exclude': ['繁日内嵌'],
            'collect_all_links': False
        },
        'bangumi': {
            'api_base': 'https://api.bgm.tv',
            'page_size': 100
        },
        'http': {
            'proxy': None,
            'timeout': 10
        },
        'poll': {
            'check_interval': 3600,
            'max_workers': 2
        },
        'subscriptions': [
            {
                'id': '3141',
                'name': '葬送的芙莉莲',
                'season': None,
                'include': ['1080p'],
                'exclude': []
            }
        ]
    }

    with open(config_path, 'w', encoding='utf-8') as f:
        json.dump(test_config, f, ensure_ascii=False, indent=2)

    return config_path


@pytest.fixture
def app_config(test_config_path):
    """Load AppConfig from the temporary test configuration."""
    from mikanfeed.core.config import AppConfig
    return AppConfig.load(str(test_config_path))


@pytest.fixture
def mikan_config():
    """Default Mikan site configuration."""
    from mikanfeed.core.config import MikanConfig
    return MikanConfig()


# ==================== Database Fixtures ====================

@pytest.fixture
def test_db_path(tmp_path) -> Path:
    """Create a temporary test database path."""
    return tmp_path / 'db' / 'test_mikanfeed.db'


@pytest.fixture
def test_db_session(test_db_path):
    """Create a test database session manager."""
    from mikanfeed.infrastructure.database.session import DatabaseSessionManager

    db_manager = DatabaseSessionManager(db_path=str(test_db_path))
    db_manager.init_db()

    yield db_manager

    db_manager.dispose()


@pytest.fixture
def episode_repo(test_db_session):
    """Create episode repository with test database."""
    from mikanfeed.infrastructure.repositories.episode_repository import EpisodeRepository
    return EpisodeRepository(test_db_session)


# ==================== Mock Fixtures ====================

@pytest.fixture
def mock_http_client():
    """Mock HTTP client."""
    mock = MagicMock()
    mock.get_json.return_value = {}
    mock.get_text.return_value = ''
    mock.get_bytes.return_value = b''
    return mock


@pytest.fixture
def mock_episode_repo():
    """Mock episode store that knows no episodes."""
    mock = MagicMock()
    mock.exists.return_value = False
    return mock


@pytest.fixture
def mock_bangumi_client():
    """Mock Bangumi metadata client backed by sample API data."""
    from mikanfeed.infrastructure.metadata.bangumi_adapter import BangumiAdapter

    http = MagicMock()

    def get_json(url, params=None):
        if url.endswith('/v0/episodes'):
            return BANGUMI_EPISODES
        return BANGUMI_SUBJECT

    http.get_json.side_effect = get_json
    return BangumiAdapter(http)


@pytest.fixture
def mock_rss_response():
    """Mock Mikan RSS feed body."""
    return MIKAN_RSS_XML.encode('utf-8')


# ==================== Feed Service Fixtures ====================

@pytest.fixture
def subscription():
    """Subscription used by the validator scenarios."""
    from mikanfeed.core.domain.entities import SeriesSubscription
    return SeriesSubscription(id='42', name='Show', include=[], exclude=['CR'])


@pytest.fixture
def dedup_cache():
    from mikanfeed.services.feed.dedup_cache import EpisodeDedupCache
    return EpisodeDedupCache()


@pytest.fixture
def validator(dedup_cache, mock_episode_repo):
    """Create FeedEntryValidator with a mocked episode store."""
    from mikanfeed.services.feed.episode_resolver import EpisodeResolver
    from mikanfeed.services.feed.feed_validator import FeedEntryValidator
    from mikanfeed.services.feed.filter_service import FilterService

    return FeedEntryValidator(
        filter_service=FilterService(),
        dedup_cache=dedup_cache,
        resolver=EpisodeResolver(mock_episode_repo)
    )
