"""
Unit tests for the dependency injection container wiring.
"""

import pytest
from dependency_injector import providers

from mikanfeed.container import Container
from mikanfeed.core.config import AppConfig, HttpConfig, MikanConfig
from mikanfeed.infrastructure.database.session import DatabaseSessionManager


class TestContainer:
    """Tests for Container providers."""

    @pytest.fixture
    def config(self):
        return AppConfig(
            mikan=MikanConfig(image_proxy='https://img.example/proxy', collect_all_links=True),
            http=HttpConfig(timeout=7, proxy='http://127.0.0.1:7890'),
        )

    @pytest.fixture
    def container(self, config, test_db_path):
        container = Container()
        container.app_config.override(providers.Object(config))
        container.db_manager.override(
            providers.Singleton(DatabaseSessionManager, db_path=str(test_db_path))
        )
        yield container
        container.reset_singletons()

    def test_config_sections_injected(self, container):
        assert container.http_client().timeout == 7
        assert container.page_parser()._collect_all_links is True
        assert container.image_normalizer().proxy('https://a/b.jpg') == (
            'https://img.example/proxy?url=https://a/b.jpg'
        )

    def test_singletons_shared(self, container):
        validator = container.feed_validator()
        poller = container.feed_poller()

        assert poller._validator is validator
        assert validator._dedup_cache is container.dedup_cache()
        assert container.series_service()._http is container.http_client()

    def test_registry_uses_mikan_base(self, container):
        registry = container.subscription_registry()
        assert registry._base == 'https://mikanime.tv'

    def test_episode_repo_uses_db_manager(self, container, test_db_path):
        repo = container.episode_repo()
        assert repo._db.db_path == str(test_db_path)

    def test_cache_clear_request_uses_poll_config(self, container):
        assert container.cache_clear_request().path == 'clean-cache.request'
