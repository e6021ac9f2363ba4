"""
Dependency Injection Container module.

Contains the Container class for managing application dependencies.
"""

from dependency_injector import containers, providers

from mikanfeed.core.config import get_config

# Database
from mikanfeed.infrastructure.database.session import DatabaseSessionManager

# External Adapters
from mikanfeed.infrastructure.feed.rss_reader import RSSReader
from mikanfeed.infrastructure.http.http_client import HttpClient
from mikanfeed.infrastructure.metadata.bangumi_adapter import BangumiAdapter

# Repositories
from mikanfeed.infrastructure.repositories.episode_repository import EpisodeRepository

# Scraper
from mikanfeed.infrastructure.scraper.image_url import ImageUrlNormalizer
from mikanfeed.infrastructure.scraper.mikan_parser import MikanPageParser

# Feed Services
from mikanfeed.services.feed import (
    CacheClearRequest,
    DownloadDescriptorBuilder,
    EpisodeDedupCache,
    EpisodeResolver,
    FeedEntryValidator,
    FeedPoller,
    FilterService,
    SubscriptionRegistry,
)

# Series Services
from mikanfeed.services.series_service import SeriesService


class Container(containers.DeclarativeContainer):
    """
    依赖注入容器。

    服务层次结构:
    1. Configuration
    2. Database & Repositories (基础数据访问)
    3. External Adapters (外部服务适配器)
    4. Feed Services (条目校验与轮询)
    5. Series Services (番剧浏览)
    """

    # ===== Configuration =====
    # 首次使用时加载；测试中可通过 override 替换
    app_config = providers.Singleton(get_config)
    mikan_config = app_config.provided.mikan
    bangumi_config = app_config.provided.bangumi
    http_config = app_config.provided.http
    poll_config = app_config.provided.poll

    # ===== Database =====
    db_manager = providers.Singleton(DatabaseSessionManager)

    # ===== Repositories =====
    episode_repo = providers.Singleton(EpisodeRepository, db_manager=db_manager)

    # ===== External Adapters =====
    http_client = providers.Singleton(HttpClient, http_config=http_config)
    bangumi_client = providers.Singleton(
        BangumiAdapter,
        http_client=http_client,
        bangumi_config=bangumi_config
    )
    feed_reader = providers.Singleton(RSSReader, http_client=http_client)

    # ===== Scraper =====
    page_parser = providers.Singleton(
        MikanPageParser,
        collect_all_links=mikan_config.collect_all_links
    )
    image_normalizer = providers.Singleton(
        ImageUrlNormalizer,
        base=mikan_config.base,
        image_base=mikan_config.image_base,
        image_proxy=mikan_config.image_proxy
    )

    # ===== Feed Services =====
    filter_service = providers.Singleton(FilterService)
    dedup_cache = providers.Singleton(EpisodeDedupCache)
    cache_clear_request = providers.Singleton(
        CacheClearRequest,
        path=poll_config.cache_clear_file
    )
    episode_resolver = providers.Singleton(EpisodeResolver, episode_repo=episode_repo)
    feed_validator = providers.Singleton(
        FeedEntryValidator,
        filter_service=filter_service,
        dedup_cache=dedup_cache,
        resolver=episode_resolver
    )
    descriptor_builder = providers.Singleton(DownloadDescriptorBuilder)
    subscription_registry = providers.Singleton(
        SubscriptionRegistry,
        base=mikan_config.base
    )
    feed_poller = providers.Singleton(
        FeedPoller,
        feed_reader=feed_reader,
        validator=feed_validator,
        registry=subscription_registry,
        max_workers=poll_config.max_workers
    )

    # ===== Series Services =====
    series_service = providers.Singleton(
        SeriesService,
        http_client=http_client,
        page_parser=page_parser,
        metadata_client=bangumi_client,
        image_normalizer=image_normalizer,
        mikan_config=mikan_config
    )


# 全局容器实例
container = Container()
