"""
Episode repository module.

Contains the EpisodeRepository class implementing IEpisodeRepository interface.
"""

import logging

from mikanfeed.core.domain.entities import DownloadDescriptor
from mikanfeed.core.exceptions import DatabaseError, StoreError
from mikanfeed.core.interfaces.repositories import IEpisodeRepository
from mikanfeed.infrastructure.database.models import EpisodeRecord, SeriesRecord
from mikanfeed.infrastructure.database.session import DatabaseSessionManager

logger = logging.getLogger(__name__)


class EpisodeRepository(IEpisodeRepository):
    """剧集仓库"""

    def __init__(self, db_manager: DatabaseSessionManager):
        self._db = db_manager

    def exists(
        self,
        series_name: str,
        season: str | None,
        episode_no: str
    ) -> bool:
        """按 (番剧名, 季度, 集数) 检查剧集是否已存在

        季度为空时不作为匹配条件。

        Raises:
            StoreError: 查询失败时抛出，调用方不得视为"不存在"
        """
        try:
            with self._db.session() as session:
                query = (
                    session.query(EpisodeRecord.id)
                    .join(SeriesRecord, EpisodeRecord.series_id == SeriesRecord.id)
                    .filter(SeriesRecord.name == series_name)
                    .filter(EpisodeRecord.no == episode_no)
                )
                if season:
                    query = query.filter(SeriesRecord.season == season)
                found = query.first() is not None
        except DatabaseError as e:
            raise StoreError(
                f'剧集查询失败: {e.message}',
                series_name=series_name,
                episode_no=episode_no,
                context=dict(e.context)
            )

        logger.debug(
            f'🔍 剧集查询: {series_name} [{season or "-"}] #{episode_no} -> '
            f'{"已存在" if found else "不存在"}'
        )
        return found

    def apply_descriptor(self, descriptor: DownloadDescriptor) -> int:
        """根据下载描述写入剧集记录

        番剧不存在时自动创建；同集数的记录在 overwrite_episode 为真时被覆盖。
        """
        series_name = descriptor.series.name
        season = descriptor.series.season
        episode = descriptor.episode

        try:
            with self._db.session() as session:
                series = (
                    session.query(SeriesRecord)
                    .filter_by(name=series_name, season=season)
                    .first()
                )
                if series is None:
                    series = SeriesRecord(
                        name=series_name, season=season, source_id=descriptor.source_id
                    )
                    session.add(series)
                    session.flush()
                    logger.info(f'📺 新建番剧记录: {series_name} [{season or "-"}]')
                elif series.source_id is None and descriptor.source_id:
                    series.source_id = descriptor.source_id

                record = (
                    session.query(EpisodeRecord)
                    .filter_by(series_id=series.id, no=episode.no)
                    .first()
                )
                if record is None:
                    record = EpisodeRecord(
                        series_id=series.id,
                        no=episode.no,
                        title=episode.title,
                        pub_at=episode.pub_at
                    )
                    session.add(record)
                    session.flush()
                    logger.info(f'✅ 新增剧集: {series_name} #{episode.no}')
                elif descriptor.overwrite_episode:
                    record.title = episode.title
                    record.pub_at = episode.pub_at
                    logger.info(f'🔄 覆盖剧集: {series_name} #{episode.no}')
                return record.id
        except DatabaseError as e:
            raise StoreError(
                f'剧集写入失败: {e.message}',
                series_name=series_name,
                episode_no=episode.no,
                context=dict(e.context)
            )
