"""
Database models module.

Contains SQLAlchemy ORM models for the MikanFeed application.
"""

from sqlalchemy import (
    TIMESTAMP,
    Column,
    ForeignKey,
    Index,
    Integer,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import declarative_base, relationship

from mikanfeed.core.utils.timezone_utils import get_utc_now

Base = declarative_base()


class SeriesRecord(Base):
    """番剧表"""

    __tablename__ = 'series'

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False)
    season = Column(Text, nullable=True)
    source_id = Column(Text, nullable=True)  # Mikan bangumi id
    created_at = Column(TIMESTAMP, default=get_utc_now)
    updated_at = Column(TIMESTAMP, default=get_utc_now, onupdate=get_utc_now)

    # 关系
    episodes = relationship('EpisodeRecord', back_populates='series', cascade='all, delete-orphan')

    __table_args__ = (
        Index('idx_series_name', 'name'),
    )

    def __repr__(self):
        return f"<SeriesRecord(id={self.id}, name='{self.name}', season={self.season!r})>"


class EpisodeRecord(Base):
    """剧集表"""

    __tablename__ = 'episodes'

    id = Column(Integer, primary_key=True, autoincrement=True)
    series_id = Column(Integer, ForeignKey('series.id'), nullable=False)
    no = Column(Text, nullable=False)
    title = Column(Text)
    pub_at = Column(TIMESTAMP, nullable=True)
    created_at = Column(TIMESTAMP, default=get_utc_now)
    updated_at = Column(TIMESTAMP, default=get_utc_now, onupdate=get_utc_now)

    # 关系
    series = relationship('SeriesRecord', back_populates='episodes')

    __table_args__ = (
        UniqueConstraint('series_id', 'no', name='uq_episode_series_no'),
        Index('idx_episode_no', 'no'),
    )

    def __repr__(self):
        return f"<EpisodeRecord(id={self.id}, series_id={self.series_id}, no='{self.no}')>"
