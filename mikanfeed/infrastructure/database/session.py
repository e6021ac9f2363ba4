"""
Episode store session module.

Owns the SQLite engine shared by the poller threads and translates
SQLAlchemy failures into DatabaseError at the session boundary.
"""

import logging
import os
from collections.abc import Generator
from contextlib import contextmanager

from sqlalchemy import create_engine, event
from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session, scoped_session, sessionmaker

from mikanfeed.core.exceptions import DatabaseError
from mikanfeed.infrastructure.database.models import Base

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = 'mikanfeed.db'

# 多个轮询线程同时查询时，等待写锁的最长时间（毫秒）
SQLITE_BUSY_TIMEOUT_MS = 5000


def _configure_sqlite(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute('PRAGMA journal_mode=WAL')
    cursor.execute(f'PRAGMA busy_timeout={SQLITE_BUSY_TIMEOUT_MS}')
    cursor.execute('PRAGMA foreign_keys=ON')
    cursor.close()


class DatabaseSessionManager:
    """
    剧集库会话管理器

    每个线程通过 scoped_session 获得独立会话，会话在上下文结束时提交并归还。
    """

    def __init__(self, db_path: str = None):
        """
        Args:
            db_path: SQLite 文件路径，未指定时读取 DB_PATH 环境变量。
        """
        self.db_path = db_path or os.getenv('DB_PATH', DEFAULT_DB_PATH)

        db_dir = os.path.dirname(self.db_path)
        if db_dir:
            os.makedirs(db_dir, exist_ok=True)

        self.engine = create_engine(
            f'sqlite:///{self.db_path}',
            pool_pre_ping=True,
            connect_args={'check_same_thread': False}
        )
        event.listen(self.engine, 'connect', _configure_sqlite)
        # 会话关闭后仍需读取记录 ID
        self.Session = scoped_session(
            sessionmaker(bind=self.engine, expire_on_commit=False)
        )

    def init_db(self):
        """创建缺失的表"""
        try:
            Base.metadata.create_all(self.engine)
        except SQLAlchemyError as e:
            raise self._translate(e, '剧集库初始化失败') from e
        logger.info(f'✅ 剧集库已就绪: {self.db_path}')

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        """提交式会话上下文，失败时回滚并抛出 DatabaseError"""
        session = self.Session()
        try:
            yield session
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            raise self._translate(e) from e
        finally:
            self.Session.remove()

    def dispose(self):
        """释放连接池"""
        self.Session.remove()
        self.engine.dispose()

    def _translate(self, error: SQLAlchemyError, message: str = None) -> DatabaseError:
        if message is None:
            if isinstance(error, IntegrityError):
                message = '数据完整性错误'
            elif isinstance(error, OperationalError):
                # 文件不可读、表不存在、等待写锁超时
                message = '剧集库不可用'
            else:
                message = '数据库操作错误'
        logger.error(f'❌ {message}: {error}')
        return DatabaseError(
            message,
            context={'db_path': self.db_path, 'original_exception': str(error)}
        )
