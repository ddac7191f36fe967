"""
数据库会话管理

- init_database(): 创建引擎与 scoped_session，并设置 CoreModel.query
- get_db(): FastAPI 依赖
- db_session_scope(): 脚本、批量打标签等非 HTTP 场景
- on_request_end(): 请求结束时提交并移除 session
"""

from contextlib import contextmanager
from typing import Callable, Generator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, scoped_session, sessionmaker
from sqlalchemy.pool import StaticPool

from ytagging.log import get_logger

logger = get_logger("ytagging.orm.session")


def build_engine(url: str, settings=None, echo=False) -> Engine:
    """按 URL 类型选择连接池参数

    SQLite 内存库必须共享同一个连接（StaticPool），否则每个连接看到的是空库。
    """
    parsed = make_url(url)
    if parsed.get_backend_name() != "sqlite":
        pool = {}
        if settings is not None:
            pool = dict(
                pool_size=settings.pool_size,
                max_overflow=settings.max_overflow,
                pool_timeout=settings.pool_timeout,
                pool_recycle=settings.pool_recycle,
                pool_pre_ping=settings.pool_pre_ping,
            )
        return create_engine(url, echo=echo, **pool)

    options = {"connect_args": {"check_same_thread": False}}
    if parsed.database in (None, "", ":memory:"):
        options["poolclass"] = StaticPool
    return create_engine(url, echo=echo, **options)


class DatabaseManager:
    """持有引擎与 scoped_session

    session 默认按线程划分作用域；传入 scopefunc 可以改为按请求或任务划分。

    使用示例:
        from ytagging.orm import db_manager, init_database

        init_database("sqlite:///./tags.db")
        Tag.metadata.create_all(bind=db_manager.engine)
    """

    def __init__(self):
        self._engine: Optional[Engine] = None
        self._sessions: Optional[scoped_session] = None

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            raise RuntimeError("数据库未初始化，请先调用 init_database()")
        return self._engine

    @property
    def session_scope(self) -> scoped_session:
        if self._sessions is None:
            raise RuntimeError("数据库未初始化，请先调用 init_database()")
        return self._sessions

    @property
    def is_initialized(self) -> bool:
        return self._engine is not None

    def init(
        self,
        database_url: Optional[str] = None,
        config=None,
        logging_config=None,
        scopefunc: Optional[Callable] = None,
    ):
        """初始化数据库

        Args:
            database_url: 数据库 URL；同时提供 config 时以参数为准
            config: DatabaseSettings
            logging_config: LoggingSettings，sql_log_enabled 为真时输出 SQL
            scopefunc: scoped_session 作用域函数

        Returns:
            (engine, session_scope)
        """
        url = database_url or getattr(config, "url", None)
        if not url:
            raise ValueError("缺少数据库 URL，请传入 database_url 或 config.url")

        echo = getattr(config, "echo", False)
        if getattr(logging_config, "sql_log_enabled", False):
            echo = "debug"

        self._engine = build_engine(url, config, echo=echo)
        factory = sessionmaker(bind=self._engine, autoflush=True)
        self._sessions = scoped_session(factory, scopefunc=scopefunc)

        from .core_model import CoreModel
        CoreModel.query = self._sessions.query_property()

        logger.info(f"数据库已初始化: {self._engine.url.render_as_string(hide_password=True)}")
        return self._engine, self._sessions

    def get_session(self) -> Session:
        return self.session_scope()

    def cleanup(self) -> None:
        """提交当前 session 中未落库的更改并移除；提交失败时回滚后再抛出"""
        if self._sessions is None or not self._sessions.registry.has():
            return
        session = self._sessions()
        try:
            if session.new or session.dirty or session.deleted:
                session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            self._sessions.remove()


db_manager = DatabaseManager()


def init_database(database_url: Optional[str] = None, config=None, logging_config=None, scopefunc=None):
    """初始化数据库，参数见 DatabaseManager.init()"""
    return db_manager.init(database_url, config=config, logging_config=logging_config, scopefunc=scopefunc)


def get_engine() -> Engine:
    return db_manager.engine


def on_request_end() -> None:
    db_manager.cleanup()


@contextmanager
def db_session_scope(auto_commit: bool = True) -> Generator[Session, None, None]:
    """在一个 session 中执行一组标签操作，正常结束时提交，异常时回滚

    使用示例:
        with db_session_scope():
            for article in Article.get_all():
                article.retag(["python", "orm"], commit=False)
    """
    session = db_manager.get_session()
    try:
        yield session
        if auto_commit:
            session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        db_manager.session_scope.remove()


def get_db() -> Generator[Session, None, None]:
    """FastAPI 依赖

    使用示例:
        @router.get("/tags")
        def list_tags(db: Session = Depends(get_db)):
            ...
    """
    with db_session_scope() as session:
        yield session
