from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from sqlalchemy import create_engine, event
from sqlalchemy.engine import make_url
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from notekeeper.core.exceptions import DatabaseNotReadyError
from notekeeper.db.tables import Base
from notekeeper.utils.logging import get_logger

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine
    from sqlalchemy.orm import Session

logger = get_logger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    # SQLite ignores ON DELETE CASCADE unless enforcement is switched on per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_db_engine(database_url: str, *, echo: bool = False) -> Engine:
    """Create the SQLAlchemy engine for the configured database location."""
    url = make_url(database_url)
    kwargs: dict = {"echo": echo, "pool_pre_ping": True}
    if url.get_backend_name() == "sqlite":
        # Sessions hop between worker threads via asyncio.to_thread
        kwargs["connect_args"] = {"check_same_thread": False}
        if url.database in (None, "", ":memory:"):
            kwargs["poolclass"] = StaticPool

    engine = create_engine(url, **kwargs)
    if url.get_backend_name() == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


class Database:
    """Owns the engine, the session factory and the schema readiness state."""

    def __init__(self, database_url: str, *, echo: bool = False) -> None:
        self.url = database_url
        self.engine = create_db_engine(database_url, echo=echo)
        self._session_factory = sessionmaker(
            bind=self.engine,
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
        )
        self._ready = False
        self._init_lock = asyncio.Lock()

    @property
    def is_ready(self) -> bool:
        return self._ready

    async def initialize(self) -> None:
        """Create the schema once. Concurrent callers wait for the first run."""
        async with self._init_lock:
            if self._ready:
                return
            logger.info("Initializing database schema", extra={"url": self._safe_url()})
            await asyncio.to_thread(Base.metadata.create_all, self.engine)
            self._ready = True
            logger.info("Database initialized successfully")

    def session(self) -> Session:
        if not self._ready:
            raise DatabaseNotReadyError()
        return self._session_factory()

    def dispose(self) -> None:
        self.engine.dispose()
        self._ready = False
        logger.info("Database connection closed")

    def _safe_url(self) -> str:
        return make_url(self.url).render_as_string(hide_password=True)
