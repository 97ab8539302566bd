# resume_core/db/session.py
from contextlib import asynccontextmanager
from datetime import datetime
from typing import AsyncIterator

from sqlalchemy import event, text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from resume_core.core.config import Settings, settings as default_settings
from resume_core.core.errors import StoreUnavailable
from resume_core.core.logging import get_logger
from resume_core.db.base import Base, Clock

logger = get_logger(__name__)

_UNAVAILABLE = (OperationalError, InterfaceError, OSError)


def _set_sqlite_pragmas(dbapi_connection, connection_record):
    # Let SQLAlchemy emit BEGIN itself instead of the driver deferring it
    # to the first write
    dbapi_connection.isolation_level = None
    cur = dbapi_connection.cursor()
    cur.execute("PRAGMA journal_mode=WAL;")
    cur.execute("PRAGMA synchronous=NORMAL;")
    cur.execute("PRAGMA foreign_keys=ON;")
    cur.close()


def _begin_immediate(conn):
    # Take the write lock at BEGIN so reads inside a unit of work (max
    # order_index, parent checks) see what the following writes act on
    conn.exec_driver_sql("BEGIN IMMEDIATE")


class Database:
    """
    Owns the async engine and session factory.

    Built once at process start (``connect``), handed to every store and
    service, and closed with ``dispose``. Each unit of work gets its own
    short-lived session, so concurrent reads use separate pooled connections.
    """

    def __init__(self, url: str | None = None, settings: Settings | None = None):
        self.settings = settings or default_settings
        self.url = url or self.settings.DATABASE_URL
        self.clock = Clock()
        self._engine: AsyncEngine | None = None
        self._sessions: async_sessionmaker[AsyncSession] | None = None

    # ---------- Lifecycle ----------
    def connect(self) -> "Database":
        if self._engine is not None:
            return self

        url = make_url(self.url)
        is_sqlite = url.get_backend_name() == "sqlite"
        in_memory = is_sqlite and url.database in (None, "", ":memory:")

        engine_args = {"echo": self.settings.DB_ECHO, "pool_pre_ping": self.settings.DB_POOL_PRE_PING}
        if is_sqlite:
            engine_args["connect_args"] = {"timeout": 30}
        if not in_memory:
            engine_args["pool_size"] = self.settings.DB_POOL_SIZE
            engine_args["max_overflow"] = self.settings.DB_MAX_OVERFLOW

        self._engine = create_async_engine(url, **engine_args)
        if is_sqlite:
            event.listen(self._engine.sync_engine, "connect", _set_sqlite_pragmas)
            event.listen(self._engine.sync_engine, "begin", _begin_immediate)

        self._sessions = async_sessionmaker(
            bind=self._engine,
            expire_on_commit=False,
            autoflush=False,
        )
        logger.info("database_connected", backend=url.get_backend_name(), pool_size=engine_args.get("pool_size"))
        return self

    async def dispose(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
            logger.info("database_disposed")
        self._engine = None
        self._sessions = None

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            raise StoreUnavailable("Database.connect() has not been called")
        return self._engine

    @property
    def dialect_name(self) -> str:
        return self.engine.dialect.name

    def now(self) -> datetime:
        return self.clock.now()

    # ---------- Units of work ----------
    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[AsyncSession]:
        """
        Yields a session inside BEGIN/COMMIT. Connection-level failures are
        re-raised as StoreUnavailable.
        """
        if self._sessions is None:
            raise StoreUnavailable("Database.connect() has not been called")
        try:
            async with self._sessions() as session:
                async with session.begin():
                    yield session
        except _UNAVAILABLE as exc:
            logger.error("store_unavailable", error=str(exc))
            raise StoreUnavailable(str(exc)) from exc

    async def health_check(self) -> None:
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except _UNAVAILABLE as exc:
            logger.error("database_health_check_failed", error=str(exc))
            raise StoreUnavailable(str(exc)) from exc

    # ---------- Schema ----------
    async def create_all(self) -> None:
        """Create all tables (development and tests; production uses Alembic)."""
        # Import models so Base.metadata knows about them
        from resume_core.models import resume, sections, user  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

