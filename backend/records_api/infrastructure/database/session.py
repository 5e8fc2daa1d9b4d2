"""SQLAlchemy database handle — engine, session factory and lifecycle."""

import logging
from collections.abc import AsyncGenerator

from fastapi import Request
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from records_api.infrastructure.database.base import Base

logger = logging.getLogger(__name__)


def _get_async_url(url: str) -> str:
    """Convert a sync SQLAlchemy URL to an async one."""
    if url.startswith("sqlite:///"):
        return url.replace("sqlite:///", "sqlite+aiosqlite:///", 1)
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    return url


def _enable_sqlite_case_sensitive_like(dbapi_connection, connection_record) -> None:
    """Make LIKE case-sensitive on SQLite, as it already is on PostgreSQL."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA case_sensitive_like = ON")
    cursor.close()


class Database:
    """Explicitly constructed storage handle with an open/close lifecycle.

    Nothing is connected until ``open()`` is awaited; ``close()`` disposes the
    engine and its pool.
    """

    def __init__(self, url: str, *, echo: bool = False):
        self.url = _get_async_url(url)
        self._echo = echo
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None

    @property
    def is_open(self) -> bool:
        return self._engine is not None

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            raise RuntimeError("Database is not open")
        return self._engine

    async def open(self) -> None:
        """Create the engine and the schema. Safe to call more than once."""
        if self._engine is None:
            self._engine = create_async_engine(self.url, echo=self._echo, future=True)
            if self._engine.dialect.name == "sqlite":
                event.listen(
                    self._engine.sync_engine,
                    "connect",
                    _enable_sqlite_case_sensitive_like,
                )
            self._session_factory = async_sessionmaker(
                self._engine,
                class_=AsyncSession,
                expire_on_commit=False,
            )

        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database opened (%s)", self._engine.url.render_as_string(hide_password=True))

    async def close(self) -> None:
        if self._engine is None:
            return
        await self._engine.dispose()
        self._engine = None
        self._session_factory = None
        logger.info("Database closed")

    def session(self) -> AsyncSession:
        """Return a new session bound to this database."""
        if self._session_factory is None:
            raise RuntimeError("Database is not open")
        return self._session_factory()


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency — yields an async DB session per request."""
    database: Database = request.app.state.database
    async with database.session() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
