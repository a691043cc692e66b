"""PostgreSQL database connection and session management."""

import logging
from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlmodel import SQLModel

from app.config import get_settings

logger = logging.getLogger(__name__)


class Database:
    """
    Process-wide database handle.

    The engine is created on first use and released with ``dispose()``;
    the application lifespan and the CLI own that lifecycle.
    """

    def __init__(self, url: str | None = None, echo: bool | None = None, **engine_options: Any):
        settings = get_settings()
        self.url = url or settings.database_url
        self.echo = settings.debug if echo is None else echo
        self.engine_options = engine_options
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None

    def _connect(self) -> None:
        self._engine = create_async_engine(
            self.url, echo=self.echo, future=True, **self.engine_options
        )
        self._session_factory = async_sessionmaker(
            self._engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        logger.debug("Created database engine (%s)", self._engine.dialect.name)

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            self._connect()
        return self._engine

    @property
    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        if self._session_factory is None:
            self._connect()
        return self._session_factory

    async def dispose(self) -> None:
        """Close pooled connections. The next use creates a fresh engine."""
        if self._engine is not None:
            await self._engine.dispose()
            logger.debug("Database engine disposed")
        self._engine = None
        self._session_factory = None


database = Database()


async def init_db(db: Database | None = None) -> None:
    """Initialize database tables."""
    import app.models  # noqa: F401 - registers every table on SQLModel.metadata

    db = db or database
    async with db.engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """Dependency for getting async database sessions."""
    async with database.session_factory() as session:
        try:
            yield session
        finally:
            await session.close()
