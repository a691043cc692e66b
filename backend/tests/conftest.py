"""Shared fixtures: in-memory SQLite database and an API client bound to it."""

import json
import logging
from collections.abc import AsyncGenerator
from datetime import UTC, datetime, timedelta

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.pool import StaticPool

from app.config import get_settings
from app.db.postgres import Database, get_session, init_db
from app.main import app
from app.models import ArticleSummary, CollectedUrl, NewsSource

NOW = datetime(2025, 6, 1, 12, 0, tzinfo=UTC)


@pytest.fixture(autouse=True)
def _fresh_settings():
    """Tests that change environment variables must not leak cached settings."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def production_env(monkeypatch):
    """Run with ENVIRONMENT=production; settings may already be cached by then."""
    monkeypatch.setenv("ENVIRONMENT", "production")
    get_settings.cache_clear()
    assert get_settings().is_production


@pytest.fixture(autouse=True)
def _propagating_app_logger():
    """``setup_logging`` detaches the app logger from root; caplog needs it attached."""
    yield
    logger = logging.getLogger("app")
    logger.handlers = []
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest_asyncio.fixture
async def database() -> AsyncGenerator[Database, None]:
    db = Database(
        url="sqlite+aiosqlite://",
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await init_db(db)
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def session(database: Database) -> AsyncGenerator[AsyncSession, None]:
    async with database.session_factory() as s:
        yield s


@pytest_asyncio.fixture
async def client(database: Database) -> AsyncGenerator[AsyncClient, None]:
    async def override_get_session() -> AsyncGenerator[AsyncSession, None]:
        async with database.session_factory() as s:
            yield s

    app.dependency_overrides[get_session] = override_get_session
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def add_summary(session: AsyncSession):
    """Insert an ``ArticleSummary``; list arguments are stored as JSON text."""
    counter = {"n": 0}

    async def _add(**fields) -> ArticleSummary:
        counter["n"] += 1
        n = counter["n"]
        for name, value in list(fields.items()):
            if isinstance(value, list):
                fields[name] = json.dumps(value)
        fields.setdefault("source_file", f"article_{n}.txt")
        fields.setdefault("processed_at", NOW - timedelta(minutes=n))
        fields.setdefault("model_used", "gpt-4o-mini")
        summary = ArticleSummary(**fields)
        session.add(summary)
        await session.commit()
        return summary

    return _add


@pytest_asyncio.fixture
async def collected_url(session: AsyncSession) -> CollectedUrl:
    source = NewsSource(name="Reuters", url="https://www.reuters.com", category="Markets")
    session.add(source)
    await session.flush()
    url = CollectedUrl(
        source_id=source.id,
        url="https://www.reuters.com/markets/nvidia-earnings",
        domain="reuters.com",
    )
    session.add(url)
    await session.commit()
    return url
