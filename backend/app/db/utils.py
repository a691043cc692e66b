"""Database maintenance helpers used by the status endpoint and the CLI."""

import logging
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import delete, text
from sqlalchemy.exc import SQLAlchemyError

from app.config import get_settings
from app.db.postgres import Database, database
from app.models import (
    ArticleSummary,
    CollectedUrl,
    CollectionBatch,
    NewsSource,
    PipelineRun,
)

logger = logging.getLogger(__name__)

# Children before parents so foreign keys never dangle.
RESET_ORDER = (ArticleSummary, CollectedUrl, CollectionBatch, PipelineRun, NewsSource)


async def check_connection(db: Database | None = None) -> bool:
    """Open a connection and run a trivial query."""
    db = db or database
    try:
        async with db.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError) as e:
        logger.error("Database connection failed: %s", e)
        return False
    logger.info("Database connected successfully")
    return True


async def get_info(db: Database | None = None) -> dict[str, Any] | None:
    """Server version, or None when it cannot be read."""
    db = db or database
    dialect = db.engine.dialect.name
    query = "SELECT sqlite_version() AS version" if dialect == "sqlite" else "SELECT version() AS version"
    try:
        async with db.engine.connect() as conn:
            result = await conn.execute(text(query))
            row = result.mappings().first()
    except (SQLAlchemyError, OSError) as e:
        logger.warning("Could not get database info: %s", e)
        return None
    return {"dialect": dialect, "version": row["version"] if row else None}


async def reset(db: Database | None = None) -> None:
    """Delete all collection and summary data. Refused in production."""
    if get_settings().is_production:
        raise RuntimeError("Cannot reset database in production")

    db = db or database
    async with db.session_factory() as session:
        for model in RESET_ORDER:
            await session.execute(delete(model))
        await session.commit()
    logger.info("Database reset successfully")


async def seed(db: Database | None = None) -> dict[str, Any]:
    """Insert a sample source, collection batch and collected URL."""
    db = db or database
    async with db.session_factory() as session:
        news_source = NewsSource(
            name="Sample News Source",
            url="https://example.com",
            category="Technology",
            description="Sample news source for testing",
            active=True,
        )
        batch = CollectionBatch(
            batch_id=f"sample-batch-{int(datetime.now(UTC).timestamp() * 1000)}",
            sources_count=1,
            completed=True,
        )
        session.add_all([news_source, batch])
        await session.flush()

        collected_url = CollectedUrl(
            source_id=news_source.id,
            url="https://example.com/article-1",
            domain="example.com",
            collection_batch_id=batch.batch_id,
        )
        session.add(collected_url)
        await session.commit()

    logger.info("Database seeded successfully")
    return {
        "news_source_id": news_source.id,
        "batch_id": batch.batch_id,
        "collected_url_id": collected_url.id,
    }
