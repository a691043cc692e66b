"""Collection pipeline models: news sources, batches, collected URLs and runs."""

from datetime import UTC, datetime
from typing import Optional

from sqlalchemy import DateTime
from sqlmodel import Field, Relationship, SQLModel


class NewsSource(SQLModel, table=True):
    """News site the collector pulls article URLs from."""

    __tablename__ = "news_sources"

    id: int | None = Field(default=None, primary_key=True)
    name: str = Field(max_length=200)
    url: str = Field(max_length=2048)
    category: str | None = Field(default=None, max_length=100)
    description: str | None = Field(default=None)
    active: bool = Field(default=True, index=True)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC), sa_type=DateTime(timezone=True)
    )


class CollectionBatch(SQLModel, table=True):
    """One collector pass over the active sources."""

    __tablename__ = "collection_batches"

    id: int | None = Field(default=None, primary_key=True)
    batch_id: str = Field(max_length=100, unique=True, index=True)
    sources_count: int = Field(default=0)
    completed: bool = Field(default=False)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC), sa_type=DateTime(timezone=True)
    )


class CollectedUrl(SQLModel, table=True):
    """Article URL picked up by the collector; summaries link back to it."""

    __tablename__ = "collected_urls"

    id: int | None = Field(default=None, primary_key=True)
    source_id: int | None = Field(default=None, foreign_key="news_sources.id", index=True)
    url: str = Field(max_length=2048, unique=True, index=True)
    domain: str | None = Field(default=None, max_length=255)
    collection_batch_id: str | None = Field(
        default=None, foreign_key="collection_batches.batch_id", index=True
    )
    collected_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC), sa_type=DateTime(timezone=True)
    )

    # Relationships
    source: Optional[NewsSource] = Relationship()
    batch: Optional[CollectionBatch] = Relationship()


class PipelineRun(SQLModel, table=True):
    """A summarization run; each summary records the run that produced it."""

    __tablename__ = "pipeline_runs"

    id: int | None = Field(default=None, primary_key=True)
    run_id: str = Field(max_length=100, unique=True, index=True)
    model_used: str | None = Field(default=None, max_length=100)
    status: str = Field(default="running", max_length=20)  # running, completed, failed
    started_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC), sa_type=DateTime(timezone=True)
    )
    completed_at: datetime | None = Field(default=None, sa_type=DateTime(timezone=True))
