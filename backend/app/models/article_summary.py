"""Article summary model - one LLM analysis of a collected article."""

from datetime import UTC, datetime
from typing import Optional

from sqlalchemy import DateTime, Text
from sqlmodel import Field, Relationship, SQLModel

from app.models.pipeline import CollectedUrl, PipelineRun

# Columns holding a JSON-encoded list of strings.
JSON_LIST_FIELDS = (
    "key_metrics",
    "companies_mentioned",
    "sectors_affected",
    "risk_factors",
    "opportunities",
)


class ArticleSummary(SQLModel, table=True):
    """
    Persisted analysis of a single article.

    The parsed model output is flattened into scalar columns, except for the
    list-valued fields which are stored as JSON text.
    """

    __tablename__ = "article_summaries"

    id: int | None = Field(default=None, primary_key=True)
    source_file: str = Field(max_length=500, unique=True, index=True)
    source_url: str | None = Field(default=None, max_length=2048)
    processed_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_type=DateTime(timezone=True),
        index=True,
    )
    model_used: str | None = Field(default=None, max_length=100)
    raw_response: str | None = Field(default=None, sa_type=Text)

    # Parsed analysis
    summary: str | None = Field(default=None, sa_type=Text)
    investment_implications: str | None = Field(default=None, sa_type=Text)
    sentiment: str | None = Field(default=None, max_length=20, index=True)
    time_horizon: str | None = Field(default=None, max_length=20)
    confidence_score: float | None = Field(default=None, ge=0.0, le=1.0)

    # JSON-encoded string lists
    key_metrics: str | None = Field(default=None, sa_type=Text)
    companies_mentioned: str | None = Field(default=None, sa_type=Text)
    sectors_affected: str | None = Field(default=None, sa_type=Text)
    risk_factors: str | None = Field(default=None, sa_type=Text)
    opportunities: str | None = Field(default=None, sa_type=Text)

    # Provenance
    collected_url_id: int | None = Field(default=None, foreign_key="collected_urls.id", index=True)
    pipeline_run_id: int | None = Field(default=None, foreign_key="pipeline_runs.id", index=True)

    # Relationships
    collected_url: Optional[CollectedUrl] = Relationship()
    pipeline_run: Optional[PipelineRun] = Relationship()
