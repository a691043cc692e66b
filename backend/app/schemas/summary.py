"""Article summary schemas for API request/response validation."""

from datetime import datetime

from pydantic import BaseModel, Field


class ParsedSummary(BaseModel):
    """Structured analysis decoded from a stored summary row."""

    summary: str = ""
    investment_implications: str = ""
    sentiment: str = ""
    time_horizon: str = ""
    confidence_score: float = 0
    key_metrics: list[str] = Field(default_factory=list)
    companies_mentioned: list[str] = Field(default_factory=list)
    sectors_affected: list[str] = Field(default_factory=list)
    risk_factors: list[str] = Field(default_factory=list)
    opportunities: list[str] = Field(default_factory=list)


class SummaryDisplay(BaseModel):
    """Display strings for a summary card, computed at request time."""

    sentiment_label: str
    confidence_label: str | None = None
    time_horizon_label: str | None = None
    time_ago: str


class NormalizedSummary(BaseModel):
    """UI-ready view of one summary row."""

    id: int
    source_file: str = ""
    processed_at: datetime | None = None
    model_used: str = ""
    original_url: str | None = None
    article_domain: str | None = None
    url_collected_at: datetime | None = None
    parsed_summary: ParsedSummary
    display: SummaryDisplay | None = None


class CollectedUrlInfo(BaseModel):
    url: str
    domain: str | None = None
    collected_at: datetime | None = None

    class Config:
        from_attributes = True


class PipelineRunInfo(BaseModel):
    run_id: str
    model_used: str | None = None
    started_at: datetime | None = None

    class Config:
        from_attributes = True


class SummaryDetail(BaseModel):
    """Single summary with provenance, for the details view."""

    id: int
    source_file: str = ""
    processed_at: datetime | None = None
    model_used: str = ""
    raw_response: str | None = None
    source_url: str | None = None
    collected_url: CollectedUrlInfo | None = None
    pipeline_run: PipelineRunInfo | None = None
    parsed_summary: ParsedSummary


class SummaryCreate(BaseModel):
    """Schema for storing a new summary produced by the analysis pipeline."""

    source_file: str = Field(..., min_length=1, max_length=500)
    source_url: str | None = Field(default=None, max_length=2048)
    processed_at: datetime | None = None
    model_used: str | None = Field(default=None, max_length=100)
    raw_response: str | None = None

    summary: str | None = None
    investment_implications: str | None = None
    sentiment: str | None = Field(default=None, max_length=20)
    time_horizon: str | None = Field(default=None, max_length=20)
    confidence_score: float | None = Field(default=None, ge=0.0, le=1.0)

    key_metrics: list[str] = Field(default_factory=list)
    companies_mentioned: list[str] = Field(default_factory=list)
    sectors_affected: list[str] = Field(default_factory=list)
    risk_factors: list[str] = Field(default_factory=list)
    opportunities: list[str] = Field(default_factory=list)

    collected_url_id: int | None = None
    pipeline_run_id: int | None = None
