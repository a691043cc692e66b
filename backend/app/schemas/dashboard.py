"""Dashboard schemas."""

from pydantic import BaseModel, Field, field_validator

from app.schemas.summary import NormalizedSummary


class SummaryFilters(BaseModel):
    """
    Optional, independent predicates over the normalized summaries.

    Blank values are treated as "no filter". All set predicates are ANDed.
    """

    sentiment: str | None = None
    time_horizon: str | None = None
    search: str | None = None

    @field_validator("sentiment", "time_horizon", "search", mode="before")
    @classmethod
    def blank_to_none(cls, value: str | None) -> str | None:
        if value is None:
            return None
        value = str(value).strip()
        return value or None

    @property
    def is_active(self) -> bool:
        return any((self.sentiment, self.time_horizon, self.search))


class DashboardQuery(BaseModel):
    """Filters plus the page being viewed."""

    filters: SummaryFilters = Field(default_factory=SummaryFilters)
    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=9, ge=1)

    def with_filters(self, **changes: str | None) -> "DashboardQuery":
        """Change filters. Any filter change sends the view back to page 1."""
        return DashboardQuery(
            filters=SummaryFilters.model_validate({**self.filters.model_dump(), **changes}),
            page=1,
            page_size=self.page_size,
        )

    def go_to_page(self, page: int) -> "DashboardQuery":
        return DashboardQuery(filters=self.filters, page=page, page_size=self.page_size)


class SentimentCounts(BaseModel):
    positive: int = 0
    negative: int = 0
    neutral: int = 0


class DashboardStats(BaseModel):
    """Counts and average confidence over a set of summaries."""

    total_summaries: int = 0
    sentiments: SentimentCounts = Field(default_factory=SentimentCounts)
    avg_confidence: float = 0


class PageInfo(BaseModel):
    page: int
    page_size: int
    total_items: int
    total_pages: int
    first_item: int  # 1-based position of the first item on the page, 0 when empty
    last_item: int
    page_numbers: list[int] = Field(default_factory=list)


class DashboardData(BaseModel):
    """Payload of ``GET /dashboard``."""

    summaries: list[NormalizedSummary]
    stats: DashboardStats
    pagination: PageInfo
    total_available: int = Field(
        default=0, description="Number of summaries in the store, ignoring filters"
    )
