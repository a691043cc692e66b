"""In-memory filtering of normalized summaries."""

from collections.abc import Iterable

from app.schemas.dashboard import SummaryFilters
from app.schemas.summary import NormalizedSummary


def searchable_text(summary: NormalizedSummary) -> str:
    """Lower-cased, space-joined text that ``search`` is matched against."""
    parsed = summary.parsed_summary
    parts = [
        parsed.summary,
        parsed.investment_implications,
        *parsed.companies_mentioned,
        *parsed.sectors_affected,
        *parsed.key_metrics,
        summary.source_file,
        summary.original_url or "",
        summary.article_domain or "",
        summary.model_used or "",
    ]
    return " ".join(parts).lower()


def matches(summary: NormalizedSummary, filters: SummaryFilters) -> bool:
    parsed = summary.parsed_summary
    # Equality checks first; the search scan is the expensive one.
    if filters.sentiment and parsed.sentiment.lower() != filters.sentiment.lower():
        return False
    if filters.time_horizon and parsed.time_horizon.lower() != filters.time_horizon.lower():
        return False
    if filters.search and filters.search.lower() not in searchable_text(summary):
        return False
    return True


def apply_filters(
    summaries: Iterable[NormalizedSummary], *filters: SummaryFilters
) -> list[NormalizedSummary]:
    """
    Keep the summaries matching every given filter set, in their original order.

    Several filter sets are ANDed, so ``apply_filters(s, a, b)`` equals
    ``apply_filters(apply_filters(s, a), b)`` even when both set the same field.
    """
    active = [f for f in filters if f.is_active]
    if not active:
        return list(summaries)
    return [summary for summary in summaries if all(matches(summary, f) for f in active)]
