"""Turns stored article summary rows into structured, UI-ready views."""

import json
import logging
from collections.abc import Iterable
from typing import Any

from app.models import JSON_LIST_FIELDS
from app.schemas.summary import (
    CollectedUrlInfo,
    NormalizedSummary,
    ParsedSummary,
    PipelineRunInfo,
    SummaryDetail,
)

logger = logging.getLogger(__name__)


def decode_json_list(text: str | None) -> list[str]:
    """
    Decode a JSON-text list column.

    Never raises: missing values, malformed JSON and non-list payloads all
    decode to an empty list. Non-string elements are dropped.
    """
    if not text:
        return []
    try:
        parsed = json.loads(text)
    except (TypeError, ValueError):
        return []
    if not isinstance(parsed, list):
        return []
    return [item for item in parsed if isinstance(item, str)]


def encode_json_list(values: Iterable[str] | None) -> str | None:
    """Inverse of ``decode_json_list`` for writers; ``None`` stays ``None``."""
    if values is None:
        return None
    return json.dumps(list(values))


def parse_summary_fields(record: Any) -> ParsedSummary:
    """Build the parsed analysis block from a row's flattened columns."""
    lists = {name: decode_json_list(getattr(record, name, None)) for name in JSON_LIST_FIELDS}
    return ParsedSummary(
        summary=getattr(record, "summary", None) or "",
        investment_implications=getattr(record, "investment_implications", None) or "",
        sentiment=getattr(record, "sentiment", None) or "",
        time_horizon=getattr(record, "time_horizon", None) or "",
        confidence_score=getattr(record, "confidence_score", None) or 0,
        **lists,
    )


def normalize_summary(record: Any) -> NormalizedSummary:
    """Convert one ``ArticleSummary`` row (with its collected URL loaded)."""
    collected = getattr(record, "collected_url", None)
    return NormalizedSummary(
        id=int(record.id),
        source_file=record.source_file or "",
        processed_at=record.processed_at,
        model_used=record.model_used or "",
        original_url=collected.url if collected else None,
        article_domain=collected.domain if collected else None,
        url_collected_at=collected.collected_at if collected else None,
        parsed_summary=parse_summary_fields(record),
    )


def normalize_summaries(records: Iterable[Any]) -> list[NormalizedSummary]:
    """
    Normalize a batch of rows, preserving order.

    A row that fails to normalize is logged and left out; one bad row never
    fails the whole batch.
    """
    normalized = []
    for record in records:
        try:
            normalized.append(normalize_summary(record))
        except Exception:
            logger.warning(
                "Dropping summary %s: could not normalize",
                getattr(record, "id", "?"),
                exc_info=True,
            )
    return normalized


def build_summary_detail(record: Any) -> SummaryDetail:
    """Detail view of one row, including its provenance."""
    collected = getattr(record, "collected_url", None)
    run = getattr(record, "pipeline_run", None)
    return SummaryDetail(
        id=int(record.id),
        source_file=record.source_file or "",
        processed_at=record.processed_at,
        model_used=record.model_used or "",
        raw_response=record.raw_response,
        source_url=record.source_url,
        collected_url=CollectedUrlInfo.model_validate(collected) if collected else None,
        pipeline_run=PipelineRunInfo.model_validate(run) if run else None,
        parsed_summary=parse_summary_fields(record),
    )
