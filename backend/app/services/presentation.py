"""Display strings for summary cards."""

import math
from datetime import UTC, datetime

from app.schemas.summary import NormalizedSummary, SummaryDisplay

MS_PER_MINUTE = 60 * 1000
MS_PER_HOUR = 60 * MS_PER_MINUTE
MS_PER_DAY = 24 * MS_PER_HOUR

HIGH_CONFIDENCE = 0.8
MEDIUM_CONFIDENCE = 0.6


def round_half_up(value: float, digits: int = 0) -> float:
    """Round like ``Math.round``: halves go up, not to even."""
    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


def _capitalize(value: str) -> str:
    return value[:1].upper() + value[1:]


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}{'' if count == 1 else 's'} ago"


def format_time_ago(timestamp: datetime | None, now: datetime | None = None) -> str:
    """Relative age such as ``"3 hours ago"``; naive timestamps are read as UTC."""
    if timestamp is None:
        return "Unknown time"
    now = now or datetime.now(UTC)
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=UTC)
    if now.tzinfo is None:
        now = now.replace(tzinfo=UTC)

    elapsed_ms = int((now - timestamp).total_seconds() * 1000)
    days = elapsed_ms // MS_PER_DAY
    hours = elapsed_ms // MS_PER_HOUR
    minutes = elapsed_ms // MS_PER_MINUTE

    if days > 0:
        return _plural(days, "day")
    if hours > 0:
        return _plural(hours, "hour")
    if minutes > 0:
        return _plural(minutes, "minute")
    return "Just now"


def sentiment_label(sentiment: str | None) -> str:
    if not sentiment:
        return "Unknown"
    return _capitalize(sentiment)


def confidence_tier(score: float | None) -> str:
    if not score:
        return "Unknown"
    if score >= HIGH_CONFIDENCE:
        return "High"
    if score >= MEDIUM_CONFIDENCE:
        return "Medium"
    return "Low"


def confidence_label(score: float | None) -> str | None:
    """``"82% High"``; ``None`` when there is no score to show."""
    if not score:
        return None
    percent = int(round_half_up(score * 100))
    return f"{percent}% {confidence_tier(score)}"


def time_horizon_label(time_horizon: str | None) -> str | None:
    if not time_horizon:
        return None
    return f"{_capitalize(time_horizon)} Horizon"


def describe_summary(summary: NormalizedSummary, now: datetime | None = None) -> SummaryDisplay:
    parsed = summary.parsed_summary
    return SummaryDisplay(
        sentiment_label=sentiment_label(parsed.sentiment),
        confidence_label=confidence_label(parsed.confidence_score),
        time_horizon_label=time_horizon_label(parsed.time_horizon),
        time_ago=format_time_ago(summary.processed_at, now),
    )
