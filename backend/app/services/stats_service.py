"""Dashboard statistics: sentiment counts and average confidence."""

from collections.abc import Sequence

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models import ArticleSummary
from app.schemas.dashboard import DashboardStats, SentimentCounts
from app.schemas.summary import NormalizedSummary
from app.services.presentation import round_half_up

SENTIMENTS = ("positive", "negative", "neutral")


def compute_stats(summaries: Sequence[NormalizedSummary]) -> DashboardStats:
    """
    Reduce over an already-normalized (usually filtered) set.

    Sentiments are matched case-insensitively; anything outside the three
    known labels is counted in the total only.
    """
    if not summaries:
        return DashboardStats()

    counts = dict.fromkeys(SENTIMENTS, 0)
    confidence_total = 0.0
    for summary in summaries:
        sentiment = summary.parsed_summary.sentiment.lower()
        if sentiment in counts:
            counts[sentiment] += 1
        confidence_total += summary.parsed_summary.confidence_score or 0

    return DashboardStats(
        total_summaries=len(summaries),
        sentiments=SentimentCounts(**counts),
        avg_confidence=round_half_up(confidence_total / len(summaries), 2),
    )


async def count_summaries(session: AsyncSession) -> int:
    result = await session.execute(select(func.count(ArticleSummary.id)))
    return result.scalar() or 0


async def fetch_store_stats(session: AsyncSession) -> DashboardStats:
    """Same statistics as ``compute_stats``, aggregated by the database over every row."""
    total = await count_summaries(session)
    if total == 0:
        return DashboardStats()

    sentiment_key = func.lower(ArticleSummary.sentiment)
    grouped = await session.execute(
        select(sentiment_key, func.count(ArticleSummary.id))
        .where(sentiment_key.in_(SENTIMENTS))
        .group_by(sentiment_key)
    )
    counts = dict.fromkeys(SENTIMENTS, 0)
    for sentiment, count in grouped.all():
        counts[sentiment] = count

    avg_result = await session.execute(
        select(func.avg(func.coalesce(ArticleSummary.confidence_score, 0.0)))
    )
    avg_confidence = float(avg_result.scalar() or 0)

    return DashboardStats(
        total_summaries=total,
        sentiments=SentimentCounts(**counts),
        avg_confidence=round_half_up(avg_confidence, 2),
    )
