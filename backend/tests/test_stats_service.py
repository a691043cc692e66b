"""Tests for dashboard statistics."""

import pytest

from app.schemas.summary import NormalizedSummary, ParsedSummary
from app.services.stats_service import compute_stats, count_summaries, fetch_store_stats


def summary(sentiment: str = "", confidence: float = 0, id: int = 1) -> NormalizedSummary:
    return NormalizedSummary(
        id=id,
        parsed_summary=ParsedSummary(sentiment=sentiment, confidence_score=confidence),
    )


class TestComputeStats:
    def test_empty_set(self) -> None:
        stats = compute_stats([])

        assert stats.total_summaries == 0
        assert stats.avg_confidence == 0
        assert stats.sentiments.model_dump() == {"positive": 0, "negative": 0, "neutral": 0}

    def test_counts_sentiments_case_insensitively(self) -> None:
        stats = compute_stats(
            [
                summary("Positive", 0.9),
                summary("positive", 0.7),
                summary("NEGATIVE", 0.6),
                summary("neutral", 0.5),
                summary("mixed", 0.4),
                summary("", 0),
            ]
        )

        assert stats.total_summaries == 6
        assert stats.sentiments.positive == 2
        assert stats.sentiments.negative == 1
        assert stats.sentiments.neutral == 1

    def test_average_is_mean_rounded_to_two_decimals(self) -> None:
        scores = [0.82, 0.61, 0.77]

        stats = compute_stats([summary("positive", s, id=i) for i, s in enumerate(scores)])

        assert stats.avg_confidence == round(sum(scores) / len(scores), 2) == 0.73

    def test_missing_confidence_counts_as_zero(self) -> None:
        stats = compute_stats([summary("positive", 0.9), summary("negative", 0)])

        assert stats.avg_confidence == 0.45


class TestFetchStoreStats:
    async def test_empty_store(self, session) -> None:
        stats = await fetch_store_stats(session)

        assert stats.total_summaries == 0
        assert stats.avg_confidence == 0

    async def test_matches_in_memory_reduction(self, session, add_summary) -> None:
        await add_summary(sentiment="positive", confidence_score=0.9)
        await add_summary(sentiment="Positive", confidence_score=0.8)
        await add_summary(sentiment="negative", confidence_score=0.7)
        await add_summary(sentiment=None, confidence_score=None)

        stats = await fetch_store_stats(session)

        assert await count_summaries(session) == 4
        assert stats.total_summaries == 4
        assert stats.sentiments.positive == 2
        assert stats.sentiments.negative == 1
        assert stats.sentiments.neutral == 0
        assert stats.avg_confidence == pytest.approx(0.6)
