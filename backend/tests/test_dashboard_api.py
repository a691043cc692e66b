"""Tests for the dashboard service and endpoints."""

from collections.abc import AsyncGenerator
from datetime import UTC, datetime

import pytest
from sqlalchemy.exc import OperationalError

from app.db.postgres import get_session
from app.main import app
from app.schemas.dashboard import DashboardQuery, SummaryFilters
from app.services.dashboard_service import DashboardService

NOW = datetime(2025, 6, 1, 12, 0, tzinfo=UTC)


@pytest.fixture
async def ten_summaries(add_summary):
    """Ten summaries, newest first: three negative, four positive, three neutral."""
    sentiments = ["negative", "positive", "neutral", "Negative", "positive",
                  "neutral", "positive", "NEGATIVE", "positive", "neutral"]
    for i, sentiment in enumerate(sentiments):
        await add_summary(
            sentiment=sentiment,
            time_horizon="short-term" if i % 2 == 0 else "long-term",
            confidence_score=0.5 + i * 0.05,
            summary=f"Market note {i}",
            companies_mentioned=["Apple"] if i == 4 else ["Tesla"],
        )


class TestDashboardService:
    async def test_empty_store(self, session) -> None:
        data = await DashboardService(session).get_dashboard(DashboardQuery(), NOW)

        assert data.summaries == []
        assert data.stats.total_summaries == 0
        assert data.stats.avg_confidence == 0
        assert data.pagination.total_pages == 0
        assert data.total_available == 0

    async def test_first_page_is_newest_nine(self, session, ten_summaries) -> None:
        data = await DashboardService(session).get_dashboard(DashboardQuery(page_size=9), NOW)

        assert [s.source_file for s in data.summaries] == [f"article_{n}.txt" for n in range(1, 10)]
        assert data.pagination.total_pages == 2
        assert data.stats.total_summaries == 10
        assert data.total_available == 10

    async def test_stats_describe_filtered_view(self, session, ten_summaries) -> None:
        query = DashboardQuery(filters=SummaryFilters(sentiment="negative"), page_size=9)

        data = await DashboardService(session).get_dashboard(query, NOW)

        assert len(data.summaries) == 3
        assert data.pagination.total_items == 3
        assert data.pagination.total_pages == 1
        assert data.stats.total_summaries == 3
        assert data.stats.sentiments.negative == 3
        assert data.stats.sentiments.positive == 0
        # confidence 0.5, 0.65, 0.85
        assert data.stats.avg_confidence == 0.67
        assert data.total_available == 10

    async def test_page_items_carry_display_strings(self, session, add_summary) -> None:
        await add_summary(sentiment="positive", confidence_score=0.82, time_horizon="short-term")

        data = await DashboardService(session).get_dashboard(DashboardQuery(), NOW)

        display = data.summaries[0].display
        assert display is not None
        assert display.sentiment_label == "Positive"
        assert display.confidence_label == "82% High"
        assert display.time_horizon_label == "Short-term Horizon"
        assert display.time_ago == "1 minute ago"

    async def test_fetch_limit_bounds_the_view(self, session, ten_summaries) -> None:
        data = await DashboardService(session, fetch_limit=4).get_dashboard(DashboardQuery(), NOW)

        assert data.stats.total_summaries == 4
        assert data.total_available == 10

    async def test_malformed_lists_do_not_break_the_view(self, session, add_summary) -> None:
        await add_summary(sentiment="positive", key_metrics="not json", risk_factors="{}")

        data = await DashboardService(session).get_dashboard(DashboardQuery(), NOW)

        parsed = data.summaries[0].parsed_summary
        assert parsed.key_metrics == []
        assert parsed.risk_factors == []


class TestDashboardEndpoint:
    async def test_success_envelope(self, client, ten_summaries) -> None:
        response = await client.get("/api/v1/dashboard")

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert len(body["data"]["summaries"]) == 9
        assert body["data"]["pagination"]["page_numbers"] == [1, 2]
        assert body["data"]["total_available"] == 10

    async def test_filters_from_query_string(self, client, ten_summaries) -> None:
        response = await client.get(
            "/api/v1/dashboard",
            params={"sentiment": "POSITIVE", "timeHorizon": "short-term", "search": "apple"},
        )

        data = response.json()["data"]
        assert [s["source_file"] for s in data["summaries"]] == ["article_5.txt"]
        assert data["stats"]["sentiments"]["positive"] == 1

    async def test_second_page(self, client, ten_summaries) -> None:
        response = await client.get("/api/v1/dashboard", params={"page": 2})

        data = response.json()["data"]
        assert [s["source_file"] for s in data["summaries"]] == ["article_10.txt"]
        assert data["pagination"]["first_item"] == 10
        assert data["pagination"]["last_item"] == 10

    async def test_page_beyond_range_is_empty(self, client, ten_summaries) -> None:
        response = await client.get("/api/v1/dashboard", params={"page": 5})

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["summaries"] == []
        assert data["stats"]["total_summaries"] == 10

    @pytest.mark.parametrize("params", [{"page": 0}, {"page_size": 0}, {"page_size": 51}])
    async def test_invalid_paging_is_rejected(self, client, params) -> None:
        response = await client.get("/api/v1/dashboard", params=params)

        assert response.status_code == 400
        assert response.json()["success"] is False

    async def test_store_stats(self, client, ten_summaries) -> None:
        response = await client.get("/api/v1/dashboard/stats")

        data = response.json()["data"]
        assert data["total_summaries"] == 10
        assert data["sentiments"] == {"positive": 4, "negative": 3, "neutral": 3}


class _UnreachableSession:
    async def execute(self, *args, **kwargs):
        raise OperationalError("SELECT 1", {}, ConnectionRefusedError("connection refused"))


@pytest.fixture
def broken_database():
    async def override() -> AsyncGenerator[_UnreachableSession, None]:
        yield _UnreachableSession()

    app.dependency_overrides[get_session] = override
    yield
    app.dependency_overrides.clear()


async def test_database_failure_returns_error_envelope(client, broken_database) -> None:
    response = await client.get("/api/v1/dashboard")

    assert response.status_code == 500
    body = response.json()
    assert body["success"] is False
    assert body["error"]


async def test_database_failure_hides_details_in_production(
    client, broken_database, production_env
) -> None:
    response = await client.get("/api/v1/dashboard")

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "Internal server error"}
