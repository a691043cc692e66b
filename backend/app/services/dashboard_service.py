"""Dashboard service - builds the filtered, paginated summary view."""

import logging
from datetime import UTC, datetime

from sqlalchemy.ext.asyncio import AsyncSession

from app.config import get_settings
from app.schemas.dashboard import DashboardData, DashboardQuery
from app.services.pagination import paginate
from app.services.presentation import describe_summary
from app.services.stats_service import compute_stats, count_summaries
from app.services.summary_filters import apply_filters
from app.services.summary_normalizer import normalize_summaries
from app.services.summary_service import SummaryService

logger = logging.getLogger(__name__)


class DashboardService:
    """Service assembling the dashboard payload from stored summaries."""

    def __init__(self, session: AsyncSession, fetch_limit: int | None = None):
        self.session = session
        self.summaries = SummaryService(session)
        self.fetch_limit = fetch_limit or get_settings().dashboard_fetch_limit

    async def get_dashboard(
        self, query: DashboardQuery, now: datetime | None = None
    ) -> DashboardData:
        """
        Read the newest summaries, normalize, filter, then aggregate and paginate.

        ``stats`` describe the filtered view; ``total_available`` is the
        store-wide count so callers can show "N of M".
        """
        records = await self.summaries.get_latest_summaries(self.fetch_limit)
        total_available = await count_summaries(self.session)

        normalized = normalize_summaries(records)
        filtered = apply_filters(normalized, query.filters)
        stats = compute_stats(filtered)
        page = paginate(filtered, query.page, query.page_size)

        now = now or datetime.now(UTC)
        for summary in page.items:
            summary.display = describe_summary(summary, now)

        logger.debug(
            "Dashboard: %d read, %d matched filters, page %d/%d",
            len(normalized),
            len(filtered),
            page.info.page,
            page.info.total_pages,
        )
        return DashboardData(
            summaries=page.items,
            stats=stats,
            pagination=page.info,
            total_available=total_available,
        )
