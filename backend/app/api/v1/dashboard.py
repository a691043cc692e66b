"""Dashboard API endpoints."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import get_settings
from app.db.postgres import get_session as get_db
from app.schemas.common import SuccessResponse
from app.schemas.dashboard import DashboardData, DashboardQuery, DashboardStats, SummaryFilters
from app.services.dashboard_service import DashboardService
from app.services.stats_service import fetch_store_stats

router = APIRouter()

settings = get_settings()


@router.get("", response_model=SuccessResponse[DashboardData])
async def get_dashboard(
    sentiment: str | None = None,
    time_horizon: str | None = Query(default=None, alias="timeHorizon"),
    search: str | None = None,
    page: int = Query(default=1, ge=1),
    page_size: int = Query(
        default=settings.dashboard_page_size, ge=1, le=settings.dashboard_max_page_size
    ),
    db: AsyncSession = Depends(get_db),
) -> SuccessResponse[DashboardData]:
    """
    Filtered, paginated summaries with statistics for the current view.

    - sentiment / timeHorizon: exact, case-insensitive match
    - search: substring match over summary text, companies, sectors, metrics and source
    """
    query = DashboardQuery(
        filters=SummaryFilters(sentiment=sentiment, time_horizon=time_horizon, search=search),
        page=page,
        page_size=page_size,
    )
    data = await DashboardService(db).get_dashboard(query)
    return SuccessResponse(data=data)


@router.get("/stats", response_model=SuccessResponse[DashboardStats])
async def get_store_stats(db: AsyncSession = Depends(get_db)) -> SuccessResponse[DashboardStats]:
    """Statistics over every stored summary, computed by the database."""
    return SuccessResponse(data=await fetch_store_stats(db))
