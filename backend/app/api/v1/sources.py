"""News source and collection API endpoints."""

from typing import Any

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.postgres import get_session as get_db
from app.services.summary_service import SummaryService

router = APIRouter()


def _iso(value) -> str | None:
    return value.isoformat() if value else None


@router.get("/sources")
async def list_active_sources(db: AsyncSession = Depends(get_db)) -> dict[str, Any]:
    """Active news sources, ordered by name."""
    sources = await SummaryService(db).get_active_sources()
    return {
        "sources": [
            {
                "id": s.id,
                "name": s.name,
                "url": s.url,
                "category": s.category,
                "description": s.description,
                "created_at": _iso(s.created_at),
            }
            for s in sources
        ],
        "total": len(sources),
    }


@router.get("/collections/urls")
async def list_recent_collected_urls(
    limit: int = Query(default=50, ge=1, le=500),
    db: AsyncSession = Depends(get_db),
) -> dict[str, Any]:
    """Most recently collected article URLs with their source."""
    urls = await SummaryService(db).get_recent_collected_urls(limit)
    return {
        "urls": [
            {
                "id": u.id,
                "url": u.url,
                "domain": u.domain,
                "collected_at": _iso(u.collected_at),
                "collection_batch_id": u.collection_batch_id,
                "source": {"id": u.source.id, "name": u.source.name} if u.source else None,
            }
            for u in urls
        ],
        "total": len(urls),
    }


@router.get("/collections/batches")
async def list_completed_batches(
    limit: int = Query(default=20, ge=1, le=200),
    db: AsyncSession = Depends(get_db),
) -> dict[str, Any]:
    """Completed collection batches, newest first."""
    batches = await SummaryService(db).get_completed_batches(limit)
    return {
        "batches": [
            {
                "id": b.id,
                "batch_id": b.batch_id,
                "sources_count": b.sources_count,
                "created_at": _iso(b.created_at),
            }
            for b in batches
        ],
        "total": len(batches),
    }
