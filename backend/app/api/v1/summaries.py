"""Article summary API endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import get_settings
from app.db.postgres import get_session as get_db
from app.schemas.common import SuccessResponse
from app.schemas.summary import NormalizedSummary, SummaryCreate, SummaryDetail
from app.services.summary_normalizer import build_summary_detail, normalize_summaries
from app.services.summary_service import (
    DuplicateSummaryError,
    SummaryService,
    UnknownReferenceError,
)

router = APIRouter()

settings = get_settings()


@router.get("", response_model=SuccessResponse[list[NormalizedSummary]])
async def list_summaries(
    sentiment: str | None = None,
    min_confidence: float | None = Query(default=None, ge=0.0, le=1.0),
    limit: int = Query(default=20, ge=1, le=settings.summaries_max_limit),
    db: AsyncSession = Depends(get_db),
) -> SuccessResponse[list[NormalizedSummary]]:
    """
    List summaries, newest first.

    - sentiment: case-insensitive match
    - min_confidence: only summaries at or above this score, most confident first
    """
    records = await SummaryService(db).list_summaries(
        limit=limit, sentiment=sentiment, min_confidence=min_confidence
    )
    return SuccessResponse(data=normalize_summaries(records))


@router.get("/{summary_id}", response_model=SuccessResponse[SummaryDetail])
async def get_summary(
    summary_id: int, db: AsyncSession = Depends(get_db)
) -> SuccessResponse[SummaryDetail]:
    """Get one summary with its collected URL and pipeline run."""
    summary = await SummaryService(db).get_summary(summary_id)
    if not summary:
        raise HTTPException(status_code=404, detail="Summary not found")
    return SuccessResponse(data=build_summary_detail(summary))


@router.post(
    "",
    response_model=SuccessResponse[SummaryDetail],
    status_code=status.HTTP_201_CREATED,
)
async def create_summary(
    summary_in: SummaryCreate, db: AsyncSession = Depends(get_db)
) -> SuccessResponse[SummaryDetail]:
    """Store a summary produced by the analysis pipeline."""
    try:
        summary = await SummaryService(db).create_summary(summary_in)
    except (DuplicateSummaryError, UnknownReferenceError) as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return SuccessResponse(data=build_summary_detail(summary))


@router.delete("/{summary_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_summary(summary_id: int, db: AsyncSession = Depends(get_db)) -> None:
    """Delete a summary."""
    deleted = await SummaryService(db).delete_summary(summary_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Summary not found")
