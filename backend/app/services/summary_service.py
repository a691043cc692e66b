"""Summary service - reads and writes article summaries and their provenance."""

import logging
from collections.abc import Sequence

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models import (
    JSON_LIST_FIELDS,
    ArticleSummary,
    CollectedUrl,
    CollectionBatch,
    NewsSource,
    PipelineRun,
)
from app.schemas.summary import SummaryCreate
from app.services.summary_normalizer import encode_json_list

logger = logging.getLogger(__name__)


class DuplicateSummaryError(Exception):
    """A summary for this source file already exists."""


class UnknownReferenceError(Exception):
    """The summary points at a collected URL or pipeline run that does not exist."""


class SummaryService:
    """Service for querying and storing article summaries."""

    def __init__(self, session: AsyncSession):
        self.session = session

    def _summary_query(self):
        return select(ArticleSummary).options(
            selectinload(ArticleSummary.collected_url),
            selectinload(ArticleSummary.pipeline_run),
        )

    async def get_latest_summaries(self, limit: int) -> Sequence[ArticleSummary]:
        """Newest summaries first, with their collected URLs loaded."""
        result = await self.session.execute(
            self._summary_query().order_by(ArticleSummary.processed_at.desc()).limit(limit)
        )
        return result.scalars().all()

    async def list_summaries(
        self,
        limit: int,
        sentiment: str | None = None,
        min_confidence: float | None = None,
    ) -> Sequence[ArticleSummary]:
        """
        List summaries, optionally by sentiment (case-insensitive) or minimum
        confidence. With ``min_confidence`` the most confident come first.
        """
        query = self._summary_query()
        if sentiment:
            query = query.where(func.lower(ArticleSummary.sentiment) == sentiment.lower())
        if min_confidence is not None:
            query = query.where(ArticleSummary.confidence_score >= min_confidence).order_by(
                ArticleSummary.confidence_score.desc()
            )
        else:
            query = query.order_by(ArticleSummary.processed_at.desc())

        result = await self.session.execute(query.limit(limit))
        return result.scalars().all()

    async def get_summary(self, summary_id: int) -> ArticleSummary | None:
        """Get a summary by ID."""
        result = await self.session.execute(
            self._summary_query().where(ArticleSummary.id == summary_id)
        )
        return result.scalar_one_or_none()

    async def _missing_references(self, data: SummaryCreate) -> list[str]:
        missing = []
        if data.collected_url_id is not None and not await self.session.get(
            CollectedUrl, data.collected_url_id
        ):
            missing.append(f"collected URL {data.collected_url_id}")
        if data.pipeline_run_id is not None and not await self.session.get(
            PipelineRun, data.pipeline_run_id
        ):
            missing.append(f"pipeline run {data.pipeline_run_id}")
        return missing

    async def _source_file_exists(self, source_file: str) -> bool:
        result = await self.session.execute(
            select(ArticleSummary.id).where(ArticleSummary.source_file == source_file)
        )
        return result.first() is not None

    async def create_summary(self, data: SummaryCreate) -> ArticleSummary:
        """Store a summary; list fields are written as JSON text."""
        missing = await self._missing_references(data)
        if missing:
            raise UnknownReferenceError(f"Unknown {' and '.join(missing)}")

        values = data.model_dump(exclude_none=True, exclude=set(JSON_LIST_FIELDS))
        for name in JSON_LIST_FIELDS:
            values[name] = encode_json_list(getattr(data, name))

        summary = ArticleSummary(**values)
        self.session.add(summary)
        try:
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            if await self._source_file_exists(data.source_file):
                raise DuplicateSummaryError(
                    f"Summary for source file '{data.source_file}' already exists"
                ) from e
            # A referenced row vanished between the check and the insert.
            raise UnknownReferenceError(
                "Collected URL or pipeline run no longer exists"
            ) from e

        await self.session.refresh(summary, attribute_names=["collected_url", "pipeline_run"])
        logger.info("Stored summary %s for %s", summary.id, summary.source_file)
        return summary

    async def delete_summary(self, summary_id: int) -> bool:
        """Delete a summary. Returns False when it does not exist."""
        summary = await self.session.get(ArticleSummary, summary_id)
        if not summary:
            return False

        await self.session.delete(summary)
        await self.session.commit()
        return True

    async def get_active_sources(self) -> Sequence[NewsSource]:
        result = await self.session.execute(
            select(NewsSource).where(NewsSource.active == True).order_by(NewsSource.name)  # noqa: E712
        )
        return result.scalars().all()

    async def get_recent_collected_urls(self, limit: int = 50) -> Sequence[CollectedUrl]:
        result = await self.session.execute(
            select(CollectedUrl)
            .options(selectinload(CollectedUrl.source), selectinload(CollectedUrl.batch))
            .order_by(CollectedUrl.collected_at.desc())
            .limit(limit)
        )
        return result.scalars().all()

    async def get_completed_batches(self, limit: int = 20) -> Sequence[CollectionBatch]:
        result = await self.session.execute(
            select(CollectionBatch)
            .where(CollectionBatch.completed == True)  # noqa: E712
            .order_by(CollectionBatch.created_at.desc())
            .limit(limit)
        )
        return result.scalars().all()
