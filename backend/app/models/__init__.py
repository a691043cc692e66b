"""Models package - SQLModel database models."""

from app.models.article_summary import JSON_LIST_FIELDS, ArticleSummary
from app.models.pipeline import CollectedUrl, CollectionBatch, NewsSource, PipelineRun
from app.models.user import Post, User

__all__ = [
    "ArticleSummary",
    "JSON_LIST_FIELDS",
    "NewsSource",
    "CollectionBatch",
    "CollectedUrl",
    "PipelineRun",
    "User",
    "Post",
]
