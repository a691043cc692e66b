"""User and post models for PostgreSQL."""

from datetime import UTC, datetime

from sqlalchemy import DateTime, Text
from sqlmodel import Field, Relationship, SQLModel


class User(SQLModel, table=True):
    """User account model."""

    __tablename__ = "users"

    id: int | None = Field(default=None, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255)
    name: str | None = Field(default=None, max_length=100)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC), sa_type=DateTime(timezone=True)
    )

    # Relationships
    posts: list["Post"] = Relationship(
        back_populates="author",
        sa_relationship_kwargs={"cascade": "all, delete-orphan"},
    )


class Post(SQLModel, table=True):
    """Post written by a user."""

    __tablename__ = "posts"

    id: int | None = Field(default=None, primary_key=True)
    author_id: int = Field(foreign_key="users.id", index=True)
    title: str = Field(max_length=255)
    content: str | None = Field(default=None, sa_type=Text)
    published: bool = Field(default=False)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC), sa_type=DateTime(timezone=True)
    )

    # Relationships
    author: User = Relationship(back_populates="posts")
