"""User schemas for API request/response validation."""

from datetime import datetime

from pydantic import BaseModel, Field


class PostCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    content: str | None = None
    published: bool = False


class PostResponse(PostCreate):
    id: int
    author_id: int
    created_at: datetime

    class Config:
        from_attributes = True


class UserBase(BaseModel):
    """Base user schema with shared fields."""

    email: str = Field(..., min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+$")
    name: str | None = Field(default=None, max_length=100)


class UserCreate(UserBase):
    """Schema for creating a user, optionally with initial posts."""

    posts: list[PostCreate] = Field(default_factory=list)


class UserUpdate(BaseModel):
    """Partial update - only provided fields change."""

    email: str | None = Field(default=None, min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+$")
    name: str | None = Field(default=None, max_length=100)


class UserResponse(UserBase):
    id: int
    created_at: datetime
    posts: list[PostResponse] = Field(default_factory=list)

    class Config:
        from_attributes = True
