"""User service - Business logic for user accounts and their posts."""

import logging
from collections.abc import Sequence

from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models import Post, User
from app.schemas.user import UserCreate, UserUpdate

logger = logging.getLogger(__name__)


class DuplicateEmailError(Exception):
    """Another user already has this email."""


class UserService:
    """Service for managing users."""

    def __init__(self, session: AsyncSession):
        self.session = session

    def _user_query(self):
        return select(User).options(selectinload(User.posts))

    async def _commit(self, email: str | None) -> None:
        try:
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            raise DuplicateEmailError(f"A user with email '{email}' already exists") from e

    async def create_user(self, data: UserCreate) -> User:
        """Create a user and any initial posts."""
        user = User(email=data.email, name=data.name)
        user.posts = [Post(**post.model_dump()) for post in data.posts]
        self.session.add(user)
        await self._commit(data.email)
        await self.session.refresh(user, attribute_names=["posts"])
        logger.info("Created user %s", user.id)
        return user

    async def get_users(self) -> Sequence[User]:
        """Get all users, newest first."""
        result = await self.session.execute(self._user_query().order_by(User.created_at.desc()))
        return result.scalars().all()

    async def get_user(self, user_id: int) -> User | None:
        """Get a user by ID."""
        result = await self.session.execute(
            self._user_query()
            .where(User.id == user_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def update_user(self, user_id: int, data: UserUpdate) -> User | None:
        """Apply a partial update. Returns None when the user does not exist."""
        user = await self.get_user(user_id)
        if not user:
            return None

        for field, value in data.model_dump(exclude_unset=True, exclude_none=True).items():
            setattr(user, field, value)
        await self._commit(data.email)
        return await self.get_user(user_id)

    async def delete_user(self, user_id: int) -> bool:
        """Delete a user and their posts."""
        user = await self.get_user(user_id)
        if not user:
            return False

        await self.session.delete(user)
        await self.session.commit()
        return True

    async def search_users(self, query: str) -> Sequence[User]:
        """Users whose email or name contains ``query``."""
        pattern = f"%{query}%"
        result = await self.session.execute(
            self._user_query().where(or_(User.email.ilike(pattern), User.name.ilike(pattern)))
        )
        return result.scalars().all()
