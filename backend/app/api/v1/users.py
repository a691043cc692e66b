"""User API endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.postgres import get_session as get_db
from app.schemas.user import UserCreate, UserResponse, UserUpdate
from app.services.user_service import DuplicateEmailError, UserService

router = APIRouter()


@router.get("", response_model=list[UserResponse])
async def list_users(db: AsyncSession = Depends(get_db)) -> list[UserResponse]:
    """List all users with their posts."""
    users = await UserService(db).get_users()
    return [UserResponse.model_validate(u) for u in users]


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(user_in: UserCreate, db: AsyncSession = Depends(get_db)) -> UserResponse:
    """Create a user, optionally with initial posts."""
    try:
        user = await UserService(db).create_user(user_in)
    except DuplicateEmailError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return UserResponse.model_validate(user)


@router.get("/search", response_model=list[UserResponse])
async def search_users(
    q: str = Query(..., min_length=1), db: AsyncSession = Depends(get_db)
) -> list[UserResponse]:
    """Users whose email or name contains ``q``."""
    users = await UserService(db).search_users(q)
    return [UserResponse.model_validate(u) for u in users]


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: int, db: AsyncSession = Depends(get_db)) -> UserResponse:
    """Get user by ID."""
    user = await UserService(db).get_user(user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return UserResponse.model_validate(user)


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: int, user_in: UserUpdate, db: AsyncSession = Depends(get_db)
) -> UserResponse:
    """Update a user's email or name."""
    try:
        user = await UserService(db).update_user(user_id, user_in)
    except DuplicateEmailError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return UserResponse.model_validate(user)


@router.delete("/{user_id}")
async def delete_user(user_id: int, db: AsyncSession = Depends(get_db)) -> dict[str, str]:
    """Delete a user and their posts."""
    deleted = await UserService(db).delete_user(user_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="User not found")
    return {"message": "User deleted successfully"}
