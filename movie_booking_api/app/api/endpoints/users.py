"""User registration and lookup endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Path, status

from movie_booking_api.app.api.deps import get_entity_store
from movie_booking_api.app.core.errors import ServiceError
from movie_booking_api.app.schemas.user import UserCreate, UserRead
from movie_booking_api.app.services.entity_store import EntityStore

router = APIRouter()


@router.post("", response_model=UserRead, status_code=status.HTTP_201_CREATED)
async def create_user(
    user: UserCreate,
    store: EntityStore = Depends(get_entity_store),
) -> UserRead:
    """Register a user.

    ``joinedAt`` defaults to the current time.  Returns 400 if ``id``,
    ``name`` or ``email`` is missing and 409 if the id is taken.
    """
    try:
        return await store.create_user(user)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e


@router.get("/{user_id}", response_model=UserRead)
async def get_user(
    user_id: str = Path(..., description="ID of the user"),
    store: EntityStore = Depends(get_entity_store),
) -> UserRead:
    try:
        user = await store.get_by_id("user", user_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user
