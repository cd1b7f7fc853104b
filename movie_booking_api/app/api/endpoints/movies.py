"""
Movie endpoints.

Movies are created with a caller-assigned ``id`` and can be fetched back
by that id.  There is no update or delete.
"""

from fastapi import APIRouter, Depends, HTTPException, Path, status

from movie_booking_api.app.api.deps import get_entity_store
from movie_booking_api.app.core.errors import ServiceError
from movie_booking_api.app.schemas.movie import MovieCreate, MovieRead
from movie_booking_api.app.services.entity_store import EntityStore

router = APIRouter()


@router.post("", response_model=MovieRead, status_code=status.HTTP_201_CREATED)
async def create_movie(
    movie: MovieCreate,
    store: EntityStore = Depends(get_entity_store),
) -> MovieRead:
    """Create a movie.

    Returns 400 if ``id`` or ``title`` is missing and 409 if the id is
    already in use.
    """
    try:
        return await store.create_movie(movie)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e


@router.get("/{movie_id}", response_model=MovieRead)
async def get_movie(
    movie_id: str = Path(..., description="ID of the movie"),
    store: EntityStore = Depends(get_entity_store),
) -> MovieRead:
    try:
        movie = await store.get_by_id("movie", movie_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e
    if movie is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Movie not found")
    return movie
