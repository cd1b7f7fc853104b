"""
Booking endpoints.

A booking can only be created for a user and a movie that already
exist.  The check happens once, at creation; nothing ties the booking to
its user or movie afterwards.
"""

from fastapi import APIRouter, Depends, HTTPException, Path, status

from movie_booking_api.app.api.deps import get_entity_store
from movie_booking_api.app.core.errors import ServiceError
from movie_booking_api.app.schemas.booking import BookingCreate, BookingRead
from movie_booking_api.app.services.entity_store import EntityStore

router = APIRouter()


@router.post("", response_model=BookingRead, status_code=status.HTTP_201_CREATED)
async def create_booking(
    booking: BookingCreate,
    store: EntityStore = Depends(get_entity_store),
) -> BookingRead:
    """Create a booking.

    ``bookingDate`` defaults to now and ``status`` to ``Booked``.

    * 400 if ``id``, ``userId``, ``movieId`` or ``seats`` is missing
    * 404 if the user or the movie does not exist
    * 409 if the booking id is already in use
    """
    try:
        return await store.create_booking(booking)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e


@router.get("/{booking_id}", response_model=BookingRead)
async def get_booking(
    booking_id: str = Path(..., description="ID of the booking"),
    store: EntityStore = Depends(get_entity_store),
) -> BookingRead:
    try:
        booking = await store.get_by_id("booking", booking_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e
    if booking is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Booking not found")
    return booking
