"""
Analytics endpoints.

Each route runs one report of ``AnalyticsService`` and returns it as a
JSON array.  A failing query yields 500 with the database message.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException

from movie_booking_api.app.api.deps import get_analytics_service
from movie_booking_api.app.core.errors import QueryError
from movie_booking_api.app.schemas.analytics import (
    ActiveBooking,
    GenreBookingTotal,
    MovieBookingTotal,
    TopUser,
    UserBookingHistory,
)
from movie_booking_api.app.services.analytics_service import AnalyticsService

router = APIRouter()


@router.get("/movie-bookings", response_model=List[MovieBookingTotal])
async def movie_bookings(
    service: AnalyticsService = Depends(get_analytics_service),
) -> List[MovieBookingTotal]:
    """Total bookings and seats per movie, most booked first."""
    try:
        return await service.movie_booking_totals()
    except QueryError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e


@router.get("/user-bookings", response_model=List[UserBookingHistory])
async def user_bookings(
    service: AnalyticsService = Depends(get_analytics_service),
) -> List[UserBookingHistory]:
    """Booking history of each user with movie titles."""
    try:
        return await service.user_booking_history()
    except QueryError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e


@router.get("/top-users", response_model=List[TopUser])
async def top_users(
    service: AnalyticsService = Depends(get_analytics_service),
) -> List[TopUser]:
    """Users with more than the configured number of bookings (default 2)."""
    try:
        return await service.top_users()
    except QueryError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e


@router.get("/genre-wise-bookings", response_model=List[GenreBookingTotal])
async def genre_wise_bookings(
    service: AnalyticsService = Depends(get_analytics_service),
) -> List[GenreBookingTotal]:
    try:
        return await service.genre_wise_bookings()
    except QueryError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e


@router.get("/active-bookings", response_model=List[ActiveBooking])
async def active_bookings(
    service: AnalyticsService = Depends(get_analytics_service),
) -> List[ActiveBooking]:
    """``Booked`` bookings with user and movie details, most recent first."""
    try:
        return await service.active_bookings()
    except QueryError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e
