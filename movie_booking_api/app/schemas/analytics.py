"""
Response models for the analytics endpoints.

Each model mirrors one row of an aggregation produced by
``AnalyticsService``.  Fields coming from a left join (movie title and
genre in the per-movie totals) are optional because the joined record
may be missing.
"""

from datetime import datetime
from typing import List, Optional

from .booking import BookingStatus
from .common import APIModel


class MovieBookingTotal(APIModel):
    movie_id: str
    title: Optional[str] = None
    genre: Optional[str] = None
    total_bookings: int
    total_seats: int


class UserBookingEntry(APIModel):
    booking_id: str
    movie_id: str
    movie_title: str
    booking_date: datetime
    seats: int
    status: BookingStatus


class UserBookingHistory(APIModel):
    user_id: str
    user_name: str
    total_bookings: int
    bookings: List[UserBookingEntry]


class TopUser(APIModel):
    user_id: str
    name: str
    email: str
    total_bookings: int


class GenreBookingTotal(APIModel):
    genre: Optional[str] = None
    total_seats_booked: int
    bookings_count: int


class ActiveBookingUser(APIModel):
    user_id: str
    name: str
    email: str


class ActiveBookingMovie(APIModel):
    movie_id: str
    title: str
    genre: Optional[str] = None


class ActiveBooking(APIModel):
    """A ``Booked`` booking with its user and movie embedded."""

    booking_id: str
    booking_date: datetime
    seats: int
    status: BookingStatus
    user: ActiveBookingUser
    movie: ActiveBookingMovie
