"""
Pydantic models for bookings.

A booking references an existing user and movie by identifier.  The
references are validated once, at creation time, by the entity store.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import Field

from .common import SQLITE_INT_MAX, APIModel


class BookingStatus(str, Enum):
    BOOKED = "Booked"
    CANCELLED = "Cancelled"


class BookingCreate(APIModel):
    """Schema for creating a booking.

    ``booking_date`` defaults to the creation time and ``status`` to
    ``Booked`` when omitted.
    """

    id: Optional[str] = Field(None, examples=["B1"])
    user_id: Optional[str] = Field(None, examples=["U1"])
    movie_id: Optional[str] = Field(None, examples=["M1"])
    seats: Optional[int] = Field(None, ge=0, le=SQLITE_INT_MAX, examples=[2])
    booking_date: Optional[datetime] = None
    status: Optional[BookingStatus] = None


class BookingRead(APIModel):
    id: str
    user_id: str
    movie_id: str
    booking_date: datetime
    seats: int
    status: BookingStatus
