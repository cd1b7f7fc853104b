"""
Entity store for movies, users and bookings.

``EntityStore`` owns every write in the system.  Records are created
once and never updated or deleted.  Uniqueness of identifiers is left to
the primary key of each table: an insert of an existing id fails inside
SQLite and is reported as ``DuplicateKeyError``, so two concurrent
creates of the same id cannot both succeed.

Bookings are only accepted when the referenced user and movie exist at
creation time.  Both lookups are issued together and must succeed
before the insert runs, so a rejected booking never leaves a row
behind.
"""

from __future__ import annotations

import asyncio
import logging
import sqlite3
from datetime import datetime
from typing import Optional, Union

from movie_booking_api.app.core.db import (
    Database,
    as_utc,
    from_db_timestamp,
    to_db_timestamp,
    utcnow,
)
from movie_booking_api.app.core.errors import (
    DuplicateKeyError,
    NotFoundError,
    StoreError,
    ValidationError,
)
from movie_booking_api.app.schemas.booking import BookingCreate, BookingRead, BookingStatus
from movie_booking_api.app.schemas.movie import MovieCreate, MovieRead
from movie_booking_api.app.schemas.user import UserCreate, UserRead

logger = logging.getLogger(__name__)

Record = Union[MovieRead, UserRead, BookingRead]

# kind -> (table, row converter name)
_KINDS = {
    "movie": ("movies", "_row_to_movie"),
    "user": ("users", "_row_to_user"),
    "booking": ("bookings", "_row_to_booking"),
}


class EntityStore:
    """Create and look up movies, users and bookings."""

    def __init__(self, database: Database) -> None:
        self.database = database

    async def create_movie(self, data: MovieCreate) -> MovieRead:
        """Insert a movie.

        ``id`` and ``title`` are required.  Raises ``ValidationError``
        when either is missing and ``DuplicateKeyError`` when the id is
        already taken.
        """
        if not data.id or not data.title:
            raise ValidationError("id and title required")
        movie = MovieRead(
            id=data.id,
            title=data.title,
            genre=data.genre,
            release_year=data.release_year,
            duration_mins=data.duration_mins,
        )
        self._insert(
            "INSERT INTO movies (id, title, genre, release_year, duration_mins) VALUES (?, ?, ?, ?, ?)",
            (movie.id, movie.title, movie.genre, movie.release_year, movie.duration_mins),
            kind="movie",
            entity_id=movie.id,
        )
        return movie

    async def create_user(self, data: UserCreate) -> UserRead:
        """Register a user, stamping ``joined_at`` with the current time if absent."""
        if not data.id or not data.name or not data.email:
            raise ValidationError("id, name and email required")
        user = UserRead(
            id=data.id,
            name=data.name,
            email=data.email,
            joined_at=self._timestamp_or_now(data.joined_at, "joinedAt"),
        )
        self._insert(
            "INSERT INTO users (id, name, email, joined_at) VALUES (?, ?, ?, ?)",
            (user.id, user.name, user.email, to_db_timestamp(user.joined_at)),
            kind="user",
            entity_id=user.id,
        )
        return user

    async def create_booking(self, data: BookingCreate) -> BookingRead:
        """Create a booking for an existing user and movie.

        Raises
        ------
        ValidationError
            If ``id``, ``user_id``, ``movie_id`` or ``seats`` is missing.
            A seat count of zero counts as missing.
        NotFoundError
            If the user or the movie does not exist.  The user is reported
            first when both are missing.
        DuplicateKeyError
            If a booking with the same id already exists.
        """
        if not data.id or not data.user_id or not data.movie_id or not data.seats:
            raise ValidationError("id, userId, movieId, seats required")

        user, movie = await asyncio.gather(
            self.get_by_id("user", data.user_id),
            self.get_by_id("movie", data.movie_id),
        )
        if user is None:
            logger.warning("Booking %s rejected: user %s not found", data.id, data.user_id)
            raise NotFoundError("User not found")
        if movie is None:
            logger.warning("Booking %s rejected: movie %s not found", data.id, data.movie_id)
            raise NotFoundError("Movie not found")

        booking = BookingRead(
            id=data.id,
            user_id=data.user_id,
            movie_id=data.movie_id,
            booking_date=self._timestamp_or_now(data.booking_date, "bookingDate"),
            seats=data.seats,
            status=data.status or BookingStatus.BOOKED,
        )
        self._insert(
            "INSERT INTO bookings (id, user_id, movie_id, booking_date, seats, status) "
            "VALUES (?, ?, ?, ?, ?, ?)",
            (
                booking.id,
                booking.user_id,
                booking.movie_id,
                to_db_timestamp(booking.booking_date),
                booking.seats,
                booking.status.value,
            ),
            kind="booking",
            entity_id=booking.id,
        )
        return booking

    async def get_by_id(self, kind: str, entity_id: str) -> Optional[Record]:
        """Return the record of the given kind with this id, or ``None``.

        ``kind`` is one of ``"movie"``, ``"user"`` or ``"booking"``.
        """
        if kind not in _KINDS:
            raise ValueError(f"Unknown entity kind: {kind}")
        table, converter = _KINDS[kind]
        conn = self.database.get_connection()
        try:
            row = conn.execute(f"SELECT * FROM {table} WHERE id = ?", (entity_id,)).fetchone()
        except sqlite3.Error as exc:
            logger.exception("Failed to load %s %s", kind, entity_id)
            raise StoreError(str(exc)) from exc
        finally:
            conn.close()
        if row is None:
            return None
        return getattr(self, converter)(row)

    @staticmethod
    def _timestamp_or_now(value: Optional[datetime], field: str) -> datetime:
        # Converting e.g. 0001-01-01T00:00+05:00 to UTC leaves the datetime range.
        try:
            return as_utc(value or utcnow())
        except OverflowError as exc:
            raise ValidationError(f"{field} out of range") from exc

    def _insert(self, sql: str, params: tuple, *, kind: str, entity_id: str) -> None:
        conn = self.database.get_connection()
        try:
            conn.execute(sql, params)
            conn.commit()
        except sqlite3.IntegrityError as exc:
            logger.warning("Duplicate %s id %s", kind, entity_id)
            raise DuplicateKeyError("Duplicate id") from exc
        except sqlite3.Error as exc:
            logger.exception("Failed to insert %s %s", kind, entity_id)
            raise StoreError(str(exc)) from exc
        finally:
            conn.close()
        logger.info("Created %s %s", kind, entity_id)

    @staticmethod
    def _row_to_movie(row: sqlite3.Row) -> MovieRead:
        return MovieRead(
            id=row["id"],
            title=row["title"],
            genre=row["genre"],
            release_year=row["release_year"],
            duration_mins=row["duration_mins"],
        )

    @staticmethod
    def _row_to_user(row: sqlite3.Row) -> UserRead:
        return UserRead(
            id=row["id"],
            name=row["name"],
            email=row["email"],
            joined_at=from_db_timestamp(row["joined_at"]),
        )

    @staticmethod
    def _row_to_booking(row: sqlite3.Row) -> BookingRead:
        return BookingRead(
            id=row["id"],
            user_id=row["user_id"],
            movie_id=row["movie_id"],
            booking_date=from_db_timestamp(row["booking_date"]),
            seats=row["seats"],
            status=row["status"],
        )
