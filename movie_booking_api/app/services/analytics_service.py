"""
Service layer for booking analytics.

``AnalyticsService`` computes five fixed reports over the bookings
table:

* per-movie totals (left join on movies, so bookings of an unknown
  movie still show up with a null title and genre),
* per-user booking history,
* top users (more than ``top_users_threshold`` bookings),
* per-genre seat totals,
* active (``Booked``) bookings with the user and movie embedded.

Joins and grouping run in SQL.  Nesting and the final ordering are done
in Python, where the stable secondary order of every report is easy to
state:

=====================  ====================================================
report                 order
=====================  ====================================================
movie totals           ``totalBookings`` desc, ``movieId`` asc
user history           ``totalBookings`` desc, ``userId`` asc; bookings of
                       a user by ``bookingDate`` asc, ``bookingId`` asc
top users              ``totalBookings`` desc, ``userId`` asc
genre totals           ``totalSeatsBooked`` desc, ``genre`` asc, null last
active bookings        ``bookingDate`` desc, ``bookingId`` asc
=====================  ====================================================

Every report is read on a single connection.  Database failures are
raised as ``QueryError``; no partial result is ever returned.  The
service holds no state besides its database handle.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import Any, Dict, List

from movie_booking_api.app.core.db import Database, from_db_timestamp
from movie_booking_api.app.core.errors import QueryError
from movie_booking_api.app.schemas.analytics import (
    ActiveBooking,
    ActiveBookingMovie,
    ActiveBookingUser,
    GenreBookingTotal,
    MovieBookingTotal,
    TopUser,
    UserBookingEntry,
    UserBookingHistory,
)
from movie_booking_api.app.schemas.booking import BookingStatus

logger = logging.getLogger(__name__)


class AnalyticsService:
    """Read-only aggregations over bookings, users and movies."""

    def __init__(self, database: Database, top_users_threshold: int = 2) -> None:
        self.database = database
        self.top_users_threshold = top_users_threshold

    def _fetch_all(self, report: str, sql: str, params: tuple = ()) -> List[sqlite3.Row]:
        conn = self.database.get_connection()
        try:
            return conn.execute(sql, params).fetchall()
        except sqlite3.Error as exc:
            logger.exception("Analytics query %s failed", report)
            raise QueryError(str(exc)) from exc
        finally:
            conn.close()

    async def movie_booking_totals(self) -> List[MovieBookingTotal]:
        """Return booking count and seat total per movie."""
        rows = self._fetch_all(
            "movie-bookings",
            """
            SELECT b.movie_id AS movie_id,
                   COUNT(*) AS total_bookings,
                   SUM(b.seats) AS total_seats,
                   m.title AS title,
                   m.genre AS genre
            FROM bookings b
            LEFT JOIN movies m ON m.id = b.movie_id
            GROUP BY b.movie_id
            """,
        )
        totals = [
            MovieBookingTotal(
                movie_id=row["movie_id"],
                title=row["title"],
                genre=row["genre"],
                total_bookings=row["total_bookings"],
                total_seats=row["total_seats"] or 0,
            )
            for row in rows
        ]
        totals.sort(key=lambda t: (-t.total_bookings, t.movie_id))
        return totals

    async def user_booking_history(self) -> List[UserBookingHistory]:
        """Return every user's bookings with movie titles.

        Bookings whose user or movie no longer resolves are left out, and
        a user appears only if at least one of their bookings resolves.
        """
        rows = self._fetch_all(
            "user-bookings",
            """
            SELECT b.id AS booking_id,
                   b.user_id AS user_id,
                   u.name AS user_name,
                   b.movie_id AS movie_id,
                   m.title AS movie_title,
                   b.booking_date AS booking_date,
                   b.seats AS seats,
                   b.status AS status
            FROM bookings b
            JOIN users u ON u.id = b.user_id
            JOIN movies m ON m.id = b.movie_id
            """,
        )
        entries = [
            (
                row["user_id"],
                row["user_name"],
                UserBookingEntry(
                    booking_id=row["booking_id"],
                    movie_id=row["movie_id"],
                    movie_title=row["movie_title"],
                    booking_date=from_db_timestamp(row["booking_date"]),
                    seats=row["seats"],
                    status=row["status"],
                ),
            )
            for row in rows
        ]
        entries.sort(key=lambda e: (e[2].booking_date, e[2].booking_id))

        histories: Dict[str, UserBookingHistory] = {}
        for user_id, user_name, entry in entries:
            history = histories.get(user_id)
            if history is None:
                history = UserBookingHistory(
                    user_id=user_id, user_name=user_name, total_bookings=0, bookings=[]
                )
                histories[user_id] = history
            history.bookings.append(entry)
            history.total_bookings += 1

        result = list(histories.values())
        result.sort(key=lambda h: (-h.total_bookings, h.user_id))
        return result

    async def top_users(self) -> List[TopUser]:
        """Return users with more than ``top_users_threshold`` bookings."""
        rows = self._fetch_all(
            "top-users",
            """
            SELECT b.user_id AS user_id,
                   COUNT(*) AS total_bookings,
                   u.name AS name,
                   u.email AS email
            FROM bookings b
            JOIN users u ON u.id = b.user_id
            GROUP BY b.user_id
            HAVING COUNT(*) > ?
            """,
            (self.top_users_threshold,),
        )
        users = [
            TopUser(
                user_id=row["user_id"],
                name=row["name"],
                email=row["email"],
                total_bookings=row["total_bookings"],
            )
            for row in rows
        ]
        users.sort(key=lambda u: (-u.total_bookings, u.user_id))
        return users

    async def genre_wise_bookings(self) -> List[GenreBookingTotal]:
        """Return seats booked and booking count per movie genre."""
        rows = self._fetch_all(
            "genre-wise-bookings",
            """
            SELECT m.genre AS genre,
                   SUM(b.seats) AS total_seats_booked,
                   COUNT(*) AS bookings_count
            FROM bookings b
            JOIN movies m ON m.id = b.movie_id
            GROUP BY m.genre
            """,
        )
        totals = [
            GenreBookingTotal(
                genre=row["genre"],
                total_seats_booked=row["total_seats_booked"] or 0,
                bookings_count=row["bookings_count"],
            )
            for row in rows
        ]
        totals.sort(key=lambda t: (-t.total_seats_booked, t.genre is None, t.genre or ""))
        return totals

    async def active_bookings(self) -> List[ActiveBooking]:
        """Return ``Booked`` bookings, most recent first."""
        rows = self._fetch_all(
            "active-bookings",
            """
            SELECT b.id AS booking_id,
                   b.booking_date AS booking_date,
                   b.seats AS seats,
                   b.status AS status,
                   u.id AS user_id,
                   u.name AS user_name,
                   u.email AS user_email,
                   m.id AS movie_id,
                   m.title AS movie_title,
                   m.genre AS movie_genre
            FROM bookings b
            JOIN users u ON u.id = b.user_id
            JOIN movies m ON m.id = b.movie_id
            WHERE b.status = ?
            """,
            (BookingStatus.BOOKED.value,),
        )
        bookings = [self._row_to_active_booking(row) for row in rows]
        # Two stable passes: id ascending breaks ties within the same date.
        bookings.sort(key=lambda b: b.booking_id)
        bookings.sort(key=lambda b: b.booking_date, reverse=True)
        return bookings

    @staticmethod
    def _row_to_active_booking(row: sqlite3.Row) -> ActiveBooking:
        data: Dict[str, Any] = {
            "booking_id": row["booking_id"],
            "booking_date": from_db_timestamp(row["booking_date"]),
            "seats": row["seats"],
            "status": row["status"],
            "user": ActiveBookingUser(
                user_id=row["user_id"], name=row["user_name"], email=row["user_email"]
            ),
            "movie": ActiveBookingMovie(
                movie_id=row["movie_id"], title=row["movie_title"], genre=row["movie_genre"]
            ),
        }
        return ActiveBooking(**data)
