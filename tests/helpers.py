from datetime import datetime, timezone


def at(day: int, hour: int = 12) -> datetime:
    return datetime(2024, 5, day, hour, tzinfo=timezone.utc)


def insert_raw_booking(database, booking_id, user_id, movie_id, seats=1, status="Booked", booking_date=None):
    """Write a booking without reference checks, as if its user or movie vanished later."""
    with database.get_cursor() as cursor:
        cursor.execute(
            "INSERT INTO bookings (id, user_id, movie_id, booking_date, seats, status) VALUES (?, ?, ?, ?, ?, ?)",
            (booking_id, user_id, movie_id, (booking_date or at(1)).isoformat(), seats, status),
        )
