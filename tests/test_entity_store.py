import asyncio
from datetime import datetime, timedelta, timezone

import pytest

from movie_booking_api.app.core.errors import DuplicateKeyError, NotFoundError, StoreError, ValidationError
from movie_booking_api.app.schemas.booking import BookingCreate, BookingStatus
from movie_booking_api.app.schemas.movie import MovieCreate
from movie_booking_api.app.schemas.user import UserCreate


def test_created_movie_is_retrievable(store):
    created = asyncio.run(
        store.create_movie(MovieCreate(id="M1", title="Dune", genre="Sci-Fi", release_year=2021, duration_mins=155))
    )
    fetched = asyncio.run(store.get_by_id("movie", "M1"))

    assert fetched == created
    assert fetched.release_year == 2021


def test_duplicate_movie_id_is_rejected_and_not_overwritten(store, seed):
    seed.movie("M1", title="Dune")

    with pytest.raises(DuplicateKeyError):
        asyncio.run(store.create_movie(MovieCreate(id="M1", title="Arrival")))

    assert asyncio.run(store.get_by_id("movie", "M1")).title == "Dune"


@pytest.mark.parametrize(
    "payload",
    [{"title": "Dune"}, {"id": "M1"}, {"id": "", "title": "Dune"}, {"id": "M1", "title": ""}],
)
def test_movie_requires_id_and_title(store, payload):
    with pytest.raises(ValidationError, match="id and title required"):
        asyncio.run(store.create_movie(MovieCreate(**payload)))


def test_user_joined_at_defaults_to_now(store):
    before = datetime.now(timezone.utc)
    user = asyncio.run(store.create_user(UserCreate(id="U1", name="Asha", email="asha@example.com")))

    assert before <= user.joined_at <= datetime.now(timezone.utc)
    assert asyncio.run(store.get_by_id("user", "U1")).joined_at == user.joined_at


def test_user_naive_joined_at_is_treated_as_utc(store):
    user = asyncio.run(
        store.create_user(UserCreate(id="U1", name="Asha", email="a@example.com", joined_at=datetime(2024, 1, 2, 3, 4)))
    )

    assert user.joined_at == datetime(2024, 1, 2, 3, 4, tzinfo=timezone.utc)


def test_user_requires_name_and_email(store):
    with pytest.raises(ValidationError, match="id, name and email required"):
        asyncio.run(store.create_user(UserCreate(id="U1", name="Asha")))


def test_duplicate_user_id_is_rejected(store, seed):
    seed.user("U1")

    with pytest.raises(DuplicateKeyError):
        seed.user("U1")


def test_booking_defaults(store, seed):
    seed.movie("M1")
    seed.user("U1")

    booking = seed.booking("B1", "U1", "M1", seats=3)

    assert booking.status is BookingStatus.BOOKED
    assert datetime.now(timezone.utc) - booking.booking_date < timedelta(minutes=1)
    assert asyncio.run(store.get_by_id("booking", "B1")) == booking


def test_booking_keeps_explicit_status_and_date(seed):
    seed.movie("M1")
    seed.user("U1")
    when = datetime(2024, 5, 1, 18, 30, tzinfo=timezone(timedelta(hours=2)))

    booking = seed.booking("B1", "U1", "M1", booking_date=when, status=BookingStatus.CANCELLED)

    assert booking.status is BookingStatus.CANCELLED
    assert booking.booking_date == when
    assert booking.booking_date.utcoffset() == timedelta(0)


def test_booking_for_missing_movie_leaves_no_row(store, seed):
    seed.user("U1")

    with pytest.raises(NotFoundError, match="Movie not found"):
        seed.booking("B1", "U1", "M99")

    assert asyncio.run(store.get_by_id("booking", "B1")) is None


def test_booking_for_missing_user_leaves_no_row(store, seed):
    seed.movie("M1")

    with pytest.raises(NotFoundError, match="User not found"):
        seed.booking("B1", "U404", "M1")

    assert asyncio.run(store.get_by_id("booking", "B1")) is None


def test_missing_user_is_reported_before_missing_movie(seed):
    with pytest.raises(NotFoundError, match="User not found"):
        seed.booking("B1", "U404", "M404")


def test_duplicate_booking_id_is_rejected(seed):
    seed.movie("M1")
    seed.user("U1")
    seed.booking("B1", "U1", "M1", seats=2)

    with pytest.raises(DuplicateKeyError):
        seed.booking("B1", "U1", "M1", seats=5)


@pytest.mark.parametrize("missing", ["id", "user_id", "movie_id", "seats"])
def test_booking_requires_fields(store, missing):
    payload = {"id": "B1", "user_id": "U1", "movie_id": "M1", "seats": 2}
    del payload[missing]

    with pytest.raises(ValidationError, match="id, userId, movieId, seats required"):
        asyncio.run(store.create_booking(BookingCreate(**payload)))


def test_zero_seats_counts_as_missing(store):
    with pytest.raises(ValidationError):
        asyncio.run(store.create_booking(BookingCreate(id="B1", user_id="U1", movie_id="M1", seats=0)))


def test_get_by_id_returns_none_for_unknown_id(store):
    assert asyncio.run(store.get_by_id("user", "nobody")) is None


def test_get_by_id_rejects_unknown_kind(store):
    with pytest.raises(ValueError):
        asyncio.run(store.get_by_id("theatre", "T1"))


def test_booking_insert_failure_raises_store_error(store, seed, database):
    seed.movie("M1")
    seed.user("U1")
    with database.get_cursor() as cursor:
        cursor.execute("DROP TABLE bookings")

    with pytest.raises(StoreError, match="no such table"):
        seed.booking("B1", "U1", "M1")


def test_joined_at_outside_utc_range_is_rejected(store):
    joined_at = datetime(1, 1, 1, tzinfo=timezone(timedelta(hours=5)))

    with pytest.raises(ValidationError, match="joinedAt out of range"):
        asyncio.run(store.create_user(UserCreate(id="U1", name="Asha", email="a@example.com", joined_at=joined_at)))

    assert asyncio.run(store.get_by_id("user", "U1")) is None
