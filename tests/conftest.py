import asyncio

import pytest
from fastapi.testclient import TestClient

from movie_booking_api.app.core.config import Settings
from movie_booking_api.app.core.db import Database
from movie_booking_api.app.main import create_app
from movie_booking_api.app.schemas.booking import BookingCreate
from movie_booking_api.app.schemas.movie import MovieCreate
from movie_booking_api.app.schemas.user import UserCreate
from movie_booking_api.app.services.analytics_service import AnalyticsService
from movie_booking_api.app.services.entity_store import EntityStore


@pytest.fixture
def settings(tmp_path):
    return Settings(database_url=str(tmp_path / "bookings.db"), log_level="WARNING")


@pytest.fixture
def database(settings):
    db = Database(settings.database_url)
    db.init()
    return db


@pytest.fixture
def store(database):
    return EntityStore(database)


@pytest.fixture
def analytics(database):
    return AnalyticsService(database)


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as test_client:
        yield test_client


@pytest.fixture
def seed(store):
    """Return helpers that create records synchronously through the store."""

    class Seeder:
        def movie(self, id, title="Dune", genre="Sci-Fi", **kwargs):
            return asyncio.run(store.create_movie(MovieCreate(id=id, title=title, genre=genre, **kwargs)))

        def user(self, id, name=None, email=None, **kwargs):
            return asyncio.run(
                store.create_user(
                    UserCreate(id=id, name=name or f"User {id}", email=email or f"{id.lower()}@example.com", **kwargs)
                )
            )

        def booking(self, id, user_id, movie_id, seats=1, **kwargs):
            return asyncio.run(
                store.create_booking(
                    BookingCreate(id=id, user_id=user_id, movie_id=movie_id, seats=seats, **kwargs)
                )
            )

    return Seeder()

