"""FastAPI dependencies that hand services to the endpoints."""

from fastapi import Request

from movie_booking_api.app.services.analytics_service import AnalyticsService
from movie_booking_api.app.services.entity_store import EntityStore


def get_entity_store(request: Request) -> EntityStore:
    return EntityStore(request.app.state.database)


def get_analytics_service(request: Request) -> AnalyticsService:
    settings = request.app.state.settings
    return AnalyticsService(
        request.app.state.database,
        top_users_threshold=settings.top_users_threshold,
    )
