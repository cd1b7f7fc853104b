"""
Top‑level router of the API.

Clients address the endpoints at the root (``/movies``,
``/analytics/top-users``), so routers are included without a version
prefix.  New domains add their router here.
"""

from fastapi import APIRouter

from .endpoints import analytics, bookings, health, movies, users

router = APIRouter()

router.include_router(health.router, tags=["health"])
router.include_router(movies.router, prefix="/movies", tags=["movies"])
router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(bookings.router, prefix="/bookings", tags=["bookings"])
router.include_router(analytics.router, prefix="/analytics", tags=["analytics"])
