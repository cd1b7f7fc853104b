"""Entry point for the Movie Booking API.

Serves ``movie_booking_api.app.main:app`` with Uvicorn.  Host and port
come from the ``HOST`` and ``PORT`` environment variables (defaults
``0.0.0.0`` and ``3000``); the database location from ``DATABASE_URL``.

If the database cannot be initialised the application fails its startup
and this script exits with status 1.

Usage:
    python run.py
"""
import asyncio
import logging
import sys

from uvicorn import Config, Server

from movie_booking_api.app.core.config import settings
from movie_booking_api.app.main import app


async def main() -> bool:
    """Serve the API until shutdown; return whether startup succeeded."""
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        lifespan="on",
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    await server.serve()
    return server.started


if __name__ == "__main__":
    try:
        started = asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        started = True
    if not started:
        logging.getLogger(__name__).critical("Movie Booking API failed to start")
        sys.exit(1)
