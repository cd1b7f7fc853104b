"""
Main entrypoint for the Movie Booking API.

``create_app`` builds and configures the FastAPI application: logging,
the store handle, error rendering and the routers.  An instance is
created at import time as ``app`` so it can be served directly::

    uvicorn movie_booking_api.app.main:app --port 3000

Every error response has the shape ``{"error": "<message>"}``.  Request
bodies that FastAPI cannot parse (wrong types, unknown status values)
are reported as 400 like any other invalid input.
"""

import logging
import sqlite3
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api.router import router
from .core.config import Settings, settings as default_settings
from .core.db import Database
from .core.logging_config import setup_logging


def _describe_validation_error(exc: RequestValidationError) -> str:
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        messages.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return "; ".join(messages) or "Invalid request"


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Settings to use instead of the ones read from the environment at
        import time.  Tests pass their own to point at a temporary
        database.

    Returns
    -------
    FastAPI
        A configured application.  The database is initialised on
        startup; if that fails the application refuses to start.
    """
    settings = settings or default_settings
    setup_logging(settings.log_level, settings.log_file)
    logger = logging.getLogger(__name__)

    app = FastAPI(title=settings.project_name, version=settings.api_version)
    app.state.settings = settings
    app.state.database = Database(settings.database_url)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": _describe_validation_error(exc)},
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": str(exc) or exc.__class__.__name__},
        )

    app.include_router(router)

    @app.on_event("startup")
    async def startup_event() -> None:
        try:
            app.state.database.init()
        except sqlite3.Error:
            logger.critical("Could not initialise database at %s", app.state.database.path, exc_info=True)
            raise
        logger.info("%s %s started", settings.project_name, settings.api_version)

    return app


app = create_app()
