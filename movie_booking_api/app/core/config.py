"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from environment
variables, with defaults for every field so the service starts against
a local SQLite file without any setup.  Tests construct their own
``Settings`` instance and pass it to ``create_app``.
"""

import os
from dataclasses import dataclass
from typing import Optional


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Movie Booking API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: Optional[str] = os.getenv("LOG_FILE") or None

    # Path or ``sqlite:///`` URL of the database file.  Relative paths are
    # resolved against the project root by ``core.db``.
    database_url: str = os.getenv("DATABASE_URL", "movie_booking.db")

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "3000"))

    # Users need strictly more bookings than this to appear in the top
    # users report.
    top_users_threshold: int = int(os.getenv("TOP_USERS_THRESHOLD", "2"))


# Environment variables must be set before this module is imported.
settings = Settings()
