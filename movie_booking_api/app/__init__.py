"""
Application package initializer.

The API is split into a persistence layer (``core.db``), services that
hold the business logic (``services``), pydantic schemas for the wire
format (``schemas``) and thin HTTP endpoints (``api``).  Endpoints only
translate requests and errors; they never talk to the database
directly.
"""

from .main import app  # noqa: F401
