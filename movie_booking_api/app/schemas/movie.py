"""
Pydantic models for movies.

Movies are created once and never updated.  ``id`` and ``title`` are
declared optional here so that a request missing them reaches the entity
store, which reports the missing fields with a single message.
"""

from typing import Optional

from pydantic import Field

from .common import SQLITE_INT_MAX, SQLITE_INT_MIN, APIModel


class MovieCreate(APIModel):
    """Schema for creating a movie."""

    id: Optional[str] = Field(None, examples=["M1"])
    title: Optional[str] = Field(None, examples=["Dune"])
    genre: Optional[str] = Field(None, examples=["Sci-Fi"])
    release_year: Optional[int] = Field(None, ge=SQLITE_INT_MIN, le=SQLITE_INT_MAX, examples=[2021])
    duration_mins: Optional[int] = Field(None, ge=SQLITE_INT_MIN, le=SQLITE_INT_MAX, examples=[155])


class MovieRead(APIModel):
    id: str
    title: str
    genre: Optional[str] = None
    release_year: Optional[int] = None
    duration_mins: Optional[int] = None
