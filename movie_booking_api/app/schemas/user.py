"""
Pydantic models for users.

``joined_at`` defaults to the creation time when the client omits it.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from .common import APIModel


class UserCreate(APIModel):
    """Schema for registering a user."""

    id: Optional[str] = Field(None, examples=["U1"])
    name: Optional[str] = Field(None, examples=["Asha Rao"])
    email: Optional[str] = Field(None, examples=["asha@example.com"])
    joined_at: Optional[datetime] = None


class UserRead(APIModel):
    id: str
    name: str
    email: str
    joined_at: datetime
