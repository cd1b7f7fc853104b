"""Liveness check."""

from typing import Any, Dict

from fastapi import APIRouter

router = APIRouter()


@router.get("/")
async def health() -> Dict[str, Any]:
    return {"ok": True, "msg": "Movie Booking API running"}
