"""Health check endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from appylink_shared import __version__
from appylink_shared.db import is_supabase_configured

router = APIRouter(tags=["health"])


@router.get("/health")
async def health() -> dict:
    return {"status": "ok", "version": __version__}


@router.get("/ready")
async def ready() -> dict:
    return {
        "status": "ready",
        "data_source": "live" if is_supabase_configured() else "local",
    }
