"""Health and readiness check routes."""

import asyncio
import logging

from fastapi import APIRouter, Depends

from config import settings
from errors import FetchError
from services.apod import ApodService, get_service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/ready")
async def ready() -> dict:
    """Lightweight readiness check — no external calls."""
    return {"status": "ok", "service": "apod-api", "commit": settings.git_sha}


@router.get("/health")
async def health(service: ApodService = Depends(get_service)) -> dict:
    """Deep health check: fetches today's picture (from cache when warm) and reports cache stats."""
    result = {"status": "ok", "service": "apod-api", "commit": settings.git_sha, "upstream": "not_tested"}

    try:
        picture = await asyncio.to_thread(service.get_today)
        result["upstream"] = "connected" if picture is not None else "empty"
    except FetchError as e:
        logger.warning("APOD upstream health check failed: %s", e)
        result["status"] = "degraded"
        result["upstream"] = "error"
        result["upstream_error"] = str(e)

    result["cache"] = service.cache.stats()
    return result
