"""APOD routes — today, by date, and a backward-looking range.

Orchestrator calls block on the upstream HTTP request, so they run on a
worker thread via asyncio.to_thread.
"""

import asyncio
import logging
from datetime import date

from fastapi import APIRouter, Depends, Query

from config import settings
from errors import ApodNotFoundError, InvalidDateError
from services.apod import ApodService, get_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/apod", tags=["apod"])


def _parse_date(raw: str) -> str:
    """Normalize a YYYY-MM-DD query value into a cache key."""
    try:
        return date.fromisoformat(raw.strip()).isoformat()
    except ValueError:
        raise InvalidDateError(raw) from None


def clamp_days(days: int) -> int:
    """Limit the range to [1, RECENT_MAX_DAYS] to avoid abusing the NASA API."""
    return max(1, min(days, settings.recent_max_days))


@router.get("/today")
async def today(service: ApodService = Depends(get_service)) -> dict:
    key = service.today_key()
    result = await asyncio.to_thread(service.get_by_date, key)
    if result is None:
        raise ApodNotFoundError(key)
    return result


@router.get("")
async def by_date(
    day: str = Query(..., alias="date", description="Date in YYYY-MM-DD format"),
    service: ApodService = Depends(get_service),
) -> dict:
    key = _parse_date(day)
    result = await asyncio.to_thread(service.get_by_date, key)
    if result is None:
        raise ApodNotFoundError(key)
    return result


@router.get("/recent")
async def recent(
    days: int = Query(settings.recent_default_days),
    service: ApodService = Depends(get_service),
) -> list[dict]:
    days = clamp_days(days)
    return await asyncio.to_thread(service.get_recent, days)
