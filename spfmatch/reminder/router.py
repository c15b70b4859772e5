"""
Reminder Endpoints

GET /api/v1/reminder/interval - Reapplication minutes for UV index + Fitzpatrick type
GET /api/v1/reminder/uv-index - Current UV index at coordinates (default on failure)
GET /api/v1/reminder/table    - Full reapplication table

The countdown itself runs client-side (ReapplicationTimer); these
endpoints only compute values.
"""

from typing import Dict, List
from fastapi import APIRouter, Query
from pydantic import BaseModel

from .intervals import (
    REAPPLICATION_TIME_TABLE,
    UV_BUCKETS,
    recommended_interval_minutes,
    timer_needed,
    uv_bucket,
    uv_level,
)
from .uv_client import Coordinates, UVReading, get_uv_reading_async


router = APIRouter(
    prefix="/api/v1/reminder",
    tags=["reminder"],
)


class IntervalResponse(BaseModel):
    uv_index: float
    fitzpatrick_type: int
    uv_level: str
    bucket: str
    interval_minutes: int
    timer_needed: bool


class ReapplicationTableResponse(BaseModel):
    buckets: List[str]
    table: Dict[int, Dict[str, int]]


@router.get("/interval", response_model=IntervalResponse)
async def reapplication_interval(
    uv_index: float = Query(ge=0, description="Current UV index"),
    fitzpatrick_type: int = Query(ge=1, le=6),
):
    """Recommended minutes between applications."""
    return IntervalResponse(
        uv_index=uv_index,
        fitzpatrick_type=fitzpatrick_type,
        uv_level=uv_level(uv_index),
        bucket=uv_bucket(uv_index),
        interval_minutes=recommended_interval_minutes(uv_index, fitzpatrick_type),
        timer_needed=timer_needed(uv_index),
    )


@router.get("/uv-index", response_model=UVReading)
async def current_uv_index(
    latitude: float = Query(ge=-90, le=90),
    longitude: float = Query(ge=-180, le=180),
):
    """UV index from the weather service; source="default" with a warning on failure."""
    return await get_uv_reading_async(Coordinates(latitude=latitude, longitude=longitude))


@router.get("/table", response_model=ReapplicationTableResponse)
async def reapplication_table():
    return ReapplicationTableResponse(
        buckets=list(UV_BUCKETS),
        table={t: dict(row) for t, row in REAPPLICATION_TIME_TABLE.items()},
    )
