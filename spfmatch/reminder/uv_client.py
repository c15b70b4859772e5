"""
UV Index Client
===============
Current UV index from the Open-Meteo forecast API, plus the location ->
UV resolution used by the reapplication timer.

Failure never leaves the UV index unresolved: the boundary functions
(get_uv_reading, resolve_uv_index) substitute DEFAULT_UV_INDEX and return
an advisory warning.

Usage:
    reading = get_uv_reading(Coordinates(latitude=40.7, longitude=-74.0))
    reading.uv_index, reading.warning
"""

import asyncio
import logging
import math
from typing import Any, Awaitable, Callable, Literal, Optional

import httpx
from pydantic import BaseModel, Field

from spfmatch import config

logger = logging.getLogger(__name__)

UV_FETCH_WARNING = "Failed to fetch UV index. Using default value."
LOCATION_WARNING = "Unable to retrieve your location. Please enable location services."


class UVIndexError(Exception):
    """UV service did not return a usable reading."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class LocationUnavailableError(Exception):
    """Location provider denied access or failed."""
    pass


class Coordinates(BaseModel):
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)


class UVReading(BaseModel):
    """A resolved UV index, real or substituted."""
    uv_index: float = Field(ge=0)
    source: Literal["api", "default"]
    location: Optional[Coordinates] = None
    warning: Optional[str] = None


# Async callable returning the device position; raises on denial
LocationProvider = Callable[[], Awaitable[Coordinates]]


def _params(coords: Coordinates) -> dict:
    return {
        "latitude": coords.latitude,
        "longitude": coords.longitude,
        "current": "uv_index",
    }


def parse_uv_response(response: httpx.Response) -> float:
    """
    Extract current.uv_index from an Open-Meteo response.

    Raises:
        UVIndexError: non-2xx, malformed JSON, missing or non-numeric field
    """
    if not 200 <= response.status_code < 300:
        raise UVIndexError(
            f"UV service returned HTTP {response.status_code}",
            status_code=response.status_code,
        )
    try:
        data: Any = response.json()
    except ValueError:
        # JSONDecodeError or UnicodeDecodeError
        raise UVIndexError("UV service returned malformed JSON")

    current = data.get("current") if isinstance(data, dict) else None
    value = current.get("uv_index") if isinstance(current, dict) else None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise UVIndexError(f"UV service response missing current.uv_index ({value!r})")
    if not math.isfinite(value) or value < 0:
        raise UVIndexError(f"UV service returned invalid uv_index {value!r}")
    return float(value)


def fetch_uv_index(
    coords: Coordinates,
    base_url: str = config.UV_API_BASE_URL,
    timeout: float = config.UV_TIMEOUT_SECONDS,
    transport: Optional[httpx.BaseTransport] = None,
) -> float:
    """Current UV index at coords (sync). Raises UVIndexError."""
    try:
        with httpx.Client(timeout=timeout, transport=transport) as client:
            response = client.get(base_url, params=_params(coords))
    except httpx.TimeoutException:
        raise UVIndexError(f"UV service timed out after {timeout}s")
    except httpx.HTTPError as e:
        raise UVIndexError(f"Cannot reach UV service: {e}")
    return parse_uv_response(response)


async def fetch_uv_index_async(
    coords: Coordinates,
    base_url: str = config.UV_API_BASE_URL,
    timeout: float = config.UV_TIMEOUT_SECONDS,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> float:
    """Current UV index at coords (async). Raises UVIndexError."""
    try:
        async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
            response = await client.get(base_url, params=_params(coords))
    except httpx.TimeoutException:
        raise UVIndexError(f"UV service timed out after {timeout}s")
    except httpx.HTTPError as e:
        raise UVIndexError(f"Cannot reach UV service: {e}")
    return parse_uv_response(response)


def default_reading(location: Optional[Coordinates], warning: str) -> UVReading:
    return UVReading(
        uv_index=config.DEFAULT_UV_INDEX,
        source="default",
        location=location,
        warning=warning,
    )


def get_uv_reading(
    coords: Coordinates,
    transport: Optional[httpx.BaseTransport] = None,
) -> UVReading:
    """UV reading at coords, default UV index on any service failure."""
    try:
        uv_index = fetch_uv_index(coords, transport=transport)
    except UVIndexError as e:
        logger.warning(f"UV fetch failed: {e}. Using default UV index {config.DEFAULT_UV_INDEX}")
        return default_reading(coords, UV_FETCH_WARNING)
    logger.info(f"UV index {uv_index} at ({coords.latitude:.2f}, {coords.longitude:.2f})")
    return UVReading(uv_index=uv_index, source="api", location=coords)


async def get_uv_reading_async(
    coords: Coordinates,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> UVReading:
    """Async get_uv_reading."""
    try:
        uv_index = await fetch_uv_index_async(coords, transport=transport)
    except UVIndexError as e:
        logger.warning(f"UV fetch failed: {e}. Using default UV index {config.DEFAULT_UV_INDEX}")
        return default_reading(coords, UV_FETCH_WARNING)
    logger.info(f"UV index {uv_index} at ({coords.latitude:.2f}, {coords.longitude:.2f})")
    return UVReading(uv_index=uv_index, source="api", location=coords)


async def resolve_uv_index(
    location_provider: LocationProvider,
    timeout: float = config.GEOLOCATION_TIMEOUT_SECONDS,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> UVReading:
    """
    Location first, then UV at that location.

    Location denial, failure or a wait longer than `timeout` yields the
    default UV index immediately.
    """
    try:
        coords = await asyncio.wait_for(location_provider(), timeout=timeout)
    except asyncio.TimeoutError:
        logger.warning(f"Location provider did not answer within {timeout}s")
        return default_reading(None, LOCATION_WARNING)
    except LocationUnavailableError as e:
        logger.warning(f"Location unavailable: {e}")
        return default_reading(None, LOCATION_WARNING)
    except Exception as e:
        logger.warning(f"Location provider failed: {type(e).__name__}: {e}")
        return default_reading(None, LOCATION_WARNING)

    return await get_uv_reading_async(coords, transport=transport)
