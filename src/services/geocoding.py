import logging
from typing import List, Optional

import httpx
from pydantic import ValidationError

from core import config
from models.schemas import GeocodingResult, LocationCoords

logger = logging.getLogger(__name__)

MIN_QUERY_LENGTH = 3
MAX_RESULTS = 5


def _headers() -> dict:
    return {"User-Agent": config.GEOCODER_USER_AGENT}


def format_coordinates(lat: float, lng: float) -> str:
    return f"{lat}, {lng}"


async def search_locations(query: str) -> List[GeocodingResult]:
    """
    Search places by free text using Nominatim (OpenStreetMap).
    Short queries never reach the network; any failure yields an empty list.
    """
    if not query or len(query.strip()) < MIN_QUERY_LENGTH:
        return []
    params = {"format": "json", "q": query, "limit": MAX_RESULTS, "addressdetails": 1}
    try:
        async with httpx.AsyncClient(timeout=config.GEOCODER_TIMEOUT_SECONDS) as client:
            resp = await client.get(f"{config.NOMINATIM_BASE_URL}/search", params=params, headers=_headers())
            resp.raise_for_status()
        data = resp.json() or []
    except (httpx.HTTPError, ValueError) as exc:
        logger.warning("Location search failed for %s: %s", query, exc)
        return []
    if not isinstance(data, list):
        logger.warning("Unexpected search payload for %s: %r", query, data)
        return []

    results: List[GeocodingResult] = []
    for item in data[:MAX_RESULTS]:
        try:
            results.append(GeocodingResult.model_validate(item))
        except ValidationError as exc:
            logger.warning("Skipping malformed search hit %r: %s", item, exc)
    return results


async def reverse_geocode(lat: float, lng: float) -> str:
    """
    Resolve coordinates to a display address. Falls back to "lat, lng" so the
    caller always gets something printable.
    """
    params = {"format": "json", "lat": lat, "lon": lng, "addressdetails": 1}
    try:
        async with httpx.AsyncClient(timeout=config.GEOCODER_TIMEOUT_SECONDS) as client:
            resp = await client.get(f"{config.NOMINATIM_BASE_URL}/reverse", params=params, headers=_headers())
            resp.raise_for_status()
        data = resp.json() or {}
        return data.get("display_name") or format_coordinates(lat, lng)
    except (httpx.HTTPError, ValueError, AttributeError) as exc:
        logger.warning("Reverse geocoding failed for (%s, %s): %s", lat, lng, exc)
        return format_coordinates(lat, lng)


async def get_location_coords(query: str) -> Optional[LocationCoords]:
    results = await search_locations(query)
    if not results:
        return None
    try:
        return results[0].coords()
    except ValueError:
        logger.warning("Unusable coordinates in first result for %s", query)
        return None
