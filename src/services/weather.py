import logging
import math
from typing import Any

import httpx
from pydantic import ValidationError

from core import config
from core.errors import WeatherFetchError, WeatherValidationError
from models.schemas import LocationCoords, WeatherReport

logger = logging.getLogger(__name__)

CURRENT_FIELDS = "temperature_2m,wind_speed_10m"


def _coordinate(value: Any, name: str, limit: float) -> float:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise WeatherValidationError("Latitude and longitude are required")
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise WeatherValidationError(f"Invalid {name}: {value!r}") from exc
    if math.isnan(number) or not -limit <= number <= limit:
        raise WeatherValidationError(f"Invalid {name}: {value!r}")
    return number


def validate_coordinates(lat: Any, lng: Any) -> tuple[float, float]:
    return _coordinate(lat, "latitude", 90), _coordinate(lng, "longitude", 180)


def _to_report(data: dict) -> WeatherReport:
    current = data["current"]
    units = data["current_units"]
    return WeatherReport(
        temperature=current["temperature_2m"],
        temperature_unit=units["temperature_2m"],
        wind_speed=current["wind_speed_10m"],
        wind_speed_unit=units["wind_speed_10m"],
        time=current["time"],
        coordinates=LocationCoords(lat=data["latitude"], lng=data["longitude"]),
    )


async def get_current_weather(lat: Any, lng: Any) -> WeatherReport:
    """
    Current temperature and wind speed from Open-Meteo. Every call hits the
    provider; there is no cache and no retry.
    """
    latitude, longitude = validate_coordinates(lat, lng)
    params = {"latitude": latitude, "longitude": longitude, "current": CURRENT_FIELDS}
    try:
        async with httpx.AsyncClient(timeout=config.WEATHER_TIMEOUT_SECONDS) as client:
            resp = await client.get(config.OPEN_METEO_FORECAST_URL, params=params)
            resp.raise_for_status()
        return _to_report(resp.json())
    except (httpx.HTTPError, ValueError, KeyError, TypeError, ValidationError) as exc:
        logger.error("Weather lookup failed for (%s, %s): %s", latitude, longitude, exc)
        raise WeatherFetchError("Failed to fetch weather data") from exc
