import logging
from typing import Optional

from core.errors import WeatherFetchError
from models.schemas import LocationCoords, LocationSelection
from services.geocoding import reverse_geocode
from services.weather import get_current_weather, validate_coordinates

logger = logging.getLogger(__name__)


async def select_location(lat: float, lng: float, address: Optional[str] = None) -> LocationSelection:
    """
    Everything a trip form needs once a place is picked, either from the search
    list (address known) or from a map click (address looked up).
    A weather failure is reported alongside the location instead of failing the pick.
    """
    lat, lng = validate_coordinates(lat, lng)
    origin = address.strip() if address and address.strip() else await reverse_geocode(lat, lng)
    selection = LocationSelection(origin=origin, location_coords=LocationCoords(lat=lat, lng=lng))
    try:
        report = await get_current_weather(lat, lng)
    except WeatherFetchError as exc:
        logger.warning("No weather for picked location (%s, %s): %s", lat, lng, exc)
        selection.weather_error = str(exc)
        return selection
    selection.weather_data = report.snapshot()
    return selection
