from .geocoding import get_location_coords, reverse_geocode, search_locations
from .locations import select_location
from .weather import get_current_weather

__all__ = [
    "search_locations",
    "reverse_geocode",
    "get_location_coords",
    "get_current_weather",
    "select_location",
]
