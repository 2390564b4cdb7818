"""
Geocoding and weather routes. These are thin wrappers over the public
Nominatim and Open-Meteo APIs.
"""

from fastapi import APIRouter, HTTPException, Query

from core.errors import WeatherFetchError, WeatherValidationError
from models.schemas import (
    GeocodingResult,
    LocationCoords,
    LocationSelectRequest,
    LocationSelection,
    ReverseGeocodeResponse,
    WeatherReport,
)
from services.geocoding import get_location_coords, reverse_geocode, search_locations
from services.locations import select_location
from services.weather import get_current_weather

router = APIRouter(tags=["Lookups"])


@router.get("/weather", response_model=WeatherReport)
async def weather(lat: str | None = None, lng: str | None = None) -> WeatherReport:
    try:
        return await get_current_weather(lat, lng)
    except WeatherValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except WeatherFetchError:
        raise HTTPException(status_code=500, detail="Failed to fetch weather data")


@router.get("/geocoding/search", response_model=list[GeocodingResult])
async def geocoding_search(q: str = Query("", description="Free text place query")) -> list[GeocodingResult]:
    return await search_locations(q)


@router.get("/geocoding/reverse", response_model=ReverseGeocodeResponse)
async def geocoding_reverse(lat: float, lng: float) -> ReverseGeocodeResponse:
    return ReverseGeocodeResponse(address=await reverse_geocode(lat, lng))


@router.get("/geocoding/coords", response_model=LocationCoords)
async def geocoding_coords(q: str) -> LocationCoords:
    coords = await get_location_coords(q)
    if coords is None:
        raise HTTPException(status_code=404, detail="No matching location")
    return coords


@router.post("/locations/select", response_model=LocationSelection)
async def locations_select(req: LocationSelectRequest) -> LocationSelection:
    if req.lat is None or req.lng is None:
        raise HTTPException(status_code=400, detail="Latitude and longitude are required")
    try:
        return await select_location(req.lat, req.lng, req.address)
    except WeatherValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
