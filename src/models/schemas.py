from datetime import datetime, timezone
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TransportMode(str, Enum):
    CAR = "Car"
    BIKE = "Bike"
    TRAIN = "Train"
    CYCLE = "Cycle"
    WALK = "Walk"
    OTHER = "Other"


class LocationCoords(BaseModel):
    lat: float
    lng: float


class Traveler(BaseModel):
    id: str
    name: str = ""


class WeatherSnapshot(BaseModel):
    """Weather captured when the trip location was picked; never refreshed on its own."""

    model_config = ConfigDict(populate_by_name=True)

    temperature: float
    temperature_unit: str = Field(alias="temperatureUnit")
    wind_speed: float = Field(alias="windSpeed")
    wind_speed_unit: str = Field(alias="windSpeedUnit")
    time: str


class WeatherReport(WeatherSnapshot):
    coordinates: LocationCoords

    def snapshot(self) -> WeatherSnapshot:
        return WeatherSnapshot.model_validate(self.model_dump(exclude={"coordinates"}))


class Trip(BaseModel):
    """
    A logged trip as stored in the remote document. Fields unknown to this
    model are kept so a rewrite of the collection does not drop them.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: str = ""
    trip_number: str = Field(default="", alias="tripNumber")
    origin: str = ""
    destination: str = ""
    mode_of_transport: TransportMode = Field(default=TransportMode.CAR, alias="modeOfTransport")
    departure: str = ""
    arrival: str = ""
    travelers: list[Traveler] = Field(default_factory=list)
    notes: str = ""
    location_coords: LocationCoords | None = Field(default=None, alias="locationCoords")
    weather_data: WeatherSnapshot | None = Field(default=None, alias="weatherData")
    created_at: str = Field(default="", alias="createdAt")

    @field_validator("travelers")
    @classmethod
    def _drop_blank_travelers(cls, travelers: list[Traveler]) -> list[Traveler]:
        return [t for t in travelers if t.name.strip()]

    def created_at_datetime(self) -> datetime | None:
        if not self.created_at:
            return None
        try:
            parsed = datetime.fromisoformat(self.created_at.replace("Z", "+00:00"))
        except ValueError:
            return None
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed

    def to_document(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class TripCount(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    count: int
    next_trip_number: int = Field(alias="nextTripNumber")


class TripMessage(BaseModel):
    message: str
    trip: Trip | None = None


class GeocodingResult(BaseModel):
    """One Nominatim search hit. Coordinates stay as the text the provider sent."""

    model_config = ConfigDict(extra="ignore")

    place_id: str
    display_name: str
    lat: str
    lon: str
    type: str = ""
    importance: float = 0.0

    @field_validator("place_id", "lat", "lon", mode="before")
    @classmethod
    def _as_text(cls, value):
        if value is None:
            return value
        return str(value)

    def coords(self) -> LocationCoords:
        return LocationCoords(lat=float(self.lat), lng=float(self.lon))


class ReverseGeocodeResponse(BaseModel):
    address: str


class LocationSelectRequest(BaseModel):
    lat: float | None = Field(default=None, ge=-90, le=90)
    lng: float | None = Field(default=None, ge=-180, le=180)
    address: str | None = None


class LocationSelection(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    origin: str
    location_coords: LocationCoords = Field(alias="locationCoords")
    weather_data: WeatherSnapshot | None = Field(default=None, alias="weatherData")
    weather_error: str | None = Field(default=None, alias="weatherError")


class Preferences(BaseModel):
    theme: Literal["light", "dark"] = "light"
