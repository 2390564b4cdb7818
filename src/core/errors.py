class TripLogError(Exception):
    """Base class for errors raised by the trip log service."""


class ConfigurationError(TripLogError):
    """Remote store credentials are missing; no request was attempted."""


class StoreError(TripLogError):
    """The remote document store could not be read or written."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class DocumentParseError(StoreError):
    """The store answered, but the body was not a JSON document."""


class SaveError(StoreError):
    """A create, update or delete could not be persisted."""


class TripNotFoundError(TripLogError):
    def __init__(self, trip_id: str):
        super().__init__(f"Trip not found: {trip_id}")
        self.trip_id = trip_id


class TripConflictError(TripLogError):
    def __init__(self, trip_id: str):
        super().__init__(f"Trip id already exists: {trip_id}")
        self.trip_id = trip_id


class WeatherValidationError(TripLogError):
    """Coordinates were missing or unusable."""


class WeatherFetchError(TripLogError):
    """The forecast provider failed or returned an unexpected payload."""
