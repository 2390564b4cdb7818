import os

from dotenv import load_dotenv

load_dotenv()


def _get_int_env(var_name: str, default_value: int) -> int:
    text = str(os.getenv(var_name, default_value)).strip()
    try:
        return int(text)
    except ValueError:
        return default_value


def _get_float_env(var_name: str, default_value: float) -> float:
    text = str(os.getenv(var_name, default_value)).strip()
    try:
        return float(text)
    except ValueError:
        return default_value


def _get_cors_origins() -> list[str]:
    """
    CORS origins as a comma separated list, e.g.
      CORS_ORIGINS="http://localhost:3000,https://trips.example.com"
    """
    raw = os.getenv("CORS_ORIGINS", "").strip()
    if not raw:
        return ["*"]
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


APP_NAME = "Trip Log API"
APP_VERSION = "1.0.0"

SERVER_HOST = os.getenv("SERVER_HOST", "0.0.0.0")
SERVER_PORT = _get_int_env("SERVER_PORT", 8000)
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
CORS_ORIGINS = _get_cors_origins()

# Remote document store
JSONSILO_API_URL = os.getenv("JSONSILO_API_URL")
JSONSILO_API_KEY = os.getenv("JSONSILO_API_KEY")
STORE_TIMEOUT_SECONDS = _get_float_env("STORE_TIMEOUT_SECONDS", 10.0)

# Geocoding (Nominatim asks for an identifying User-Agent instead of a key)
NOMINATIM_BASE_URL = os.getenv("NOMINATIM_BASE_URL", "https://nominatim.openstreetmap.org").rstrip("/")
GEOCODER_USER_AGENT = os.getenv("GEOCODER_USER_AGENT", "TripCaptureApp/1.0")
GEOCODER_TIMEOUT_SECONDS = _get_float_env("GEOCODER_TIMEOUT_SECONDS", 8.0)

# Weather
OPEN_METEO_FORECAST_URL = os.getenv("OPEN_METEO_FORECAST_URL", "https://api.open-meteo.com/v1/forecast")
WEATHER_TIMEOUT_SECONDS = _get_float_env("WEATHER_TIMEOUT_SECONDS", 10.0)

# Local files
TRIP_EVENT_LOG = os.getenv("TRIP_EVENT_LOG")
PREFERENCES_PATH = os.getenv("PREFERENCES_PATH", "preferences.json")
