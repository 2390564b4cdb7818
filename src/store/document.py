import logging
from typing import Any, List, Optional

import httpx

from core.errors import ConfigurationError, DocumentParseError, StoreError

logger = logging.getLogger(__name__)

API_KEY_HEADER = "X-MAN-API"
FILE_NAME = "trips_data"
REGION_NAME = "api"


def extract_trips(payload: Any) -> List[dict]:
    """
    Normalize the two envelopes the store has been seen to return:
    {"file_data": {"trips": [...]}} and a bare {"trips": [...]}.
    """
    if not isinstance(payload, dict):
        return []
    file_data = payload.get("file_data")
    if isinstance(file_data, dict) and isinstance(file_data.get("trips"), list):
        return list(file_data["trips"])
    if isinstance(payload.get("trips"), list):
        return list(payload["trips"])
    return []


def build_envelope(trips: List[dict]) -> dict:
    return {
        "file_name": FILE_NAME,
        "file_data": {"trips": trips},
        "region_name": REGION_NAME,
        "is_public": False,
    }


class TripDocumentClient:
    """
    Reads and rewrites the single JsonSilo document holding every trip.
    The store has no partial updates, so every write sends the whole collection.
    """

    def __init__(self, api_url: Optional[str], api_key: Optional[str], timeout: float = 10.0):
        self.api_url = api_url
        self.api_key = api_key
        self.timeout = timeout

    def _credentials(self) -> tuple[str, str]:
        if not self.api_url or not self.api_key:
            logger.error(
                "Missing store configuration (has_url=%s, has_key=%s)",
                bool(self.api_url),
                bool(self.api_key),
            )
            raise ConfigurationError("Server configuration error")
        return self.api_url, self.api_key

    async def fetch_trips(self) -> List[dict]:
        url, key = self._credentials()
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                resp = await client.get(url, headers={API_KEY_HEADER: key})
                resp.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.error("Store GET failed: %s %s", exc.response.status_code, exc.response.text)
            raise StoreError(
                f"Failed to fetch trips: {exc.response.status_code}",
                status_code=exc.response.status_code,
            ) from exc
        except httpx.HTTPError as exc:
            logger.error("Store GET failed: %s", exc)
            raise StoreError(f"Failed to fetch trips: {exc}") from exc

        try:
            payload = resp.json()
        except ValueError as exc:
            logger.error("Store returned a non-JSON document: %s", exc)
            raise DocumentParseError("Store document is not valid JSON") from exc
        trips = extract_trips(payload)
        logger.debug("Fetched %d trips from store", len(trips))
        return trips

    async def save_trips(self, trips: List[dict]) -> None:
        url, key = self._credentials()
        headers = {API_KEY_HEADER: key, "Content-Type": "application/json"}
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                resp = await client.patch(url, headers=headers, json=build_envelope(trips))
                resp.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.error("Store PATCH failed: %s %s", exc.response.status_code, exc.response.text)
            raise StoreError(
                f"Failed to save trips: {exc.response.status_code}",
                status_code=exc.response.status_code,
            ) from exc
        except httpx.HTTPError as exc:
            logger.error("Store PATCH failed: %s", exc)
            raise StoreError(f"Failed to save trips: {exc}") from exc
        logger.debug("Saved %d trips to store", len(trips))
