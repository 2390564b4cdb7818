import logging
import time
from datetime import datetime, timezone
from typing import List

from pydantic import ValidationError

from core.errors import (
    DocumentParseError,
    SaveError,
    StoreError,
    TripConflictError,
    TripNotFoundError,
    WeatherValidationError,
)
from core.events import log_event
from models.schemas import Trip, TripCount
from services.weather import get_current_weather
from store.document import TripDocumentClient

logger = logging.getLogger(__name__)

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


def sort_newest_first(trips: List[Trip]) -> List[Trip]:
    """Order by createdAt descending; trips without a readable timestamp go last."""

    def key(trip: Trip):
        created = trip.created_at_datetime()
        return (created is not None, created or _OLDEST)

    return sorted(trips, key=key, reverse=True)


def _new_trip_id(existing_ids: set) -> str:
    candidate = int(time.time() * 1000)
    while str(candidate) in existing_ids:
        candidate += 1
    return str(candidate)


class TripSynchronizer:
    """
    Applies one create, update or delete to the remote trip collection by
    fetching the whole document, changing it in memory and writing it back.

    There is no version check between the read and the write: two writers
    racing on the same document lose one of the changes.
    """

    def __init__(self, client: TripDocumentClient):
        self.client = client

    async def list_trips(self) -> List[Trip]:
        trips: List[Trip] = []
        for entry in await self.client.fetch_trips():
            try:
                trips.append(Trip.model_validate(entry))
            except ValidationError as exc:
                logger.warning("Skipping malformed trip entry %r: %s", entry, exc)
        return trips

    async def get_trip(self, trip_id: str) -> Trip:
        for trip in await self.list_trips():
            if trip.id == trip_id:
                return trip
        raise TripNotFoundError(trip_id)

    async def count_trips(self) -> TripCount:
        try:
            count = len(await self.client.fetch_trips())
        except StoreError as exc:
            logger.warning("Could not count trips, assuming none: %s", exc)
            count = 0
        return TripCount(count=count, next_trip_number=count + 1)

    async def create_trip(self, trip: Trip) -> Trip:
        try:
            documents = await self.client.fetch_trips()
        except DocumentParseError as exc:
            logger.warning("Existing trip document unreadable, starting from an empty collection: %s", exc)
            documents = []
        except StoreError as exc:
            # Unlike an unreadable body, an error status or unreachable store aborts the create.
            raise SaveError("Failed to save trip", status_code=exc.status_code) from exc

        existing_ids = {doc.get("id") for doc in documents if isinstance(doc, dict)}
        if trip.id and trip.id in existing_ids:
            raise TripConflictError(trip.id)

        updates = {}
        if not trip.id:
            updates["id"] = _new_trip_id(existing_ids)
        if not trip.created_at:
            updates["created_at"] = datetime.now(timezone.utc).isoformat()
        if not trip.trip_number.strip():
            updates["trip_number"] = str(len(documents) + 1)
        created = trip.model_copy(update=updates)

        documents.append(created.to_document())
        await self._write(documents, "Failed to save trip")
        logger.info("Created trip %s (#%s)", created.id, created.trip_number)
        log_event(created.id, "trip_created", {"count": len(documents)})
        return created

    async def update_trip(self, trip: Trip) -> Trip:
        documents = await self._read_for_write("Failed to update trip")

        index = next(
            (i for i, doc in enumerate(documents) if isinstance(doc, dict) and doc.get("id") == trip.id),
            -1,
        )
        if not trip.id or index == -1:
            raise TripNotFoundError(trip.id)

        updated = trip
        if not trip.created_at and documents[index].get("createdAt"):
            updated = trip.model_copy(update={"created_at": documents[index]["createdAt"]})
        documents[index] = updated.to_document()

        await self._write(documents, "Failed to update trip")
        logger.info("Updated trip %s", updated.id)
        log_event(updated.id, "trip_updated", {"count": len(documents)})
        return updated

    async def delete_trip(self, trip_id: str) -> None:
        documents = await self._read_for_write("Failed to delete trip")

        remaining = [doc for doc in documents if not (isinstance(doc, dict) and doc.get("id") == trip_id)]
        if len(remaining) == len(documents):
            raise TripNotFoundError(trip_id)

        await self._write(remaining, "Failed to delete trip")
        logger.info("Deleted trip %s", trip_id)
        log_event(trip_id, "trip_deleted", {"count": len(remaining)})

    async def refresh_trip_weather(self, trip_id: str) -> Trip:
        """Explicitly re-fetch the weather snapshot for a stored trip."""
        trip = await self.get_trip(trip_id)
        if trip.location_coords is None:
            raise WeatherValidationError("Trip has no location coordinates")
        report = await get_current_weather(trip.location_coords.lat, trip.location_coords.lng)
        return await self.update_trip(trip.model_copy(update={"weather_data": report.snapshot()}))

    async def _read_for_write(self, failure_message: str) -> List[dict]:
        try:
            return await self.client.fetch_trips()
        except StoreError as exc:
            raise SaveError(failure_message, status_code=exc.status_code) from exc

    async def _write(self, documents: List[dict], failure_message: str) -> None:
        try:
            await self.client.save_trips(documents)
        except StoreError as exc:
            raise SaveError(failure_message, status_code=exc.status_code) from exc
