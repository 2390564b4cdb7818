import unittest
from unittest.mock import AsyncMock, patch

from core.errors import (
    ConfigurationError,
    SaveError,
    StoreError,
    TripConflictError,
    TripNotFoundError,
    WeatherValidationError,
)
from models.schemas import LocationCoords, Trip, TransportMode, WeatherReport
from store.document import TripDocumentClient
from store.trips import TripSynchronizer, sort_newest_first
from tests.helpers import InMemoryDocumentClient, unreadable_document


def stored_trip(trip_id: str, created_at: str = "2024-05-01T10:00:00.000Z", **extra) -> dict:
    doc = {
        "id": trip_id,
        "tripNumber": trip_id,
        "origin": f"Origin {trip_id}",
        "destination": "",
        "modeOfTransport": "Train",
        "departure": "",
        "arrival": "",
        "travelers": [],
        "notes": "",
        "createdAt": created_at,
    }
    doc.update(extra)
    return doc


class TripSynchronizerTests(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.store = InMemoryDocumentClient([stored_trip("100"), stored_trip("200")])
        self.sync = TripSynchronizer(self.store)

    async def test_create_then_list_adds_exactly_one(self):
        before = await self.sync.list_trips()
        created = await self.sync.create_trip(Trip(origin="Lisbon", mode_of_transport=TransportMode.WALK))
        after = await self.sync.list_trips()

        self.assertEqual(len(after), len(before) + 1)
        matches = [t for t in after if t.id == created.id]
        self.assertEqual(len(matches), 1)
        self.assertEqual(matches[0].origin, "Lisbon")
        self.assertEqual(matches[0].mode_of_transport, TransportMode.WALK)
        self.assertEqual(self.store.trips[-1]["id"], created.id)

    async def test_create_fills_id_number_and_timestamp(self):
        created = await self.sync.create_trip(Trip(origin="Rome"))

        self.assertTrue(created.id.isdigit())
        self.assertEqual(created.trip_number, "3")
        self.assertIsNotNone(created.created_at_datetime())

    async def test_create_keeps_caller_values(self):
        trip = Trip(id="555", trip_number="42", created_at="2023-01-01T00:00:00Z", origin="Nice")
        created = await self.sync.create_trip(trip)

        self.assertEqual((created.id, created.trip_number), ("555", "42"))
        self.assertEqual(created.created_at, "2023-01-01T00:00:00Z")

    async def test_create_rejects_existing_id(self):
        with self.assertRaises(TripConflictError):
            await self.sync.create_trip(Trip(id="100"))
        self.assertEqual(self.store.save_count, 0)

    async def test_create_drops_blank_travelers(self):
        trip = Trip.model_validate(
            {"origin": "Bern", "travelers": [{"id": "1", "name": "Ana"}, {"id": "2", "name": "   "}]}
        )
        created = await self.sync.create_trip(trip)

        self.assertEqual([t.name for t in created.travelers], ["Ana"])
        self.assertEqual(self.store.trips[-1]["travelers"], [{"id": "1", "name": "Ana"}])

    async def test_create_on_unreadable_document_starts_empty(self):
        self.store.fetch_error = unreadable_document()
        created = await self.sync.create_trip(Trip(origin="Porto"))

        self.assertEqual([doc["id"] for doc in self.store.trips], [created.id])
        self.assertEqual(created.trip_number, "1")

    async def test_create_fails_when_fetch_fails(self):
        self.store.fetch_error = StoreError("down", status_code=500)
        with self.assertRaises(SaveError):
            await self.sync.create_trip(Trip(origin="Porto"))
        self.assertEqual(self.store.save_count, 0)

    async def test_create_fails_when_patch_fails(self):
        self.store.save_error = StoreError("nope", status_code=500)
        with self.assertRaises(SaveError):
            await self.sync.create_trip(Trip(origin="Porto"))

    async def test_update_replaces_entry_and_keeps_length(self):
        trip = await self.sync.get_trip("200")
        changed = trip.model_copy(update={"notes": "Window seat", "destination": "Vienna"})
        await self.sync.update_trip(changed)

        after = await self.sync.list_trips()
        self.assertEqual(len(after), 2)
        updated = next(t for t in after if t.id == "200")
        self.assertEqual(updated.notes, "Window seat")
        self.assertEqual(updated.destination, "Vienna")
        self.assertEqual([t.id for t in after], ["100", "200"])

    async def test_update_keeps_created_at_when_omitted(self):
        await self.sync.update_trip(Trip(id="100", origin="Elsewhere"))

        self.assertEqual(self.store.trips[0]["createdAt"], "2024-05-01T10:00:00.000Z")
        self.assertEqual(self.store.trips[0]["origin"], "Elsewhere")

    async def test_update_missing_id_is_not_found_and_writes_nothing(self):
        before = list(self.store.trips)
        with self.assertRaises(TripNotFoundError):
            await self.sync.update_trip(Trip(id="999", origin="Nowhere"))

        self.assertEqual(self.store.trips, before)
        self.assertEqual(self.store.save_count, 0)

    async def test_update_fails_when_fetch_fails(self):
        self.store.fetch_error = StoreError("down", status_code=503)
        with self.assertRaises(SaveError) as ctx:
            await self.sync.update_trip(Trip(id="100", origin="Elsewhere"))

        self.assertEqual(str(ctx.exception), "Failed to update trip")
        self.assertEqual(ctx.exception.status_code, 503)
        self.assertEqual(self.store.save_count, 0)

    async def test_update_fails_when_patch_fails(self):
        self.store.save_error = StoreError("nope", status_code=500)
        with self.assertRaises(SaveError) as ctx:
            await self.sync.update_trip(Trip(id="100", origin="Elsewhere"))

        self.assertEqual(str(ctx.exception), "Failed to update trip")
        self.assertEqual(self.store.save_count, 0)
        self.assertEqual(self.store.trips[0]["origin"], "Origin 100")

    async def test_delete_fails_when_fetch_fails(self):
        self.store.fetch_error = StoreError("down", status_code=503)
        with self.assertRaises(SaveError) as ctx:
            await self.sync.delete_trip("100")

        self.assertEqual(str(ctx.exception), "Failed to delete trip")
        self.assertEqual(self.store.save_count, 0)

    async def test_delete_fails_when_patch_fails(self):
        self.store.save_error = StoreError("nope", status_code=500)
        with self.assertRaises(SaveError) as ctx:
            await self.sync.delete_trip("100")

        self.assertEqual(str(ctx.exception), "Failed to delete trip")
        self.assertEqual(self.store.save_count, 0)
        self.assertEqual(len(self.store.trips), 2)

    async def test_delete_removes_exactly_one(self):
        await self.sync.delete_trip("100")

        after = await self.sync.list_trips()
        self.assertEqual([t.id for t in after], ["200"])

    async def test_delete_missing_id_is_not_found_and_writes_nothing(self):
        with self.assertRaises(TripNotFoundError):
            await self.sync.delete_trip("nope")

        self.assertEqual(len(self.store.trips), 2)
        self.assertEqual(self.store.save_count, 0)

    async def test_create_and_delete_scenario_on_empty_collection(self):
        store = InMemoryDocumentClient()
        sync = TripSynchronizer(store)
        trip = Trip.model_validate(
            {
                "origin": "San Francisco, CA",
                "modeOfTransport": "Car",
                "travelers": [{"id": "1", "name": "John Doe"}],
            }
        )

        created = await sync.create_trip(trip)
        listed = await sync.list_trips()
        self.assertEqual(len(listed), 1)
        self.assertEqual(len(listed[0].travelers), 1)
        self.assertEqual(listed[0].trip_number, "1")

        await sync.delete_trip(created.id)
        self.assertEqual(await sync.list_trips(), [])

    async def test_list_skips_malformed_entries(self):
        self.store.trips.append({"id": "300", "modeOfTransport": "Rocket"})

        trips = await self.sync.list_trips()
        self.assertEqual([t.id for t in trips], ["100", "200"])

    async def test_list_preserves_unknown_fields_on_rewrite(self):
        self.store.trips[0]["rating"] = 5
        trip = await self.sync.get_trip("100")
        await self.sync.update_trip(trip.model_copy(update={"notes": "x"}))

        self.assertEqual(self.store.trips[0]["rating"], 5)

    async def test_list_propagates_store_failure(self):
        self.store.fetch_error = StoreError("boom", status_code=502)
        with self.assertRaises(StoreError):
            await self.sync.list_trips()

    async def test_missing_configuration_propagates(self):
        sync = TripSynchronizer(TripDocumentClient(None, None))
        with self.assertRaises(ConfigurationError):
            await sync.list_trips()
        with self.assertRaises(ConfigurationError):
            await sync.create_trip(Trip(origin="x"))

    async def test_count_falls_back_to_zero(self):
        count = await self.sync.count_trips()
        self.assertEqual((count.count, count.next_trip_number), (2, 3))

        self.store.fetch_error = StoreError("down")
        count = await self.sync.count_trips()
        self.assertEqual((count.count, count.next_trip_number), (0, 1))

    async def test_refresh_weather_stores_new_snapshot(self):
        self.store.trips[1]["locationCoords"] = {"lat": 48.2, "lng": 16.37}
        report = WeatherReport(
            temperature=12.5,
            temperature_unit="°C",
            wind_speed=9.1,
            wind_speed_unit="km/h",
            time="2024-05-02T09:00",
            coordinates=LocationCoords(lat=48.2, lng=16.37),
        )
        with patch("store.trips.get_current_weather", new=AsyncMock(return_value=report)) as fetch:
            trip = await self.sync.refresh_trip_weather("200")

        fetch.assert_awaited_once_with(48.2, 16.37)
        self.assertEqual(trip.weather_data.temperature, 12.5)
        self.assertEqual(
            self.store.trips[1]["weatherData"],
            {
                "temperature": 12.5,
                "temperatureUnit": "°C",
                "windSpeed": 9.1,
                "windSpeedUnit": "km/h",
                "time": "2024-05-02T09:00",
            },
        )

    async def test_refresh_weather_requires_coordinates(self):
        with self.assertRaises(WeatherValidationError):
            await self.sync.refresh_trip_weather("100")


class SortNewestFirstTests(unittest.TestCase):
    def test_orders_by_created_at_descending(self):
        trips = [
            Trip(id="old", created_at="2023-01-01T00:00:00Z"),
            Trip(id="bad", created_at="yesterday"),
            Trip(id="new", created_at="2024-06-01T12:30:00.000Z"),
            Trip(id="mid", created_at="2023-07-01T00:00:00"),
        ]

        self.assertEqual([t.id for t in sort_newest_first(trips)], ["new", "mid", "old", "bad"])


if __name__ == "__main__":
    unittest.main()
