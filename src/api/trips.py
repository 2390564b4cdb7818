"""
Trip routes: listing and CRUD over the remote trip collection.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from api.deps import get_synchronizer
from core.errors import (
    ConfigurationError,
    StoreError,
    TripConflictError,
    TripNotFoundError,
    WeatherFetchError,
    WeatherValidationError,
)
from models.schemas import Trip, TripCount, TripMessage
from store.trips import TripSynchronizer, sort_newest_first

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/trips", tags=["Trips"])


def _config_error() -> HTTPException:
    return HTTPException(status_code=500, detail="Server configuration error")


@router.get("", response_model=list[Trip])
async def list_trips(sync: TripSynchronizer = Depends(get_synchronizer)) -> list[Trip]:
    try:
        trips = await sync.list_trips()
    except ConfigurationError:
        raise _config_error()
    except StoreError as exc:
        logger.error("Error fetching trips: %s", exc)
        raise HTTPException(status_code=500, detail="Failed to fetch trips")
    return sort_newest_first(trips)


@router.get("/count", response_model=TripCount)
async def count_trips(sync: TripSynchronizer = Depends(get_synchronizer)) -> TripCount:
    try:
        return await sync.count_trips()
    except ConfigurationError:
        raise _config_error()


@router.get("/{trip_id}", response_model=Trip)
async def get_trip(trip_id: str, sync: TripSynchronizer = Depends(get_synchronizer)) -> Trip:
    try:
        return await sync.get_trip(trip_id)
    except ConfigurationError:
        raise _config_error()
    except TripNotFoundError:
        raise HTTPException(status_code=404, detail="Trip not found")
    except StoreError as exc:
        logger.error("Error fetching trip %s: %s", trip_id, exc)
        raise HTTPException(status_code=500, detail="Failed to fetch trip")


@router.post("", response_model=TripMessage)
async def create_trip(trip: Trip, sync: TripSynchronizer = Depends(get_synchronizer)) -> TripMessage:
    try:
        created = await sync.create_trip(trip)
    except ConfigurationError:
        raise _config_error()
    except TripConflictError:
        raise HTTPException(status_code=409, detail="Trip id already exists")
    except StoreError as exc:
        logger.error("Error saving trip: %s", exc)
        raise HTTPException(status_code=500, detail="Failed to save trip")
    return TripMessage(message="Trip saved successfully", trip=created)


@router.put("", response_model=TripMessage)
async def update_trip(trip: Trip, sync: TripSynchronizer = Depends(get_synchronizer)) -> TripMessage:
    try:
        updated = await sync.update_trip(trip)
    except ConfigurationError:
        raise _config_error()
    except TripNotFoundError:
        raise HTTPException(status_code=404, detail="Trip not found")
    except StoreError as exc:
        logger.error("Error updating trip: %s", exc)
        raise HTTPException(status_code=500, detail="Failed to update trip")
    return TripMessage(message="Trip updated successfully", trip=updated)


@router.delete("", response_model=TripMessage, response_model_exclude_none=True)
async def delete_trip(
    trip_id: str | None = Query(None, alias="id"),
    sync: TripSynchronizer = Depends(get_synchronizer),
) -> TripMessage:
    if not trip_id:
        raise HTTPException(status_code=400, detail="Trip ID is required")
    try:
        await sync.delete_trip(trip_id)
    except ConfigurationError:
        raise _config_error()
    except TripNotFoundError:
        raise HTTPException(status_code=404, detail="Trip not found")
    except StoreError as exc:
        logger.error("Error deleting trip: %s", exc)
        raise HTTPException(status_code=500, detail="Failed to delete trip")
    return TripMessage(message="Trip deleted successfully")


@router.post("/{trip_id}/weather", response_model=Trip)
async def refresh_trip_weather(trip_id: str, sync: TripSynchronizer = Depends(get_synchronizer)) -> Trip:
    try:
        return await sync.refresh_trip_weather(trip_id)
    except ConfigurationError:
        raise _config_error()
    except TripNotFoundError:
        raise HTTPException(status_code=404, detail="Trip not found")
    except WeatherValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except WeatherFetchError:
        raise HTTPException(status_code=500, detail="Failed to fetch weather data")
    except StoreError as exc:
        logger.error("Error refreshing weather for trip %s: %s", trip_id, exc)
        raise HTTPException(status_code=500, detail="Failed to update trip")
