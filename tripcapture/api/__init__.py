"""Routes API / API routes."""

from fastapi import APIRouter

from tripcapture.api import (
    acquisition,
    sensors,
    trip_ids,
    trips,
)

api_router = APIRouter(prefix="/api")

api_router.include_router(acquisition.router, prefix="/acquisition", tags=["acquisition"])
api_router.include_router(sensors.router, prefix="/sensors", tags=["sensors"])
api_router.include_router(trip_ids.router, prefix="/trip-ids", tags=["trip-ids"])
api_router.include_router(trips.router, prefix="/trips", tags=["trips"])
