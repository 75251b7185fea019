"""Remontee capteurs appareil / Device sensor reports."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Request

from tripcapture.api.deps import get_location_provider
from tripcapture.config import settings
from tripcapture.rate_limit import limiter
from tripcapture.schemas.acquisition import LocationReport
from tripcapture.sensors import Location, ReportedLocationProvider

router = APIRouter()


@router.post("/location", status_code=202)
@limiter.limit(settings.RATE_LIMIT_GPS)
async def report_location(
    request: Request,
    data: LocationReport,
    provider: ReportedLocationProvider = Depends(get_location_provider),
):
    """Position GPS de l'appareil / GPS fix from the device companion."""
    provider.report(Location(
        latitude=data.latitude,
        longitude=data.longitude,
        accuracy=data.accuracy,
        timestamp=data.timestamp or datetime.now(timezone.utc),
    ))
    return {"status": "accepted"}
