"""Dependances partagees / Shared API dependencies.

Une seule session de capture par processus (un seul operateur).
"""

from fastapi import Depends

from tripcapture.config import settings
from tripcapture.database import Database, get_database
from tripcapture.sensors import HttpConnectivityProvider, ReportedLocationProvider
from tripcapture.services.acquisition import AcquisitionCoordinator
from tripcapture.services.capture_session import CaptureSession
from tripcapture.services.record_store import RecordStore

location_provider = ReportedLocationProvider(
    enabled=settings.LOCATION_ENABLED,
    max_age_seconds=settings.LOCATION_MAX_AGE_SECONDS,
)

_capture_session: CaptureSession | None = None


def get_location_provider() -> ReportedLocationProvider:
    return location_provider


def get_record_store(database: Database = Depends(get_database)) -> RecordStore:
    return RecordStore(database)


def get_capture_session() -> CaptureSession:
    """Session de capture du processus / Process-wide capture session."""
    global _capture_session
    if _capture_session is None:
        coordinator = AcquisitionCoordinator(
            connectivity=HttpConnectivityProvider(
                settings.CONNECTIVITY_PROBE_URL,
                timeout=settings.CONNECTIVITY_PROBE_TIMEOUT_SECONDS,
            ),
            location=location_provider,
            timeout_seconds=settings.LOCATION_TIMEOUT_SECONDS,
            accuracy=settings.LOCATION_ACCURACY,
        )
        _capture_session = CaptureSession(
            coordinator,
            RecordStore(get_database()),
            display_limit=settings.RECORDS_DISPLAY_LIMIT,
        )
    return _capture_session
