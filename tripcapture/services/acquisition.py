"""
Coordinateur d'acquisition / Acquisition coordinator.

Connectivité puis position GPS, toujours dans cet ordre. Un échec de l'une
n'empêche jamais le rapport de l'autre, et le bouton "réessayer" est
toujours réactivé en sortie.
"""

import asyncio
import logging
from contextlib import contextmanager
from datetime import datetime
from typing import Iterator

from tripcapture.schemas.acquisition import (
    AcquisitionResult,
    LocationFailure,
    LocationFailureKind,
    LocationReading,
    NetworkStatus,
)
from tripcapture.sensors import (
    ConnectivityProvider,
    FeatureNotEnabledError,
    FeatureNotSupportedError,
    Location,
    LocationProvider,
    NetworkAccess,
    PermissionDeniedError,
)

logger = logging.getLogger(__name__)

NETWORK_STATUS_BY_ACCESS: dict[NetworkAccess, NetworkStatus] = {
    NetworkAccess.INTERNET: NetworkStatus.CONNECTED,
    NetworkAccess.CONSTRAINED_INTERNET: NetworkStatus.LIMITED,
    NetworkAccess.LOCAL: NetworkStatus.LOCAL,
    NetworkAccess.NONE: NetworkStatus.OFFLINE,
}

LOCATION_ACQUIRED_MESSAGE = "Location acquired - Enter Trip ID to save"

FAILURE_MESSAGES: dict[LocationFailureKind, str] = {
    LocationFailureKind.UNAVAILABLE: "Unable to retrieve location",
    LocationFailureKind.UNSUPPORTED: "Geolocation not supported on this device",
    LocationFailureKind.DISABLED: "Please enable location services",
    LocationFailureKind.PERMISSION_DENIED: "Location permission required",
    LocationFailureKind.TIMEOUT: "Location request timed out",
    LocationFailureKind.ERROR: "Error: {detail}",
}

_FAILURE_BY_ERROR: tuple[tuple[type[Exception], LocationFailureKind], ...] = (
    (FeatureNotSupportedError, LocationFailureKind.UNSUPPORTED),
    (FeatureNotEnabledError, LocationFailureKind.DISABLED),
    (PermissionDeniedError, LocationFailureKind.PERMISSION_DENIED),
    (asyncio.TimeoutError, LocationFailureKind.TIMEOUT),
)


def classify_network_access(access: NetworkAccess | str | None) -> NetworkStatus:
    """Signal brut -> statut affiché / Raw signal -> reported status."""
    try:
        access = NetworkAccess(access)
    except ValueError:
        return NetworkStatus.UNKNOWN
    return NETWORK_STATUS_BY_ACCESS.get(access, NetworkStatus.UNKNOWN)


def failure_from_error(exc: Exception) -> LocationFailure:
    for error_type, kind in _FAILURE_BY_ERROR:
        if isinstance(exc, error_type):
            return LocationFailure(kind=kind, detail=str(exc) or None)
    return LocationFailure(kind=LocationFailureKind.ERROR, detail=str(exc) or type(exc).__name__)


def failure_message(failure: LocationFailure) -> str:
    return FAILURE_MESSAGES[failure.kind].format(detail=failure.detail or "unknown")


def format_location(location: Location, now: datetime | None = None) -> LocationReading:
    accuracy = f"{location.accuracy:.1f} m" if location.accuracy is not None else "N/A"
    return LocationReading(
        latitude=f"{location.latitude:.6f}",
        longitude=f"{location.longitude:.6f}",
        accuracy=accuracy,
        captured_at=(now or datetime.now()).strftime("%H:%M:%S"),
    )


class RetryControl:
    """Bouton rafraîchir / Refresh affordance, disabled only while an attempt runs."""

    def __init__(self):
        self.enabled = True

    @contextmanager
    def attempt(self) -> Iterator[None]:
        self.enabled = False
        try:
            yield
        finally:
            self.enabled = True


class AcquisitionCoordinator:
    def __init__(
        self,
        connectivity: ConnectivityProvider,
        location: LocationProvider,
        timeout_seconds: float = 10.0,
        accuracy: str = "medium",
    ):
        self.connectivity = connectivity
        self.location = location
        self.timeout_seconds = timeout_seconds
        self.accuracy = accuracy
        self.retry = RetryControl()

    async def check_connectivity(self) -> tuple[NetworkStatus, str | None]:
        try:
            access = await self.connectivity.get_network_access()
        except Exception as exc:
            logger.warning("Connectivity read failed: %s", exc)
            return NetworkStatus.ERROR, f"Connectivity error: {exc}"
        return classify_network_access(access), None

    async def fetch_location(self) -> tuple[LocationReading | None, LocationFailure | None]:
        with self.retry.attempt():
            try:
                location = await asyncio.wait_for(
                    self.location.get_location(self.accuracy, self.timeout_seconds),
                    self.timeout_seconds,
                )
            except Exception as exc:
                failure = failure_from_error(exc)
                logger.warning("Location fetch failed (%s): %s", failure.kind.value, exc)
                return None, failure
            if location is None:
                return None, LocationFailure(kind=LocationFailureKind.UNAVAILABLE)
            return format_location(location), None

    async def acquire(self) -> AcquisitionResult:
        """Connectivité puis position / Connectivity check, then bounded location fetch."""
        network_status, connectivity_error = await self.check_connectivity()
        reading, failure = await self.fetch_location()

        if failure is not None:
            status_message = failure_message(failure)
        else:
            status_message = LOCATION_ACQUIRED_MESSAGE
        return AcquisitionResult(
            network_status=network_status,
            connectivity_error=connectivity_error,
            location=reading,
            failure=failure,
            status_message=status_message,
            retry_enabled=self.retry.enabled,
        )
