"""
Capteurs / Sensor providers (connectivité réseau, géolocalisation).

Les fournisseurs sont des boîtes noires pour le coordinateur : ils renvoient
un petit contrat de résultat ou lèvent une SensorError typée.
"""

import asyncio
import enum
import logging
import socket
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Protocol

import httpx

logger = logging.getLogger(__name__)


class NetworkAccess(str, enum.Enum):
    """Signal brut de joignabilité / Raw reachability signal."""
    INTERNET = "Internet"
    CONSTRAINED_INTERNET = "ConstrainedInternet"
    LOCAL = "Local"
    NONE = "None"
    UNKNOWN = "Unknown"


@dataclass
class Location:
    latitude: float
    longitude: float
    accuracy: float | None = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


# ─── Erreurs capteur / Sensor errors ───

class SensorError(Exception):
    pass


class FeatureNotSupportedError(SensorError):
    """Pas de GPS sur cet appareil / No geolocation on this device."""


class FeatureNotEnabledError(SensorError):
    """Services de localisation désactivés / Location services turned off."""


class PermissionDeniedError(SensorError):
    """Permission de localisation refusée / Location permission denied."""


# ─── Contrats / Contracts ───

class ConnectivityProvider(Protocol):
    async def get_network_access(self) -> NetworkAccess: ...


class LocationProvider(Protocol):
    async def get_location(self, accuracy: str, timeout: float) -> Location | None: ...


# ─── Implémentations par défaut / Default providers ───

class HttpConnectivityProvider:
    """Sonde HTTP de connectivité / HTTP reachability probe.

    204/2xx -> Internet ; autre statut (portail captif) -> ConstrainedInternet ;
    erreur de transport -> Local si une adresse non-loopback existe, sinon None.
    """

    def __init__(self, probe_url: str, timeout: float = 3.0, transport: httpx.AsyncBaseTransport | None = None):
        self.probe_url = probe_url
        self.timeout = timeout
        self.transport = transport

    async def get_network_access(self) -> NetworkAccess:
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                resp = await client.get(self.probe_url)
        except httpx.TransportError as exc:
            logger.debug("Connectivity probe failed: %s", exc)
            return NetworkAccess.LOCAL if _has_local_address() else NetworkAccess.NONE
        if resp.is_success:
            return NetworkAccess.INTERNET
        return NetworkAccess.CONSTRAINED_INTERNET


def _has_local_address() -> bool:
    try:
        addresses = socket.getaddrinfo(socket.gethostname(), None)
    except socket.gaierror:
        return False
    return any(not info[4][0].startswith(("127.", "::1")) for info in addresses)


class ReportedLocationProvider:
    """Dernière position remontée par l'appareil / Latest fix reported by the device companion.

    Attend la première position (borné par le timeout de l'appelant) ;
    une position trop ancienne donne None.
    """

    def __init__(self, enabled: bool = True, max_age_seconds: float = 120.0):
        self.enabled = enabled
        self.max_age_seconds = max_age_seconds
        self._latest: Location | None = None
        self._received = asyncio.Event()

    def report(self, location: Location) -> None:
        if location.timestamp.tzinfo is None:
            # heure locale de l'appareil / device local time
            location.timestamp = location.timestamp.astimezone()
        self._latest = location
        self._received.set()

    async def get_location(self, accuracy: str, timeout: float) -> Location | None:
        if not self.enabled:
            raise FeatureNotEnabledError("Location services are disabled")
        if self._latest is None:
            await asyncio.wait_for(self._received.wait(), timeout)
        location = self._latest
        age = (datetime.now(timezone.utc) - location.timestamp).total_seconds()
        if age > self.max_age_seconds:
            logger.info("Discarding stale fix (%.0f s old)", age)
            return None
        return location
