"""Schémas acquisition / Acquisition schemas: connectivity, location and failures."""

import enum
from datetime import datetime

from pydantic import BaseModel, Field


class NetworkStatus(str, enum.Enum):
    CONNECTED = "Connected"
    LIMITED = "Limited"
    LOCAL = "Local"
    OFFLINE = "Offline"
    UNKNOWN = "Unknown"
    ERROR = "Error"


class LocationFailureKind(str, enum.Enum):
    """Ensemble fermé des échecs de localisation / Closed set of location failures."""
    UNAVAILABLE = "unavailable"  # échec doux : fournisseur sans résultat / soft failure
    UNSUPPORTED = "unsupported"
    DISABLED = "disabled"
    PERMISSION_DENIED = "permission_denied"
    TIMEOUT = "timeout"
    ERROR = "error"


class LocationFailure(BaseModel):
    kind: LocationFailureKind
    detail: str | None = None


class LocationReading(BaseModel):
    latitude: str  # "12.345600"
    longitude: str
    accuracy: str  # "4.5 m" ou "N/A"
    captured_at: str  # HH:MM:SS


class AcquisitionResult(BaseModel):
    """Résultat éphémère d'une acquisition / Ephemeral acquisition outcome."""
    network_status: NetworkStatus
    connectivity_error: str | None = None
    location: LocationReading | None = None
    failure: LocationFailure | None = None
    status_message: str = ""
    retry_enabled: bool = True


# ─── Remontée GPS appareil / Device GPS report ───

class LocationReport(BaseModel):
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    accuracy: float | None = Field(default=None, ge=0)
    timestamp: datetime | None = None
