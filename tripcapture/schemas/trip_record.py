"""Schémas Enregistrement de trajet / Trip record schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from tripcapture.schemas.acquisition import NetworkStatus


class TripRecordCreate(BaseModel):
    """Sauvegarde d'une capture / Capture save request (coordinates come from the session)."""
    trip_id: str


class TripRecordUpdate(BaseModel):
    trip_id: str | None = Field(default=None, min_length=1, max_length=50)
    latitude: str | None = Field(default=None, min_length=1)
    longitude: str | None = Field(default=None, min_length=1)
    network_status: NetworkStatus | None = None


class TripRecordRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    trip_id: str
    latitude: str
    longitude: str
    coordinates: str
    network_status: str
    created_at: datetime


class TripRecordSaved(BaseModel):
    record: TripRecordRead
    record_count: int | None = None
    message: str


class RecordCount(BaseModel):
    count: int


class RecordsSummary(BaseModel):
    """Derniers enregistrements + total / Latest records plus total count."""
    total: int
    records: list[TripRecordRead]
