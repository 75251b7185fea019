"""Modèle Enregistrement de trajet / Trip record model."""

from datetime import datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from tripcapture.database import Base


class TripRecord(Base):
    """Point de contrôle terrain tagué / Tagged field check-in."""
    __tablename__ = "trip_records"
    # Jamais de réutilisation d'id / ids are never reused after delete
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    trip_id: Mapped[str] = mapped_column(String(50), nullable=False)
    latitude: Mapped[str] = mapped_column(String(20), nullable=False)  # 6 décimales / 6 decimals
    longitude: Mapped[str] = mapped_column(String(20), nullable=False)
    network_status: Mapped[str] = mapped_column(String(20), nullable=False, default="")
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)  # posé par le store / set by the store

    @property
    def coordinates(self) -> str:
        return f"{self.latitude}, {self.longitude}"

    def __repr__(self) -> str:
        return f"<TripRecord {self.trip_id} @ {self.coordinates}>"
