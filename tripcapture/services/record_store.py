"""
Stockage local des enregistrements / Local trip record store.

Toutes les opérations attendent l'initialisation paresseuse de la base et
lèvent StorageError en cas d'échec. Le store reste utilisable après une
erreur : l'initialisation est retentée au prochain appel.
"""

import logging
from datetime import datetime

from sqlalchemy import delete, func, select, update

from tripcapture.database import Database
from tripcapture.models.trip_record import TripRecord

logger = logging.getLogger(__name__)


class RecordStore:
    """Opérations CRUD sur TripRecord / CRUD operations over TripRecord."""

    def __init__(self, database: Database):
        self.database = database

    async def save(self, record: TripRecord) -> int:
        """Insérer (created_at posé ici) / Insert, stamping created_at; returns the new id."""
        record.created_at = datetime.now()
        async with self.database.session() as db:
            db.add(record)
            await db.flush()
            record_id = record.id
        logger.info("Saved trip record %s (id=%s)", record.trip_id, record_id)
        return record_id

    async def list_all(self, newest_first: bool = False) -> list[TripRecord]:
        order = TripRecord.id.desc() if newest_first else TripRecord.id
        async with self.database.session() as db:
            result = await db.execute(select(TripRecord).order_by(order))
            return list(result.scalars().all())

    async def list_recent(self, limit: int) -> list[TripRecord]:
        """N derniers par id, ordre croissant / Last N by id, ascending."""
        async with self.database.session() as db:
            result = await db.execute(select(TripRecord).order_by(TripRecord.id.desc()).limit(limit))
            records = list(result.scalars().all())
        records.reverse()
        return records

    async def get_by_id(self, record_id: int) -> TripRecord | None:
        async with self.database.session() as db:
            return await db.get(TripRecord, record_id)

    async def update(self, record: TripRecord) -> int:
        """Mettre à jour (created_at immuable) / Update mutable fields; returns rows affected."""
        async with self.database.session() as db:
            result = await db.execute(
                update(TripRecord)
                .where(TripRecord.id == record.id)
                .values(
                    trip_id=record.trip_id,
                    latitude=record.latitude,
                    longitude=record.longitude,
                    network_status=record.network_status,
                )
            )
            return result.rowcount

    async def delete(self, record: TripRecord) -> int:
        async with self.database.session() as db:
            result = await db.execute(delete(TripRecord).where(TripRecord.id == record.id))
            return result.rowcount

    async def count(self) -> int:
        async with self.database.session() as db:
            return await db.scalar(select(func.count(TripRecord.id))) or 0
