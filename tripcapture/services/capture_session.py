"""
Session de capture / Capture session, orchestration sans UI.

Tient le dernier résultat d'acquisition et enchaîne : valider, vérifier la
position, persister, recompter. Les décisions (validation, classification)
restent des fonctions pures ; ici on ne fait que les appeler.
"""

import logging

from tripcapture.exceptions import InvalidTripIdError, LocationUnavailableError, StorageError
from tripcapture.models.trip_record import TripRecord
from tripcapture.schemas.acquisition import AcquisitionResult
from tripcapture.schemas.trip_record import RecordsSummary, TripRecordRead
from tripcapture.schemas.validation import TripIdCheck
from tripcapture.services.acquisition import AcquisitionCoordinator
from tripcapture.services.record_store import RecordStore
from tripcapture.services.trip_id_validator import validate_trip_id

logger = logging.getLogger(__name__)


class CaptureSession:
    def __init__(self, coordinator: AcquisitionCoordinator, store: RecordStore, display_limit: int = 10):
        self.coordinator = coordinator
        self.store = store
        self.display_limit = display_limit
        self.current: AcquisitionResult | None = None

    @property
    def latitude(self) -> str:
        if self.current is None or self.current.location is None:
            return ""
        return self.current.location.latitude

    @property
    def longitude(self) -> str:
        if self.current is None or self.current.location is None:
            return ""
        return self.current.location.longitude

    @property
    def network_status(self) -> str:
        return self.current.network_status.value if self.current is not None else ""

    async def refresh(self) -> AcquisitionResult:
        """Nouvelle acquisition, l'ancienne est oubliée / Re-acquire, discarding the previous result."""
        self.current = await self.coordinator.acquire()
        return self.current

    async def ensure_acquired(self) -> AcquisitionResult:
        """Acquisition à l'entrée d'écran / Acquire once on screen entry."""
        if self.current is None:
            return await self.refresh()
        return self.current

    def check_trip_id(self, candidate: str) -> TripIdCheck:
        result = validate_trip_id(candidate)
        return TripIdCheck(
            **result.model_dump(),
            can_save=result.is_valid and bool(self.latitude),
        )

    async def save(self, trip_id: str) -> tuple[TripRecord, int | None]:
        """Valider, vérifier la position, persister / Guard checks, then a single insert."""
        if not validate_trip_id(trip_id).is_valid:
            raise InvalidTripIdError()
        if not self.latitude or not self.longitude:
            raise LocationUnavailableError()

        record = TripRecord(
            trip_id=trip_id.strip(),
            latitude=self.latitude,
            longitude=self.longitude,
            network_status=self.network_status,
        )
        await self.store.save(record)
        return record, await self.record_count()

    async def record_count(self) -> int | None:
        """Total ou None si le store échoue (affiché "--") / Total, or None when the store fails."""
        try:
            return await self.store.count()
        except StorageError as exc:
            logger.error("Unable to count trip records: %s", exc.message)
            return None

    async def view_records(self, limit: int | None = None) -> RecordsSummary:
        total = await self.store.count()
        records = await self.store.list_recent(limit or self.display_limit)
        return RecordsSummary(
            total=total,
            records=[TripRecordRead.model_validate(r) for r in records],
        )
