"""Routes Enregistrements de trajet / Trip record routes."""

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from tripcapture.api.deps import get_capture_session, get_record_store
from tripcapture.config import settings
from tripcapture.exceptions import InvalidTripIdError
from tripcapture.rate_limit import limiter
from tripcapture.schemas.trip_record import (
    RecordCount,
    RecordsSummary,
    TripRecordCreate,
    TripRecordRead,
    TripRecordSaved,
    TripRecordUpdate,
)
from tripcapture.services.capture_session import CaptureSession
from tripcapture.services.record_store import RecordStore
from tripcapture.services.trip_id_validator import validate_trip_id

router = APIRouter()


@router.get("/", response_model=list[TripRecordRead])
async def list_trip_records(
    newest_first: bool = False,
    limit: int | None = Query(default=None, ge=1),
    store: RecordStore = Depends(get_record_store),
):
    """Lister les enregistrements / List trip records (ascending id by default)."""
    records = await store.list_all(newest_first=newest_first)
    if limit is not None:
        records = records[:limit]
    return records


@router.get("/count", response_model=RecordCount)
async def count_trip_records(store: RecordStore = Depends(get_record_store)):
    return RecordCount(count=await store.count())


@router.get("/summary", response_model=RecordsSummary)
async def trip_records_summary(
    limit: int | None = Query(default=None, ge=1),
    session: CaptureSession = Depends(get_capture_session),
):
    """Derniers enregistrements + total / Latest records with total count."""
    return await session.view_records(limit)


@router.get("/{record_id}", response_model=TripRecordRead)
async def get_trip_record(record_id: int, store: RecordStore = Depends(get_record_store)):
    record = await store.get_by_id(record_id)
    if not record:
        raise HTTPException(status_code=404, detail="Trip record not found")
    return record


@router.post("/", response_model=TripRecordSaved, status_code=201)
@limiter.limit(settings.RATE_LIMIT_DEFAULT)
async def save_trip_record(
    request: Request,
    data: TripRecordCreate,
    session: CaptureSession = Depends(get_capture_session),
):
    """Sauvegarder la capture courante / Save the current capture under a Trip ID."""
    record, count = await session.save(data.trip_id)
    return TripRecordSaved(
        record=TripRecordRead.model_validate(record),
        record_count=count,
        message=f"Trip '{record.trip_id}' saved to local database",
    )


@router.put("/{record_id}", response_model=TripRecordRead)
async def update_trip_record(
    record_id: int,
    data: TripRecordUpdate,
    store: RecordStore = Depends(get_record_store),
):
    """Modifier un enregistrement / Update a trip record."""
    record = await store.get_by_id(record_id)
    if not record:
        raise HTTPException(status_code=404, detail="Trip record not found")
    changes = data.model_dump(exclude_unset=True, mode="json")
    nulls = sorted(key for key, value in changes.items() if value is None)
    if nulls:
        raise HTTPException(status_code=422, detail=f"Fields cannot be null: {', '.join(nulls)}")
    if "trip_id" in changes and not validate_trip_id(changes["trip_id"]).is_valid:
        raise InvalidTripIdError()
    for key, value in changes.items():
        setattr(record, key, value)
    if not await store.update(record):
        raise HTTPException(status_code=404, detail="Trip record not found")
    return record


@router.delete("/{record_id}", status_code=204)
async def delete_trip_record(record_id: int, store: RecordStore = Depends(get_record_store)):
    """Supprimer un enregistrement / Delete a trip record."""
    record = await store.get_by_id(record_id)
    if not record or not await store.delete(record):
        raise HTTPException(status_code=404, detail="Trip record not found")
