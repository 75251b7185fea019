"""Routes validation Trip ID / Trip ID validation routes."""

from fastapi import APIRouter, Depends

from tripcapture.api.deps import get_capture_session
from tripcapture.schemas.validation import TripIdCandidate, TripIdCheck
from tripcapture.services.capture_session import CaptureSession

router = APIRouter()


@router.post("/validate", response_model=TripIdCheck)
async def validate_trip_id(data: TripIdCandidate, session: CaptureSession = Depends(get_capture_session)):
    """Valider a chaque frappe / Validate on every keystroke."""
    return session.check_trip_id(data.candidate)
