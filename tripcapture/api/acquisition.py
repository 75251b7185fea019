"""Routes acquisition / Acquisition routes (connectivity + GPS fix)."""

from fastapi import APIRouter, Depends

from tripcapture.api.deps import get_capture_session
from tripcapture.schemas.acquisition import AcquisitionResult
from tripcapture.services.capture_session import CaptureSession

router = APIRouter()


@router.get("/", response_model=AcquisitionResult)
async def get_acquisition(session: CaptureSession = Depends(get_capture_session)):
    """Dernier resultat (acquiert a la premiere visite) / Latest result, acquiring on first entry."""
    return await session.ensure_acquired()


@router.post("/refresh", response_model=AcquisitionResult)
async def refresh_acquisition(session: CaptureSession = Depends(get_capture_session)):
    """Relancer l'acquisition / Re-run acquisition."""
    return await session.refresh()
