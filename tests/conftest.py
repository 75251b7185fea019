"""Configuration des tests / Shared test fixtures."""

from datetime import datetime, timezone

import pytest
from httpx import ASGITransport, AsyncClient

from tripcapture.api.deps import get_capture_session, get_location_provider, get_record_store
from tripcapture.database import Database
from tripcapture.main import app
from tripcapture.rate_limit import limiter
from tripcapture.sensors import Location, NetworkAccess, ReportedLocationProvider
from tripcapture.services.acquisition import AcquisitionCoordinator
from tripcapture.services.capture_session import CaptureSession
from tripcapture.services.record_store import RecordStore


class FakeConnectivity:
    def __init__(self, access=NetworkAccess.INTERNET, error: Exception | None = None):
        self.access = access
        self.error = error
        self.calls = 0

    async def get_network_access(self):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.access


class FakeLocation:
    def __init__(self, location: Location | None = None, error: Exception | None = None):
        self.location = location
        self.error = error
        self.requests: list[tuple[str, float]] = []

    async def get_location(self, accuracy, timeout):
        self.requests.append((accuracy, timeout))
        if self.error is not None:
            raise self.error
        return self.location


def make_fix(lat: float = 12.3456, lon: float = 98.7654, accuracy: float | None = 4.26) -> Location:
    return Location(latitude=lat, longitude=lon, accuracy=accuracy, timestamp=datetime.now(timezone.utc))


@pytest.fixture
async def database(tmp_path):
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'data' / 'trips.db3'}")
    yield db
    await db.dispose()


@pytest.fixture
def store(database):
    return RecordStore(database)


@pytest.fixture
def connectivity():
    return FakeConnectivity()


@pytest.fixture
def location_provider():
    return FakeLocation(make_fix())


@pytest.fixture
def coordinator(connectivity, location_provider):
    return AcquisitionCoordinator(connectivity, location_provider, timeout_seconds=0.5)


@pytest.fixture
def session(coordinator, store):
    return CaptureSession(coordinator, store, display_limit=10)


@pytest.fixture
async def client(session, store):
    limiter.reset()
    reported = ReportedLocationProvider()
    app.dependency_overrides[get_capture_session] = lambda: session
    app.dependency_overrides[get_record_store] = lambda: store
    app.dependency_overrides[get_location_provider] = lambda: reported
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides = {}
