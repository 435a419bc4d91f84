import pytest
from datetime import datetime, timedelta, timezone
from fastapi.testclient import TestClient

from app.main import create_app
from app.services.booking_store import BookingStore

class TickingClock:
    """Deterministic clock: every call is one second after the previous one."""

    def __init__(self, start=datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)):
        self.current = start

    def __call__(self):
        now = self.current
        self.current = now + timedelta(seconds=1)
        return now

@pytest.fixture
def clock():
    return TickingClock()

@pytest.fixture
def store(clock):
    return BookingStore(clock=clock)

@pytest.fixture
def client(store):
    return TestClient(create_app(store))

@pytest.fixture
def ann():
    return {"name": "Ann", "email": "ann@x.com", "event": "Gala"}
