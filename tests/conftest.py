"""Shared test fixtures and configuration."""
import pytest
import os
from datetime import datetime
from typing import List

from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

# Set test environment variables before importing app
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("STATIC_DIR", "tests/fixtures/no-static")
os.environ.setdefault("RESTAURANT_NAME", "Test Restaurant")

from app.main import app
from app.db.models import Base
from app.services.persistence.orders import OrderStore
from app.services.realtime.events import OrderEvent


# Test database URL (in-memory SQLite)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

# A fixed Wednesday, 2024-05-15 12:30 local time
FIXED_NOW = datetime(2024, 5, 15, 12, 30)


class RecordingPublisher:
    """Collects published events instead of broadcasting them."""

    def __init__(self):
        self.events: List[OrderEvent] = []

    def publish(self, event: OrderEvent) -> None:
        self.events.append(event)


class FakeClock:
    """Settable clock for stamping order creation times."""

    def __init__(self, now: datetime = FIXED_NOW):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
async def test_db_engine():
    """Create test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    # Drop all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
async def test_db(test_db_engine):
    """Create test database session."""
    async_session = async_sessionmaker(
        test_db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session() as session:
        yield session


@pytest.fixture
def publisher():
    """Event publisher that records instead of broadcasting."""
    return RecordingPublisher()


@pytest.fixture
def clock():
    """Clock pinned to FIXED_NOW; tests move it by assigning `clock.now`."""
    return FakeClock()


@pytest.fixture
def store(test_db, publisher, clock):
    """Order store on the test database."""
    return OrderStore(db=test_db, publisher=publisher, clock=clock)


@pytest.fixture
def sample_items():
    """Line items from the reference order: 2 x Biryani, 3 x Naan."""
    return [
        {"name": "Biryani", "price": 200, "qty": 2},
        {"name": "Naan", "price": 20, "qty": 3},
    ]


@pytest.fixture
def test_client():
    """Create FastAPI test client running the app lifespan (fresh in-memory database)."""
    with TestClient(app) as client:
        yield client
