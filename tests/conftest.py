"""
Pytest configuration and fixtures.
"""

from datetime import datetime, timezone
from typing import AsyncGenerator

import pytest
from httpx import AsyncClient, ASGITransport

from app.api.deps import get_store
from app.core.database import close_db, create_engine, create_session_factory, init_db
from app.core.store import EntityStore
from app.main import app


class FrozenClock:
    """Controllable clock for the store."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def set(self, *args: int) -> None:
        self.now = datetime(*args, tzinfo=timezone.utc)


@pytest.fixture
def clock() -> FrozenClock:
    """Clock frozen at 2024-05-15 10:00 UTC."""
    return FrozenClock(datetime(2024, 5, 15, 10, 0, tzinfo=timezone.utc))


@pytest.fixture
async def test_engine(tmp_path):
    """Engine on a fresh SQLite file per test."""
    engine = create_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    await init_db(engine)

    yield engine

    await close_db(engine)


@pytest.fixture
async def store(test_engine, clock) -> EntityStore:
    """Entity store on the test database."""
    return EntityStore(create_session_factory(test_engine), clock=clock)


@pytest.fixture
async def client(store: EntityStore) -> AsyncGenerator[AsyncClient, None]:
    """Create test client with store override."""
    app.dependency_overrides[get_store] = lambda: store

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()
