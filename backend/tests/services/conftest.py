"""Service test fixtures — async DB, snapshot store, and FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use the test DB session
    - Every test gets a fresh SnapshotStore registered as the process store
    - The seed client talks to an httpx.MockTransport, never the network

Design Decisions:
    - SQLite in-memory with StaticPool: one connection shared by all sessions,
      so rows written by one session are visible to the next
    - snapshot_registry patched directly: ASGITransport does not run lifespan
"""

import httpx
import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool
from httpx import ASGITransport, AsyncClient

from salescope.api.dependencies import get_seed_client
from salescope.core.transaction_snapshot import SnapshotStore
from salescope.db.base import Base
from salescope.infrastructure.database import get_db, DatabaseSessionManager
from salescope.infrastructure.seed_client import ResilientSeedClient
import salescope.infrastructure.database as db_module
import salescope.infrastructure.snapshot_registry as snapshot_module
import salescope.models  # noqa: F401
from salescope.main import app
from tests.factories import seed_payload


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def store(monkeypatch):
    """Fresh SnapshotStore installed as the process-wide store."""
    fresh = SnapshotStore()
    monkeypatch.setattr(snapshot_module, "snapshot_store", fresh)
    return fresh


@pytest.fixture
def seed_server():
    """Configurable fake seed endpoint.

    Returns dict with:
      - responses: list of httpx.Response | Exception served in order
        (the last one repeats); defaults to the seed_payload() array
      - calls: number of requests received
    """
    state = {"responses": [httpx.Response(200, json=seed_payload())], "calls": 0}

    def handler(request: httpx.Request) -> httpx.Response:
        index = min(state["calls"], len(state["responses"]) - 1)
        state["calls"] += 1
        response = state["responses"][index]
        if isinstance(response, Exception):
            raise response
        return response

    state["transport"] = httpx.MockTransport(handler)
    return state


@pytest.fixture
def seed_client(seed_server):
    return ResilientSeedClient(
        "http://seed.test/product_transaction.json",
        max_retries=2, base_delay_ms=1, max_delay_ms=2,
        transport=seed_server["transport"],
    )


@pytest.fixture
async def client(test_engine, test_session_factory, store, seed_client):
    """FastAPI test client with DB, store, and seed client overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_seed_client] = lambda: seed_client

    # Patch db_manager for the readiness probe, which uses it directly
    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager
