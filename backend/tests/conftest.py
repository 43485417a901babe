"""Root conftest — shared test configuration and database fixtures.

Invariants:
    - Every test gets a fresh in-memory SQLite database with the registry bootstrapped
    - get_db dependency overridden to use the test session factory
    - db_manager patched so readiness probes see the test engine
    - Every test starts from a fresh process logical clock

Design Decisions:
    - SQLite in-memory: fast, no external dependency; PostgreSQL-specific
      features are not exercised by the registry
"""

import os

# Ensure tests never reach a real database
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///test.db")
os.environ.setdefault("REGISTRY_OWNER", "registry-owner")

import pytest  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient  # noqa: E402

import coldchain.models  # noqa: E402,F401
import coldchain.infrastructure.database as db_module  # noqa: E402
from coldchain.infrastructure import logical_clock  # noqa: E402
from coldchain.db.base import Base  # noqa: E402
from coldchain.infrastructure.database import get_db, DatabaseSessionManager  # noqa: E402
from coldchain.main import app  # noqa: E402
from coldchain.services.registry_bootstrap import ensure_registry_initialized  # noqa: E402
from tests.factories import OWNER  # noqa: E402


@pytest.fixture(autouse=True)
def fresh_logical_clock(monkeypatch):
    monkeypatch.setattr(logical_clock, "clock", logical_clock.LogicalClock())


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    factory = async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )
    async with factory() as session:
        await ensure_registry_initialized(session, OWNER)
    return factory


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

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
