"""Service test fixtures — async DB + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB session
    - db_manager patched for the readiness probe, which bypasses get_db
    - make_plant inserts rows directly (no service validation) with optional created_at

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
    - Concurrency tests use a file-backed database instead (see test_purchase_concurrency)
"""

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from plant_store.db.base import Base
from plant_store.infrastructure.database import get_db, DatabaseSessionManager
from plant_store.models.plant import Plant
from plant_store.models.plant_category import PlantCategory
import plant_store.infrastructure.database as db_module
from plant_store.main import app

BASE_TIME = datetime(2020, 1, 1, tzinfo=timezone.utc)


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
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


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


@pytest.fixture
def make_plant(test_db):
    """Insert a plant directly. Without created_at, each call is newer than the last."""
    counter = {"n": 0}

    async def _make(
        name: str = "Aloe Vera",
        categories: tuple[str, ...] = ("succulent",),
        quantity: int = 5,
        price: float = 12.5,
        description: str = "",
        created_at: datetime | None = None,
    ) -> Plant:
        counter["n"] += 1
        plant = Plant(
            name=name,
            price=price,
            quantity=quantity,
            description=description,
            created_at=created_at or BASE_TIME + timedelta(minutes=counter["n"]),
            category_entries=[
                PlantCategory(position=i, name=c)
                for i, c in enumerate(categories)
            ],
        )
        test_db.add(plant)
        await test_db.commit()
        return plant

    return _make
