"""API test fixtures: async DB + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use the test session factory
    - Widget handlers read time from a controllable clock
"""

from datetime import datetime, timezone

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)

from crudify.api.route_collection import CrudResource
from crudify.config import Settings
from crudify.infrastructure.database import get_db
from crudify.main import create_app
from tests.fakes import FakeClock
from tests.models import Base, Note, Widget


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
def settings():
    return Settings(
        database_url="sqlite+aiosqlite:///:memory:",
        default_per_page=10,
        max_per_page=50,
        log_format="text",
    )


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def widget_resource(settings, clock):
    return CrudResource(
        Widget, searchable_fields=["name", "age"], settings=settings, clock=clock,
    )


@pytest.fixture
def note_resource(settings):
    return CrudResource(Note, searchable_fields=["title"], settings=settings)


@pytest.fixture
def collections(widget_resource, note_resource):
    return [widget_resource, note_resource]


@pytest.fixture
def app(collections, settings):
    return create_app(collections, settings=settings)


@pytest.fixture
async def client(app, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
async def seed_widgets(test_db):
    """Three widgets with distinct creation times (oldest first in insertion order)."""
    widgets = [
        Widget(name="John", age=30, created_at=datetime(2026, 1, 1, tzinfo=timezone.utc)),
        Widget(name="Joanna", age=41, created_at=datetime(2026, 1, 3, tzinfo=timezone.utc)),
        Widget(name="Bob", age=30, created_at=datetime(2026, 1, 2, tzinfo=timezone.utc)),
    ]
    test_db.add_all(widgets)
    await test_db.commit()
    return widgets


@pytest.fixture
async def seed_note(test_db):
    note = Note(title="Groceries", body="eggs, milk")
    test_db.add(note)
    await test_db.commit()
    await test_db.refresh(note)
    return note
