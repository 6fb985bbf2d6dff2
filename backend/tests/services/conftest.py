"""Service test fixtures — per-test SQLite database, stores and FastAPI test client.

Invariants:
    - Every test gets a fresh SQLite file under tmp_path
    - The database goes through DatabaseSessionManager, so FK enforcement
      (and ON DELETE CASCADE) is on exactly as in production
    - The client talks to the app through ASGITransport with app.state.db_manager
      pointed at the test manager

Design Decisions:
    - SQLite file over :memory:: every pooled connection sees the same data
      without sharing a single DBAPI connection between sessions
"""

import pytest
from httpx import ASGITransport, AsyncClient

from forms_api.infrastructure.database import DatabaseSessionManager
from forms_api.main import app
from forms_api.services.field_store import FieldStore
from forms_api.services.schema_store import SchemaStore


@pytest.fixture
async def db_manager(tmp_path):
    manager = DatabaseSessionManager(
        f"sqlite+aiosqlite:///{tmp_path / 'forms.db'}",
    )
    await manager.create_tables()
    yield manager
    await manager.close()


@pytest.fixture
async def test_db(db_manager):
    async with db_manager.session() as session:
        yield session


@pytest.fixture
def schema_store(test_db):
    return SchemaStore(test_db)


@pytest.fixture
def field_store(test_db):
    return FieldStore(test_db)


@pytest.fixture
async def client(db_manager):
    """FastAPI test client bound to the test database."""
    original_manager = getattr(app.state, "db_manager", None)
    app.state.db_manager = db_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.state.db_manager = original_manager


@pytest.fixture
async def lenient_client(db_manager):
    """Client that returns 500 responses instead of re-raising app exceptions."""
    original_manager = getattr(app.state, "db_manager", None)
    app.state.db_manager = db_manager

    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as c:
        yield c

    app.state.db_manager = original_manager


@pytest.fixture
async def seed_schema(schema_store):
    """Insert a schema named 'contact form' and return its id."""
    return await schema_store.create("contact form")
