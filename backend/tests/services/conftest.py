"""Service test fixtures — async SQLite store, service wiring, HTTP client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - db_manager swapped for one bound to the test engine, so routes and the
      repository share the same store
    - TaskService built with a RecordingDispatcher unless a test says otherwise

Design Decisions:
    - SQLite in-memory: fast, no external dependency; the unique constraint on
      tasks.description is enforced exactly as on PostgreSQL
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

import taskflow.infrastructure.database as db_module
import taskflow.models  # noqa: F401
from taskflow.core.domain_types import EntityKind
from taskflow.db.base import Base
from taskflow.infrastructure.database import DatabaseSessionManager
from taskflow.infrastructure.sql_repository import SqlAlchemyRepository
from taskflow.main import app
from taskflow.services.task_service import TaskService
from tests.services.fakes import RecordingDispatcher


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
def test_db_manager(test_engine, test_session_factory):
    manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    manager.engine = test_engine
    manager._session_factory = test_session_factory
    return manager


@pytest.fixture
def repository(test_db_manager):
    return SqlAlchemyRepository(test_db_manager)


@pytest.fixture
def dispatcher():
    return RecordingDispatcher()


@pytest.fixture
def service(repository, dispatcher):
    return TaskService(repository, dispatcher)


@pytest.fixture
async def project(repository):
    return await repository.create(
        EntityKind.PROJECT, {"name": "Website relaunch"},
    )


@pytest.fixture
async def user(repository):
    return await repository.create(
        EntityKind.USER, {"name": "Ada", "email": "ada@example.com"},
    )


@pytest.fixture
def new_task(project):
    """Factory for create_task payloads against the seeded project."""
    def _make(**overrides) -> dict:
        payload = {
            "description": "Write the Launch Plan",
            "status": "in-progress",
            "due_date": "2030-12-31",
            "project_id": project["id"],
            "assigned_to_id": None,
        }
        payload.update(overrides)
        return payload
    return _make


@pytest.fixture
async def client(test_db_manager):
    """FastAPI test client bound to the test store."""
    original_manager = db_module.db_manager
    db_module.db_manager = test_db_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager
