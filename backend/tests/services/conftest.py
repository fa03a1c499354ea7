"""Service test fixtures — async DB, repository, and FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB sessions
    - db_manager patched so the readiness probe hits the test DB

Design Decisions:
    - SQLite in-memory with StaticPool: every session shares the one connection,
      so data written through the client is visible to direct queries
    - One client request = one session, mirroring production get_db
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool
from httpx import ASGITransport, AsyncClient

from commander.db.base import Base
from commander.infrastructure.database import get_db, DatabaseSessionManager
from commander.models.command import Command
from commander.services.command_repository import SqlCommandRepository
import commander.infrastructure.database as db_module
from commander.main import app


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
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
def repository(test_db):
    return SqlCommandRepository(test_db)


@pytest.fixture
async def seed_commands(test_db):
    """Insert three commands directly, bypassing the repository."""
    commands = [
        Command(how_to="Run a project", line="dotnet run", platform=".Net"),
        Command(how_to="List files", line="ls -la", platform="Linux"),
        Command(how_to="Show processes", line="ps aux", platform="Linux"),
    ]
    test_db.add_all(commands)
    await test_db.commit()
    return commands


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
