"""
Pytest configuration and shared fixtures.

Database tests run against an in-memory SQLite database created fresh for
every test; row helpers live in ``tests/factories.py``.
"""

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

import recruit.models  # noqa: F401
from recruit.db.base import Base
from recruit.db.session import build_engine


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests, no database")
    config.addinivalue_line("markers", "db: uses a throwaway SQLite database")


@pytest_asyncio.fixture
async def engine():
    engine = build_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine) -> AsyncSession:
    session_maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_maker() as session:
        yield session


@pytest.fixture
def outbox():
    from recruit.services.notification_service import MemoryTransport

    return MemoryTransport()


@pytest.fixture
def client(tmp_path, outbox):
    """
    TestClient against a throwaway SQLite file.

    Tables are created with a synchronous engine; requests use an async
    engine without pooling so no connection outlives its event loop.
    """
    from fastapi.testclient import TestClient
    from sqlalchemy import create_engine
    from sqlalchemy.pool import NullPool

    from recruit.core.dependencies import get_db, get_notifier
    from recruit.main import app
    from recruit.services.notification_service import PositionNotifier

    db_path = tmp_path / "api.db"
    sync_engine = create_engine(f"sqlite:///{db_path}")
    Base.metadata.create_all(sync_engine)
    sync_engine.dispose()

    async_engine = build_engine(f"sqlite+aiosqlite:///{db_path}", poolclass=NullPool)
    session_maker = async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)

    async def override_get_db():
        async with session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    notifier = PositionNotifier(outbox, from_address="noreply@example.com", base_url="http://admin.test")
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_notifier] = lambda: notifier
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
