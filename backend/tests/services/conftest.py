"""Service test fixtures - async DB + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database (tables + unique slug index)
    - get_db dependency overridden to use the test DB
    - get_image_host overridden with an in-memory fake that records uploads

Design Decisions:
    - SQLite in-memory: fast, no external dependency, enforces the unique index
      the duplicate-slug tests rely on
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from eventdesk.db.base import Base
from eventdesk.infrastructure.database import get_db
from eventdesk.infrastructure.image_host import get_image_host
import eventdesk.models  # noqa: F401
from eventdesk.main import app
from tests.services.factories import FakeImageHost


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
def image_host():
    return FakeImageHost()


@pytest.fixture
async def client(test_session_factory, image_host):
    """FastAPI test client with DB and image host dependencies overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_image_host] = lambda: image_host

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
