"""Test fixtures — async test client, test database, payload factories."""
from typing import AsyncGenerator

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

import app.models  # noqa: F401
from app.database import Base
from app.api.deps import get_db
from app.client.api import PropertyAPI
from app.main import app
from app.services.property_store import PropertyStore


TEST_DATABASE_URL = "sqlite+aiosqlite:///./test.db"

test_engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=NullPool)
test_session_factory = async_sessionmaker(
    test_engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


@pytest_asyncio.fixture(scope="function")
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create tables and yield a test database session."""
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with test_session_factory() as session:
        yield session

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest_asyncio.fixture(scope="function")
async def store(db_session: AsyncSession) -> PropertyStore:
    return PropertyStore(db_session)


@pytest_asyncio.fixture(scope="function")
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Yield an HTTP test client with the test DB injected."""

    async def override_get_db():
        try:
            yield db_session
            await db_session.commit()
        except Exception:
            await db_session.rollback()
            raise

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture(scope="function")
async def api(client: AsyncClient) -> AsyncGenerator[PropertyAPI, None]:
    """Client-side API wrapper talking to the app in-process."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test/api") as http:
        yield PropertyAPI(client=http)


def make_property_payload(**overrides) -> dict:
    """Create a valid property creation payload."""
    defaults = {
        "name": "Luxury Plot in Pune",
        "type": "Plot",
        "location": "Pune",
        "price": 250000,
        "description": "A large plot of land available for development in prime location.",
        "image": "https://example.com/images/plot.jpg",
        "coordinates": {"lat": 18.5204, "lng": 73.8567},
    }
    defaults.update(overrides)
    return defaults
