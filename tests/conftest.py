import os
import sys
from pathlib import Path
from typing import AsyncIterator

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from asgi_lifespan import LifespanManager
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

# Ensure env is set before importing the app
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("APP_DEBUG", "true")
sys.path.append(str(Path(__file__).resolve().parents[1]))

from pulse.config import Settings
from pulse.main import create_app
from pulse.models import Base


@pytest.fixture()
def test_db_url(tmp_path: Path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'test.db'}"


@pytest.fixture()
def settings(test_db_url: str) -> Settings:
    return Settings(database_url=test_db_url, debug=True, event_scan_code="TestEvent2025")


@pytest.fixture()
def app(settings: Settings):
    return create_app(settings)


@pytest_asyncio.fixture()
async def client(app) -> AsyncIterator[AsyncClient]:
    async with LifespanManager(app):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
            yield ac


@pytest_asyncio.fixture()
async def session_factory(test_db_url: str) -> AsyncIterator[async_sessionmaker]:
    engine = create_async_engine(test_db_url)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    await engine.dispose()


@pytest_asyncio.fixture()
async def db_session(session_factory: async_sessionmaker) -> AsyncIterator[AsyncSession]:
    async with session_factory() as session:
        yield session


def _feedback_payload(attendee_id: str, **overrides) -> dict:
    payload = {
        "attendeeId": attendee_id,
        "expectations": "Learn about async Python",
        "experience": "Good",
        "keyTakeaways": "Structured concurrency is neat",
        "improvements": "Longer coffee breaks please",
    }
    payload.update(overrides)
    return payload


@pytest.fixture()
def feedback_payload():
    """Build a valid POST /feedback body for an attendee."""
    return _feedback_payload
