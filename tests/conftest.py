import os

# Settings are read at import time; point them at throwaway values first.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./.pytest-placeholder.db"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["ENVIRONMENT"] = "test"
os.environ["RESEND_API_KEY"] = ""
os.environ["GCS_BUCKET_NAME"] = ""

from unittest.mock import MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from app.db.session import get_db
from app.main import app
from app.models import Base, User, Workspace
from app.models.enums import UserRole
from tests.helpers import create_user, create_workspace


@pytest_asyncio.fixture
async def engine(tmp_path):
    # A file database so that concurrent requests get separate connections
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        poolclass=NullPool,
        connect_args={"timeout": 15},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return async_sessionmaker(engine, expire_on_commit=False, autoflush=False)


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture(autouse=True)
def mock_emails(monkeypatch):
    """Outbound email never leaves the test run."""
    welcome = MagicMock()
    day_pass = MagicMock()
    monkeypatch.setattr("app.services.auth_service.send_welcome_email", welcome)
    monkeypatch.setattr("app.services.day_pass_service.send_day_pass_email", day_pass)
    return {"welcome": welcome, "day_pass": day_pass}


@pytest_asyncio.fixture
async def member(db) -> User:
    return await create_user(db, email="asha@example.com", name="Asha Rao")


@pytest_asyncio.fixture
async def other_member(db) -> User:
    return await create_user(db, email="vikram@example.com", name="Vikram Shah")


@pytest_asyncio.fixture
async def admin(db) -> User:
    return await create_user(db, email="admin@example.com", name="Admin", role=UserRole.ADMIN)


@pytest_asyncio.fixture
async def workspace(db) -> Workspace:
    return await create_workspace(db)
