"""
Shared fixtures: in-memory SQLite store, test settings and an ASGI client.

Every test gets a fresh database. Assertions read through new sessions so
they never see stale identity-map state from an earlier read.
"""

import os

# Must be set before app modules create the engine.
os.environ.setdefault("VW_DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("VW_LOG_FORMAT", "text")

import uuid
from typing import Optional

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, select

import app.models  # noqa: F401
from app.core.config import Settings, get_settings
from app.core.database import get_session
from app.main import app
from app.models.organization import Organization
from app.models.report import Report
from app.models.user import User
from app.models.user_org import UserOrg

ADMIN_TOKEN = "admin-secret"
SYSTEM_TOKEN = "system-secret"


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        database_url="sqlite+aiosqlite:///:memory:",
        secret_key="test-secret-key",
        domain="https://vault.example.com/",
        invitation_org_name="Acme Vault",
        admin_token=ADMIN_TOKEN,
        system_api_token=SYSTEM_TOKEN,
    )


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", poolclass=StaticPool, echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def client(session_factory, settings):
    """API client with the session and settings dependencies overridden."""

    async def override_get_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_settings] = lambda: settings

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def use_settings(settings):
    """Swap in settings with some fields changed for the rest of the test."""

    def _use(**updates) -> Settings:
        new = settings.model_copy(update=updates)
        app.dependency_overrides[get_settings] = lambda: new
        return new

    return _use


@pytest.fixture
def admin_headers():
    return {"admin_token": ADMIN_TOKEN}


@pytest.fixture
def system_headers():
    return {"x-vaultwarden-api": SYSTEM_TOKEN}


class Store:
    """Seeds rows and reads them back, one committed session per call."""

    def __init__(self, session_factory):
        self.session_factory = session_factory

    async def add(self, *rows):
        async with self.session_factory() as session:
            session.add_all(rows)
            await session.commit()
        return rows[0] if len(rows) == 1 else rows

    async def user(self, email: str = "member@example.com", akey: str = "", private_key: Optional[str] = None) -> User:
        return await self.add(User(email=email, akey=akey, private_key=private_key))

    async def org(self, name: str = "Acme") -> Organization:
        return await self.add(Organization(name=name))

    async def member(self, user: User, org: Organization) -> UserOrg:
        return await self.add(UserOrg(user_uuid=user.uuid, org_uuid=org.uuid))

    async def all(self, model) -> list:
        async with self.session_factory() as session:
            result = await session.execute(select(model))
            return list(result.scalars().all())

    async def personal_report(self, user_uuid: uuid.UUID) -> Optional[Report]:
        async with self.session_factory() as session:
            result = await session.execute(select(Report).where(Report.user_uuid == user_uuid))
            return result.scalar_one_or_none()

    async def org_report(self, org_uuid: uuid.UUID) -> Optional[Report]:
        async with self.session_factory() as session:
            result = await session.execute(select(Report).where(Report.org_uuid == org_uuid))
            return result.scalar_one_or_none()


@pytest.fixture
def store(session_factory) -> Store:
    return Store(session_factory)
