"""Pytest configuration and shared fixtures."""

from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from torre_tempo.config import Settings
from torre_tempo.core.database import Base, create_session_factory
from torre_tempo.main import create_app

# Import all models to ensure they're registered with Base.metadata
from torre_tempo.modules.rota.models import RotaShift, RotaWeek  # noqa: F401
from torre_tempo.modules.scopes.models import UserScope  # noqa: F401
from torre_tempo.core.constants import ADVANCED_SCHEDULING_MODULE
from torre_tempo.modules.tenants.models import Tenant, TenantModule
from torre_tempo.modules.users.models import User
from tests.factories.tenant import TenantFactory


# Shared in-memory database; StaticPool keeps one connection alive per engine
TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest.fixture
def settings() -> Settings:
    """Settings for the app under test."""
    return Settings(
        database_url=TEST_DATABASE_URL,
        environment="testing",
        log_level="DEBUG",
    )


@pytest.fixture
async def engine():
    """Create test database engine with the full schema."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(engine) -> async_sessionmaker[AsyncSession]:
    """Session factory injected into the app under test."""
    return create_session_factory(engine)


@pytest.fixture
async def db(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Provide a database session for arranging test data.

    Data must be committed to be visible to the tenant middleware,
    which opens its own session.
    """
    async with session_factory() as session:
        yield session


@pytest.fixture
def app(settings: Settings, session_factory):
    """Create test application instance."""
    return create_app(settings=settings, session_factory=session_factory)


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """Provide async HTTP client for API testing."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client


# ============================================================
# Tenant and User Fixtures
# ============================================================


@pytest.fixture
async def tenant(db: AsyncSession) -> Tenant:
    """Create an active tenant with a scope directory.

    Returns:
        A persisted Tenant instance
    """
    tenant = Tenant(
        **TenantFactory.build(
            subscription_status="active",
            settings={
                "directories": {
                    "locations": ["Madrid Centro", "Valencia"],
                    "departments": ["Kitchen", "Floor"],
                }
            },
        ).model_dump()
    )
    db.add(tenant)
    await db.commit()
    return tenant


@pytest.fixture
async def user(db: AsyncSession, tenant: Tenant) -> User:
    """Create a user of ``tenant`` with one scope membership.

    Returns:
        A persisted User instance
    """
    user = User(
        email="ana@example.com",
        full_name="Ana Torres",
        tenant_id=tenant.id,
        location="Madrid Centro",
        department="Kitchen",
    )
    db.add(user)
    await db.flush()
    db.add(UserScope(user_id=user.id, location="Madrid Centro", department="Kitchen"))
    await db.commit()
    return user


@pytest.fixture
async def scheduling_module(db: AsyncSession, tenant: Tenant) -> TenantModule:
    """Enable the advanced scheduling module for ``tenant``.

    Returns:
        A persisted TenantModule instance
    """
    module = TenantModule(
        tenant_id=tenant.id,
        module_key=ADVANCED_SCHEDULING_MODULE,
        enabled=True,
    )
    db.add(module)
    await db.commit()
    return module
