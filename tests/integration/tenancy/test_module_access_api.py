"""Integration tests for the per-tenant feature module gate."""

from datetime import UTC, datetime, timedelta

import pytest
from fastapi import Depends, FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool

from torre_tempo.config import Settings
from torre_tempo.core.constants import ADVANCED_SCHEDULING_MODULE
from torre_tempo.core.database import Base, create_session_factory
from torre_tempo.core.errors import register_exception_handlers
from torre_tempo.main import create_app
from torre_tempo.modules.tenants.dependencies import require_module
from torre_tempo.modules.tenants.models import Tenant, TenantModule


pytestmark = pytest.mark.integration


async def add_module(db: AsyncSession, tenant: Tenant, **kwargs) -> TenantModule:
    """Persist a module entry for ``tenant``."""
    module = TenantModule(tenant_id=tenant.id, module_key=ADVANCED_SCHEDULING_MODULE, **kwargs)
    db.add(module)
    await db.commit()
    return module


def upgrade_url(tenant: Tenant) -> str:
    return f"/t/{tenant.slug}/billing/upgrade?module={ADVANCED_SCHEDULING_MODULE}"


class TestModuleAccess:
    """Tests for rota routes behind the advanced scheduling module."""

    async def test_enabled_module_admits_request(
        self, client: AsyncClient, tenant: Tenant, db: AsyncSession
    ):
        """An enabled module without a trial lets the request through."""
        await add_module(db, tenant, enabled=True)

        response = await client.get(f"/t/{tenant.slug}/rota/weeks")

        assert response.status_code == 200
        assert response.json() == []

    async def test_missing_module_is_forbidden(self, client: AsyncClient, tenant: Tenant):
        """A tenant without a module entry gets 403 with an upgrade link."""
        response = await client.get(f"/t/{tenant.slug}/rota/weeks")

        assert response.status_code == 403
        assert response.json() == {
            "error": "Module not enabled",
            "message": "The 'advanced_scheduling' module is not enabled for this tenant",
            "upgrade_url": upgrade_url(tenant),
        }

    async def test_disabled_module_is_forbidden(
        self, client: AsyncClient, tenant: Tenant, db: AsyncSession
    ):
        """A module entry switched off is treated like a missing one."""
        await add_module(db, tenant, enabled=False)

        response = await client.get(f"/t/{tenant.slug}/rota/weeks")

        assert response.status_code == 403
        assert response.json()["error"] == "Module not enabled"

    async def test_expired_trial_is_forbidden(
        self, client: AsyncClient, tenant: Tenant, db: AsyncSession
    ):
        """An enabled module whose trial has ended is denied."""
        await add_module(
            db, tenant, enabled=True, trial_until=datetime.now(UTC) - timedelta(days=1)
        )

        response = await client.get(f"/t/{tenant.slug}/rota/weeks")

        assert response.status_code == 403
        assert response.json() == {
            "error": "Module trial expired",
            "message": "The trial for 'advanced_scheduling' has expired",
            "upgrade_url": upgrade_url(tenant),
        }

    async def test_running_trial_admits_request(
        self, client: AsyncClient, tenant: Tenant, db: AsyncSession
    ):
        """A trial that has not ended yet grants access."""
        await add_module(
            db, tenant, enabled=True, trial_until=datetime.now(UTC) + timedelta(days=7)
        )

        response = await client.get(f"/t/{tenant.slug}/rota/weeks")

        assert response.status_code == 200

    async def test_module_of_other_tenant_does_not_count(
        self, client: AsyncClient, tenant: Tenant, db: AsyncSession
    ):
        """Module entries are looked up per tenant."""
        other = Tenant(slug="other", legal_name="Other S.L.", subscription_status="active")
        db.add(other)
        await db.commit()
        await add_module(db, other, enabled=True)

        response = await client.get(f"/t/{tenant.slug}/rota/weeks")

        assert response.status_code == 403

    async def test_ungated_routes_need_no_module(self, client: AsyncClient, tenant: Tenant):
        """Routes outside the gated router are unaffected."""
        response = await client.get(f"/t/{tenant.slug}/scopes/directory")

        assert response.status_code == 200


class TestModuleGateFailures:
    """Tests for the gate when its inputs are missing or broken."""

    async def test_missing_tenant_context_returns_400(self, settings: Settings, session_factory):
        """A gated route reached without tenant resolution is rejected."""
        app = FastAPI()
        app.state.settings = settings
        app.state.session_factory = session_factory
        register_exception_handlers(app)

        @app.get("/gated", dependencies=[Depends(require_module(ADVANCED_SCHEDULING_MODULE))])
        async def gated() -> dict[str, str]:
            return {"status": "ok"}

        async with AsyncClient(
            transport=ASGITransport(app=app), base_url="http://test"
        ) as client:
            response = await client.get("/gated")

        assert response.status_code == 400
        assert response.json() == {
            "error": "Tenant context required",
            "message": "Tenant context is required for this operation",
        }

    async def test_store_failure_fails_closed(self, settings: Settings):
        """A failing module lookup yields the opaque 500 body."""
        # Only the tenants table exists, so the tenant resolves but the module lookup fails
        engine = create_async_engine(
            "sqlite+aiosqlite://",
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
        async with engine.begin() as conn:
            await conn.run_sync(
                lambda sync_conn: Base.metadata.create_all(sync_conn, tables=[Tenant.__table__])
            )
        session_factory = create_session_factory(engine)
        async with session_factory() as session:
            session.add(Tenant(slug="demo", legal_name="Demo S.L.", subscription_status="active"))
            await session.commit()

        app = create_app(settings=settings, session_factory=session_factory)
        async with AsyncClient(
            transport=ASGITransport(app=app, raise_app_exceptions=False),
            base_url="http://test",
        ) as client:
            response = await client.get("/t/demo/rota/weeks")

        await engine.dispose()

        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error"}
