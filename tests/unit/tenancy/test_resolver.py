"""Unit tests for the tenant resolver."""

from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest

from torre_tempo.core.errors import TenantNotFoundError, TenantSuspendedError
from torre_tempo.core.tenancy.resolver import TenantResolver
from torre_tempo.modules.tenants.repos import TenantRecord


def make_resolver(record: TenantRecord | None) -> TenantResolver:
    """Create a resolver whose repository returns ``record``."""
    resolver = TenantResolver(MagicMock())
    resolver.repo.get_by_slug = AsyncMock(return_value=record)
    return resolver


def make_record(status: str = "active", settings: dict | None = None) -> TenantRecord:
    """Create a tenant projection row."""
    return TenantRecord(
        id=uuid4(),
        slug="demo",
        legal_name="Demo Hostelería S.L.",
        settings=settings if settings is not None else {"time": {"standard_daily_hours": 8}},
        subscription_status=status,
    )


class TestTenantResolver:
    """Tests for TenantResolver.resolve."""

    @pytest.mark.asyncio
    async def test_active_tenant_resolves(self):
        """An active tenant yields its context."""
        record = make_record("active")
        resolver = make_resolver(record)

        context = await resolver.resolve("demo")

        resolver.repo.get_by_slug.assert_awaited_once_with("demo")
        assert context.id == record.id
        assert context.slug == "demo"
        assert context.legal_name == "Demo Hostelería S.L."
        assert context.settings == {"time": {"standard_daily_hours": 8}}

    @pytest.mark.asyncio
    async def test_trial_tenant_resolves(self):
        """Trial tenants are admitted like active ones."""
        resolver = make_resolver(make_record("trial"))

        context = await resolver.resolve("demo")

        assert context.slug == "demo"

    @pytest.mark.asyncio
    async def test_context_has_no_subscription_status(self):
        """The status is checked, not passed downstream."""
        context = await make_resolver(make_record("active")).resolve("demo")

        assert "subscription_status" not in context.model_dump()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", ["suspended", "cancelled", "past_due", "", "ACTIVE"])
    async def test_other_statuses_are_denied(self, status: str):
        """Only the exact values 'active' and 'trial' grant access."""
        resolver = make_resolver(make_record(status))

        with pytest.raises(TenantSuspendedError) as exc_info:
            await resolver.resolve("demo")

        assert exc_info.value.status_code == 403
        assert exc_info.value.error == "Tenant suspended"
        assert exc_info.value.message == "This tenant account is not active"

    @pytest.mark.asyncio
    async def test_unknown_slug_raises_not_found(self):
        """A missing tenant raises with the slug in the message."""
        resolver = make_resolver(None)

        with pytest.raises(TenantNotFoundError) as exc_info:
            await resolver.resolve("ghost")

        assert exc_info.value.status_code == 404
        assert exc_info.value.message == "Tenant 'ghost' does not exist"

    @pytest.mark.asyncio
    async def test_null_settings_become_empty_document(self):
        """A tenant stored without settings gets an empty settings dict."""
        record = make_record("active")._replace(settings=None)

        context = await make_resolver(record).resolve("demo")

        assert context.settings == {}
