"""Unit tests for tenant module entries."""

from datetime import UTC, datetime, timedelta

from torre_tempo.modules.tenants.models import TenantModule


NOW = datetime(2026, 10, 18, 12, 0, tzinfo=UTC)


class TestTrialExpired:
    """Tests for TenantModule.trial_expired."""

    def test_no_trial_never_expires(self):
        """A module without trial end is permanent."""
        assert TenantModule(module_key="x", enabled=True).trial_expired(NOW) is False

    def test_past_trial_end_is_expired(self):
        """A trial end before now has expired."""
        module = TenantModule(module_key="x", trial_until=NOW - timedelta(seconds=1))

        assert module.trial_expired(NOW) is True

    def test_future_trial_end_is_running(self):
        """A trial end after now is still running."""
        module = TenantModule(module_key="x", trial_until=NOW + timedelta(days=1))

        assert module.trial_expired(NOW) is False

    def test_naive_trial_end_is_read_as_utc(self):
        """Naive values, as SQLite returns them, compare as UTC."""
        module = TenantModule(module_key="x", trial_until=datetime(2026, 10, 18, 11, 0))

        assert module.trial_expired(NOW) is True
