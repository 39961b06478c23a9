"""Tenant resolution: path parsing, lookup, and per-request context."""

from torre_tempo.core.tenancy.context import TenantContext
from torre_tempo.core.tenancy.dependencies import CurrentTenant, get_tenant_context
from torre_tempo.core.tenancy.middleware import TenantContextMiddleware
from torre_tempo.core.tenancy.path import NO_MATCH, TenantSlug, parse_tenant_slug
from torre_tempo.core.tenancy.resolver import TenantResolver


__all__ = [
    "NO_MATCH",
    "CurrentTenant",
    "TenantContext",
    "TenantContextMiddleware",
    "TenantResolver",
    "TenantSlug",
    "get_tenant_context",
    "parse_tenant_slug",
]
