"""Tenant slug extraction from request paths.

Tenant-scoped URLs have the shape ``{prefix}/{slug}/...``. The parser
below takes exactly one segment after the prefix literal and reports
either that segment or :data:`NO_MATCH`.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Final


class _NoMatch(Enum):
    NO_MATCH = "no_match"


NO_MATCH: Final = _NoMatch.NO_MATCH


@dataclass(frozen=True, slots=True)
class TenantSlug:
    """A slug taken from a tenant-scoped path."""

    value: str

    def __str__(self) -> str:
        return self.value


def parse_tenant_slug(path: str, prefix: str) -> TenantSlug | _NoMatch:
    """Extract the tenant slug that follows ``prefix`` in ``path``.

    ``prefix`` must already be normalised to ``/segment`` form.

    Examples:
        >>> parse_tenant_slug("/t/demo/dashboard", "/t")
        TenantSlug(value='demo')
        >>> parse_tenant_slug("/dashboard", "/t") is NO_MATCH
        True
    """
    head = prefix + "/"
    if not path.startswith(head):
        return NO_MATCH

    rest = path[len(head):]
    slug, _, _ = rest.partition("/")
    if not slug:
        return NO_MATCH
    return TenantSlug(slug)
