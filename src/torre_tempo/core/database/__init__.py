"""Database layer - session management, base models, and mixins."""

from torre_tempo.core.database.base import (
    Base,
    ScopeMixin,
    TenantMixin,
    TimestampMixin,
    UUIDMixin,
)
from torre_tempo.core.database.session import (
    create_engine,
    create_session_factory,
    get_db,
)


__all__ = [
    "Base",
    "ScopeMixin",
    "TenantMixin",
    "TimestampMixin",
    "UUIDMixin",
    "create_engine",
    "create_session_factory",
    "get_db",
]
