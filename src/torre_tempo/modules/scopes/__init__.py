"""Scopes module - location x department membership and backfill."""

from torre_tempo.modules.scopes.routes import router


__module_info__ = {
    "name": "scopes",
    "version": "1.0.0",
    "description": "Location and department scoping",
    "dependencies": ["tenants"],
}

__all__ = ["router"]
