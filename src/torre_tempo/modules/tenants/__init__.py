"""Tenants module - Multi-tenancy support."""

from torre_tempo.modules.tenants.routes import router


# Module metadata
__module_info__ = {
    "name": "tenants",
    "version": "1.0.0",
    "description": "Multi-tenancy support module",
    "dependencies": [],
}

__all__ = ["router"]
