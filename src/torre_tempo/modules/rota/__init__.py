"""Rota module - weekly schedules and shifts."""

from torre_tempo.modules.rota.routes import router


__module_info__ = {
    "name": "rota",
    "version": "1.0.0",
    "description": "Weekly rota planning",
    "dependencies": ["tenants", "users"],
}

__all__ = ["router"]
