"""Users module - tenant employees and their scope memberships."""

from torre_tempo.modules.users.routes import router


__module_info__ = {
    "name": "users",
    "version": "1.0.0",
    "description": "Tenant users",
    "dependencies": ["tenants", "scopes"],
}

__all__ = ["router"]
