"""Application-wide constants.

This module defines constants used throughout the application
to avoid magic numbers and ensure consistency.
"""

# Tenant routing
DEFAULT_TENANT_PATH_PREFIX = "/t"
MAX_SLUG_LENGTH = 63

# String field lengths
MAX_EMAIL_LENGTH = 255
MAX_NAME_LENGTH = 255
MAX_SCOPE_LENGTH = 120
MAX_ROLE_NAME_LENGTH = 100
MAX_STATUS_LENGTH = 20
MAX_MODULE_KEY_LENGTH = 50

# Feature modules gated per tenant
ADVANCED_SCHEDULING_MODULE = "advanced_scheduling"

# Scope fallbacks used when tenant settings name no directory entries
FALLBACK_LOCATION = "default"
FALLBACK_DEPARTMENT = "general"

# Legacy store
DEFAULT_DB_PATH = "data/torre-tempo.sqlite"
SETTINGS_ROW_ID = 1
