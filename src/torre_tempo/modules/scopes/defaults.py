"""Default scope derivation from a tenant settings document.

The settings document is free-form JSON. Only
``directories.locations`` and ``directories.departments`` matter here,
and each step of the walk falls back when a value is missing or has the
wrong type, so every input has a defined result.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from torre_tempo.core.constants import FALLBACK_DEPARTMENT, FALLBACK_LOCATION


@dataclass(frozen=True, slots=True)
class ScopeDefaults:
    """The (location, department) pair used to fill missing scope values."""

    location: str = FALLBACK_LOCATION
    department: str = FALLBACK_DEPARTMENT

    @classmethod
    def from_settings(cls, settings: Any) -> "ScopeDefaults":
        """Derive defaults from a parsed settings document.

        Examples:
            >>> ScopeDefaults.from_settings({"directories": {"locations": ["HQ"]}})
            ScopeDefaults(location='HQ', department='general')
            >>> ScopeDefaults.from_settings(None)
            ScopeDefaults(location='default', department='general')
        """
        return cls(
            location=_first_entry(directory_entries(settings, "locations"), FALLBACK_LOCATION),
            department=_first_entry(
                directory_entries(settings, "departments"), FALLBACK_DEPARTMENT
            ),
        )


def directory_entries(settings: Any, name: str) -> list[Any]:
    """Return ``settings["directories"][name]`` or ``[]`` when absent or malformed."""
    if not isinstance(settings, Mapping):
        return []
    directories = settings.get("directories")
    if not isinstance(directories, Mapping):
        return []
    entries = directories.get(name)
    if not isinstance(entries, list):
        return []
    return entries


def _first_entry(entries: list[Any], fallback: str) -> str:
    # Only the first entry counts; a blank or non-string first entry falls back.
    if entries and isinstance(entries[0], str) and entries[0]:
        return entries[0]
    return fallback
