"""URL path helpers."""

from collections.abc import Iterable


def matches_path_prefix(path: str, prefixes: Iterable[str]) -> bool:
    """Check whether ``path`` lies under one of ``prefixes``.

    Matching is by whole segments: ``/health`` covers ``/health`` and
    ``/health/live`` but not ``/healthcheck``.

    Examples:
        >>> matches_path_prefix("/health/live", ["/health"])
        True
        >>> matches_path_prefix("/healthcheck", ["/health"])
        False
    """
    for prefix in prefixes:
        base = prefix.rstrip("/")
        if path == base or path.startswith(base + "/"):
            return True
    return False
