"""Logging module with structured logging and request tracking."""

from torre_tempo.core.logging.middleware import RequestIdMiddleware, RequestLoggingMiddleware
from torre_tempo.core.logging.setup import configure_logging


__all__ = [
    "RequestIdMiddleware",
    "RequestLoggingMiddleware",
    "configure_logging",
]
