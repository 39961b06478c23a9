"""Torre Tempo - tenant-scoped workforce scheduling API."""

__version__ = "0.1.0"
