"""Application configuration using pydantic-settings."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from torre_tempo.core.constants import DEFAULT_DB_PATH, DEFAULT_TENANT_PATH_PREFIX


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Application
    app_name: str = "Torre Tempo"
    debug: bool = False
    environment: str = "development"  # development, staging, production

    # Database
    database_url: str = "sqlite+aiosqlite:///./data/torre-tempo.sqlite"
    database_echo: bool = False

    # Legacy SQLite store targeted by the scope backfill
    db_path: Path = Field(default=Path(DEFAULT_DB_PATH), validation_alias="DB_PATH")

    # Tenant routing
    tenant_path_prefix: str = DEFAULT_TENANT_PATH_PREFIX

    # CORS
    cors_origins: list[str] = []

    # Observability
    log_level: str = "INFO"

    @field_validator("tenant_path_prefix")
    @classmethod
    def validate_tenant_path_prefix(cls, v: str) -> str:
        """Ensure the prefix is a single absolute path literal.

        Raises:
            ValueError: If the prefix is not of the form ``/segment``
        """
        if not v.startswith("/") or v.endswith("/") or len(v) < 2:
            raise ValueError(
                "TENANT_PATH_PREFIX must look like '/t' (leading slash, no trailing slash)"
            )
        return v

    @computed_field  # type: ignore[prop-decorator]
    @property
    def async_database_url(self) -> str:
        """Convert a plain PostgreSQL URL to its asyncpg variant."""
        if self.database_url.startswith("postgresql://"):
            return self.database_url.replace("postgresql://", "postgresql+asyncpg://", 1)
        return self.database_url

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
