"""Centralized application configuration via environment variables."""

from enum import StrEnum
from functools import lru_cache
from pathlib import Path

from pydantic import SecretStr, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(StrEnum):
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Secrets use SecretStr to prevent accidental logging.
    Database URL is assembled from individual components to match
    the official PostgreSQL Docker image environment variables.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # --- App ---
    environment: Environment = Environment.DEVELOPMENT
    log_level: str = "INFO"

    # --- PostgreSQL (destination catalog) ---
    postgres_user: str = "postgres"
    postgres_password: SecretStr = SecretStr("postgres")
    postgres_db: str = "postgres"
    postgres_host: str = "localhost"
    postgres_port: int = 54322

    @computed_field  # type: ignore[prop-decorator]
    @property
    def database_url(self) -> str:
        """Assemble database URL from components.

        Uses psycopg v3 driver which supports both sync (create_engine)
        and async (create_async_engine) modes natively.
        """
        password = self.postgres_password.get_secret_value()
        return (
            f"postgresql+psycopg://{self.postgres_user}:{password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )

    # Only courses with id >= this value take part in the check.
    min_course_id: int = 616

    # --- Source CMS ---
    source_catalog_url: str = "http://localhost:3005/member-pages/all-courses/"
    catalog_heading_class: str = "elementor-cta__title"
    fetch_delay_seconds: float = 0.1
    fetch_timeout_seconds: float = 30.0
    max_redirects: int = 10
    user_agent: str = "course-audit/0.1"

    # --- Output ---
    report_path: Path = Path(".context/integrity-report.json")

    # --- Platform import API (remediation) ---
    platform_url: str | None = None
    course_import_secret: SecretStr | None = None
    archive_delay_seconds: float = 0.3

    # --- Convenience properties ---
    @property
    def is_dev(self) -> bool:
        return self.environment == Environment.DEVELOPMENT

    @property
    def is_prod(self) -> bool:
        return self.environment == Environment.PRODUCTION


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Cached settings singleton.

    Usage::

        from course_audit.config import get_settings
        settings = get_settings()
    """
    return Settings()
