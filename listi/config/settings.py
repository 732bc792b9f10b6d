"""
Application settings - pydantic-settings configuration.

This module defines application configuration using pydantic-settings
for environment variable loading with validation and defaults.
"""

from functools import lru_cache
from typing import Literal

from psycopg.conninfo import make_conninfo
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Database configuration
    database_url: str | None = None  # Takes precedence over the db_* fields
    db_host: str = "localhost"
    db_port: int = 5432
    db_name: str = "listi"
    db_user: str = "listi"
    db_password: str = "listi"
    db_sslmode: str = "require"  # TLS without certificate validation
    pool_min_size: int = 2
    pool_max_size: int = 10
    run_migrations: bool = True

    # Registration settings
    verification_enabled: bool = True
    code_ttl_seconds: int = 900
    max_attempts: int = 5
    pbkdf2_iterations: int = 600_000
    email_syntax_check: bool = False

    # Mail settings
    mail_provider: Literal["console", "smtp", "http"] = "console"
    app_name: str = "LISTI"
    mail_from_address: str = "no-reply@listi.local"
    smtp_host: str = "localhost"
    smtp_port: int = 587
    smtp_user: str | None = None
    smtp_password: str | None = None
    smtp_starttls: bool = True
    smtp_timeout: float = 10.0
    mail_api_url: str = "https://api.resend.com/emails"
    mail_api_key: str | None = None
    mail_api_timeout: float = 10.0

    # HTTP settings
    cors_origins: list[str] = ["*"]
    static_dir: str = "sitio"
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"

    def conninfo(self) -> str:
        """Build the psycopg connection string."""
        if self.database_url:
            return self.database_url
        return make_conninfo(
            host=self.db_host,
            port=self.db_port,
            dbname=self.db_name,
            user=self.db_user,
            password=self.db_password,
            sslmode=self.db_sslmode,
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
