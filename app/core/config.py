"""
Application configuration.

Loads settings from environment variables and .env file.
All configuration is centralized here. No scattered magic strings.
"""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment.

    Attributes:
        project_name: Display name for the API.
        version: Current API version string.
        debug: Enable debug mode (exposes /docs). Must be False in production.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
        rate_limit_enabled: Turn slowapi rate limiting on or off.
        rate_limit_default: Default rate limit for all endpoints.
        cors_origins: Allowed CORS origins, comma-separated in the environment.
        demo_user_id: The single owner every request acts as.
        demo_user_email: Email stored on the owner row at startup.
        auto_create_schema: Create missing tables on startup.

    The database DSN is either given whole as ``DATABASE_URL`` or built
    from the postgres_* parts.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    project_name: str = "SubTrack"
    version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"
    rate_limit_enabled: bool = True
    rate_limit_default: str = "60/minute"
    cors_origins: str = "*"

    demo_user_id: str = "demo-user-default-id"
    demo_user_email: str = "demo@example.com"

    database_url: Optional[str] = None
    database_echo: bool = False
    auto_create_schema: bool = True
    postgres_user: str = "postgres"
    postgres_password: str = "postgres"
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_db: str = "subtrack"

    def get_cors_origins(self) -> list[str]:
        """Split the comma-separated CORS_ORIGINS value."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    def get_database_url(self) -> str:
        """Return the effective async DSN.

        Priority:
        1. Explicit ``DATABASE_URL``; a bare ``postgresql://`` scheme is
           switched to the asyncpg driver.
        2. Build an asyncpg DSN from postgres_* values.
        """
        if self.database_url:
            if self.database_url.startswith("postgresql://"):
                return self.database_url.replace("postgresql://", "postgresql+asyncpg://", 1)
            return self.database_url
        return (
            f"postgresql+asyncpg://{self.postgres_user}:{self.postgres_password}@"
            f"{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )


settings = Settings()
