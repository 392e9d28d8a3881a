"""Application settings using pydantic-settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration - single source of truth.

    All settings loaded from environment variables or .env files, once per
    process. The instance is frozen: business logic receives values from it
    through constructors and never mutates or re-reads configuration.

    Usage:
        settings = get_settings()
        print(settings.database_url)
        print(settings.frontend_url)
    """

    # Database
    database_url_override: str | None = Field(default=None, alias="DATABASE_URL")
    db_host: str = Field(default="localhost")
    db_port: int = Field(default=5432)
    db_user: str = Field(default="postgres")
    db_password: str = Field(default="postgres")
    db_name: str = Field(default="kinote")
    db_echo: bool = Field(default=False)
    db_pool_size: int = Field(default=5)
    db_max_overflow: int = Field(default=10)

    # Security
    secret_key: str = Field(default="", min_length=32)
    algorithm: str = Field(default="HS256")
    session_token_expire_days: int = Field(default=7, gt=0)
    verification_token_expire_hours: int = Field(default=24, gt=0)
    password_reset_token_expire_hours: int = Field(default=1, gt=0)
    argon2_time_cost: int = Field(default=3, ge=1)
    argon2_memory_cost: int = Field(default=65536, ge=8)
    argon2_parallelism: int = Field(default=4, ge=1)
    protected_path_prefixes: str = Field(
        default="/api/user,/api/todo,/api/calendar,/api/activity,/api/streak,/api/ai",
        description="Comma-separated path prefixes that require a session token.",
    )

    # Email
    email_backend: Literal["smtp", "console"] = Field(default="smtp")
    smtp_host: str = Field(default="smtp.gmail.com")
    smtp_port: int = Field(default=587)
    smtp_user: str = Field(default="")
    smtp_password: str = Field(default="")
    smtp_use_tls: bool = Field(default=True, description="Upgrade the connection with STARTTLS")
    smtp_use_ssl: bool = Field(default=False, description="Connect with implicit TLS")
    smtp_timeout_seconds: float = Field(default=10.0, gt=0)
    email_sender: str = Field(default="Kinote <no-reply@kinote.app>")
    frontend_url: str = Field(default="http://localhost:3000")

    # Application
    environment: Literal["dev", "prod", "test"] = Field(default="dev")
    debug: bool = Field(default=False)
    app_name: str = Field(default="Kinote")
    app_version: str = Field(default="1.0.0")

    # CORS
    cors_origins: str = Field(default="http://localhost:3000")

    # Logging
    log_level: str = Field(default="INFO")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
        populate_by_name=True,
    )

    @field_validator("secret_key")
    @classmethod
    def validate_secret_key(cls, v: str) -> str:
        """Ensure secret_key is provided and meets requirements."""
        if not v or len(v) < 32:
            raise ValueError(
                "SECRET_KEY must be set in environment and be at least 32 characters long"
            )
        return v

    @field_validator("frontend_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",")]

    @property
    def protected_path_prefixes_list(self) -> list[str]:
        """Parse comma-separated protected prefixes into a list."""
        return [
            prefix.strip()
            for prefix in self.protected_path_prefixes.split(",")
            if prefix.strip()
        ]

    @property
    def database_url(self) -> str:
        """Build async database URL (DATABASE_URL wins when set)."""
        if self.database_url_override:
            return self.database_url_override
        return f"postgresql+asyncpg://{self.db_user}:{self.db_password}@{self.db_host}:{self.db_port}/{self.db_name}"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Settings are loaded once and cached for the application lifecycle.
    For testing, clear the cache with: get_settings.cache_clear()

    Returns:
        Settings instance loaded from environment
    """
    return Settings()
