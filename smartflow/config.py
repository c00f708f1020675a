"""
Service settings, read from the environment or a local .env file.
"""

from functools import lru_cache
from pathlib import Path
from typing import List, Union

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parent.parent

DEFAULT_CORS_ORIGINS = ["http://localhost:3000", "http://localhost:5173"]
DEVELOPMENT_JWT_SECRET = "development-secret-key-change-in-production"


class Settings(BaseSettings):
    """Settings for the time tracking service. Field names map to upper-case env vars."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Environment
    environment: str = Field(default="development", description="Current environment")
    debug: bool = Field(default=False, description="Debug mode")
    log_level: str = Field(default="INFO", description="Root log level")

    # API Configuration
    api_title: str = Field(default="SmartFlowPM Time Tracking")
    api_version: str = Field(default="1.0.0")
    api_prefix: str = Field(default="/api/v1")
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)

    # Database
    database_url: str = Field(
        default=f"sqlite:///{BASE_DIR / 'smartflow.db'}",
        description="SQLAlchemy database URL"
    )

    # JWT Configuration (verification only; tokens are issued elsewhere)
    jwt_secret_key: str = Field(default=DEVELOPMENT_JWT_SECRET, description="JWT secret key")
    jwt_algorithm: str = Field(default="HS256")

    # CORS
    cors_origins: Union[str, List[str]] = Field(default="http://localhost:3000,http://localhost:5173")

    # Pagination
    default_page_size: int = Field(default=20)
    max_page_size: int = Field(default=100)

    # Time tracking rules
    lock_submitted_time_entries: bool = Field(
        default=True,
        description="Reject edits to entries linked to a submitted or approved timesheet"
    )

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS origins from comma-separated string or list."""
        if isinstance(v, str):
            if not v.strip():
                return list(DEFAULT_CORS_ORIGINS)
            return [origin.strip() for origin in v.split(",")]
        elif v is None:
            return list(DEFAULT_CORS_ORIGINS)
        return v

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment.lower() == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() == "production"

    @property
    def is_testing(self) -> bool:
        """Check if running in testing environment."""
        return self.environment.lower() == "testing"

    def validate_environment(self) -> None:
        """Refuse to run production with missing values or the development JWT secret."""
        missing = [name.upper() for name in ("database_url", "jwt_secret_key") if not getattr(self, name)]
        if missing:
            raise ValueError(f"Missing required environment variables: {', '.join(missing)}")
        if self.jwt_secret_key == DEVELOPMENT_JWT_SECRET:
            raise ValueError("JWT_SECRET_KEY must be changed from the development default")


@lru_cache()
def get_settings() -> Settings:
    settings = Settings()
    if settings.is_production:
        settings.validate_environment()
    return settings


settings = get_settings()
