"""Application settings.

Values are read from environment variables and an optional ``.env`` file.
"""

from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    environment: str = Field(default="dev", description="Deployment environment name")
    database_url: str = Field(
        default="sqlite+aiosqlite:///./hrms.db",
        description="Async SQLAlchemy URL for the application database",
    )
    db_auto_migrate: bool = Field(
        default=True,
        description="Create missing tables on startup (use Alembic outside of dev)",
    )

    log_level: str = Field(default="INFO", description="Root log level")
    log_format: str = Field(default="text", description="text | json")

    api_prefix: str = Field(default="/api/v1")
    cors_origins: str = Field(default="*", description="Comma separated list of allowed origins")

    @field_validator("log_level")
    @classmethod
    def _upper_log_level(cls, value: str) -> str:
        return value.strip().upper() or "INFO"

    @property
    def cors_origin_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


settings = Settings()
