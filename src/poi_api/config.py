"""Application configuration."""

import json

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    database_url: str = "postgresql+asyncpg://localhost/poi_map"
    database_url_sync: str = "postgresql://localhost/poi_map"

    session_expire_days: int = 7

    # Auth mode: "dev" uses X-User-Id header, "production" uses Bearer token
    auth_mode: str = "dev"

    # Logging
    log_level: str = "info"

    # Download name for GET /api/pois/export
    export_filename: str = "pois-export.json"

    # CORS configuration
    frontend_url: str = "http://localhost:5173"
    cors_origins: list[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
    ]

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS origins from string (JSON or comma-separated) or list."""
        if isinstance(v, str):
            try:
                parsed = json.loads(v)
                if isinstance(parsed, list):
                    return parsed
            except json.JSONDecodeError:
                pass
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @field_validator("auth_mode")
    @classmethod
    def validate_auth_mode(cls, v: str) -> str:
        """Only dev and production auth modes exist."""
        mode = v.strip().lower()
        if mode not in ("dev", "production"):
            raise ValueError(f"auth_mode must be 'dev' or 'production', got {v!r}")
        return mode


settings = Settings()
