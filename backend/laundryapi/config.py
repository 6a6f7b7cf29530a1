"""
Laundry API Backend: Application Configuration
================================================

What:  Centralized configuration management using Pydantic Settings.
Why:   Type-safe environment variable loading with validation on startup.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by every module that needs configuration values.
When:  Loaded once at module import time; validated before app starts.
"""

from pathlib import Path
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have defaults suitable for local development.
    Production deployments MUST override JWT_SECRET and OWNER_PASSWORD.
    """

    # ── Store ─────────────────────────────────────────────────────────────
    # What: Path of the SQLite database file, relative to the backend CWD
    # The async driver URL is derived from it (see database_url below)
    database_path: str = Field(
        default="./dlsmlaundry.db",
        description="SQLite database file used as the relational store",
    )

    @property
    def database_url(self) -> str:
        """Async SQLAlchemy URL for the configured SQLite file."""
        return f"sqlite+aiosqlite:///{Path(self.database_path).as_posix()}"

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="127.0.0.1")
    backend_port: int = Field(default=5000, ge=1, le=65535)

    # What: Versioned prefix every API router is mounted under
    api_prefix: str = Field(default="/api/v1")

    # ── CORS ──────────────────────────────────────────────────────────────
    # Format: Comma-separated origins, or "*" for any origin
    cors_origins: str = Field(default="*")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Credentials ───────────────────────────────────────────────────────
    # What: HMAC secret for signing session tokens (HS256)
    jwt_secret: str = Field(default="secret")

    # What: Lifetime of an issued session token, in seconds (default: 24h)
    token_ttl_seconds: int = Field(default=86400, ge=60, le=2_592_000)

    # What: bcrypt work factor; each +1 doubles hashing time
    password_hash_rounds: int = Field(default=9, ge=4, le=14)

    # ── Owner Seed ────────────────────────────────────────────────────────
    # What: Account inserted as user id = 1 when the users table is empty
    owner_name: str = Field(default="Owner")
    owner_username: str = Field(default="owner")
    owner_email: str = Field(default="owner@laundry.local")
    owner_password: str = Field(default="owner")

    # ── Logging ───────────────────────────────────────────────────────────
    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    @field_validator("api_prefix")
    @classmethod
    def validate_api_prefix(cls, v: str) -> str:
        """Normalizes the prefix to '/segment' form without a trailing slash."""
        v = "/" + v.strip().strip("/")
        return "" if v == "/" else v

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }

    def validate_required_for_production(self) -> None:
        """
        What:  Validates that security-sensitive settings were overridden.
        When:  Called during app startup (lifespan).
        How:   Collects every problem and raises one ValueError listing them.
        """
        errors = []
        if self.jwt_secret == "secret":
            errors.append("JWT_SECRET is using the development default. Set a long random value.")
        if self.owner_password == "owner":
            errors.append("OWNER_PASSWORD is using the development default.")
        if errors:
            raise ValueError(
                "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
            )


# Singleton instance, imported throughout the application
settings = Settings()
