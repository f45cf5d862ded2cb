"""
Configuration management using Pydantic settings.
Handles database connection parameters, JWT secrets, and the bootstrap admin account.
"""

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings
from typing import Optional, List
from functools import lru_cache


DEFAULT_JWT_SECRET = "your_jwt_secret"


class Settings(BaseSettings):
    """Application settings loaded from environment variables or a .env file."""

    # Application configuration
    app_name: str = "Real Estate API"
    app_version: str = "1.0.0"
    environment: str = "development"
    debug: bool = False

    # Database configuration. When database_url is not given it is built
    # from the PG* values below.
    database_url: Optional[str] = None
    pguser: str = "postgres"
    pghost: str = "localhost"
    pgdatabase: str = "real_estate_db"
    pgpassword: str = "securepassword"
    pgport: int = 5432
    create_tables_on_startup: bool = True

    # JWT configuration
    jwt_secret: str = DEFAULT_JWT_SECRET
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24

    # Bootstrap admin account, created once at startup if missing
    admin_name: str = "Admin User"
    admin_email: str = "admin@realestate.com"
    admin_password: str = "changeme-admin"

    # API configuration
    api_prefix: str = "/api"
    cors_origins: List[str] = ["*"]
    max_request_size: int = 10 * 1024 * 1024  # 10MB

    # Server configuration
    host: str = "0.0.0.0"
    port: int = 3000

    @field_validator("jwt_secret")
    @classmethod
    def validate_jwt_secret(cls, v):
        """Validate JWT secret strength."""
        if not v:
            raise ValueError("JWT_SECRET is required")
        if len(v) < 32 and v != DEFAULT_JWT_SECRET:
            raise ValueError("JWT_SECRET must be at least 32 characters long")
        return v

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v):
        """Validate environment setting."""
        allowed_envs = ["development", "testing", "staging", "production"]
        if v not in allowed_envs:
            raise ValueError(f"Environment must be one of: {allowed_envs}")
        return v

    @model_validator(mode="after")
    def assemble_database_url(self):
        """Build the database URL from components and force the async driver."""
        if not self.database_url:
            self.database_url = (
                f"postgresql+asyncpg://{self.pguser}:{self.pgpassword}"
                f"@{self.pghost}:{self.pgport}/{self.pgdatabase}"
            )
        elif self.database_url.startswith("postgresql://"):
            self.database_url = self.database_url.replace("postgresql://", "postgresql+asyncpg://", 1)
        return self

    @property
    def is_testing(self) -> bool:
        """Check if running in testing mode."""
        return self.environment == "testing"

    @property
    def uses_sqlite(self) -> bool:
        """Check if the configured database is SQLite."""
        return self.database_url.startswith("sqlite")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    Used as a FastAPI dependency so handlers receive the process-wide configuration.
    """
    return Settings()
