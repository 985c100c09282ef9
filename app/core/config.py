"""
Application configuration loaded from environment variables.

A single Settings instance is built at startup and handed to create_app(),
which keeps it on app.state for the dependencies that need it.
"""
from functools import lru_cache
from typing import List, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Application
    app_name: str = "Job Portal API"
    host: str = "0.0.0.0"
    port: int = 3000
    static_dir: str = "static"
    cors_origins: List[str] = ["*"]

    # Database
    database_url: str = "sqlite:///./job_portal.db"
    run_migrations: bool = False

    # Security
    secret_key: str = "change-me-in-production"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60

    # Logging
    log_level: str = "INFO"
    log_file: Optional[str] = None

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    @field_validator("database_url")
    @classmethod
    def normalize_postgres_scheme(cls, v: str) -> str:
        # Hosted Postgres providers still hand out postgres:// URLs
        if v.startswith("postgres://"):
            return v.replace("postgres://", "postgresql://", 1)
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()
