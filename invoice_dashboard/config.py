"""
Configuration settings for the invoice dashboard action layer.

Uses Pydantic Settings to load environment variables for the database
connection, logging, the route cache, sessions, and the behaviour switches of
the invoice actions.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Database
    postgres_url: Optional[str] = Field(None, alias="POSTGRES_URL")
    db_host: str = Field("localhost", alias="DB_HOST")
    db_port: int = Field(5432, alias="DB_PORT")
    db_user: str = Field("postgres", alias="DB_USER")
    db_password: str = Field("postgres", alias="DB_PASSWORD")
    db_name: str = Field("invoice_dashboard", alias="DB_NAME")
    db_sslmode: str = Field("prefer", alias="DB_SSLMODE")
    db_pool_min_size: int = Field(1, alias="DB_POOL_MIN_SIZE")
    db_pool_max_size: int = Field(10, alias="DB_POOL_MAX_SIZE")

    # Application
    app_env: str = Field("development", alias="APP_ENV")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_json: bool = Field(False, alias="LOG_JSON")

    # Route cache and sessions
    cache_dir: str = Field(".cache/routes", alias="CACHE_DIR")
    session_ttl_seconds: int = Field(30 * 24 * 60 * 60, alias="SESSION_TTL_SECONDS")

    # Invoice actions
    missing_id_policy: Literal["ignore", "report"] = Field("ignore", alias="MISSING_ID_POLICY")
    update_surfaces_errors: bool = Field(True, alias="UPDATE_SURFACES_ERRORS")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Retrieve a cached instance of Settings to avoid repeated env parsing.
    """
    return Settings()


__all__ = ["Settings", "get_settings"]
