"""Application settings and configuration management."""
from typing import Literal, Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BackendSettings(BaseSettings):
    """Remote room-management backend configuration."""

    # API_BASE_URL; VITE_API_BASE_URL is what the web build used
    base_url: str = Field(
        default="",
        validation_alias=AliasChoices("API_BASE_URL", "VITE_API_BASE_URL"),
    )
    request_timeout: float = 15.0

    login_path: str = "/auth/login"
    register_path: str = "/auth/register"
    rooms_list_path: str = "/api/rooms/{hotel_id}"
    rooms_create_path: str = "/api/rooms"

    model_config = SettingsConfigDict(
        env_prefix="API_",
        populate_by_name=True,
        frozen=True,
    )


class SessionSettings(BaseSettings):
    """Where the session credential is persisted between runs."""

    storage: Literal["file", "memory", "redis"] = "file"
    storage_key: str = "token"
    file_path: str = "~/.roomdesk/session.json"

    model_config = SettingsConfigDict(env_prefix="SESSION_")


class RedisSettings(BaseSettings):
    """Redis configuration for the shared session store."""

    host: str = "localhost"
    port: int = 6379
    db: int = 0
    password: Optional[str] = None
    ssl: bool = False
    socket_timeout: int = 5
    socket_connect_timeout: int = 5

    model_config = SettingsConfigDict(env_prefix="REDIS_")


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: Literal["json", "console"] = "console"

    model_config = SettingsConfigDict(env_prefix="LOG_")


class Settings(BaseSettings):
    """Main application settings."""

    environment: Literal["dev", "staging", "prod"] = "dev"
    debug: bool = False

    # Default hotel scope for the CLI (HOTEL_ID)
    hotel_id: str = ""

    # Sub-settings
    backend: BackendSettings = BackendSettings()
    session: SessionSettings = SessionSettings()
    redis: RedisSettings = RedisSettings()
    logging: LoggingSettings = LoggingSettings()

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )


# Global settings instance
settings = Settings()
