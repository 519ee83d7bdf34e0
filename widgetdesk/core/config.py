"""Core configuration settings for the server."""

import os
from functools import lru_cache
from typing import Optional

from loguru import logger
from pydantic import computed_field, field_validator, model_validator
from pydantic_settings import BaseSettings

_HMAC_ALGORITHMS = ("HS256", "HS384", "HS512")
_DEFAULT_SECRET = "widgetdesk-development-secret"


class Settings(BaseSettings):
    """Server settings loaded from environment variables."""

    # Development settings
    reload: bool = False
    debug: bool = False

    # API settings
    api_host: str = "127.0.0.1"
    api_port: int = 8001
    service_name: str = "widgetdesk"

    # Database settings
    database_url: str = "sqlite+aiosqlite:///./widgetdesk.db"
    database_echo: bool = False

    # Authentication settings
    jwt_secret_key: str = _DEFAULT_SECRET
    jwt_algorithm: str = "HS256"
    token_expiration_minutes: int = 10080  # 7 days
    auth_cookie_name: str = "widgetdesk_token"
    auth_cookie_secure: bool = False
    login_path: str = "/auth/login"
    dashboard_path: str = "/dashboard"

    # Notes autosave debounce window, seconds
    note_autosave_delay: float = 1.0

    # Simulated latency of the heuristic suggestion generators, seconds
    task_suggestion_latency: float = 0.5
    note_suggestion_latency: float = 0.8
    note_summary_latency: float = 0.6

    # Canvas settings
    placement_jitter: float = 200
    viewport_width: int = 1280
    viewport_height: int = 800

    # Logging
    log_level: str = "INFO"
    log_file: Optional[str] = None

    @computed_field
    @property
    def is_sqlite(self) -> bool:
        """Whether the configured database is SQLite."""
        return self.database_url.startswith("sqlite")

    @field_validator("jwt_algorithm")
    @classmethod
    def validate_jwt_algorithm(cls, value: str) -> str:
        """Upper-case and restrict to the HMAC family."""
        value = value.upper()
        if value not in _HMAC_ALGORITHMS:
            raise ValueError(
                f"Unsupported jwt_algorithm '{value}', expected one of {_HMAC_ALGORITHMS}"
            )
        return value

    @field_validator(
        "note_autosave_delay",
        "task_suggestion_latency",
        "note_suggestion_latency",
        "note_summary_latency",
        "placement_jitter",
    )
    @classmethod
    def validate_non_negative(cls, value: float) -> float:
        if value < 0:
            raise ValueError("Delays and offsets must be non-negative")
        return value

    @model_validator(mode="after")
    def warn_on_default_secret(self) -> "Settings":
        if self.jwt_secret_key == _DEFAULT_SECRET or len(self.jwt_secret_key) < 16:
            logger.warning(
                "Using a weak JWT secret; set WIDGETDESK_JWT_SECRET_KEY in production"
            )
        return self

    class Config:
        env_prefix = "WIDGETDESK_"
        env_file = str(os.getenv("WIDGETDESK_ENV_FILE", ".env"))
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache
def get_server_settings() -> Settings:
    """Get cached server settings instance.

    Returns:
        Settings instance configured for server operations
    """
    return Settings()
