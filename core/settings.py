from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOCAL_CONNECTION = "Host=localhost;Port=5432;Username=postgres;Password=yourpassword;Database=it15_db;"

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _as_bool(value, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    if value is None or str(value).strip() == "":
        return default
    return str(value).strip().lower() in _TRUE_VALUES


class PortalSettings(BaseSettings):
    """Centralized application configuration pulled from environment/.env."""

    environment: str = Field("development", alias="APP_ENV")
    secret_key: str = Field("dev-secret", alias="SECRET_KEY")
    # Hosted deployments inject a single URL; local development falls back to DEFAULT_CONNECTION
    database_url: Optional[str] = Field(None, alias="DATABASE_URL")
    default_connection: str = Field(LOCAL_CONNECTION, alias="DEFAULT_CONNECTION")
    migrate_on_startup: bool = Field(True, alias="DB_MIGRATE_ON_STARTUP")
    seed_on_startup: bool = Field(True, alias="DB_SEED_ON_STARTUP")
    seed_admin_email: str = Field("admin@it15.local", alias="SEED_ADMIN_EMAIL")
    # Empty password means no admin account is seeded
    seed_admin_password: str = Field("", alias="SEED_ADMIN_PASSWORD")
    force_https: bool = Field(False, alias="FORCE_HTTPS")
    income_api_base_url: str = Field("https://fakestoreapi.com/", alias="INCOME_API_BASE_URL")
    http_timeout: float = Field(10.0, alias="HTTP_TIMEOUT")
    session_ttl: int = Field(2 * 60 * 60, alias="SESSION_TTL")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    json_logs: bool = Field(False, alias="JSON_LOGS")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("environment", mode="before")
    @classmethod
    def _normalize_environment(cls, value: str | None) -> str:
        val = (value or "development").strip().lower()
        if val in {"dev", "development"}:
            return "development"
        if val in {"test", "testing"}:
            return "testing"
        return "production"

    @field_validator("secret_key", mode="before")
    @classmethod
    def _normalize_secret(cls, value: str | None) -> str:
        val = (value or "dev-secret").strip()
        return val or "dev-secret"

    @field_validator("database_url", mode="before")
    @classmethod
    def _strip_database_url(cls, value: str | None) -> Optional[str]:
        if isinstance(value, str):
            value = value.strip()
            return value or None
        return value

    @field_validator("default_connection", mode="before")
    @classmethod
    def _strip_default_connection(cls, value: str | None) -> str:
        return (value or "").strip()

    @field_validator("seed_admin_email", "seed_admin_password", mode="before")
    @classmethod
    def _strip_seed_values(cls, value: str | None) -> str:
        return (value or "").strip()

    @field_validator("migrate_on_startup", "seed_on_startup", mode="before")
    @classmethod
    def _parse_default_on(cls, value) -> bool:
        return _as_bool(value, True)

    @field_validator("force_https", "json_logs", mode="before")
    @classmethod
    def _parse_default_off(cls, value) -> bool:
        return _as_bool(value, False)

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: str | None) -> str:
        val = (value or "INFO").strip().upper()
        if val not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            return "INFO"
        return val

    @property
    def is_development(self) -> bool:
        return self.environment == "development"


@lru_cache(maxsize=1)
def get_settings() -> PortalSettings:
    return PortalSettings()


def reset_settings_cache() -> None:
    """Testing helper to clear cached settings."""
    get_settings.cache_clear()
