# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from functools import lru_cache
from pathlib import Path
from typing import Annotated

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from balitour.shared.errors.base import ConfigurationError

DEV_JWT_SECRET = "balitour-development-only-signing-secret"
_PLACEHOLDER_SECRETS = ("dev", "development", "test", "changeme", "your-secret-key-here", "")


def _parse_bool(value: str | bool | None) -> bool | None:
    if value is None:
        return None
    if isinstance(value, str):
        if not value.strip():
            return None
        return value.strip().lower() in ("1", "true", "yes")
    return bool(value)


class AuthConfig(BaseSettings):
    max_attempts: int = Field(5, ge=1, alias="LOGIN_MAX_ATTEMPTS")
    lockout_minutes: float = Field(15.0, gt=0, alias="LOGIN_LOCKOUT_MINUTES")
    session_ttl_days: int = Field(7, ge=1, alias="SESSION_TTL_DAYS")

    model_config = SettingsConfigDict(validate_by_name=True, extra="ignore")

    @property
    def lockout_seconds(self) -> float:
        return self.lockout_minutes * 60

    @property
    def session_ttl_seconds(self) -> int:
        return self.session_ttl_days * 24 * 60 * 60


class SecurityConfig(BaseSettings):
    # None means "secure in production only"
    cookie_secure: bool | None = Field(None, alias="COOKIE_SECURE")

    allowed_origins: Annotated[list[str], NoDecode] = Field(["*"], alias="ALLOWED_ORIGINS")

    enable_hsts: bool = Field(False, alias="ENABLE_HSTS")

    # Number of reverse proxies whose X-Forwarded-* headers are trusted.
    trusted_proxies: int = Field(0, ge=0, alias="TRUSTED_PROXIES")

    model_config = SettingsConfigDict(validate_by_name=True, extra="ignore")

    @field_validator("allowed_origins", mode="before")
    @classmethod
    def _parse_origins(cls, value: str | list[str]) -> list[str]:
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    @field_validator("cookie_secure", mode="before")
    @classmethod
    def _parse_cookie_secure(cls, value: str | bool | None) -> bool | None:
        return _parse_bool(value)

    @field_validator("enable_hsts", mode="before")
    @classmethod
    def _parse_hsts(cls, value: str | bool) -> bool:
        return bool(_parse_bool(value))


class CatalogConfig(BaseSettings):
    directory: Path = Field(Path("instance/catalog"), alias="CATALOG_DIR")

    model_config = SettingsConfigDict(validate_by_name=True, extra="ignore")


def _auth_config_factory() -> AuthConfig:
    return AuthConfig()  # type: ignore[call-arg]


def _security_config_factory() -> SecurityConfig:
    return SecurityConfig()  # type: ignore[call-arg]


def _catalog_config_factory() -> CatalogConfig:
    return CatalogConfig()  # type: ignore[call-arg]


class AppConfig(BaseSettings):
    app_env: str = Field("development", alias="APP_ENV")
    jwt_secret: str | None = Field(None, alias="JWT_SECRET")
    admin_email: str = Field("admin@example.com", alias="ADMIN_EMAIL")
    admin_password_hash: str | None = Field(None, alias="ADMIN_PASSWORD_HASH")
    user_email: str = Field("user@example.com", alias="USER_EMAIL")
    user_password_hash: str | None = Field(None, alias="USER_PASSWORD_HASH")
    debug_logging: bool = Field(False, alias="DEBUG_LOGGING")

    auth: AuthConfig = Field(default_factory=_auth_config_factory)
    security: SecurityConfig = Field(default_factory=_security_config_factory)
    catalog: CatalogConfig = Field(default_factory=_catalog_config_factory)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        validate_by_name=True,
        validate_assignment=True,
    )

    @field_validator("admin_password_hash", "user_password_hash", "jwt_secret", mode="before")
    @classmethod
    def _blank_is_unset(cls, value: str | None) -> str | None:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("debug_logging", mode="before")
    @classmethod
    def _parse_debug_logging(cls, value: str | bool) -> bool:
        return bool(_parse_bool(value))

    @model_validator(mode="after")
    def _validate_production_settings(self) -> "AppConfig":
        if not self.is_production():
            return self

        if self.jwt_secret is None:
            raise ConfigurationError(
                "JWT_SECRET must be set in production", setting="JWT_SECRET"
            )
        if self.jwt_secret.lower() in _PLACEHOLDER_SECRETS:
            raise ConfigurationError(
                "JWT_SECRET must be a strong random value in production",
                setting="JWT_SECRET",
            )
        return self

    def is_production(self) -> bool:
        return self.app_env.lower() in ("production", "prod")

    def is_development(self) -> bool:
        return self.app_env.lower() in ("development", "dev")

    @property
    def signing_secret(self) -> str:
        return self.jwt_secret or DEV_JWT_SECRET

    @property
    def secure_cookies(self) -> bool:
        if self.security.cookie_secure is not None:
            return self.security.cookie_secure
        return self.is_production()


@lru_cache(maxsize=1)
def load_config() -> AppConfig:
    return AppConfig()  # type: ignore[call-arg]


__all__ = ["AppConfig", "AuthConfig", "CatalogConfig", "SecurityConfig", "load_config"]
