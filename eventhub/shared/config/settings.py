# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

import sys
from functools import lru_cache
from typing import Annotated

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

_ENV = SettingsConfigDict(
    env_file=".env",
    env_file_encoding="utf-8",
    extra="ignore",
    populate_by_name=True,
)

_INSECURE_SECRETS = ("dev", "development", "test", "change-me", "")


def _parse_csv(value: str | list[str]) -> list[str]:
    if isinstance(value, str):
        return [item.strip() for item in value.split(",") if item.strip()]
    return value


class DatabaseConfig(BaseSettings):
    url: str = Field("sqlite:///eventhub.db", alias="DATABASE_URL")
    pool_size: int = Field(10, ge=1, alias="DATABASE_POOL_SIZE")
    max_overflow: int = Field(5, ge=0, alias="DATABASE_MAX_OVERFLOW")
    pool_timeout: float = Field(30.0, ge=0.1, alias="DATABASE_POOL_TIMEOUT")

    model_config = _ENV


class AuthConfig(BaseSettings):
    jwt_secret: str = Field("dev", alias="JWT_SECRET")
    jwt_algorithm: str = Field("HS256", alias="JWT_ALGORITHM")
    token_ttl_seconds: int = Field(3600, ge=60, alias="TOKEN_TTL_SECONDS")

    model_config = _ENV


class UploadConfig(BaseSettings):
    max_bytes: int = Field(5 * 1024 * 1024, ge=1, alias="UPLOAD_MAX_BYTES")
    allowed_types: Annotated[list[str], NoDecode] = Field(
        ["image/jpeg", "image/jpg", "image/png"], alias="UPLOAD_ALLOWED_TYPES"
    )

    model_config = _ENV

    @field_validator("allowed_types", mode="before")
    @classmethod
    def _parse_types(cls, value: str | list[str]) -> list[str]:
        return [item.lower() for item in _parse_csv(value)]


class RealtimeConfig(BaseSettings):
    cors_origins: Annotated[list[str], NoDecode] = Field(["*"], alias="REALTIME_CORS_ORIGINS")
    async_delivery: bool = Field(True, alias="REALTIME_ASYNC_DELIVERY")

    model_config = _ENV

    @field_validator("cors_origins", mode="before")
    @classmethod
    def _parse_origins(cls, value: str | list[str]) -> list[str]:
        return _parse_csv(value)


class RegistrationConfig(BaseSettings):
    closes_at_start: bool = Field(True, alias="REGISTRATION_CLOSES_AT_START")

    model_config = _ENV


class SecurityConfig(BaseSettings):
    # CORS
    allowed_origins: Annotated[list[str], NoDecode] = Field(["*"], alias="ALLOWED_ORIGINS")

    # Rate limiting
    enable_rate_limit: bool = Field(True, alias="ENABLE_RATE_LIMIT")
    rate_limit_requests: int = Field(10, alias="RL_LIMIT")
    rate_limit_window: float = Field(60.0, alias="RL_WINDOW")

    # Reverse proxies in front of the app whose X-Forwarded-For is trusted
    trusted_proxy_count: int = Field(0, ge=0, alias="TRUSTED_PROXY_COUNT")

    # HSTS
    enable_hsts: bool = Field(False, alias="ENABLE_HSTS")

    model_config = _ENV

    @field_validator("allowed_origins", mode="before")
    @classmethod
    def _parse_origins(cls, value: str | list[str]) -> list[str]:
        return _parse_csv(value)

    @field_validator("enable_rate_limit", "enable_hsts", mode="before")
    @classmethod
    def _parse_bool(cls, value: str | bool) -> bool:
        if isinstance(value, str):
            return value.lower() in ("1", "true", "yes")
        return bool(value)


class AppConfig(BaseSettings):
    app_env: str = Field("development", alias="APP_ENV")
    secret_key: str = Field("dev", alias="SECRET_KEY")
    debug_logging: bool = Field(False, alias="DEBUG_LOGGING")

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    auth: AuthConfig = Field(default_factory=AuthConfig)
    uploads: UploadConfig = Field(default_factory=UploadConfig)
    realtime: RealtimeConfig = Field(default_factory=RealtimeConfig)
    registration: RegistrationConfig = Field(default_factory=RegistrationConfig)
    security: SecurityConfig = Field(default_factory=SecurityConfig)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        validate_assignment=True,
    )

    @field_validator("debug_logging", mode="before")
    @classmethod
    def _parse_debug_logging(cls, value: str | bool) -> bool:
        if isinstance(value, str):
            return value.lower() in ("1", "true", "yes")
        return bool(value)

    @model_validator(mode="after")
    def _validate_production_settings(self) -> "AppConfig":
        if not self.is_production():
            return self

        for name, value in (("SECRET_KEY", self.secret_key), ("JWT_SECRET", self.auth.jwt_secret)):
            if value in _INSECURE_SECRETS:
                print(
                    f"\n❌ CRITICAL SECURITY ERROR: Insecure {name} detected in production!\n"
                    f"   {name} must be a strong random value in production.\n"
                    "   Generate one with: python -c \"import secrets; print(secrets.token_urlsafe(32))\"\n",
                    file=sys.stderr,
                )
                sys.exit(1)

        warnings = []
        if "*" in self.security.allowed_origins:
            warnings.append("⚠️  CORS allows wildcard (*) origins")
        if "*" in self.realtime.cors_origins:
            warnings.append("⚠️  Socket.IO allows wildcard (*) origins")
        if not self.security.enable_hsts:
            warnings.append("⚠️  HSTS is DISABLED (recommended for HTTPS)")

        if warnings:
            print("\n⚠️  PRODUCTION SECURITY WARNINGS:", file=sys.stderr)
            for warning in warnings:
                print(f"   {warning}", file=sys.stderr)

        return self

    def is_production(self) -> bool:
        return self.app_env.lower() in ("production", "prod")


@lru_cache(maxsize=1)
def load_config() -> AppConfig:
    return AppConfig()


__all__ = ["AppConfig", "load_config"]
