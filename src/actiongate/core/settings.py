"""
Central configuration for actiongate.

This module provides a single, typed configuration object that reads from
environment variables (12-factor style) using pydantic-settings.

Usage:

    from actiongate.core.settings import get_settings

    settings = get_settings()
    interval = settings.registry.refresh_seconds
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from actiongate.protocol.enums import SecurityLevel

DEFAULT_REGISTRY_URL = "https://actions-registry.dialectapi.to/all"


class RegistrySettings(BaseSettings):
    url: str = Field(
        default=DEFAULT_REGISTRY_URL,
        validation_alias="ACTIONGATE_REGISTRY_URL",
        description="Endpoint serving the trust registry snapshot.",
    )
    refresh_seconds: float = Field(
        default=600.0,
        validation_alias="ACTIONGATE_REGISTRY_REFRESH_SECONDS",
        description="Interval between registry refreshes (default 10 minutes).",
    )

    @field_validator("refresh_seconds")
    @classmethod
    def _validate_refresh(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("ACTIONGATE_REGISTRY_REFRESH_SECONDS must be positive")
        return v

    model_config = SettingsConfigDict(env_prefix="", extra="ignore", populate_by_name=True)


class HTTPSettings(BaseSettings):
    timeout: float = Field(
        default=10.0,
        validation_alias="ACTIONGATE_HTTP_TIMEOUT",
        description="Timeout in seconds for registry and action endpoint calls.",
    )
    user_agent: str = Field(
        default="actiongate/0.1",
        validation_alias="ACTIONGATE_HTTP_USER_AGENT",
    )

    model_config = SettingsConfigDict(env_prefix="", extra="ignore", populate_by_name=True)


class SecuritySettings(BaseSettings):
    level: SecurityLevel = Field(
        default=SecurityLevel.ONLY_TRUSTED,
        validation_alias="ACTIONGATE_SECURITY_LEVEL",
        description="Policy applied to all three domains when none is passed explicitly.",
    )

    model_config = SettingsConfigDict(env_prefix="", extra="ignore", populate_by_name=True)


class RuntimeSettings(BaseSettings):
    log_level: str = Field(
        default="INFO",
        validation_alias="ACTIONGATE_LOG_LEVEL",
        description="Log level for the actiongate logger namespace.",
    )

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, v: str) -> str:
        v = (v or "INFO").upper()
        if v not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            return "INFO"
        return v

    model_config = SettingsConfigDict(env_prefix="", extra="ignore", populate_by_name=True)


class ActionGateSettings(BaseSettings):
    """
    Root configuration object.

    Aggregates:
      - Registry
      - HTTP
      - Security
      - Runtime
    """

    registry: RegistrySettings = Field(default_factory=RegistrySettings)
    http: HTTPSettings = Field(default_factory=HTTPSettings)
    security: SecuritySettings = Field(default_factory=SecuritySettings)
    runtime: RuntimeSettings = Field(default_factory=RuntimeSettings)

    model_config = SettingsConfigDict(env_prefix="", extra="ignore", populate_by_name=True)


@lru_cache(maxsize=1)
def get_settings() -> ActionGateSettings:
    """
    Cached accessor for ActionGateSettings.

    Tests that tweak the environment call get_settings.cache_clear().
    """
    return ActionGateSettings()
