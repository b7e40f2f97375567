#!/usr/bin/env python3
"""
Centralized Configuration Module using Pydantic Settings

This module provides type-safe, environment-based configuration for the
vendor list cache engine. Adapters and the resolver read their defaults
from here so deployments tune TTLs, endpoints and the external tier without
code changes.

Architectural Decision: Pydantic Settings for type safety and validation
- Environment variable loading with .env support
- Type validation at startup (fail fast on misconfiguration)
- Easy testing with reload_settings()

Date: 2026-03-02
"""

from typing import Annotated, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from vendorlist_cache.core.config.constants import (
    DEFAULT_APP_NAMESPACE,
    DEFAULT_GVL_ENDPOINT,
    DEFAULT_ORIGIN_TIMEOUT,
    EXTERNAL_TTL_MS,
    MEMORY_TTL_MS,
)


class CacheSettings(BaseSettings):
    """
    TTL configuration for the two cache tiers.

    The memory tier TTL is deliberately shorter than the external tier TTL.
    """

    CACHE_MEMORY_TTL_MS: int = Field(default=MEMORY_TTL_MS, gt=0, description="Memory tier TTL (ms)")
    CACHE_EXTERNAL_TTL_MS: int = Field(default=EXTERNAL_TTL_MS, gt=0, description="External tier TTL (ms)")

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=True)


class OriginSettings(BaseSettings):
    """Vendor list origin endpoint configuration."""

    GVL_ENDPOINT: str = Field(default=DEFAULT_GVL_ENDPOINT, description="Vendor list endpoint")
    GVL_REQUEST_TIMEOUT: float = Field(default=DEFAULT_ORIGIN_TIMEOUT, gt=0, description="Origin timeout (s)")
    GVL_VENDOR_IDS: Annotated[list[int] | None, NoDecode] = Field(
        default=None, description="Vendor id allowlist"
    )

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=True)


class RedisSettings(BaseSettings):
    """
    External tier connection settings.

    Either the Upstash REST pair or a plain Redis URL may be configured.
    """

    UPSTASH_REDIS_REST_URL: str | None = Field(default=None, description="Upstash REST URL")
    UPSTASH_REDIS_REST_TOKEN: str | None = Field(default=None, description="Upstash REST token")
    REDIS_URL: str | None = Field(default=None, description="Redis URL (redis://...)")

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=True)


class LoggingSettings(BaseSettings):
    """
    Logging configuration for structured logging.

    Architectural Decision: structlog for production-grade logging
    """

    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    LOG_FORMAT: Literal["json", "console"] = Field(default="json", description="Log output format")

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=True)


class Settings(BaseSettings):
    """
    Main settings class that aggregates all configuration sections.

    Usage:
        from vendorlist_cache.core.config.settings import get_settings

        settings = get_settings()
        ttl = settings.cache.CACHE_MEMORY_TTL_MS
        endpoint = settings.origin.GVL_ENDPOINT
    """

    APP_NAMESPACE: str = Field(default=DEFAULT_APP_NAMESPACE, description="Cache key namespace")

    # Cache settings
    CACHE_MEMORY_TTL_MS: int = Field(default=MEMORY_TTL_MS, gt=0, description="Memory tier TTL (ms)")
    CACHE_EXTERNAL_TTL_MS: int = Field(default=EXTERNAL_TTL_MS, gt=0, description="External tier TTL (ms)")

    # Origin settings
    GVL_ENDPOINT: str = Field(default=DEFAULT_GVL_ENDPOINT, description="Vendor list endpoint")
    GVL_REQUEST_TIMEOUT: float = Field(default=DEFAULT_ORIGIN_TIMEOUT, gt=0, description="Origin timeout (s)")
    GVL_VENDOR_IDS: Annotated[list[int] | None, NoDecode] = Field(
        default=None, description="Vendor id allowlist (comma-separated)"
    )

    # External tier settings
    UPSTASH_REDIS_REST_URL: str | None = Field(default=None, description="Upstash REST URL")
    UPSTASH_REDIS_REST_TOKEN: str | None = Field(default=None, description="Upstash REST token")
    REDIS_URL: str | None = Field(default=None, description="Redis URL (redis://...)")

    # Logging settings
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    LOG_FORMAT: Literal["json", "console"] = Field(default="json", description="Log output format")

    @field_validator("APP_NAMESPACE")
    @classmethod
    def validate_namespace(cls, v):
        """Namespace becomes the first cache key segment."""
        if not v or ":" in v:
            raise ValueError("APP_NAMESPACE must be non-empty and must not contain ':'")
        return v

    @field_validator("GVL_VENDOR_IDS", mode="before")
    @classmethod
    def parse_vendor_ids(cls, v):
        """Accept "1,2,3", "[1, 2, 3]" or a list."""
        if v is None or isinstance(v, list):
            return v
        if isinstance(v, str):
            text = v.strip().strip("[]")
            if not text:
                return None
            return [int(part) for part in text.split(",") if part.strip()]
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of {valid_levels}")
        return v.upper()

    # Nested configuration views
    @property
    def cache(self) -> "CacheSettings":
        """Get cache settings."""
        return CacheSettings(
            CACHE_MEMORY_TTL_MS=self.CACHE_MEMORY_TTL_MS,
            CACHE_EXTERNAL_TTL_MS=self.CACHE_EXTERNAL_TTL_MS,
        )

    @property
    def origin(self) -> "OriginSettings":
        """Get origin settings."""
        return OriginSettings(
            GVL_ENDPOINT=self.GVL_ENDPOINT,
            GVL_REQUEST_TIMEOUT=self.GVL_REQUEST_TIMEOUT,
            GVL_VENDOR_IDS=self.GVL_VENDOR_IDS,
        )

    @property
    def redis(self) -> "RedisSettings":
        """Get external tier settings."""
        return RedisSettings(
            UPSTASH_REDIS_REST_URL=self.UPSTASH_REDIS_REST_URL,
            UPSTASH_REDIS_REST_TOKEN=self.UPSTASH_REDIS_REST_TOKEN,
            REDIS_URL=self.REDIS_URL,
        )

    @property
    def logging(self) -> "LoggingSettings":
        """Get logging settings."""
        return LoggingSettings(LOG_LEVEL=self.LOG_LEVEL, LOG_FORMAT=self.LOG_FORMAT)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )


# Global settings instance (singleton pattern)
_settings: Settings | None = None


def get_settings() -> Settings:
    """
    Get the global settings instance (singleton).

    Returns:
        Settings: Global settings instance
    """
    global _settings

    if _settings is None:
        _settings = Settings()

    return _settings


def reload_settings() -> Settings:
    """
    Reload settings (useful for testing).

    Returns:
        Settings: New settings instance
    """
    global _settings
    _settings = Settings()
    return _settings
