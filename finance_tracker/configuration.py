"""Mini README: Centralised configuration for the Finance Tracker service.

Structure:
    * FinanceTrackerSettings - pydantic-settings model describing runtime options.
    * get_settings - cached accessor for environment-aware settings.

Usage:
    The listening port honours the conventional ``PORT`` variable (falling back
    to ``FINANCE_TRACKER_PORT``) and defaults to 3000. Every other option uses
    the ``FINANCE_TRACKER_`` prefix. Settings are cached per process; tests
    call ``get_settings.cache_clear()`` after changing the environment.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import List

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class FinanceTrackerSettings(BaseSettings):
    """Runtime configuration for the Finance Tracker API."""

    model_config = SettingsConfigDict(
        env_prefix="FINANCE_TRACKER_",
        env_file=".env",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
    )

    host: str = Field(
        "0.0.0.0",
        description="Network interface for the HTTP service to bind to.",
    )
    port: int = Field(
        3000,
        description="Port the HTTP service listens on.",
        ge=1,
        le=65535,
        validation_alias=AliasChoices("PORT", "FINANCE_TRACKER_PORT", "port"),
    )
    log_level: str = Field(
        "INFO",
        description="Root logging level name, e.g. DEBUG or WARNING.",
    )
    cors_origins: List[str] = Field(
        default_factory=lambda: ["*"],
        description="Origins allowed by the CORS middleware.",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalise_level(cls, value: object) -> str:
        """Upper-case the level name and reject names logging does not know."""

        name = str(value).strip().upper()
        if not isinstance(logging.getLevelName(name), int):
            raise ValueError(f"Unknown log level: {value}")
        return name


@lru_cache()
def get_settings() -> FinanceTrackerSettings:
    """Return cached settings, ensuring consistent configuration across modules."""

    return FinanceTrackerSettings()
