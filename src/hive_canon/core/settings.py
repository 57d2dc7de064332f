"""Runtime settings for hive-canon.

``CanonSettings`` collects the few knobs the command line front-end needs
(log level and format, exit-code policy) from environment variables prefixed
with ``HIVE_CANON_`` and an optional ``.env`` file.

Examples:
    >>> import os
    >>> os.environ["HIVE_CANON_LOG_LEVEL"] = "DEBUG"
    >>> reset_settings()
    >>> get_settings().log_level
    'DEBUG'

Tags:
    settings, configuration, pydantic, environment, hive-canon
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class CanonSettings(BaseSettings):
    """Settings shared by the CLI and embedding applications.

    Fields
    ──────
    log_level        : Structlog log level
    json_logs        : Force JSON (True) or console (False) logs; None = auto
    fail_on_invalid  : ``enforce`` exits with code 2 when the result is invalid
    service_name     : ``service.name`` stamped on every log line
    """

    model_config = SettingsConfigDict(
        env_prefix="HIVE_CANON_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Observability ────────────────────────────────────────────
    log_level: str = "INFO"
    json_logs: bool | None = None
    service_name: str = "hive-canon"

    # ── Contract policy ──────────────────────────────────────────
    fail_on_invalid: bool = Field(
        default=True,
        description="Exit non-zero from `enforce` when required critical fields are unfilled",
    )

    @field_validator("log_level")
    @classmethod
    def _normalise_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unsupported log level: {value}")
        return level


@lru_cache(maxsize=1)
def get_settings() -> CanonSettings:
    """Return the process-wide settings instance."""
    return CanonSettings()


def reset_settings() -> None:
    """Drop the cached settings so the next call re-reads the environment."""
    get_settings.cache_clear()


__all__ = ["CanonSettings", "get_settings", "reset_settings"]
