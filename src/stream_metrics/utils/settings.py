"""Environment driven settings for stream-metrics."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from dotenv import find_dotenv, load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .logger import LOG_FORMATS, configure_logging


class MetricsSettings(BaseSettings):
    """Settings read from ``STREAM_METRICS_*`` environment variables."""

    log_level: str = Field(default="INFO", description="Minimum log level")
    log_format: str = Field(
        default="json",
        description="Renderer used for log records (json, console or plain)",
    )
    log_file_path: Path | None = Field(
        default=None,
        description="Optional file receiving a copy of every log record",
    )
    default_threshold: float = Field(
        default=0.5,
        ge=0.0,
        le=1.0,
        description="Decision threshold used when a binary metric omits one",
    )
    default_bins: int = Field(
        default=0,
        ge=0,
        description="AUROC histogram size when omitted; 0 selects exact mode",
    )

    model_config = SettingsConfigDict(
        env_prefix="STREAM_METRICS_",
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def _normalise_level(cls, value: str) -> str:
        return value.upper()

    @field_validator("log_format")
    @classmethod
    def _validate_format(cls, value: str) -> str:
        normalized = value.lower()
        if normalized not in LOG_FORMATS:
            msg = f"log_format must be one of {sorted(LOG_FORMATS)}"
            raise ValueError(msg)
        return normalized

    @field_validator("default_bins")
    @classmethod
    def _validate_bins(cls, value: int) -> int:
        if value == 1:
            msg = "default_bins must be 0 (exact) or at least 2"
            raise ValueError(msg)
        return value


@lru_cache(maxsize=1)
def get_settings() -> MetricsSettings:
    """Return the cached settings instance."""
    return MetricsSettings()


def reset_settings() -> None:
    """Drop the cached settings so the environment is read again."""
    get_settings.cache_clear()


def load_settings(dotenv_path: Path | str | None = None) -> MetricsSettings:
    """Load variables from a ``.env`` file and return fresh settings.

    Args:
        dotenv_path: Optional path to .env file to load. Without one, the
            nearest ``.env`` at or above the working directory is used.

    """
    if dotenv_path:
        load_dotenv(dotenv_path, override=True)
    else:
        load_dotenv(find_dotenv(usecwd=True), override=True)
    reset_settings()
    return get_settings()


def configure_logging_from_settings(settings: MetricsSettings | None = None) -> None:
    """Apply the logging level, format and file declared in ``settings``."""
    resolved = settings if settings is not None else get_settings()
    configure_logging(
        log_level=resolved.log_level,
        log_format=resolved.log_format,
        log_file=resolved.log_file_path,
    )


__all__ = [
    "MetricsSettings",
    "configure_logging_from_settings",
    "get_settings",
    "load_settings",
    "reset_settings",
]
