"""Structured logging configuration built on structlog."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any

import structlog

LOG_FORMATS = frozenset({"json", "console", "plain"})


def _build_renderer(log_format: str) -> Any:
    """Return the final structlog processor for the requested format."""
    if log_format == "json":
        return structlog.processors.JSONRenderer()
    if log_format == "console":
        return structlog.dev.ConsoleRenderer(colors=False)
    return structlog.processors.KeyValueRenderer(
        key_order=["timestamp", "level", "event"],
    )


def _resolve_level(log_level: str) -> int:
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        msg = f"Unsupported log level: {log_level}"
        raise ValueError(msg)
    return level


def _configure_structlog(level: int, log_format: str) -> None:
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            _build_renderer(log_format),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


def configure_logging(
    log_level: str = "INFO",
    log_format: str = "json",
    log_file: Path | str | None = None,
) -> None:
    """Configure structlog and the stdlib root logger.

    Args:
        log_level: Minimum level name, e.g. ``"DEBUG"``.
        log_format: One of ``json``, ``console`` or ``plain``.
        log_file: Optional path that receives a copy of every record.

    """
    normalized_format = log_format.lower()
    if normalized_format not in LOG_FORMATS:
        msg = f"Unsupported log format: {log_format}"
        raise ValueError(msg)
    level = _resolve_level(log_level)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file is not None:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    logging.basicConfig(
        format="%(message)s",
        level=level,
        handlers=handlers,
        force=True,
    )
    _configure_structlog(level, normalized_format)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger bound to ``name``.

    Configuration is left to the application, see :func:`configure_logging`.
    """
    return structlog.get_logger(name)


__all__ = ["LOG_FORMATS", "configure_logging", "get_logger"]
