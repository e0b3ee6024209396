"""Shared helpers: validation, logging, settings and text utilities."""

from .aggregator import MetricAggregator, Reduction
from .logger import configure_logging, get_logger
from .settings import (
    MetricsSettings,
    configure_logging_from_settings,
    get_settings,
    load_settings,
    reset_settings,
)
from .text import edit_distance, tokenize
from .validation import (
    verify_binary_label,
    verify_finite_order,
    verify_label,
    verify_lengths,
    verify_range,
)

__all__ = [
    "MetricAggregator",
    "MetricsSettings",
    "Reduction",
    "configure_logging",
    "configure_logging_from_settings",
    "edit_distance",
    "get_logger",
    "get_settings",
    "load_settings",
    "reset_settings",
    "tokenize",
    "verify_binary_label",
    "verify_finite_order",
    "verify_label",
    "verify_lengths",
    "verify_range",
]
