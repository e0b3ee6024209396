"""Streaming evaluation metrics computed incrementally over batches."""

from .base import BaseComponent, StreamingMetric
from .classification import (
    AverageMethod,
    BinaryAccuracy,
    BinaryAuroc,
    BinaryConfusionMatrix,
    BinaryF1Score,
    BinaryHingeLoss,
    BinaryJaccardIndex,
    BinaryPrecision,
    BinaryRecall,
    BinaryStatScores,
    LabelAccuracy,
    MulticlassAccuracy,
    MulticlassF1Score,
    MulticlassJaccardIndex,
    MulticlassPrecision,
    MulticlassRecall,
    MulticlassStatScores,
    average_ratios,
)
from .collection import MetricCollection, MetricReport
from .configuration import (
    MetricDefinition,
    MetricKind,
    SuiteConfig,
    default_binary_suite,
    load_suite_config,
)
from .errors import (
    IncompatibleInputError,
    InvalidClassIndexError,
    InvalidLabelShapeError,
    LengthMismatchError,
    MetricError,
)
from .utils import (
    MetricAggregator,
    Reduction,
    configure_logging,
    configure_logging_from_settings,
    edit_distance,
    get_logger,
    get_settings,
    tokenize,
)

__all__ = [
    "AverageMethod",
    "BaseComponent",
    "BinaryAccuracy",
    "BinaryAuroc",
    "BinaryConfusionMatrix",
    "BinaryF1Score",
    "BinaryHingeLoss",
    "BinaryJaccardIndex",
    "BinaryPrecision",
    "BinaryRecall",
    "BinaryStatScores",
    "IncompatibleInputError",
    "InvalidClassIndexError",
    "InvalidLabelShapeError",
    "LabelAccuracy",
    "LengthMismatchError",
    "MetricAggregator",
    "MetricCollection",
    "MetricDefinition",
    "MetricError",
    "MetricKind",
    "MetricReport",
    "MulticlassAccuracy",
    "MulticlassF1Score",
    "MulticlassJaccardIndex",
    "MulticlassPrecision",
    "MulticlassRecall",
    "MulticlassStatScores",
    "Reduction",
    "StreamingMetric",
    "SuiteConfig",
    "average_ratios",
    "configure_logging",
    "configure_logging_from_settings",
    "default_binary_suite",
    "edit_distance",
    "get_logger",
    "get_settings",
    "load_suite_config",
    "tokenize",
]
