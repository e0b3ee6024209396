"""Load metric suite definitions from YAML and build metric collections."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from enum import Enum
from pathlib import Path
from typing import Any, cast

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from stream_metrics.base import StreamingMetric
from stream_metrics.classification import (
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
)
from stream_metrics.collection import MetricCollection
from stream_metrics.utils.settings import get_settings


class MetricKind(str, Enum):
    """Metric types that can be declared in a suite configuration."""

    BINARY_STAT_SCORES = "binary_stat_scores"
    BINARY_ACCURACY = "binary_accuracy"
    BINARY_PRECISION = "binary_precision"
    BINARY_RECALL = "binary_recall"
    BINARY_F1 = "binary_f1"
    BINARY_JACCARD = "binary_jaccard"
    BINARY_CONFUSION_MATRIX = "binary_confusion_matrix"
    BINARY_AUROC = "binary_auroc"
    BINARY_HINGE = "binary_hinge"
    MULTICLASS_STAT_SCORES = "multiclass_stat_scores"
    MULTICLASS_ACCURACY = "multiclass_accuracy"
    MULTICLASS_PRECISION = "multiclass_precision"
    MULTICLASS_RECALL = "multiclass_recall"
    MULTICLASS_F1 = "multiclass_f1"
    MULTICLASS_JACCARD = "multiclass_jaccard"
    LABEL_ACCURACY = "label_accuracy"

    @property
    def family(self) -> str:
        """Input family: ``binary``, ``multiclass``, ``hinge`` or ``label``."""
        if self is MetricKind.BINARY_HINGE:
            return "hinge"
        return self.value.split("_", 1)[0]


_THRESHOLDED_KINDS = {
    MetricKind.BINARY_STAT_SCORES: BinaryStatScores,
    MetricKind.BINARY_ACCURACY: BinaryAccuracy,
    MetricKind.BINARY_PRECISION: BinaryPrecision,
    MetricKind.BINARY_RECALL: BinaryRecall,
    MetricKind.BINARY_F1: BinaryF1Score,
    MetricKind.BINARY_JACCARD: BinaryJaccardIndex,
    MetricKind.BINARY_CONFUSION_MATRIX: BinaryConfusionMatrix,
}

_AVERAGED_KINDS: dict[MetricKind, Callable[..., StreamingMetric[Any, Any]]] = {
    MetricKind.MULTICLASS_ACCURACY: MulticlassAccuracy,
    MetricKind.MULTICLASS_PRECISION: MulticlassPrecision,
    MetricKind.MULTICLASS_RECALL: MulticlassRecall,
    MetricKind.MULTICLASS_F1: MulticlassF1Score,
    MetricKind.MULTICLASS_JACCARD: MulticlassJaccardIndex,
}


class MetricDefinition(BaseModel):
    """Declaration of a single metric inside a suite."""

    name: str = Field(min_length=1, description="Key of the metric in reports")
    kind: MetricKind = Field(description="Type of metric to build")
    threshold: float | None = Field(
        default=None,
        ge=0.0,
        le=1.0,
        description="Decision threshold for thresholded binary metrics",
    )
    num_classes: int | None = Field(
        default=None,
        ge=2,
        description="Number of classes for multiclass metrics",
    )
    average: AverageMethod = Field(
        default=AverageMethod.MACRO,
        description="Averaging policy for multiclass metrics",
    )
    bins: int | None = Field(
        default=None,
        ge=0,
        description="AUROC histogram size; 0 keeps every sample",
    )
    squared: bool = Field(default=False, description="Square the hinge loss")

    model_config = ConfigDict(extra="forbid")

    @model_validator(mode="after")
    def _validate_kind_fields(self) -> MetricDefinition:
        """Reject fields that do not apply to the declared kind."""
        family = self.kind.family
        if family == "multiclass" and self.num_classes is None:
            msg = f"Metric '{self.name}' requires num_classes"
            raise ValueError(msg)
        if family != "multiclass" and self.num_classes is not None:
            msg = f"num_classes only applies to multiclass metrics ('{self.name}')"
            raise ValueError(msg)
        if self.bins is not None and self.kind is not MetricKind.BINARY_AUROC:
            msg = f"bins only applies to binary_auroc ('{self.name}')"
            raise ValueError(msg)
        if self.bins == 1:
            msg = "bins must be 0 (exact) or at least 2"
            raise ValueError(msg)
        if self.threshold is not None and self.kind not in _THRESHOLDED_KINDS:
            msg = (
                "threshold only applies to thresholded binary metrics "
                f"('{self.name}')"
            )
            raise ValueError(msg)
        if self.squared and self.kind is not MetricKind.BINARY_HINGE:
            msg = f"squared only applies to binary_hinge ('{self.name}')"
            raise ValueError(msg)
        if "average" in self.model_fields_set and self.kind not in _AVERAGED_KINDS:
            msg = (
                "average only applies to averaged multiclass metrics "
                f"('{self.name}')"
            )
            raise ValueError(msg)
        return self

    def build(self) -> StreamingMetric[Any, Any]:
        """Instantiate the declared metric, filling defaults from settings."""
        settings = get_settings()
        if self.kind in _THRESHOLDED_KINDS:
            threshold = (
                self.threshold if self.threshold is not None
                else settings.default_threshold
            )
            return _THRESHOLDED_KINDS[self.kind](threshold)
        if self.kind is MetricKind.BINARY_AUROC:
            bins = self.bins if self.bins is not None else settings.default_bins
            return BinaryAuroc(bins)
        if self.kind is MetricKind.BINARY_HINGE:
            return BinaryHingeLoss(squared=self.squared)
        if self.kind is MetricKind.LABEL_ACCURACY:
            return LabelAccuracy()

        num_classes = cast(int, self.num_classes)
        if self.kind is MetricKind.MULTICLASS_STAT_SCORES:
            return MulticlassStatScores(num_classes)
        return _AVERAGED_KINDS[self.kind](num_classes, self.average)


def _empty_definitions() -> list[MetricDefinition]:
    """Return an empty definition list with precise typing."""
    return []


class SuiteConfig(BaseModel):
    """Collection of metric definitions sharing one input family."""

    metrics: list[MetricDefinition] = Field(default_factory=_empty_definitions)

    model_config = ConfigDict(extra="forbid")

    @model_validator(mode="after")
    def _validate_members(self) -> SuiteConfig:
        """Require unique names and a single input family."""
        if not self.metrics:
            msg = "A metric suite must declare at least one metric"
            raise ValueError(msg)
        names = [definition.name for definition in self.metrics]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            msg = f"Duplicate metric names: {', '.join(duplicates)}"
            raise ValueError(msg)
        families = {definition.kind.family for definition in self.metrics}
        if len(families) > 1:
            msg = (
                "All metrics in a suite must accept the same inputs, got "
                f"{', '.join(sorted(families))}"
            )
            raise ValueError(msg)
        return self

    @property
    def family(self) -> str:
        """Input family shared by every metric in the suite."""
        return self.metrics[0].kind.family

    def build(self) -> MetricCollection:
        """Build a :class:`MetricCollection` holding every declared metric."""
        return MetricCollection(
            {definition.name: definition.build() for definition in self.metrics},
        )

    def describe(self) -> list[dict[str, Any]]:
        """Return a user-friendly description of the suite."""
        return [
            definition.model_dump(mode="json", exclude_none=True)
            for definition in self.metrics
        ]


def load_suite_config(path: str | Path) -> SuiteConfig:
    """Load a metric suite definition from a YAML file."""
    config_path = Path(path)
    if not config_path.exists():
        msg = f"Metric suite configuration file not found: {config_path}"
        raise FileNotFoundError(msg)

    with config_path.open("r", encoding="utf-8") as handle:
        loaded: object = yaml.safe_load(handle)

    content: dict[str, Any]
    if isinstance(loaded, Mapping):
        mapping = cast("Mapping[str, Any]", loaded)
        content = dict(mapping)
    else:
        content = {}

    try:
        return SuiteConfig.model_validate(content)
    except ValidationError as exc:
        msg = f"Invalid metric suite configuration: {exc}"
        raise ValueError(msg) from exc


def default_binary_suite() -> SuiteConfig:
    """Provide a suite covering the usual binary classification metrics."""
    return SuiteConfig(
        metrics=[
            MetricDefinition(name="accuracy", kind=MetricKind.BINARY_ACCURACY),
            MetricDefinition(name="precision", kind=MetricKind.BINARY_PRECISION),
            MetricDefinition(name="recall", kind=MetricKind.BINARY_RECALL),
            MetricDefinition(name="f1", kind=MetricKind.BINARY_F1),
            MetricDefinition(name="jaccard", kind=MetricKind.BINARY_JACCARD),
            MetricDefinition(name="auroc", kind=MetricKind.BINARY_AUROC),
        ],
    )


__all__ = [
    "MetricDefinition",
    "MetricKind",
    "SuiteConfig",
    "default_binary_suite",
    "load_suite_config",
]
