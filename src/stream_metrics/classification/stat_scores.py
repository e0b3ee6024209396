"""Confusion-matrix accumulators underlying the classification metrics."""

from __future__ import annotations

import math
from collections.abc import Sequence

from stream_metrics.base import StreamingMetric
from stream_metrics.errors import IncompatibleInputError, InvalidLabelShapeError
from stream_metrics.utils.validation import (
    verify_binary_label,
    verify_label,
    verify_lengths,
    verify_range,
)


class BinaryStatScores(
    StreamingMetric["BinaryStatScores", "tuple[int, int, int, int]"],
):
    """Thresholded true/false positive/negative counts for binary targets.

    A sample is predicted positive when its probability is strictly greater
    than ``threshold``; targets must be ``0`` or ``1``.
    """

    def __init__(self, threshold: float = 0.5) -> None:
        """Create an empty accumulator with a fixed decision threshold."""
        super().__init__()
        self.threshold = verify_range(threshold, 0.0, 1.0)
        self.true_positive = 0
        self.false_positive = 0
        self.false_negative = 0
        self.true_negative = 0
        self.total = 0

    def stage(
        self,
        predictions: Sequence[float],
        targets: Sequence[int],
    ) -> BinaryStatScores:
        """Count a batch into a new accumulator sharing this threshold."""
        verify_lengths(predictions, targets)
        batch = BinaryStatScores(self.threshold)
        for raw_prediction, raw_target in zip(predictions, targets, strict=True):
            prediction = verify_range(raw_prediction, 0.0, 1.0)
            actual = verify_binary_label(raw_target) == 1
            predicted = prediction > self.threshold

            if predicted and actual:
                batch.true_positive += 1
            elif predicted and not actual:
                batch.false_positive += 1
            elif not predicted and actual:
                batch.false_negative += 1
            else:
                batch.true_negative += 1
            batch.total += 1
        return batch

    def commit(self, staged: BinaryStatScores) -> None:
        """Add the counts of a staged batch."""
        self.merge(staged)
        self.logger.debug(
            "Updated binary stat scores",
            batch_size=staged.total,
            total=self.total,
        )

    def merge(self, other: BinaryStatScores) -> None:
        """Add the counts of another accumulator with the same threshold."""
        if other.threshold != self.threshold:
            msg = (
                "Cannot merge binary stat scores with different thresholds "
                f"({self.threshold} != {other.threshold})"
            )
            raise ValueError(msg)
        self.true_positive += other.true_positive
        self.false_positive += other.false_positive
        self.false_negative += other.false_negative
        self.true_negative += other.true_negative
        self.total += other.total

    def reset(self) -> None:
        """Zero every counter."""
        self.true_positive = 0
        self.false_positive = 0
        self.false_negative = 0
        self.true_negative = 0
        self.total = 0

    def compute(self) -> tuple[int, int, int, int] | None:
        """Return ``(tp, fp, fn, tn)`` or ``None`` when nothing was observed."""
        if self.total == 0:
            return None
        return (
            self.true_positive,
            self.false_positive,
            self.false_negative,
            self.true_negative,
        )

    def to_dict(self) -> dict[str, int | float]:
        """Return a JSON-serializable snapshot of the counters."""
        return {
            "threshold": self.threshold,
            "true_positive": self.true_positive,
            "false_positive": self.false_positive,
            "false_negative": self.false_negative,
            "true_negative": self.true_negative,
            "total": self.total,
        }


def _argmax(row: Sequence[float]) -> int:
    """Return the index of the first maximum of ``row``."""
    best_index = 0
    best_value = row[0]
    for index in range(1, len(row)):
        if row[index] > best_value:
            best_index = index
            best_value = row[index]
    return best_index


class MulticlassStatScores(
    StreamingMetric["MulticlassStatScores", "tuple[list[int], ...]"],
):
    """One-vs-rest stat scores for each of ``num_classes`` classes.

    Every sample contributes exactly one verdict per class, so
    ``total_per_class[k] == total`` holds for every class.
    """

    def __init__(self, num_classes: int) -> None:
        """Create an empty accumulator for a fixed number of classes."""
        super().__init__()
        if num_classes < 2:  # noqa: PLR2004
            msg = f"num_classes must be at least 2, got {num_classes}"
            raise ValueError(msg)
        self.num_classes = num_classes
        self._zeros()

    def _zeros(self) -> None:
        """Install the all-zero state for ``num_classes`` classes."""
        self.true_positive = [0] * self.num_classes
        self.false_positive = [0] * self.num_classes
        self.false_negative = [0] * self.num_classes
        self.true_negative = [0] * self.num_classes
        self.total_per_class = [0] * self.num_classes
        self.total = 0

    def stage(
        self,
        predictions: Sequence[Sequence[float]],
        targets: Sequence[int],
    ) -> MulticlassStatScores:
        """Count a batch into a new accumulator with the same class count."""
        verify_lengths(predictions, targets)
        batch = MulticlassStatScores(self.num_classes)
        for row, raw_target in zip(predictions, targets, strict=True):
            target = verify_label(raw_target, self.num_classes)
            if len(row) != self.num_classes:
                raise InvalidLabelShapeError(len(row), self.num_classes)
            scores = [float(score) for score in row]
            if any(math.isnan(score) for score in scores):
                raise IncompatibleInputError("prediction scores without NaN", row)

            predicted = _argmax(scores)
            for class_index in range(self.num_classes):
                if class_index == target:
                    if class_index == predicted:
                        batch.true_positive[class_index] += 1
                    else:
                        batch.false_negative[class_index] += 1
                elif class_index == predicted:
                    batch.false_positive[class_index] += 1
                else:
                    batch.true_negative[class_index] += 1
                batch.total_per_class[class_index] += 1
            batch.total += 1
        return batch

    def commit(self, staged: MulticlassStatScores) -> None:
        """Add the counts of a staged batch."""
        self.merge(staged)
        self.logger.debug(
            "Updated multiclass stat scores",
            batch_size=staged.total,
            total=self.total,
            num_classes=self.num_classes,
        )

    def merge(self, other: MulticlassStatScores) -> None:
        """Add the per-class counts of another accumulator."""
        if other.num_classes != self.num_classes:
            msg = (
                "Cannot merge multiclass stat scores with different class counts "
                f"({self.num_classes} != {other.num_classes})"
            )
            raise ValueError(msg)
        for class_index in range(self.num_classes):
            self.true_positive[class_index] += other.true_positive[class_index]
            self.false_positive[class_index] += other.false_positive[class_index]
            self.false_negative[class_index] += other.false_negative[class_index]
            self.true_negative[class_index] += other.true_negative[class_index]
            self.total_per_class[class_index] += other.total_per_class[class_index]
        self.total += other.total

    def reset(self) -> None:
        """Restore the all-zero state."""
        self._zeros()

    def compute(self) -> tuple[list[int], ...] | None:
        """Return per-class ``(tp, fp, fn, tn)`` lists, or ``None`` when empty."""
        if self.total == 0:
            return None
        return (
            list(self.true_positive),
            list(self.false_positive),
            list(self.false_negative),
            list(self.true_negative),
        )

    @property
    def support(self) -> list[int]:
        """Number of samples whose target is each class."""
        return [
            tp + fn
            for tp, fn in zip(self.true_positive, self.false_negative, strict=True)
        ]

    def to_dict(self) -> dict[str, object]:
        """Return a JSON-serializable snapshot of the counters."""
        return {
            "num_classes": self.num_classes,
            "true_positive": list(self.true_positive),
            "false_positive": list(self.false_positive),
            "false_negative": list(self.false_negative),
            "true_negative": list(self.true_negative),
            "total_per_class": list(self.total_per_class),
            "total": self.total,
        }


__all__ = ["BinaryStatScores", "MulticlassStatScores"]
