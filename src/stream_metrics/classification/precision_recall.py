"""Precision and recall for binary and multiclass predictions."""

from __future__ import annotations

from .derived import BinaryDerivedMetric, MulticlassDerivedMetric, ratio


def precision_from_counts(true_positive: int, false_positive: int) -> float | None:
    """Return ``tp / (tp + fp)``; ``None`` when nothing was predicted positive."""
    return ratio(true_positive, true_positive + false_positive)


def recall_from_counts(true_positive: int, false_negative: int) -> float | None:
    """Return ``tp / (tp + fn)``; ``None`` when no positive target was seen."""
    return ratio(true_positive, true_positive + false_negative)


class BinaryPrecision(BinaryDerivedMetric):
    """Share of predicted positives that are actually positive."""

    def _from_counts(
        self, true_positive: int, false_positive: int, false_negative: int,
        true_negative: int,
    ) -> float | None:
        return precision_from_counts(true_positive, false_positive)


class BinaryRecall(BinaryDerivedMetric):
    """Share of actual positives that are predicted positive."""

    def _from_counts(
        self, true_positive: int, false_positive: int, false_negative: int,
        true_negative: int,
    ) -> float | None:
        return recall_from_counts(true_positive, false_negative)


class MulticlassPrecision(MulticlassDerivedMetric):
    """One-vs-rest precision combined by the averaging policy."""

    def per_class_terms(self) -> tuple[list[int], list[int]]:
        """True positives over predicted positives per class."""
        scores = self.stat_scores
        denominators = [
            tp + fp
            for tp, fp in zip(scores.true_positive, scores.false_positive, strict=True)
        ]
        return list(scores.true_positive), denominators


class MulticlassRecall(MulticlassDerivedMetric):
    """One-vs-rest recall combined by the averaging policy."""

    def per_class_terms(self) -> tuple[list[int], list[int]]:
        """True positives over actual positives per class."""
        scores = self.stat_scores
        return list(scores.true_positive), scores.support


__all__ = [
    "BinaryPrecision",
    "BinaryRecall",
    "MulticlassPrecision",
    "MulticlassRecall",
    "precision_from_counts",
    "recall_from_counts",
]
