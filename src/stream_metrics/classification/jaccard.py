"""Jaccard index (intersection over union) for class predictions.

For a class, the predicted and actual positive sets intersect in ``tp`` samples
and their union holds ``tp + fp + fn`` samples.
"""

from __future__ import annotations

from .derived import BinaryDerivedMetric, MulticlassDerivedMetric, ratio


def jaccard_from_counts(
    true_positive: int,
    false_positive: int,
    false_negative: int,
) -> float | None:
    """Return ``tp / (tp + fp + fn)`` or ``None`` for an empty union."""
    return ratio(true_positive, true_positive + false_positive + false_negative)


class BinaryJaccardIndex(BinaryDerivedMetric):
    """Overlap of thresholded positive predictions with positive targets."""

    def _from_counts(
        self, true_positive: int, false_positive: int, false_negative: int,
        true_negative: int,
    ) -> float | None:
        return jaccard_from_counts(true_positive, false_positive, false_negative)


class MulticlassJaccardIndex(MulticlassDerivedMetric):
    """Per-class intersection over union combined by the averaging policy."""

    def per_class_terms(self) -> tuple[list[int], list[int]]:
        """Intersection over union sizes per class."""
        scores = self.stat_scores
        denominators = [
            tp + fp + fn
            for tp, fp, fn in zip(
                scores.true_positive,
                scores.false_positive,
                scores.false_negative,
                strict=True,
            )
        ]
        return list(scores.true_positive), denominators


__all__ = ["BinaryJaccardIndex", "MulticlassJaccardIndex", "jaccard_from_counts"]
