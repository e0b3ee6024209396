"""F1 score, the harmonic mean of precision and recall."""

from __future__ import annotations

from .derived import BinaryDerivedMetric, MulticlassDerivedMetric, ratio


def f1_from_counts(
    true_positive: int,
    false_positive: int,
    false_negative: int,
) -> float | None:
    """Return ``2 tp / (2 tp + fp + fn)``.

    This equals ``2 * precision * recall / (precision + recall)`` whenever
    both are defined, and stays defined (as ``0.0``) when ``tp == 0`` but some
    errors were made. ``None`` is returned only when every count is zero.
    """
    return ratio(
        2 * true_positive,
        2 * true_positive + false_positive + false_negative,
    )


class BinaryF1Score(BinaryDerivedMetric):
    """Binary F1 score over thresholded predictions."""

    def _from_counts(
        self, true_positive: int, false_positive: int, false_negative: int,
        true_negative: int,
    ) -> float | None:
        return f1_from_counts(true_positive, false_positive, false_negative)


class MulticlassF1Score(MulticlassDerivedMetric):
    """One-vs-rest F1 score combined by the averaging policy."""

    def per_class_terms(self) -> tuple[list[int], list[int]]:
        """Doubled true positives over ``2 tp + fp + fn`` per class."""
        scores = self.stat_scores
        numerators = [2 * tp for tp in scores.true_positive]
        denominators = [
            2 * tp + fp + fn
            for tp, fp, fn in zip(
                scores.true_positive,
                scores.false_positive,
                scores.false_negative,
                strict=True,
            )
        ]
        return numerators, denominators


__all__ = ["BinaryF1Score", "MulticlassF1Score", "f1_from_counts"]
