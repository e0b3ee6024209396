"""Accuracy for binary, multiclass and label predictions."""

from __future__ import annotations

from collections.abc import Hashable, Sequence
from dataclasses import dataclass

from stream_metrics.base import StreamingMetric
from stream_metrics.utils.validation import verify_lengths

from .derived import BinaryDerivedMetric, MulticlassDerivedMetric, ratio


def accuracy_from_counts(
    true_positive: int,
    false_positive: int,
    false_negative: int,
    true_negative: int,
) -> float | None:
    """Return ``(tp + tn) / total`` or ``None`` when there are no samples."""
    total = true_positive + false_positive + false_negative + true_negative
    return ratio(true_positive + true_negative, total)


class BinaryAccuracy(BinaryDerivedMetric):
    """Fraction of thresholded predictions that match the binary target."""

    def _from_counts(
        self, true_positive: int, false_positive: int, false_negative: int,
        true_negative: int,
    ) -> float | None:
        return accuracy_from_counts(
            true_positive, false_positive, false_negative, true_negative,
        )


class MulticlassAccuracy(MulticlassDerivedMetric):
    """Per-class hit rate ``tp / (tp + fn)`` combined by the averaging policy.

    Micro averaging reduces to the share of samples whose highest scoring
    class equals the target.
    """

    def per_class_terms(self) -> tuple[list[int], list[int]]:
        """Correct predictions over samples per target class."""
        scores = self.stat_scores
        return list(scores.true_positive), scores.support


@dataclass(slots=True)
class LabelCounts:
    """Matching and total label counts for a batch."""

    correct: int = 0
    total: int = 0


class LabelAccuracy(StreamingMetric[LabelCounts, float]):
    """Share of predicted labels equal to their target label.

    Labels are compared with ``==``, so any hashable label works: class
    indices, strings or enum members.
    """

    def __init__(self) -> None:
        """Create an empty accumulator."""
        super().__init__()
        self._counts = LabelCounts()

    def stage(
        self,
        predictions: Sequence[Hashable],
        targets: Sequence[Hashable],
    ) -> LabelCounts:
        """Count matching labels in a batch."""
        verify_lengths(predictions, targets)
        correct = sum(
            1
            for prediction, target in zip(predictions, targets, strict=True)
            if prediction == target
        )
        return LabelCounts(correct=correct, total=len(targets))

    def commit(self, staged: LabelCounts) -> None:
        """Add a staged batch to the running counts."""
        self._counts.correct += staged.correct
        self._counts.total += staged.total
        self.logger.debug(
            "Updated label accuracy",
            batch_size=staged.total,
            total=self._counts.total,
        )

    def reset(self) -> None:
        """Forget every observed label."""
        self._counts = LabelCounts()

    def compute(self) -> float | None:
        """Return the share of matches, or ``None`` before any label arrives."""
        return ratio(self._counts.correct, self._counts.total)


__all__ = [
    "BinaryAccuracy",
    "LabelAccuracy",
    "LabelCounts",
    "MulticlassAccuracy",
    "accuracy_from_counts",
]
