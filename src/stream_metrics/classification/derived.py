"""Shared plumbing for metrics derived from stat scores."""

from __future__ import annotations

from abc import abstractmethod
from collections.abc import Sequence

from stream_metrics.base import StreamingMetric

from .averaging import AverageMethod, average_ratios
from .stat_scores import BinaryStatScores, MulticlassStatScores


def ratio(numerator: float, denominator: float) -> float | None:
    """Return ``numerator / denominator``, or ``None`` for an empty denominator."""
    if denominator <= 0:
        return None
    return numerator / denominator


class BinaryDerivedMetric(StreamingMetric[BinaryStatScores, float]):
    """Binary metric computed from a privately owned :class:`BinaryStatScores`."""

    def __init__(self, threshold: float = 0.5) -> None:
        """Create the metric with its own thresholded accumulator."""
        super().__init__()
        self._stat_scores = BinaryStatScores(threshold)

    @property
    def stat_scores(self) -> BinaryStatScores:
        """Expose the underlying accumulator for inspection."""
        return self._stat_scores

    @property
    def threshold(self) -> float:
        """Decision threshold applied to predictions."""
        return self._stat_scores.threshold

    def stage(
        self,
        predictions: Sequence[float],
        targets: Sequence[int],
    ) -> BinaryStatScores:
        """Validate and count a batch without modifying the metric."""
        return self._stat_scores.stage(predictions, targets)

    def commit(self, staged: BinaryStatScores) -> None:
        """Merge staged counts into the accumulator."""
        self._stat_scores.commit(staged)

    def reset(self) -> None:
        """Clear the accumulator."""
        self._stat_scores.reset()

    def compute(self) -> float | None:
        """Return the metric, ``None`` when empty or undefined."""
        scores = self._stat_scores
        if scores.total == 0:
            return None
        return self._from_counts(
            scores.true_positive,
            scores.false_positive,
            scores.false_negative,
            scores.true_negative,
        )

    @abstractmethod
    def _from_counts(
        self, true_positive: int, false_positive: int, false_negative: int,
        true_negative: int,
    ) -> float | None:
        """Evaluate the metric formula on accumulated counts."""


class MulticlassDerivedMetric(StreamingMetric[MulticlassStatScores, float]):
    """Multiclass metric combining per-class ratios with an averaging policy."""

    def __init__(
        self,
        num_classes: int,
        average: AverageMethod | str = AverageMethod.MACRO,
    ) -> None:
        """Create the metric for ``num_classes`` classes."""
        super().__init__()
        self._stat_scores = MulticlassStatScores(num_classes)
        self.average = AverageMethod(average)

    @property
    def stat_scores(self) -> MulticlassStatScores:
        """Expose the underlying accumulator for inspection."""
        return self._stat_scores

    @property
    def num_classes(self) -> int:
        """Number of classes the metric was built for."""
        return self._stat_scores.num_classes

    def stage(
        self,
        predictions: Sequence[Sequence[float]],
        targets: Sequence[int],
    ) -> MulticlassStatScores:
        """Validate and count a batch without modifying the metric."""
        return self._stat_scores.stage(predictions, targets)

    def commit(self, staged: MulticlassStatScores) -> None:
        """Merge staged counts into the accumulator."""
        self._stat_scores.commit(staged)

    def reset(self) -> None:
        """Clear the accumulator."""
        self._stat_scores.reset()

    def compute(self) -> float | None:
        """Return the averaged metric, ``None`` when empty or undefined."""
        if self._stat_scores.total == 0:
            return None
        numerators, denominators = self.per_class_terms()
        return average_ratios(
            numerators,
            denominators,
            self._stat_scores.support,
            self.average,
        )

    def per_class(self) -> list[float | None]:
        """Return the unaveraged metric for every class."""
        numerators, denominators = self.per_class_terms()
        return [
            ratio(numerator, denominator)
            for numerator, denominator in zip(numerators, denominators, strict=True)
        ]

    @abstractmethod
    def per_class_terms(self) -> tuple[list[int], list[int]]:
        """Return per-class numerators and denominators of the metric."""


__all__ = ["BinaryDerivedMetric", "MulticlassDerivedMetric", "ratio"]
