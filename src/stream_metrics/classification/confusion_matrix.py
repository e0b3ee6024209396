"""Binary confusion matrix view over stat scores."""

from __future__ import annotations

from collections.abc import Sequence

from stream_metrics.base import StreamingMetric

from .stat_scores import BinaryStatScores

ConfusionMatrix = tuple[tuple[int, int], tuple[int, int]]


class BinaryConfusionMatrix(StreamingMetric[BinaryStatScores, ConfusionMatrix]):
    """2x2 confusion matrix laid out as ``((tp, fp), (fn, tn))``."""

    def __init__(self, threshold: float = 0.5) -> None:
        """Create an empty matrix for the given decision threshold."""
        super().__init__()
        self._stat_scores = BinaryStatScores(threshold)

    @property
    def stat_scores(self) -> BinaryStatScores:
        """Expose the underlying accumulator for inspection."""
        return self._stat_scores

    def stage(
        self,
        predictions: Sequence[float],
        targets: Sequence[int],
    ) -> BinaryStatScores:
        """Validate and count a batch without modifying the matrix."""
        return self._stat_scores.stage(predictions, targets)

    def commit(self, staged: BinaryStatScores) -> None:
        """Merge staged counts."""
        self._stat_scores.commit(staged)

    def reset(self) -> None:
        """Zero every cell."""
        self._stat_scores.reset()

    def compute(self) -> ConfusionMatrix | None:
        """Return the matrix, or ``None`` when nothing was observed."""
        scores = self._stat_scores
        if scores.total == 0:
            return None
        return (
            (scores.true_positive, scores.false_positive),
            (scores.false_negative, scores.true_negative),
        )


__all__ = ["BinaryConfusionMatrix", "ConfusionMatrix"]
