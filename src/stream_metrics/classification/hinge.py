"""Streaming hinge loss for binary classification."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from stream_metrics.base import StreamingMetric
from stream_metrics.errors import IncompatibleInputError
from stream_metrics.utils.validation import verify_lengths, verify_range


@dataclass(slots=True)
class HingeTotals:
    """Summed loss and sample count for a batch."""

    measures: float = 0.0
    total: int = 0


class BinaryHingeLoss(StreamingMetric[HingeTotals, float]):
    """Mean of ``max(0, 1 - prediction * target)`` over all samples.

    Predictions lie in ``[-1, 1]`` and targets are encoded as ``-1`` or ``1``.
    With ``squared=True`` each per-sample loss is squared before averaging.
    """

    def __init__(self, *, squared: bool = False) -> None:
        """Create an empty accumulator."""
        super().__init__()
        self.squared = squared
        self._totals = HingeTotals()

    def stage(
        self,
        predictions: Sequence[float],
        targets: Sequence[float],
    ) -> HingeTotals:
        """Compute the summed loss of a batch."""
        verify_lengths(predictions, targets)
        batch = HingeTotals()
        for raw_prediction, raw_target in zip(predictions, targets, strict=True):
            prediction = verify_range(raw_prediction, -1.0, 1.0)
            target = float(raw_target)
            if target not in (-1.0, 1.0):
                raise IncompatibleInputError("hinge target -1 or 1", raw_target)
            measure = max(0.0, 1.0 - prediction * target)
            if self.squared:
                measure *= measure
            batch.measures += measure
            batch.total += 1
        return batch

    def commit(self, staged: HingeTotals) -> None:
        """Add a staged batch to the running totals."""
        self._totals.measures += staged.measures
        self._totals.total += staged.total
        self.logger.debug(
            "Updated hinge loss",
            batch_size=staged.total,
            total=self._totals.total,
        )

    def reset(self) -> None:
        """Forget every observed sample."""
        self._totals = HingeTotals()

    def compute(self) -> float | None:
        """Return the mean loss, or ``None`` when nothing was observed."""
        if self._totals.total == 0:
            return None
        return self._totals.measures / self._totals.total


__all__ = ["BinaryHingeLoss", "HingeTotals"]
