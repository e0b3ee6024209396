"""Running reduction over scalar values."""

from __future__ import annotations

import math
from collections.abc import Iterable
from enum import Enum

from stream_metrics.errors import IncompatibleInputError


class Reduction(str, Enum):
    """Supported reductions for :class:`MetricAggregator`."""

    SUM = "sum"
    MEAN = "mean"
    MAX = "max"
    MIN = "min"


class MetricAggregator:
    """Aggregate per-batch scalar values without keeping them."""

    def __init__(self, reduction: Reduction | str = Reduction.MEAN) -> None:
        """Initialise an empty aggregator for the given reduction."""
        self.reduction = Reduction(reduction)
        self.reset()

    def update(self, value: float) -> None:
        """Fold a single value into the running statistics."""
        candidate = float(value)
        if math.isnan(candidate):
            raise IncompatibleInputError("a numeric value (not NaN)", value)
        self.total += 1
        self.sum += candidate
        self.min = candidate if self.min is None else min(self.min, candidate)
        self.max = candidate if self.max is None else max(self.max, candidate)

    def update_many(self, values: Iterable[float]) -> None:
        """Fold several values, rejecting the whole batch if one is NaN."""
        batch = [float(value) for value in values]
        for value in batch:
            if math.isnan(value):
                raise IncompatibleInputError("a numeric value (not NaN)", value)
        for value in batch:
            self.update(value)

    def reset(self) -> None:
        """Forget every value seen so far."""
        self.total = 0
        self.sum = 0.0
        self.min: float | None = None
        self.max: float | None = None

    def compute(self) -> float | None:
        """Return the reduced value, or ``None`` before the first update."""
        if self.total == 0:
            return None
        if self.reduction is Reduction.SUM:
            return self.sum
        if self.reduction is Reduction.MEAN:
            return self.sum / self.total
        if self.reduction is Reduction.MIN:
            return self.min
        return self.max


__all__ = ["MetricAggregator", "Reduction"]
