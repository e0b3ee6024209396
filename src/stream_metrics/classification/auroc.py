"""Area under the ROC curve with exact and histogram-approximate modes.

The AUROC is the probability that a randomly drawn positive sample scores
higher than a randomly drawn negative one, ties counting one half. Both modes
sweep the scores from high to low and integrate the ROC curve with the
trapezoidal rule:

* exact mode keeps every ``(score, label)`` pair and treats samples sharing a
  score as one step of the curve, so the result does not depend on the order
  in which tied samples arrived;
* binned mode quantises each score to ``round(score * (bins - 1))`` and only
  keeps one positive and one negative histogram, trading exactness within a
  bucket for memory that does not grow with the number of samples.

Binned results converge to the exact ones as ``bins`` grows.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass, field
from itertools import groupby

from stream_metrics.base import StreamingMetric
from stream_metrics.utils.validation import (
    verify_binary_label,
    verify_finite_order,
    verify_lengths,
    verify_range,
)


def _empty_samples() -> list[tuple[float, bool]]:
    """Return an empty sample list with precise typing."""
    return []


@dataclass(slots=True)
class ExactScores:
    """Every observed ``(score, is_positive)`` pair."""

    samples: list[tuple[float, bool]] = field(default_factory=_empty_samples)
    positives: int = 0
    negatives: int = 0

    def add(self, score: float, *, is_positive: bool) -> None:
        """Record one sample."""
        self.samples.append((score, is_positive))
        if is_positive:
            self.positives += 1
        else:
            self.negatives += 1

    def merge(self, other: ExactScores) -> None:
        """Append every sample of ``other``."""
        self.samples.extend(other.samples)
        self.positives += other.positives
        self.negatives += other.negatives


@dataclass(slots=True)
class BinnedScores:
    """Positive and negative score histograms over ``bins`` buckets."""

    bins: int
    positive: list[int] = field(init=False)
    negative: list[int] = field(init=False)
    positives: int = 0
    negatives: int = 0

    def __post_init__(self) -> None:
        """Allocate zeroed histograms."""
        self.positive = [0] * self.bins
        self.negative = [0] * self.bins

    def bucket(self, score: float) -> int:
        """Return the histogram index for a score in ``[0, 1]``, rounding half up."""
        return math.floor(score * (self.bins - 1) + 0.5)

    def add(self, score: float, *, is_positive: bool) -> None:
        """Count one sample in the bucket of ``score``."""
        index = self.bucket(score)
        if is_positive:
            self.positive[index] += 1
            self.positives += 1
        else:
            self.negative[index] += 1
            self.negatives += 1

    def merge(self, other: BinnedScores) -> None:
        """Add the histograms of ``other``, which must use the same bins."""
        if other.bins != self.bins:
            msg = f"Cannot merge histograms of {other.bins} and {self.bins} bins"
            raise ValueError(msg)
        for index in range(self.bins):
            self.positive[index] += other.positive[index]
            self.negative[index] += other.negative[index]
        self.positives += other.positives
        self.negatives += other.negatives


AurocState = ExactScores | BinnedScores


def _trapezoid_area(steps: list[tuple[int, int]]) -> float:
    """Integrate ``(positives, negatives)`` steps ordered from high to low score.

    Each step moves the false positive count by its negatives and the true
    positive count by its positives; the area under the unnormalised ROC curve
    grows by ``d_fp * (tp_before + tp_after) / 2``.
    """
    true_positive = 0
    false_positive = 0
    area = 0.0
    for positives, negatives in steps:
        previous_true_positive = true_positive
        true_positive += positives
        false_positive += negatives
        area += negatives * (previous_true_positive + true_positive) / 2.0
    return area


def _exact_steps(state: ExactScores) -> list[tuple[int, int]]:
    ordered = sorted(state.samples, key=lambda sample: sample[0], reverse=True)
    steps: list[tuple[int, int]] = []
    for _, group in groupby(ordered, key=lambda sample: sample[0]):
        positives = negatives = 0
        for _, is_positive in group:
            if is_positive:
                positives += 1
            else:
                negatives += 1
        steps.append((positives, negatives))
    return steps


def _binned_steps(state: BinnedScores) -> list[tuple[int, int]]:
    return list(zip(reversed(state.positive), reversed(state.negative), strict=True))


class BinaryAuroc(StreamingMetric[AurocState, float]):
    """Binary AUROC estimator.

    Args:
        bins: ``0`` keeps every sample and computes the exact AUROC; any value
            of at least ``2`` switches to fixed-size histograms.

    """

    def __init__(self, bins: int = 0) -> None:
        """Select the accumulation mode from ``bins``."""
        super().__init__()
        if bins < 0 or bins == 1:
            msg = f"bins must be 0 (exact) or at least 2, got {bins}"
            raise ValueError(msg)
        self.bins = bins
        self._state = self._new_state()

    @property
    def exact(self) -> bool:
        """Whether every sample is retained."""
        return self.bins == 0

    @property
    def state(self) -> AurocState:
        """Expose the accumulated state for inspection."""
        return self._state

    def _new_state(self) -> AurocState:
        if self.bins == 0:
            return ExactScores()
        return BinnedScores(self.bins)

    def stage(
        self,
        predictions: Sequence[float],
        targets: Sequence[int],
    ) -> AurocState:
        """Validate a batch and accumulate it into a fresh state."""
        verify_lengths(predictions, targets)
        batch = self._new_state()
        for raw_prediction, raw_target in zip(predictions, targets, strict=True):
            is_positive = verify_binary_label(raw_target) == 1
            if isinstance(batch, ExactScores):
                score = verify_finite_order(raw_prediction)
            else:
                score = verify_range(raw_prediction, 0.0, 1.0)
            batch.add(score, is_positive=is_positive)
        return batch

    def commit(self, staged: AurocState) -> None:
        """Merge a staged batch into the accumulated state."""
        self._merge_state(staged)
        self.logger.debug(
            "Updated AUROC accumulator",
            exact=self.exact,
            positives=self._state.positives,
            negatives=self._state.negatives,
        )

    def merge(self, other: BinaryAuroc) -> None:
        """Fold another estimator built with the same ``bins`` into this one."""
        if other.bins != self.bins:
            msg = (
                "Cannot merge AUROC estimators with different bins "
                f"({self.bins} != {other.bins})"
            )
            raise ValueError(msg)
        self._merge_state(other.state)

    def _merge_state(self, staged: AurocState) -> None:
        state = self._state
        if isinstance(state, ExactScores) and isinstance(staged, ExactScores):
            state.merge(staged)
        elif isinstance(state, BinnedScores) and isinstance(staged, BinnedScores):
            state.merge(staged)
        else:
            msg = "Staged AUROC state does not match the estimator mode"
            raise TypeError(msg)

    def reset(self) -> None:
        """Return to an empty state of the same mode."""
        self._state = self._new_state()

    def compute(self) -> float | None:
        """Return the AUROC, or ``None`` without both positives and negatives."""
        state = self._state
        positives = state.positives
        negatives = state.negatives
        if positives == 0 or negatives == 0:
            return None

        if isinstance(state, ExactScores):
            steps = _exact_steps(state)
        else:
            steps = _binned_steps(state)
        return _trapezoid_area(steps) / (positives * negatives)


__all__ = ["AurocState", "BinaryAuroc", "BinnedScores", "ExactScores"]
