"""Tests for the binary and multiclass stat-score accumulators."""

from __future__ import annotations

import random

import pytest

from stream_metrics.classification.stat_scores import (
    BinaryStatScores,
    MulticlassStatScores,
)
from stream_metrics.errors import (
    IncompatibleInputError,
    InvalidClassIndexError,
    InvalidLabelShapeError,
    LengthMismatchError,
)

MULTICLASS_PREDICTIONS = [
    [0.16, 0.26, 0.58],
    [0.22, 0.61, 0.17],
    [0.71, 0.09, 0.20],
    [0.05, 0.82, 0.13],
]
MULTICLASS_TARGETS = [2, 1, 0, 0]


class TestBinaryStatScores:
    """Validate thresholded confusion counts."""

    def test_counts_follow_strict_threshold(self) -> None:
        """Only probabilities strictly above the threshold count as positive."""
        scores = BinaryStatScores(threshold=0.5)
        scores.update([0.8, 0.4, 0.3, 0.1], [1, 0, 1, 0])

        assert scores.true_positive == 1
        assert scores.false_positive == 0
        assert scores.false_negative == 1
        assert scores.true_negative == 2
        assert scores.total == 4

    def test_prediction_equal_to_threshold_is_negative(self) -> None:
        """A probability equal to the threshold is not predicted positive."""
        scores = BinaryStatScores(threshold=0.5)
        scores.update([0.5, 0.5], [1, 0])

        assert scores.compute() == (0, 0, 1, 1)

    def test_mixed_batch_counts_every_outcome(self) -> None:
        """Each of the four outcomes is counted once per matching sample."""
        scores = BinaryStatScores()
        scores.update([0.8, 0.6, 0.3, 0.1], [1, 0, 1, 0])

        assert scores.compute() == (1, 1, 1, 1)

    def test_counts_accumulate_across_batches(self) -> None:
        """Repeated updates keep adding to the counters."""
        scores = BinaryStatScores()
        scores.update([0.11, 0.22, 0.84], [0, 1, 0])
        scores.update([0.73, 0.33, 0.92], [1, 0, 1])

        assert scores.compute() == (2, 1, 1, 2)
        assert scores.total == 6

    def test_total_matches_counts_after_random_updates(self) -> None:
        """``tp + fp + fn + tn`` always equals ``total``."""
        rng = random.Random(13)
        scores = BinaryStatScores(threshold=0.3)
        for _ in range(25):
            size = rng.randint(0, 20)
            predictions = [rng.random() for _ in range(size)]
            targets = [rng.randint(0, 1) for _ in range(size)]
            scores.update(predictions, targets)
            assert (
                scores.true_positive
                + scores.false_positive
                + scores.false_negative
                + scores.true_negative
            ) == scores.total

    def test_empty_accumulator_computes_none(self) -> None:
        """Nothing observed means no result."""
        scores = BinaryStatScores()
        scores.update([], [])

        assert scores.compute() is None

    def test_reset_zeroes_every_counter(self) -> None:
        """Reset brings the accumulator back to its initial state."""
        scores = BinaryStatScores(threshold=0.2)
        scores.update([0.9, 0.1], [1, 1])
        scores.reset()

        assert scores.to_dict() == {
            "threshold": 0.2,
            "true_positive": 0,
            "false_positive": 0,
            "false_negative": 0,
            "true_negative": 0,
            "total": 0,
        }
        assert scores.compute() is None

    def test_length_mismatch_raises(self) -> None:
        """Batches of different sizes are rejected."""
        scores = BinaryStatScores()
        with pytest.raises(LengthMismatchError, match="same length") as excinfo:
            scores.update([0.1, 0.2], [0])

        assert excinfo.value.predictions == 2
        assert excinfo.value.targets == 1

    @pytest.mark.parametrize("prediction", [-0.1, 1.01, float("nan")])
    def test_out_of_range_prediction_raises(self, prediction: float) -> None:
        """Probabilities must lie within ``[0, 1]``."""
        scores = BinaryStatScores()
        with pytest.raises(IncompatibleInputError):
            scores.update([prediction], [1])

    @pytest.mark.parametrize("target", [2, -1, 0.5])
    def test_non_binary_target_raises(self, target: float) -> None:
        """Targets must be 0 or 1."""
        scores = BinaryStatScores()
        with pytest.raises(IncompatibleInputError, match="binary label"):
            scores.update([0.7], [target])  # type: ignore[list-item]

    def test_failed_update_leaves_counts_untouched(self) -> None:
        """A batch with one invalid sample is rejected as a whole."""
        scores = BinaryStatScores()
        scores.update([0.9], [1])

        with pytest.raises(IncompatibleInputError):
            scores.update([0.9, 0.1, 0.4], [1, 0, 7])

        assert scores.compute() == (1, 0, 0, 0)
        assert scores.total == 1

    @pytest.mark.parametrize("threshold", [-0.5, 1.5])
    def test_invalid_threshold_raises(self, threshold: float) -> None:
        """The threshold must itself be a probability."""
        with pytest.raises(IncompatibleInputError):
            BinaryStatScores(threshold=threshold)

    def test_merge_adds_shard_counts(self) -> None:
        """Merging shards gives the same counts as one accumulator."""
        combined = BinaryStatScores()
        combined.update([0.9, 0.2, 0.7, 0.1], [1, 1, 0, 0])

        first = BinaryStatScores()
        first.update([0.9, 0.2], [1, 1])
        second = BinaryStatScores()
        second.update([0.7, 0.1], [0, 0])
        first.merge(second)

        assert first.to_dict() == combined.to_dict()

    def test_merge_rejects_different_thresholds(self) -> None:
        """Counts taken at different thresholds cannot be combined."""
        with pytest.raises(ValueError, match="different thresholds"):
            BinaryStatScores(0.3).merge(BinaryStatScores(0.6))


class TestMulticlassStatScores:
    """Validate one-vs-rest per-class counts."""

    def test_counts_per_class(self) -> None:
        """Argmax predictions yield the expected per-class verdicts."""
        scores = MulticlassStatScores(3)
        scores.update(MULTICLASS_PREDICTIONS, MULTICLASS_TARGETS)

        assert scores.true_positive == [1, 1, 1]
        assert scores.false_positive == [0, 1, 0]
        assert scores.false_negative == [1, 0, 0]
        assert scores.true_negative == [2, 2, 3]
        assert scores.total_per_class == [4, 4, 4]
        assert scores.total == 4
        assert scores.support == [2, 1, 1]

    def test_ties_resolve_to_first_maximum(self) -> None:
        """Equal scores predict the lowest class index holding the maximum."""
        scores = MulticlassStatScores(3)
        scores.update([[0.2, 0.4, 0.4]], [1])

        assert scores.true_positive == [0, 1, 0]
        assert scores.false_positive == [0, 0, 0]

    def test_per_class_totals_stay_consistent(self) -> None:
        """Every class sees one verdict per sample."""
        rng = random.Random(5)
        scores = MulticlassStatScores(4)
        for _ in range(20):
            size = rng.randint(1, 10)
            rows = [[rng.random() for _ in range(4)] for _ in range(size)]
            targets = [rng.randrange(4) for _ in range(size)]
            scores.update(rows, targets)

            assert sum(scores.total_per_class) == 4 * scores.total
            for k in range(4):
                assert scores.total_per_class[k] == (
                    scores.true_positive[k]
                    + scores.false_positive[k]
                    + scores.false_negative[k]
                    + scores.true_negative[k]
                )
                assert scores.total_per_class[k] == scores.total

    def test_accepts_unnormalised_scores(self) -> None:
        """Rows may hold logits rather than probabilities."""
        scores = MulticlassStatScores(2)
        scores.update([[-3.0, 4.5], [12.0, -1.0]], [1, 1])

        assert scores.true_positive == [0, 1]
        assert scores.false_negative == [0, 1]
        assert scores.false_positive == [1, 0]

    def test_length_mismatch_raises(self) -> None:
        """Row and target counts must agree."""
        scores = MulticlassStatScores(3)
        with pytest.raises(LengthMismatchError):
            scores.update(MULTICLASS_PREDICTIONS, [0, 1])

    @pytest.mark.parametrize("target", [3, -1])
    def test_out_of_range_target_raises(self, target: int) -> None:
        """Targets must index one of the configured classes."""
        scores = MulticlassStatScores(3)
        with pytest.raises(InvalidClassIndexError) as excinfo:
            scores.update([[0.1, 0.2, 0.7]], [target])

        assert excinfo.value.num_classes == 3
        assert isinstance(excinfo.value, IncompatibleInputError)

    def test_row_length_mismatch_raises(self) -> None:
        """Rows must hold one score per class."""
        scores = MulticlassStatScores(3)
        with pytest.raises(InvalidLabelShapeError) as excinfo:
            scores.update([[0.1, 0.9]], [1])

        assert excinfo.value.total_labels == 2
        assert excinfo.value.num_labels == 3

    def test_nan_score_raises(self) -> None:
        """NaN scores cannot be ranked."""
        scores = MulticlassStatScores(2)
        with pytest.raises(IncompatibleInputError, match="NaN"):
            scores.update([[float("nan"), 0.2]], [0])

    def test_failed_update_leaves_counts_untouched(self) -> None:
        """An invalid row anywhere in the batch rejects the whole batch."""
        scores = MulticlassStatScores(3)
        scores.update(MULTICLASS_PREDICTIONS[:1], MULTICLASS_TARGETS[:1])
        before = scores.to_dict()

        with pytest.raises(InvalidLabelShapeError):
            scores.update([[0.7, 0.2, 0.1], [0.5, 0.5]], [0, 1])

        assert scores.to_dict() == before

    def test_reset_restores_zero_state(self) -> None:
        """Reset keeps the class count but clears every counter."""
        scores = MulticlassStatScores(3)
        scores.update(MULTICLASS_PREDICTIONS, MULTICLASS_TARGETS)
        scores.reset()

        assert scores.num_classes == 3
        assert scores.true_positive == [0, 0, 0]
        assert scores.total_per_class == [0, 0, 0]
        assert scores.total == 0
        assert scores.compute() is None

    def test_requires_at_least_two_classes(self) -> None:
        """A single class is not a classification problem."""
        with pytest.raises(ValueError, match="at least 2"):
            MulticlassStatScores(1)

    def test_merge_adds_shard_counts(self) -> None:
        """Merging shards gives the same counts as one accumulator."""
        combined = MulticlassStatScores(3)
        combined.update(MULTICLASS_PREDICTIONS, MULTICLASS_TARGETS)

        first = MulticlassStatScores(3)
        first.update(MULTICLASS_PREDICTIONS[:2], MULTICLASS_TARGETS[:2])
        second = MulticlassStatScores(3)
        second.update(MULTICLASS_PREDICTIONS[2:], MULTICLASS_TARGETS[2:])
        first.merge(second)

        assert first.to_dict() == combined.to_dict()

    def test_merge_rejects_different_class_counts(self) -> None:
        """Accumulators over different class sets cannot be combined."""
        with pytest.raises(ValueError, match="different class counts"):
            MulticlassStatScores(3).merge(MulticlassStatScores(4))
