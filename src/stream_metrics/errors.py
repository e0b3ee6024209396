"""Error taxonomy shared by every streaming metric."""

from __future__ import annotations


class MetricError(ValueError):
    """Base class for invalid batches passed to a metric."""


class LengthMismatchError(MetricError):
    """Prediction and target batches have different sizes."""

    def __init__(self, predictions: int, targets: int) -> None:
        """Record both batch sizes and build the error message."""
        self.predictions = predictions
        self.targets = targets
        msg = (
            "Predictions and targets must have the same length "
            f"({predictions} != {targets})"
        )
        super().__init__(msg)


class IncompatibleInputError(MetricError):
    """A value lies outside the numeric range or label domain a metric accepts."""

    def __init__(self, expected: str, got: object) -> None:
        """Record what was expected and the offending value."""
        self.expected = expected
        self.got = got
        msg = f"Incompatible input: expected {expected}, got {got!r}"
        super().__init__(msg)


class InvalidClassIndexError(IncompatibleInputError):
    """A target class index is outside ``range(num_classes)``."""

    def __init__(self, class_index: int, num_classes: int) -> None:
        """Record the rejected index together with the configured class count."""
        self.class_index = class_index
        self.num_classes = num_classes
        super().__init__(f"class index in [0, {num_classes})", class_index)


class InvalidLabelShapeError(IncompatibleInputError):
    """A prediction row does not hold exactly one score per class."""

    def __init__(self, total_labels: int, num_labels: int) -> None:
        """Record the observed row length and the configured class count."""
        self.total_labels = total_labels
        self.num_labels = num_labels
        super().__init__(f"{num_labels} scores per prediction row", total_labels)


__all__ = [
    "IncompatibleInputError",
    "InvalidClassIndexError",
    "InvalidLabelShapeError",
    "LengthMismatchError",
    "MetricError",
]
