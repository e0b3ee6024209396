"""Range and label-domain checks shared by all metrics."""

from __future__ import annotations

import math
from collections.abc import Sized

from stream_metrics.errors import (
    IncompatibleInputError,
    InvalidClassIndexError,
    LengthMismatchError,
)


def verify_lengths(predictions: Sized, targets: Sized) -> None:
    """Raise :class:`LengthMismatchError` unless both batches have equal size."""
    if len(predictions) != len(targets):
        raise LengthMismatchError(len(predictions), len(targets))


def verify_range(value: float, lower: float, upper: float) -> float:
    """Return ``value`` as a float when it lies in ``[lower, upper]``.

    NaN never satisfies the check.
    """
    candidate = float(value)
    if not lower <= candidate <= upper:
        raise IncompatibleInputError(
            f"value within the range [{lower}, {upper}]",
            value,
        )
    return candidate


def verify_finite_order(value: float) -> float:
    """Return ``value`` as a float when it can be ordered (i.e. is not NaN)."""
    candidate = float(value)
    if math.isnan(candidate):
        raise IncompatibleInputError("a comparable score (not NaN)", value)
    return candidate


def verify_label(label: int, num_classes: int) -> int:
    """Return ``label`` when it is an integral index in ``range(num_classes)``."""
    if isinstance(label, bool):
        index = int(label)
    elif isinstance(label, int):
        index = label
    elif isinstance(label, float) and label.is_integer():
        index = int(label)
    else:
        raise InvalidClassIndexError(label, num_classes)  # type: ignore[arg-type]

    if not 0 <= index < num_classes:
        raise InvalidClassIndexError(index, num_classes)
    return index


def verify_binary_label(label: int) -> int:
    """Return ``label`` when it is ``0`` or ``1``."""
    try:
        return verify_label(label, 2)
    except InvalidClassIndexError as exc:
        raise IncompatibleInputError("binary label 0 or 1", label) from exc


__all__ = [
    "verify_binary_label",
    "verify_finite_order",
    "verify_label",
    "verify_lengths",
    "verify_range",
]
