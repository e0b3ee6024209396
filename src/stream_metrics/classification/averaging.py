"""Micro, macro and weighted combination of per-class ratios."""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum


class AverageMethod(str, Enum):
    """How per-class ratios are combined into one multiclass score."""

    MICRO = "micro"
    MACRO = "macro"
    WEIGHTED = "weighted"


def average_ratios(
    numerators: Sequence[float],
    denominators: Sequence[float],
    supports: Sequence[float],
    method: AverageMethod | str,
) -> float | None:
    """Combine per-class ``numerator / denominator`` ratios.

    ``MICRO`` pools every numerator and denominator before dividing once.
    ``MACRO`` takes the plain mean of the per-class ratios and ``WEIGHTED``
    weights them by ``supports``. Classes whose denominator is zero have no
    ratio; macro and weighted averages leave them out entirely instead of
    counting them as zero.

    Returns:
        The combined score, or ``None`` when no ratio is defined.

    """
    if not len(numerators) == len(denominators) == len(supports):
        msg = "Numerators, denominators and supports must have the same length"
        raise ValueError(msg)

    average = AverageMethod(method)

    if average is AverageMethod.MICRO:
        pooled_denominator = sum(denominators)
        if pooled_denominator <= 0:
            return None
        return sum(numerators) / pooled_denominator

    weighted_sum = 0.0
    total_weight = 0.0
    for numerator, denominator, support in zip(
        numerators, denominators, supports, strict=True,
    ):
        if denominator <= 0:
            continue
        weight = 1.0 if average is AverageMethod.MACRO else float(support)
        weighted_sum += weight * (numerator / denominator)
        total_weight += weight

    if total_weight <= 0:
        return None
    return weighted_sum / total_weight


__all__ = ["AverageMethod", "average_ratios"]
