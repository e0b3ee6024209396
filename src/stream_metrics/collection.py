"""Groups of metrics updated from the same batches."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

from stream_metrics.base import BaseComponent, StreamingMetric


def _empty_values() -> dict[str, Any]:
    """Return a new values dictionary with precise typing."""
    return {}


@dataclass(frozen=True, slots=True)
class MetricReport:
    """Snapshot of every metric in a collection."""

    values: dict[str, Any] = field(default_factory=_empty_values)
    batches: int = 0
    samples: int = 0

    def __getitem__(self, name: str) -> Any:
        """Return the value computed for ``name``."""
        return self.values[name]

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable representation of the report."""
        return {
            "values": dict(self.values),
            "batches": self.batches,
            "samples": self.samples,
        }


class MetricCollection(BaseComponent):
    """Named metrics that consume the same prediction/target batches.

    A batch is staged in every member before any of them is updated, so one
    member rejecting the batch leaves the whole collection unchanged.
    """

    def __init__(self, metrics: Mapping[str, StreamingMetric[Any, Any]]) -> None:
        """Initialise the collection with uniquely named metrics."""
        super().__init__()
        if not metrics:
            msg = "A metric collection requires at least one metric"
            raise ValueError(msg)
        for name in metrics:
            if not name or not name.strip():
                msg = "Metric names must be non-empty"
                raise ValueError(msg)
        self._metrics = dict(metrics)
        self._batches = 0
        self._samples = 0

    def __len__(self) -> int:
        return len(self._metrics)

    def __iter__(self) -> Iterator[str]:
        return iter(self._metrics)

    def __contains__(self, name: object) -> bool:
        return name in self._metrics

    def __getitem__(self, name: str) -> StreamingMetric[Any, Any]:
        return self._metrics[name]

    def add(self, name: str, metric: StreamingMetric[Any, Any]) -> None:
        """Register another metric under a new name."""
        if name in self._metrics:
            msg = f"Duplicate metric name detected: {name}"
            raise ValueError(msg)
        if not name.strip():
            msg = "Metric names must be non-empty"
            raise ValueError(msg)
        self._metrics[name] = metric

    def update(self, predictions: Any, targets: Any) -> None:
        """Stage the batch in every metric, then commit all of them."""
        staged: list[tuple[StreamingMetric[Any, Any], object]] = []
        for name, metric in self._metrics.items():
            try:
                staged.append((metric, metric.stage(predictions, targets)))
            except ValueError as exc:
                self.logger.debug(
                    "Metric rejected batch",
                    metric=name,
                    error=str(exc),
                )
                raise

        for metric, partial in staged:
            metric.commit(partial)

        self._batches += 1
        self._samples += len(targets)
        self.logger.debug(
            "Updated metric collection",
            batch_size=len(targets),
            batches=self._batches,
        )

    def reset(self) -> None:
        """Reset every metric."""
        for metric in self._metrics.values():
            metric.reset()
        self._batches = 0
        self._samples = 0

    def compute(self) -> MetricReport:
        """Compute every metric and bundle the values."""
        values = {name: metric.compute() for name, metric in self._metrics.items()}
        return MetricReport(
            values=values,
            batches=self._batches,
            samples=self._samples,
        )


__all__ = ["MetricCollection", "MetricReport"]
