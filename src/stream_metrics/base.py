"""Base classes shared by stream-metrics components."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

from stream_metrics.utils.logger import get_logger

StagedT = TypeVar("StagedT")
OutputT = TypeVar("OutputT")


class BaseComponent:
    """Component carrying a structlog logger named after its class."""

    def __init__(self) -> None:
        """Bind a logger for the concrete component type."""
        self.logger = get_logger(self.__class__.__name__)


class StreamingMetric(BaseComponent, ABC, Generic[StagedT, OutputT]):
    """Metric accumulated over batches through ``update``/``reset``/``compute``.

    Updates happen in two steps. :meth:`stage` validates a batch and folds it
    into a standalone partial state without touching the metric; :meth:`commit`
    merges that partial state in. A batch that fails validation therefore
    never leaves a metric half updated, and a :class:`MetricCollection` can
    stage every member before committing any of them.
    """

    @abstractmethod
    def stage(self, predictions: Any, targets: Any) -> StagedT:
        """Validate a batch and return its partial state."""

    @abstractmethod
    def commit(self, staged: StagedT) -> None:
        """Merge a partial state produced by :meth:`stage`."""

    @abstractmethod
    def reset(self) -> None:
        """Return the metric to its freshly constructed state."""

    @abstractmethod
    def compute(self) -> OutputT | None:
        """Return the metric value, or ``None`` when it is undefined."""

    def update(self, predictions: Any, targets: Any) -> None:
        """Incorporate one batch of predictions and targets."""
        self.commit(self.stage(predictions, targets))


__all__ = ["BaseComponent", "StreamingMetric"]
