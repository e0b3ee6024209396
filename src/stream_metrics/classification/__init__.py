"""Classification metrics accumulated over batches.

Every metric here follows the :class:`~stream_metrics.base.StreamingMetric`
contract: ``update`` with batches, ``compute`` at any point, ``reset`` to
start over.
"""

from .accuracy import (
    BinaryAccuracy,
    LabelAccuracy,
    LabelCounts,
    MulticlassAccuracy,
    accuracy_from_counts,
)
from .auroc import BinaryAuroc, BinnedScores, ExactScores
from .averaging import AverageMethod, average_ratios
from .confusion_matrix import BinaryConfusionMatrix
from .f1 import BinaryF1Score, MulticlassF1Score, f1_from_counts
from .hinge import BinaryHingeLoss
from .jaccard import BinaryJaccardIndex, MulticlassJaccardIndex, jaccard_from_counts
from .precision_recall import (
    BinaryPrecision,
    BinaryRecall,
    MulticlassPrecision,
    MulticlassRecall,
    precision_from_counts,
    recall_from_counts,
)
from .stat_scores import BinaryStatScores, MulticlassStatScores

__all__ = [
    "AverageMethod",
    "BinaryAccuracy",
    "BinaryAuroc",
    "BinaryConfusionMatrix",
    "BinaryF1Score",
    "BinaryHingeLoss",
    "BinaryJaccardIndex",
    "BinaryPrecision",
    "BinaryRecall",
    "BinaryStatScores",
    "BinnedScores",
    "ExactScores",
    "LabelAccuracy",
    "LabelCounts",
    "MulticlassAccuracy",
    "MulticlassF1Score",
    "MulticlassJaccardIndex",
    "MulticlassPrecision",
    "MulticlassRecall",
    "MulticlassStatScores",
    "accuracy_from_counts",
    "average_ratios",
    "f1_from_counts",
    "jaccard_from_counts",
    "precision_from_counts",
    "recall_from_counts",
]
