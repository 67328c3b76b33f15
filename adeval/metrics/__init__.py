"""Label-based anomaly detection metrics."""

from .auroc import auroc, roc_curve
from .precision import topprecision

__all__ = [
    "auroc",
    "roc_curve",
    "topprecision",
]
