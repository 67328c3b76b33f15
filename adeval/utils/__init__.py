"""Utility functions for experiment metrics.

This module provides input validation, curve integration, missing-value
handling and array coercion used across the adeval package.
"""

from .validation import validate_scores, validate_labels, validate_pair, is_unusable
from .computation import compute_auc, top_n_count
from .missing import (
    MISSING,
    is_missing,
    skip_missing,
    miss_mean,
    miss_max,
    miss_argmax,
    round_score,
)
from .decorator import as_numpy_array

__all__ = [
    # Validation functions
    "validate_scores",
    "validate_labels",
    "validate_pair",
    "is_unusable",
    # Computation functions
    "compute_auc",
    "top_n_count",
    # Missing-value handling
    "MISSING",
    "is_missing",
    "skip_missing",
    "miss_mean",
    "miss_max",
    "miss_argmax",
    "round_score",
    # Decorators
    "as_numpy_array",
]
