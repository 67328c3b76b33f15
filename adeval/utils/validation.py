"""Input validation utilities for experiment metrics."""

import numpy as np


def validate_scores(scores: np.ndarray, name: str = "scores") -> np.ndarray:
    """Ensure scores are a 1D float array. NaN values are left for the caller."""
    scores = np.asarray(scores, dtype=float)
    if scores.ndim != 1:
        raise ValueError(f"{name} must be 1D array, got shape {scores.shape}")
    return scores


def validate_labels(labels: np.ndarray, name: str = "labels") -> np.ndarray:
    """Ensure labels are a 1D array coded as 0/1."""
    labels = np.asarray(labels)
    if labels.ndim != 1:
        raise ValueError(f"{name} must be 1D array, got shape {labels.shape}")
    if labels.dtype == bool:
        labels = labels.astype(int)
    if len(labels) and not np.isin(labels, (0, 1)).all():
        raise ValueError(f"{name} must be binary coded as 0/1")
    return labels.astype(int)


def validate_pair(scores: np.ndarray, labels: np.ndarray):
    """Validate a score/label pair and check that lengths match."""
    scores = validate_scores(scores)
    labels = validate_labels(labels)
    if len(scores) != len(labels):
        raise ValueError(
            f"Length mismatch: {len(scores)} scores vs {len(labels)} labels"
        )
    return scores, labels


def is_unusable(scores: np.ndarray) -> bool:
    """A score array is unusable if it is empty or starts with NaN."""
    return len(scores) == 0 or bool(np.isnan(scores[0]))
