"""Mathematical computation utilities for experiment metrics."""

import numpy as np


def compute_auc(x: np.ndarray, y: np.ndarray) -> float:
    """Compute area under curve using trapezoidal rule."""
    # Stable sort keeps the curve order of points sharing an x value
    idx = np.argsort(x, kind="stable")
    return float(np.trapezoid(y[idx], x[idx]))


def top_n_count(n_samples: int, p: float) -> int:
    """
    Number of samples in the top fraction p of n_samples.

    Rounds half to even, so 2.5 samples become 2.

    Examples
    --------
    >>> top_n_count(100, 0.05)
    5
    """
    if not 0 <= p <= 1:
        raise ValueError(f"Invalid quantile p={p}, must be in [0, 1]")
    return int(round(n_samples * p))
