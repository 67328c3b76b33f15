"""Precision on the top-scored fraction of samples."""

from typing import Any, Union

import numpy as np

from adeval.utils.computation import top_n_count
from adeval.utils.decorator import as_numpy_array
from adeval.utils.missing import MISSING
from adeval.utils.validation import is_unusable, validate_pair, validate_scores


@as_numpy_array("scores", "labels")
def topprecision(scores: np.ndarray, labels: np.ndarray, p: float) -> Union[float, Any]:
    """
    Compute precision in prediction based on top p% rated instances.

    The number of selected instances is ``topN = round(N * p)``. The
    numerator counts anomalies among the ``topN`` highest scores. The
    denominator is the number of anomalies among the last ``topN`` entries of
    the unsorted label array, not the total number of anomalies. The two
    agree only when anomalies are stored at the tail of the array.

    Parameters
    ----------
    scores : array-like of shape (n_samples,)
        Anomaly scores where higher values indicate anomalies.
    labels : array-like of shape (n_samples,)
        Ground truth coded as 0/1.
    p : float
        Fraction of top-scored instances, in [0, 1].

    Returns
    -------
    float or missing
        Precision, or missing if scores are unusable or the denominator is 0.

    Examples
    --------
    >>> topprecision([0.1, 0.2, 0.9, 0.8], [0, 0, 1, 1], 0.5)
    1.0
    """
    scores = validate_scores(scores)
    if is_unusable(scores):
        return MISSING

    scores, labels = validate_pair(scores, labels)

    n_top = top_n_count(len(scores), p)

    # Stable descending sort, ties keep their original order
    order = np.argsort(-scores, kind="stable")
    top_labels = labels[order][:n_top]

    tail = labels[len(labels) - n_top:] if n_top > 0 else labels[:0]
    denominator = tail.sum()
    if denominator == 0:
        return MISSING

    return float(top_labels.sum() / denominator)
