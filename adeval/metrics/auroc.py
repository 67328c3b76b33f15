"""Area under the ROC curve computed from raw anomaly scores."""

import warnings
from typing import Any, Tuple, Union

import numpy as np
from sklearn.metrics import roc_curve as _sk_roc_curve

from adeval.utils.computation import compute_auc
from adeval.utils.decorator import as_numpy_array
from adeval.utils.missing import MISSING
from adeval.utils.validation import is_unusable, validate_pair, validate_scores


@as_numpy_array("scores", "labels")
def roc_curve(scores: np.ndarray, labels: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """
    Compute the ROC curve of anomaly scores against binary labels.

    One threshold is placed at each distinct score value, in descending
    order, so tied scores never produce separate curve points.

    Parameters
    ----------
    scores : array-like of shape (n_samples,)
        Anomaly scores where higher values indicate anomalies.
    labels : array-like of shape (n_samples,)
        Ground truth, 1 for anomalies and 0 for normal samples.

    Returns
    -------
    fpr : np.ndarray
        False positive rates, starting at 0.
    tpr : np.ndarray
        True positive rates, starting at 0.
    """
    scores, labels = validate_pair(scores, labels)
    fpr, tpr, _ = _sk_roc_curve(labels, scores, pos_label=1, drop_intermediate=False)
    return fpr, tpr


@as_numpy_array("scores", "labels")
def auroc(scores: np.ndarray, labels: np.ndarray) -> Union[float, Any]:
    """
    Compute area under ROC curve.

    Returns the missing marker when the scores are unusable, i.e. the array
    is empty or its first element is NaN (a detector that failed to produce
    scores stores NaNs). Labels are not checked in that case. The curve is
    integrated with the trapezoidal rule.

    Parameters
    ----------
    scores : array-like of shape (n_samples,)
        Anomaly scores where higher values indicate anomalies.
    labels : array-like of shape (n_samples,)
        Ground truth coded as 0/1.

    Returns
    -------
    float or missing
        AUROC in [0, 1], or missing if it cannot be computed.

    Examples
    --------
    >>> auroc([0.9, 0.8, 0.2, 0.1], [1, 1, 0, 0])
    1.0
    """
    scores = validate_scores(scores)
    if is_unusable(scores):
        return MISSING

    scores, labels = validate_pair(scores, labels)

    if np.isnan(scores).any():
        warnings.warn(
            "Anomaly scores contain NaN values after the first element; "
            "AUROC is reported as missing.",
            RuntimeWarning,
        )
        return MISSING

    # ROC is undefined without both classes
    if len(np.unique(labels)) < 2:
        return MISSING

    fpr, tpr = roc_curve(scores, labels)
    return compute_auc(fpr, tpr)
