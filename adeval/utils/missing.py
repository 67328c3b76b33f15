"""Missing-value marker and reductions that tolerate empty input."""

from typing import Any, Iterable, List, Sequence, Tuple, Union

import numpy as np
import pandas as pd

from adeval.constants import ROUND_DIGITS

# Distinguished marker for values that could not be computed
MISSING = pd.NA


def is_missing(value: Any) -> bool:
    """Return True for the missing marker, None or a float NaN."""
    if isinstance(value, (list, tuple, np.ndarray)):
        return False
    return bool(pd.isna(value))


def skip_missing(values: Iterable[Any]) -> List[Any]:
    """Drop missing entries, keeping the order of the rest."""
    return [v for v in values if not is_missing(v)]


def miss_mean(values: Sequence[float]) -> Union[float, Any]:
    """If values is empty, return missing, else compute the mean."""
    if len(values) == 0:
        return MISSING
    return float(np.mean(values))


def miss_max(values: Sequence[float]) -> Union[float, Any]:
    """If values is empty, return missing, else return the maximum."""
    if len(values) == 0:
        return MISSING
    return float(np.max(values))


def miss_argmax(values: Sequence[float]) -> Union[Tuple[float, int], Any]:
    """
    If values is empty, return missing, else return the maximum and its index.

    The index is that of the first occurrence of the maximum.

    Examples
    --------
    >>> miss_argmax([3, 5, 4])
    (5.0, 1)
    """
    if len(values) == 0:
        return MISSING
    idx = int(np.argmax(values))
    return float(values[idx]), idx


def round_score(value: Any, digits: int = ROUND_DIGITS) -> Union[float, Any]:
    """Round a real score, passing missing through unchanged."""
    if is_missing(value):
        return MISSING
    return round(float(value), digits)
