"""Tie-aware ranking of algorithm scores."""

from typing import Any, List, Sequence

import numpy as np
import pandas as pd
from scipy.stats import rankdata

from adeval.constants import SUMMARY_LABEL
from adeval.utils.missing import MISSING, is_missing, miss_mean, skip_missing


def rank_values(values: Sequence[Any], higher_is_better: bool = True) -> List[Any]:
    """
    Rank one row of scores.

    Tied values share the average of the ranks they jointly occupy. Missing
    entries are ranked as missing and do not consume a rank.

    Parameters
    ----------
    values : sequence of float or missing
        Scores of the algorithms in one row.
    higher_is_better : bool, default=True
        If True the highest score gets rank 1, otherwise the lowest.

    Returns
    -------
    list
        Ranks aligned with ``values``.

    Examples
    --------
    >>> rank_values([10, 10, 5])
    [1.5, 1.5, 3.0]
    """
    mask = [not is_missing(v) for v in values]
    present = np.asarray([float(v) for v, keep in zip(values, mask) if keep])

    ranks: List[Any] = [MISSING] * len(values)
    if len(present) == 0:
        return ranks

    keys = -present if higher_is_better else present
    present_ranks = iter(rankdata(keys, method="average"))
    for i, keep in enumerate(mask):
        if keep:
            ranks[i] = float(next(present_ranks))
    return ranks


def rank_table(
    table: pd.DataFrame,
    higher_is_better: bool = True,
    summary_label: str = SUMMARY_LABEL,
) -> pd.DataFrame:
    """
    Compute row ranks for a score table and add a bottom row with mean ranks.

    The first column labels the rows (typically the dataset name), every other
    column holds the scores of one algorithm. The input is not modified.

    Parameters
    ----------
    table : pandas.DataFrame
        Label column followed by one score column per algorithm.
    higher_is_better : bool, default=True
        Direction of the scores.
    summary_label : str, default="mean rank"
        Label of the appended summary row.

    Returns
    -------
    pandas.DataFrame
        Rank table with ``len(table) + 1`` rows. The summary row holds, per
        algorithm, the mean of its non-missing ranks (missing if it has none).
    """
    if table.shape[1] < 2:
        raise ValueError("Rank table needs a label column and at least one score column")

    label_col = table.columns[0]
    algorithms = list(table.columns[1:])

    records = []
    for _, row in table.iterrows():
        ranks = rank_values([row[alg] for alg in algorithms], higher_is_better)
        record = {label_col: row[label_col]}
        record.update(zip(algorithms, ranks))
        records.append(record)

    summary = {label_col: summary_label}
    for alg in algorithms:
        summary[alg] = miss_mean(skip_missing(r[alg] for r in records))
    records.append(summary)

    return pd.DataFrame(records, columns=[label_col] + algorithms, dtype=object)
