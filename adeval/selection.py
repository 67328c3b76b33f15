"""Model-selection policies turning run results into per-algorithm scores.

- MaxOverIterations: best testing AUROC in each iteration, averaged
- SelectByTrainMetric: hyperparameters chosen on a training metric
  (training AUROC or top 5% precision), scored by their testing AUROC
- MeanTime: mean fit or predict time
"""

from collections import OrderedDict
from typing import Any, Callable, Dict, Hashable, Iterable, List, Sequence

import pandas as pd

from adeval.base import ScoreTable, SelectionError, SelectionPolicy
from adeval.collect import ResultRow
from adeval.constants import SELECTION_METRICS, TIME_FIELDS
from adeval.utils.missing import is_missing, miss_max, miss_mean, skip_missing


def group_rows(
    rows: Iterable[ResultRow], key: Callable[[ResultRow], Hashable]
) -> "OrderedDict[Hashable, List[ResultRow]]":
    """Group rows by ``key`` in one pass, groups in order of first appearance."""
    groups: "OrderedDict[Hashable, List[ResultRow]]" = OrderedDict()
    for row in rows:
        groups.setdefault(key(row), []).append(row)
    return groups


class MaxOverIterations(SelectionPolicy):
    """
    Score algorithms by their maximum testing AUROC within each experiment
    iteration, averaged over iterations.
    """

    def score_rows(self, rows: List[ResultRow]) -> Any:
        by_iteration = group_rows(rows, lambda r: r.iteration)
        maxima = [
            miss_max(skip_missing(r.test_auroc for r in group))
            for group in by_iteration.values()
        ]
        return miss_mean(skip_missing(maxima))


class SelectByTrainMetric(SelectionPolicy):
    """
    Choose the hyperparameter settings with the best mean training metric,
    then score the algorithm as the mean testing AUROC of those settings
    over all iterations.

    Parameters
    ----------
    metric : {"train_auroc", "top_5p"}, default="train_auroc"
        Row field driving the selection.
    """

    def __init__(self, metric: str = "train_auroc"):
        if metric not in SELECTION_METRICS:
            raise ValueError(
                f"Unknown selection metric: {metric}, expected one of {SELECTION_METRICS}"
            )
        self.metric = metric

    def best_settings(self, rows: List[ResultRow]) -> Any:
        """Return the winning settings identifier, or None if no group qualifies."""
        by_settings = group_rows(rows, lambda r: r.settings)
        means = [
            (settings, miss_mean(skip_missing(getattr(r, self.metric) for r in group)))
            for settings, group in by_settings.items()
        ]
        candidates = [(s, m) for s, m in means if not is_missing(m)]
        if not candidates:
            return None
        # sorted() is stable: the first group wins among equal means
        return sorted(candidates, key=lambda sm: sm[1], reverse=True)[0][0]

    def score_rows(self, rows: List[ResultRow]) -> Any:
        settings = self.best_settings(rows)
        chosen = [r for r in rows if r.settings == settings]
        return miss_mean(skip_missing(r.test_auroc for r in chosen))


class MeanTime(SelectionPolicy):
    """
    Score algorithms by mean fit/predict time over iterations and
    hyperparameter settings.

    Parameters
    ----------
    field : {"fit_time", "predict_time"}
    """

    def __init__(self, field: str):
        if field not in TIME_FIELDS:
            raise ValueError(f"Unknown time field: {field}, expected one of {TIME_FIELDS}")
        self.field = field

    def score_rows(self, rows: List[ResultRow]) -> Any:
        return miss_mean(skip_missing(getattr(r, self.field) for r in rows))


# ------------------------- Functional shortcuts ------------------------- #

def max_auroc(rows: Sequence[ResultRow], algorithms: Sequence[str]) -> ScoreTable:
    """Maximum testing AUROC averaged over experiment iterations."""
    return MaxOverIterations().compute(rows, algorithms)


def train_auroc(rows: Sequence[ResultRow], algorithms: Sequence[str]) -> ScoreTable:
    """Testing AUROC of the settings with the best training AUROC."""
    return SelectByTrainMetric("train_auroc").compute(rows, algorithms)


def top_precision(rows: Sequence[ResultRow], algorithms: Sequence[str]) -> ScoreTable:
    """Testing AUROC of the settings with the best top 5% training precision."""
    return SelectByTrainMetric("top_5p").compute(rows, algorithms)


def mean_time(
    rows: Sequence[ResultRow], algorithms: Sequence[str], field: str
) -> ScoreTable:
    """Mean fit or predict time over iterations and settings."""
    return MeanTime(field).compute(rows, algorithms)


# ------------------------- Score matrices ------------------------- #

def scores_to_frame(tables: Iterable[ScoreTable], algorithms: Sequence[str]) -> pd.DataFrame:
    """Assemble per-dataset score tables into a dataset x algorithm frame."""
    columns = ["dataset"] + list(algorithms)
    records: List[Dict[str, Any]] = [t.to_record() for t in tables]
    return pd.DataFrame(records, columns=columns, dtype=object)


def score_datasets(
    rows: Sequence[ResultRow],
    algorithms: Sequence[str],
    policy: SelectionPolicy,
) -> pd.DataFrame:
    """Apply ``policy`` to every dataset of a multi-dataset result table."""
    by_dataset = group_rows(rows, lambda r: r.dataset)
    tables = [
        policy.compute(group, algorithms, dataset=dataset)
        for dataset, group in by_dataset.items()
    ]
    return scores_to_frame(tables, algorithms)


__all__ = [
    "SelectionError",
    "ScoreTable",
    "SelectionPolicy",
    "MaxOverIterations",
    "SelectByTrainMetric",
    "MeanTime",
    "group_rows",
    "max_auroc",
    "train_auroc",
    "top_precision",
    "mean_time",
    "scores_to_frame",
    "score_datasets",
]
