"""Scoring and ranking of anomaly detection experiments.

This package recomputes label-based metrics from stored experiment runs and
reduces them into comparative per-algorithm scores:
- AUROC and top-quantile precision from raw anomaly scores and labels
- Collection of per-run results from an experiment output tree
- Model-selection policies: max over iterations, selection by training
  AUROC or top 5% precision, mean fit/predict time
- Tie-aware rank tables with mean ranks

Values that cannot be computed are represented by ``MISSING`` and skipped by
every reduction.
"""

from adeval.metrics import auroc, roc_curve, topprecision
from adeval.utils import (
    MISSING,
    is_missing,
    skip_missing,
    miss_mean,
    miss_max,
    miss_argmax,
)
from adeval.ranking import rank_values, rank_table
from adeval.collect import (
    ResultRow,
    ArtifactLoader,
    NpzArtifactLoader,
    compute_run_row,
    collect_dataset_stats,
    collect_stats,
)
from adeval.selection import (
    SelectionError,
    ScoreTable,
    SelectionPolicy,
    MaxOverIterations,
    SelectByTrainMetric,
    MeanTime,
    max_auroc,
    train_auroc,
    top_precision,
    mean_time,
    scores_to_frame,
    score_datasets,
)
from adeval.tables import (
    results_to_frame,
    frame_to_rows,
    load_table,
    save_table,
    load_results,
    collect_scores,
)

__version__ = "0.0.1"

__all__ = [
    # Metrics
    "auroc",
    "roc_curve",
    "topprecision",
    # Missing values
    "MISSING",
    "is_missing",
    "skip_missing",
    "miss_mean",
    "miss_max",
    "miss_argmax",
    # Ranking
    "rank_values",
    "rank_table",
    # Collection
    "ResultRow",
    "ArtifactLoader",
    "NpzArtifactLoader",
    "compute_run_row",
    "collect_dataset_stats",
    "collect_stats",
    # Selection
    "SelectionError",
    "ScoreTable",
    "SelectionPolicy",
    "MaxOverIterations",
    "SelectByTrainMetric",
    "MeanTime",
    "max_auroc",
    "train_auroc",
    "top_precision",
    "mean_time",
    "scores_to_frame",
    "score_datasets",
    # Tables
    "results_to_frame",
    "frame_to_rows",
    "load_table",
    "save_table",
    "load_results",
    "collect_scores",
]
