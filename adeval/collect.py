"""
collect.py

Walk an experiment output tree and recompute run metrics into a flat table.

Expected layout::

    <root>/<dataset>/<algorithm>/<iteration>/<run artifact>

Each run artifact stores the training/testing anomaly scores and labels plus
fit and predict times. The run artifact's file name identifies the
hyperparameter settings, so the same name across iterations means the same
configuration.
"""

import logging
import os
from abc import ABC, abstractmethod
from dataclasses import dataclass, astuple
from typing import Any, Callable, Dict, Iterable, List, Optional, Union

import numpy as np

from adeval.constants import (
    ARTIFACT_KEYS,
    FIT_TIME_KEY,
    PREDICT_TIME_KEY,
    TEST_LABELS_KEY,
    TEST_SCORE_KEY,
    TOP_QUANTILE,
    TRAIN_LABELS_KEY,
    TRAIN_SCORE_KEY,
)
from adeval.metrics import auroc, topprecision

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResultRow:
    """Metrics of one run: one (dataset, algorithm, iteration, settings) cell."""
    dataset: str
    algorithm: str
    iteration: str
    settings: str
    train_auroc: Any
    test_auroc: Any
    top_5p: Any
    fit_time: Any
    predict_time: Any

    def as_tuple(self) -> tuple:
        return astuple(self)


class ArtifactLoader(ABC):
    """Key-value access to a stored run artifact."""

    @abstractmethod
    def load(self, path: str, key: str) -> Any:
        """
        Load one stored value.

        Must raise if the key is absent.
        """
        pass

    def load_many(self, path: str, keys: Iterable[str]) -> Dict[str, Any]:
        """Load several values of one artifact, keyed by name."""
        return {key: self.load(path, key) for key in keys}


def _unwrap(value: np.ndarray) -> Any:
    # Scalars (times) are stored as 0-d arrays
    if value.ndim == 0:
        return value.item()
    return value


class NpzArtifactLoader(ArtifactLoader):
    """Loads run artifacts saved with ``numpy.savez``."""

    def load(self, path: str, key: str) -> Any:
        return self.load_many(path, [key])[key]

    def load_many(self, path: str, keys: Iterable[str]) -> Dict[str, Any]:
        """Read all requested keys from a single open archive."""
        values = {}
        with np.load(path, allow_pickle=False) as archive:
            for key in keys:
                if key not in archive.files:
                    raise KeyError(f"Key '{key}' not found in artifact {path}")
                values[key] = _unwrap(archive[key])
        return values


def list_directory(path: str) -> List[str]:
    """List directory entries in sorted order."""
    return sorted(os.listdir(path))


Lister = Callable[[str], Iterable[str]]


def compute_run_row(
    path: str,
    dataset: str,
    algorithm: str,
    iteration: str,
    settings: str,
    loader: Optional[ArtifactLoader] = None,
) -> ResultRow:
    """
    Compute training/testing AUROC, top 5% precision and times for one run.

    Parameters
    ----------
    path : str
        Path of the run artifact.
    dataset, algorithm, iteration, settings : str
        Identifiers recorded in the row.
    loader : ArtifactLoader, optional
        Artifact access, defaults to :class:`NpzArtifactLoader`.

    Returns
    -------
    ResultRow
    """
    loader = loader or NpzArtifactLoader()

    values = loader.load_many(path, ARTIFACT_KEYS)
    train_scores = values[TRAIN_SCORE_KEY]
    train_labels = values[TRAIN_LABELS_KEY]
    test_scores = values[TEST_SCORE_KEY]
    test_labels = values[TEST_LABELS_KEY]

    return ResultRow(
        dataset=dataset,
        algorithm=algorithm,
        iteration=iteration,
        settings=settings,
        train_auroc=auroc(train_scores, train_labels),
        test_auroc=auroc(test_scores, test_labels),
        top_5p=topprecision(train_scores, train_labels, TOP_QUANTILE),
        fit_time=float(values[FIT_TIME_KEY]),
        predict_time=float(values[PREDICT_TIME_KEY]),
    )


def collect_dataset_stats(
    datapath: str,
    dataset: str,
    algorithms: Iterable[str],
    loader: Optional[ArtifactLoader] = None,
    lister: Lister = list_directory,
) -> List[ResultRow]:
    """
    Compute stats for a single dataset and all experiments that were run on it.

    Only algorithm directories named in ``algorithms`` are visited. Any
    loading error propagates and aborts the collection.

    Returns
    -------
    list of ResultRow
        One row per run artifact.
    """
    loader = loader or NpzArtifactLoader()
    wanted = set(algorithms)
    path = os.path.join(datapath, dataset)

    rows: List[ResultRow] = []
    for algorithm in sorted(set(lister(path)) & wanted):
        alg_path = os.path.join(path, algorithm)
        for iteration in sorted(lister(alg_path)):
            iter_path = os.path.join(alg_path, iteration)
            for run in sorted(lister(iter_path)):
                run_path = os.path.join(iter_path, run)
                logger.debug("Loading run artifact %s", run_path)
                rows.append(
                    compute_run_row(run_path, dataset, algorithm, iteration, run, loader)
                )

    logger.info("Collected %d runs for dataset %s", len(rows), dataset)
    return rows


def collect_stats(
    datapath: str,
    algorithms: Iterable[str],
    loader: Optional[ArtifactLoader] = None,
    lister: Lister = list_directory,
) -> List[ResultRow]:
    """Gather stats for all datasets under ``datapath`` in a single table."""
    algorithms = list(algorithms)
    rows: List[ResultRow] = []
    for dataset in sorted(lister(datapath)):
        rows.extend(collect_dataset_stats(datapath, dataset, algorithms, loader, lister))
    return rows


def filter_rows(
    rows: Iterable[ResultRow],
    dataset: Optional[str] = None,
    algorithm: Optional[Union[str, Iterable[str]]] = None,
) -> List[ResultRow]:
    """Select rows by dataset and/or algorithm name(s)."""
    if isinstance(algorithm, str):
        algorithm = {algorithm}
    elif algorithm is not None:
        algorithm = set(algorithm)
    return [
        r for r in rows
        if (dataset is None or r.dataset == dataset)
        and (algorithm is None or r.algorithm in algorithm)
    ]
