"""Abstract base class for model-selection policies."""

import warnings
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from adeval.collect import ResultRow, filter_rows
from adeval.utils.missing import MISSING, round_score


class SelectionError(LookupError):
    """Expected rows or groups are absent while scoring one algorithm."""


@dataclass
class ScoreTable:
    """One score per algorithm for a single dataset."""
    dataset: str
    scores: Dict[str, Any] = field(default_factory=dict)

    def to_record(self) -> Dict[str, Any]:
        """Flatten into ``{"dataset": ..., <algorithm>: score, ...}``."""
        return {"dataset": self.dataset, **self.scores}


class SelectionPolicy(ABC):
    """
    Abstract base class for policies reducing a result table to one score
    per algorithm.

    Subclasses implement :meth:`score_rows`, which receives the rows of one
    algorithm on one dataset. A :class:`SelectionError` raised there marks
    that algorithm as missing; every other exception propagates.
    """

    def compute(
        self,
        rows: Sequence[ResultRow],
        algorithms: Sequence[str],
        dataset: Optional[str] = None,
    ) -> ScoreTable:
        """
        Score every algorithm in ``algorithms`` on one dataset.

        Parameters
        ----------
        rows : sequence of ResultRow
            Result table, usually already restricted to one dataset.
        algorithms : sequence of str
            Algorithms to score. Algorithms not listed are ignored.
        dataset : str, optional
            Dataset to score. Defaults to the dataset of the first row.

        Returns
        -------
        ScoreTable
            Scores rounded to 6 decimals, missing where not computable.
        """
        if dataset is None:
            if len(rows) == 0:
                raise ValueError("Cannot infer the dataset of an empty result table")
            dataset = rows[0].dataset

        table = ScoreTable(dataset=dataset, scores={alg: MISSING for alg in algorithms})
        for alg in algorithms:
            try:
                selected = self._select(rows, dataset, alg)
                table.scores[alg] = round_score(self.score_rows(selected))
            except SelectionError as e:
                warnings.warn(
                    f"Could not score {alg} on {dataset}: {e}",
                    UserWarning,
                )
        return table

    def __call__(self, rows, algorithms, dataset=None) -> ScoreTable:
        return self.compute(rows, algorithms, dataset)

    @staticmethod
    def _select(rows: Sequence[ResultRow], dataset: str, algorithm: str) -> List[ResultRow]:
        selected = filter_rows(rows, dataset=dataset, algorithm=algorithm)
        if not selected:
            raise SelectionError(f"no result rows for algorithm {algorithm!r}")
        return selected

    @abstractmethod
    def score_rows(self, rows: List[ResultRow]) -> Any:
        """
        Reduce the rows of one algorithm on one dataset to a score.

        Returns
        -------
        float or missing
        """
        pass
