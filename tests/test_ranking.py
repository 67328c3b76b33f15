"""Tests for tie-aware rank tables."""

import pandas as pd
import pytest
from adeval.ranking import rank_values, rank_table
from adeval.utils.missing import MISSING, is_missing


def _score_table():
    return pd.DataFrame(
        {
            "dataset": ["abalone", "yeast", "wine"],
            "knn": [10.0, MISSING, 0.7],
            "lof": [10.0, 5.0, 0.9],
            "ocsvm": [5.0, 5.0, 0.8],
        },
        dtype=object,
    )


class TestRankValues:
    """Test suite for ranking a single row."""

    def test_two_way_tie(self):
        assert rank_values([10, 10, 5]) == [1.5, 1.5, 3.0]

    def test_three_way_tie(self):
        """Ties for ranks 2, 3, 4 all receive 3."""
        assert rank_values([9, 4, 4, 4, 1]) == [1.0, 3.0, 3.0, 3.0, 5.0]

    def test_missing_consumes_no_rank(self):
        ranks = rank_values([MISSING, 5, 5])
        assert ranks[0] is MISSING
        assert ranks[1:] == [1.5, 1.5]

    def test_lower_is_better(self):
        assert rank_values([10, 10, 5], higher_is_better=False) == [2.5, 2.5, 1.0]

    def test_all_missing(self):
        assert all(r is MISSING for r in rank_values([MISSING, None]))

    def test_no_ties(self):
        assert rank_values([0.1, 0.9, 0.5]) == [3.0, 1.0, 2.0]


class TestRankTable:
    """Test suite for rank tables with a mean-rank summary row."""

    def test_ranks_and_summary(self):
        ranked = rank_table(_score_table())

        assert len(ranked) == 4
        assert list(ranked.columns) == ["dataset", "knn", "lof", "ocsvm"]
        assert list(ranked.loc[0, ["knn", "lof", "ocsvm"]]) == [1.5, 1.5, 3.0]
        assert is_missing(ranked.loc[1, "knn"])
        assert list(ranked.loc[1, ["lof", "ocsvm"]]) == [1.5, 1.5]
        assert list(ranked.loc[2, ["knn", "lof", "ocsvm"]]) == [3.0, 1.0, 2.0]

        summary = ranked.iloc[-1]
        assert summary["dataset"] == "mean rank"
        # knn: mean(1.5, 3) skipping the missing row
        assert summary["knn"] == pytest.approx(2.25)
        assert summary["lof"] == pytest.approx((1.5 + 1.5 + 1.0) / 3)
        assert summary["ocsvm"] == pytest.approx((3.0 + 1.5 + 2.0) / 3)

    def test_input_not_modified(self):
        table = _score_table()
        original = table.copy()
        rank_table(table)
        pd.testing.assert_frame_equal(table, original)

    def test_lower_is_better_summary(self):
        times = pd.DataFrame(
            {"dataset": ["a", "b"], "knn": [2.0, 3.0], "lof": [1.0, 4.0]}
        )
        ranked = rank_table(times, higher_is_better=False, summary_label="avg")
        assert ranked.iloc[-1]["dataset"] == "avg"
        assert ranked.iloc[-1]["knn"] == pytest.approx(1.5)
        assert ranked.iloc[-1]["lof"] == pytest.approx(1.5)

    def test_column_never_ranked_is_missing(self):
        table = pd.DataFrame(
            {"dataset": ["a", "b"], "knn": [MISSING, MISSING], "lof": [0.5, 0.6]},
            dtype=object,
        )
        ranked = rank_table(table)
        assert is_missing(ranked.iloc[-1]["knn"])
        assert ranked.iloc[-1]["lof"] == 1.0

    def test_requires_score_columns(self):
        with pytest.raises(ValueError, match="score column"):
            rank_table(pd.DataFrame({"dataset": ["a"]}))
