"""Tests for collecting run metrics from an experiment output tree."""

import os

import numpy as np
import pytest
from adeval.collect import (
    ArtifactLoader,
    NpzArtifactLoader,
    ResultRow,
    collect_dataset_stats,
    collect_stats,
    compute_run_row,
    filter_rows,
)
from adeval.constants import ARTIFACT_KEYS
from adeval.utils.missing import MISSING
from .synthetic_data import make_experiment_tree, write_run_artifact


def _known_run(root):
    """One run with hand-computable metrics."""
    train_scores = np.arange(20) / 20
    train_scores[5] = 0.99  # a normal sample gets the top score
    train_labels = np.array([0] * 18 + [1, 1])
    path = os.path.join(root, "iris", "knn", "1", "k5.npz")
    write_run_artifact(
        path,
        train_scores,
        train_labels,
        [0.9, 0.8, 0.2, 0.1],
        [1, 1, 0, 0],
        fit_time=1.5,
        predict_time=0.25,
    )
    return path


class DictLoader(ArtifactLoader):
    """In-memory artifacts keyed by path."""

    def __init__(self, artifacts):
        self.artifacts = artifacts
        self.calls = []

    def load(self, path, key):
        self.calls.append((path, key))
        return self.artifacts[path][key]


class TestComputeRunRow:
    def test_round_trip_known_values(self, tmp_path):
        path = _known_run(str(tmp_path))
        row = compute_run_row(path, "iris", "knn", "1", "k5.npz")

        assert row.dataset == "iris"
        assert row.algorithm == "knn"
        assert row.iteration == "1"
        assert row.settings == "k5.npz"
        # both anomalies beat 17 of 18 normals
        assert row.train_auroc == pytest.approx(34 / 36, abs=1e-6)
        assert row.test_auroc == pytest.approx(1.0, abs=1e-6)
        # the single top-scored sample is normal
        assert row.top_5p == pytest.approx(0.0, abs=1e-6)
        assert row.fit_time == pytest.approx(1.5)
        assert row.predict_time == pytest.approx(0.25)

    def test_nan_scores_give_missing(self, tmp_path):
        path = os.path.join(str(tmp_path), "run.npz")
        write_run_artifact(
            path,
            np.full(20, np.nan),
            np.array([0] * 19 + [1]),
            [0.9, 0.1],
            [1, 0],
        )
        row = compute_run_row(path, "iris", "knn", "1", "run.npz")
        assert row.train_auroc is MISSING
        assert row.top_5p is MISSING
        assert row.test_auroc == 1.0

    def test_missing_key_raises(self, tmp_path):
        path = os.path.join(str(tmp_path), "broken.npz")
        with open(path, "wb") as f:
            np.savez(f, training_anomaly_score=np.ones(3))
        with pytest.raises(KeyError, match="training_labels"):
            compute_run_row(path, "iris", "knn", "1", "broken.npz")

    def test_row_is_immutable(self):
        row = ResultRow("iris", "knn", "1", "s1", 0.5, 0.5, 0.5, 1.0, 1.0)
        with pytest.raises(AttributeError):
            row.test_auroc = 0.9


class TestCollectDatasetStats:
    def test_one_row_per_run(self, tmp_path):
        make_experiment_tree(
            str(tmp_path),
            datasets=["iris"],
            algorithms=["knn", "lof", "ocsvm"],
            iterations=["1", "2"],
            settings=["s1.npz", "s2.npz"],
            random_state=0,
        )
        rows = collect_dataset_stats(str(tmp_path), "iris", ["knn", "lof"])

        assert len(rows) == 2 * 2 * 2
        assert {r.algorithm for r in rows} == {"knn", "lof"}
        assert {r.settings for r in rows} == {"s1.npz", "s2.npz"}
        # deterministic order: algorithm, iteration, run
        keys = [(r.algorithm, r.iteration, r.settings) for r in rows]
        assert keys == sorted(keys)
        for r in rows:
            assert 0.0 <= r.train_auroc <= 1.0
            assert 0.0 <= r.test_auroc <= 1.0

    def test_unknown_algorithms_ignored(self, tmp_path):
        make_experiment_tree(str(tmp_path), algorithms=["knn"], random_state=0)
        assert collect_dataset_stats(str(tmp_path), "iris", ["isoforest"]) == []

    def test_missing_dataset_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            collect_dataset_stats(str(tmp_path), "nope", ["knn"])

    def test_injected_loader_and_lister(self):
        tree = {
            "root/iris": ["knn"],
            "root/iris/knn": ["1"],
            "root/iris/knn/1": ["a"],
        }
        artifacts = {
            os.path.join("root", "iris", "knn", "1", "a"): {
                "training_anomaly_score": np.array([0.9, 0.1]),
                "training_labels": np.array([1, 0]),
                "testing_anomaly_score": np.array([0.1, 0.9]),
                "testing_labels": np.array([1, 0]),
                "fit_time": 2.0,
                "predict_time": 0.5,
            }
        }
        loader = DictLoader(artifacts)
        lister = lambda p: tree[p.replace(os.sep, "/")]

        rows = collect_dataset_stats("root", "iris", ["knn"], loader=loader, lister=lister)

        assert len(rows) == 1
        assert rows[0].train_auroc == 1.0
        assert rows[0].test_auroc == 0.0
        assert rows[0].fit_time == 2.0
        assert {key for _, key in loader.calls} == set(ARTIFACT_KEYS)


class TestCollectStats:
    def test_all_datasets(self, tmp_path):
        make_experiment_tree(
            str(tmp_path),
            datasets=["iris", "wine"],
            algorithms=["knn"],
            iterations=["1"],
            settings=["s1.npz"],
            random_state=1,
        )
        rows = collect_stats(str(tmp_path), ["knn"])
        assert [r.dataset for r in rows] == ["iris", "wine"]

    def test_loader_errors_abort(self, tmp_path):
        make_experiment_tree(str(tmp_path), algorithms=["knn"], random_state=2)
        with open(os.path.join(str(tmp_path), "iris", "knn", "1", "zz.npz"), "w") as f:
            f.write("not an archive")
        with pytest.raises((OSError, ValueError)):
            collect_stats(str(tmp_path), ["knn"])


class TestNpzArtifactLoader:
    def test_scalar_times_are_python_floats(self, tmp_path):
        path = _known_run(str(tmp_path))
        loader = NpzArtifactLoader()
        assert isinstance(loader.load(path, "fit_time"), float)
        assert loader.load(path, "testing_labels").tolist() == [1, 1, 0, 0]

    def test_run_opens_archive_once(self, tmp_path, monkeypatch):
        path = _known_run(str(tmp_path))
        opened = []
        real_load = np.load

        def counting_load(*args, **kwargs):
            opened.append(args[0])
            return real_load(*args, **kwargs)

        monkeypatch.setattr(np, "load", counting_load)
        compute_run_row(path, "iris", "knn", "1", "k5.npz")
        assert opened == [path]

    def test_load_many_raises_on_absent_key(self, tmp_path):
        path = _known_run(str(tmp_path))
        with pytest.raises(KeyError, match="labels"):
            NpzArtifactLoader().load_many(path, ["fit_time", "labels"])


def test_filter_rows():
    rows = [
        ResultRow("iris", "knn", "1", "s1", 0.5, 0.5, 0.5, 1.0, 1.0),
        ResultRow("iris", "lof", "1", "s1", 0.5, 0.5, 0.5, 1.0, 1.0),
        ResultRow("wine", "knn", "1", "s1", 0.5, 0.5, 0.5, 1.0, 1.0),
    ]
    assert len(filter_rows(rows, dataset="iris")) == 2
    assert len(filter_rows(rows, algorithm="knn")) == 2
    assert len(filter_rows(rows, dataset="iris", algorithm=["knn", "lof"])) == 2
