"""Basic usage example: run detectors, collect results, select and rank."""
import os
import tempfile
import time

import numpy as np
from sklearn.datasets import make_blobs
from sklearn.ensemble import IsolationForest
from sklearn.neighbors import LocalOutlierFactor
from sklearn.svm import OneClassSVM

import adeval

SETTINGS = {
    "IsolationForest": [{"n_estimators": 50}, {"n_estimators": 200}],
    "LOF": [{"n_neighbors": 5}, {"n_neighbors": 20}],
    "OCSVM": [{"gamma": 0.1}, {"gamma": 1.0}],
}


def make_dataset(seed, n_anomalies=30):
    """Blobs with uniform anomalies appended at the tail."""
    X_normal, _ = make_blobs(n_samples=400, centers=3, n_features=2, random_state=seed)
    rng = np.random.default_rng(seed)
    X_anomalies = rng.uniform(-12, 12, size=(n_anomalies, 2))
    X = np.vstack([X_normal, X_anomalies])
    y = np.hstack([np.zeros(len(X_normal), dtype=int), np.ones(n_anomalies, dtype=int)])
    return X, y


def build_detector(name, params):
    if name == "IsolationForest":
        return IsolationForest(random_state=0, **params)
    if name == "LOF":
        return LocalOutlierFactor(novelty=True, **params)
    return OneClassSVM(**params)


def run_experiments(root, datasets, iterations=3):
    """Write one .npz artifact per (dataset, detector, iteration, settings)."""
    for d, dataset in enumerate(datasets):
        for it in range(1, iterations + 1):
            X_train, y_train = make_dataset(seed=100 * d + it)
            X_test, y_test = make_dataset(seed=100 * d + it + 50)
            for name, grid in SETTINGS.items():
                for k, params in enumerate(grid):
                    detector = build_detector(name, params)
                    t0 = time.perf_counter()
                    detector.fit(X_train[y_train == 0])
                    fit_time = time.perf_counter() - t0

                    t0 = time.perf_counter()
                    test_scores = -detector.score_samples(X_test)  # Higher = more anomalous
                    predict_time = time.perf_counter() - t0
                    train_scores = -detector.score_samples(X_train)

                    path = os.path.join(root, dataset, name, str(it), f"setting_{k}.npz")
                    os.makedirs(os.path.dirname(path), exist_ok=True)
                    np.savez(
                        path,
                        training_anomaly_score=train_scores,
                        training_labels=y_train,
                        testing_anomaly_score=test_scores,
                        testing_labels=y_test,
                        fit_time=fit_time,
                        predict_time=predict_time,
                    )


def main():
    datasets = ["blobs-a", "blobs-b", "blobs-c"]
    algorithms = list(SETTINGS)

    with tempfile.TemporaryDirectory() as tmp:
        data_root = os.path.join(tmp, "experiments")
        table_root = os.path.join(tmp, "tables")

        print("Running detectors...")
        run_experiments(data_root, datasets)

        print("\nCollecting run metrics...")
        for dataset in datasets:
            rows = adeval.collect_dataset_stats(data_root, dataset, algorithms)
            adeval.save_table(
                adeval.results_to_frame(rows), os.path.join(table_root, f"{dataset}.csv")
            )
            print(f"{dataset}: {len(rows)} runs")

        policies = {
            "max test AUROC": adeval.MaxOverIterations(),
            "selected on train AUROC": adeval.SelectByTrainMetric("train_auroc"),
            "selected on top 5% precision": adeval.SelectByTrainMetric("top_5p"),
        }
        for title, policy in policies.items():
            print(f"\n=== {title} ===")
            scores = adeval.collect_scores(table_root, algorithms, policy)
            print(scores.to_string(index=False))
            print(adeval.rank_table(scores).iloc[[-1]].to_string(index=False))

        print("\n=== mean fit time (lower is better) ===")
        times = adeval.collect_scores(table_root, algorithms, adeval.MeanTime("fit_time"))
        print(adeval.rank_table(times, higher_is_better=False).to_string(index=False))


if __name__ == "__main__":
    main()
