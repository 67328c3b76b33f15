"""
constants.py
Shared names and defaults for experiment collection and scoring.
"""

# Keys stored in every run artifact
TRAIN_SCORE_KEY = "training_anomaly_score"
TRAIN_LABELS_KEY = "training_labels"
TEST_SCORE_KEY = "testing_anomaly_score"
TEST_LABELS_KEY = "testing_labels"
FIT_TIME_KEY = "fit_time"
PREDICT_TIME_KEY = "predict_time"

ARTIFACT_KEYS = [
    TRAIN_SCORE_KEY,
    TRAIN_LABELS_KEY,
    TEST_SCORE_KEY,
    TEST_LABELS_KEY,
    FIT_TIME_KEY,
    PREDICT_TIME_KEY,
]

# Column order of the flat result table
RESULT_COLUMNS = [
    "dataset",
    "algorithm",
    "iteration",
    "settings",
    "train_auroc",
    "test_auroc",
    "top_5p",
    "fit_time",
    "predict_time",
]

# Numeric columns of the result table (coerced on load)
DATA_COLUMNS = RESULT_COLUMNS[4:]

# Fields that can drive hyperparameter selection
SELECTION_METRICS = ["train_auroc", "top_5p"]

TIME_FIELDS = ["fit_time", "predict_time"]

# Fraction of top-scored training samples used for top_5p
TOP_QUANTILE = 0.05

ROUND_DIGITS = 6

# Literal written to / read from CSV for missing cells
MISSING_TOKEN = "missing"

SUMMARY_LABEL = "mean rank"
