"""
tables.py

CSV load/save for result and score tables.

Missing cells are written as the literal ``missing`` and read back as the
missing marker.
"""

import os
from pathlib import Path
from typing import Iterable, List, Sequence, Union

import pandas as pd

from adeval.base import SelectionPolicy
from adeval.collect import ResultRow
from adeval.constants import DATA_COLUMNS, MISSING_TOKEN, RESULT_COLUMNS, ROUND_DIGITS
from adeval.selection import scores_to_frame
from adeval.utils.missing import MISSING, is_missing


# ------------------------- Row <-> frame ------------------------- #

def results_to_frame(rows: Iterable[ResultRow]) -> pd.DataFrame:
    """Build a DataFrame with one column per ResultRow field."""
    return pd.DataFrame(
        [row.as_tuple() for row in rows], columns=RESULT_COLUMNS, dtype=object
    )


def frame_to_rows(frame: pd.DataFrame) -> List[ResultRow]:
    """Convert a result DataFrame back into ResultRow records."""
    absent = [c for c in RESULT_COLUMNS if c not in frame.columns]
    if absent:
        raise KeyError(f"Missing result columns: {absent}")
    return [
        ResultRow(*(MISSING if is_missing(v) else v for v in values))
        for values in frame[RESULT_COLUMNS].itertuples(index=False, name=None)
    ]


# ------------------------- CSV ------------------------- #

def _coerce(value):
    if is_missing(value) or value == MISSING_TOKEN:
        return MISSING
    return round(float(value), ROUND_DIGITS)


def load_table(
    path: Union[str, Path],
    data_columns: Sequence[Union[int, str]] = DATA_COLUMNS,
) -> pd.DataFrame:
    """
    Load a CSV file, reformatting the data columns to floats and missings.

    Parameters
    ----------
    path : str or Path
        CSV file to read.
    data_columns : sequence of str or int
        Column names (or positions) to coerce. The literal ``missing``
        becomes the missing marker, anything else a float rounded to 6
        decimals.

    Returns
    -------
    pandas.DataFrame
        Object-dtype frame. Non-data columns are kept as strings.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Table not found: {path}")

    frame = pd.read_csv(path, dtype=str, keep_default_na=False)
    frame = frame.astype(object)

    names = [frame.columns[c] if isinstance(c, int) else c for c in data_columns]
    for name in names:
        if name not in frame.columns:
            raise KeyError(f"Column not found: {name}")
        frame[name] = pd.Series([_coerce(v) for v in frame[name]], index=frame.index, dtype=object)
    return frame


def save_table(frame: pd.DataFrame, path: Union[str, Path]) -> Path:
    """Save a table to CSV, writing missing cells as ``missing``."""
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    frame.to_csv(out, index=False, na_rep=MISSING_TOKEN)
    return out


def load_results(path: Union[str, Path]) -> List[ResultRow]:
    """Load a saved result table as ResultRow records."""
    return frame_to_rows(load_table(path, DATA_COLUMNS))


def collect_scores(
    outpath: Union[str, Path],
    algorithms: Sequence[str],
    policy: SelectionPolicy,
) -> pd.DataFrame:
    """
    Collect scores on datasets in ``outpath`` for the given algorithms and
    selection policy.

    Every file in ``outpath`` is a saved result table of one dataset. The
    dataset is read from the table itself; an empty table falls back to the
    file name up to the first dot.

    Returns
    -------
    pandas.DataFrame
        One row per dataset, columns ``dataset`` followed by ``algorithms``.
    """
    tables = []
    for fname in sorted(os.listdir(outpath)):
        rows = load_results(Path(outpath) / fname)
        dataset = rows[0].dataset if rows else fname.split(".")[0]
        tables.append(policy.compute(rows, algorithms, dataset=dataset))
    return scores_to_frame(tables, algorithms)
