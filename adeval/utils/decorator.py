import numpy as np
import pandas as pd
import polars as pl
from functools import wraps
import inspect
from typing import Callable, Any, TypeVar, Union

PandasSeries = TypeVar("pd.Series")
PolarsSeries = TypeVar("pl.Series")
NumpyArray = TypeVar("np.ndarray")
InputDataType = Union[PandasSeries, PolarsSeries, NumpyArray, list]
OutputDataType = Any


def _to_numpy(value: Any) -> Any:
    """Convert a pandas/polars column (or single-column frame) to a NumPy array."""
    if isinstance(value, (pd.Series, pl.Series)):
        return value.to_numpy()
    if isinstance(value, (pd.DataFrame, pl.DataFrame)):
        if value.shape[1] != 1:
            raise ValueError(
                f"Expected a single column, got a frame with {value.shape[1]} columns"
            )
        return value.to_numpy().ravel()
    if isinstance(value, (list, tuple)):
        return np.asarray(value)
    # NumPy arrays and anything else pass through; validators handle the rest.
    return value


def as_numpy_array(*param_names: str) -> Callable:
    """
    A decorator that converts the named arguments of a function to NumPy
    arrays before the call.

    Accepts pandas Series, polars Series, single-column pandas or polars
    DataFrames, lists and tuples. The return value is passed through as is.

    Args:
        *param_names (str): Names of the function parameters to convert.

    Returns:
        Callable: The wrapper function.
    """

    def decorator(func: Callable[..., OutputDataType]) -> Callable[..., OutputDataType]:
        sig = inspect.signature(func)
        for name in param_names:
            if name not in sig.parameters:
                raise ValueError(
                    f"Parameter '{name}' not found in function signature: {list(sig.parameters)}."
                )

        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> OutputDataType:
            bound_args = sig.bind(*args, **kwargs)
            bound_args.apply_defaults()

            for name in param_names:
                bound_args.arguments[name] = _to_numpy(bound_args.arguments[name])

            return func(*bound_args.args, **bound_args.kwargs)

        return wrapper

    return decorator
