# src/hackerstats/core/_data_prep.py

import warnings
from typing import Any, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd
import jax.numpy as jnp


def _as_vector(values: Any, name: str = "values") -> jnp.ndarray:
    """
    Convert array-like input to a 1D float JAX array.

    :param values: list, tuple, numpy array, pandas Series or JAX array.
    :param name: argument name used in error messages.
    :return: 1D float jnp.ndarray.
    :raises ValueError: if the input is not 1D, is empty or holds NaN/inf.
    """
    if isinstance(values, pd.Series):
        arr = values.to_numpy(dtype=float)
    else:
        arr = np.asarray(values, dtype=float)

    if arr.ndim != 1:
        raise ValueError(f"'{name}' must be one-dimensional, got shape {arr.shape}")
    if arr.size == 0:
        raise ValueError(f"'{name}' must contain at least one observation")
    if not np.all(np.isfinite(arr)):
        raise ValueError(f"'{name}' contains NaN or infinite values")
    return jnp.asarray(arr)


def _check_n_reps(n_reps: int) -> int:
    """
    Ensure the replication count is a positive integer.
    """
    if isinstance(n_reps, bool) or not isinstance(n_reps, (int, np.integer)):
        raise ValueError(f"n_reps must be an integer, got {n_reps!r}")
    if n_reps <= 0:
        raise ValueError(f"n_reps must be positive, got {n_reps}")
    return int(n_reps)


def _check_alpha(alpha: float) -> float:
    if not (0.0 < alpha < 1.0):
        raise ValueError(f"alpha must be in (0, 1), got {alpha}")
    return float(alpha)


def _normalize_weights(
    weights: Optional[Any],
    n: int,
    name: str = "weights"
) -> Optional[jnp.ndarray]:
    """
    Validate per-element selection weights and rescale them to sum to one.

    :param weights: None (uniform sampling) or array-like of length n.
    :param n: number of observations the weights refer to.
    :param name: argument name used in error messages.
    :return: None, or a 1D jnp.ndarray of probabilities summing to 1.
    :raises ValueError: on length mismatch, negative or non-finite entries,
        or an all-zero weight vector.
    """
    if weights is None:
        return None
    if isinstance(weights, pd.Series):
        w = weights.to_numpy(dtype=float)
    else:
        w = np.asarray(weights, dtype=float)

    if w.ndim != 1 or w.size != n:
        raise ValueError(
            f"'{name}' must have one entry per observation: "
            f"expected length {n}, got shape {w.shape}"
        )
    if not np.all(np.isfinite(w)):
        raise ValueError(f"'{name}' contains NaN or infinite values")
    if np.any(w < 0):
        raise ValueError(f"'{name}' must be non-negative")
    total = w.sum()
    if total <= 0:
        raise ValueError(f"'{name}' must have a positive sum")
    return jnp.asarray(w / total)


def _validate_and_dropna(
    df: pd.DataFrame,
    columns: List[str]
) -> Tuple[pd.DataFrame, int]:
    missing = [col for col in columns if col not in df.columns]
    if missing:
        raise ValueError(f"Column(s) {missing} not found")

    initial_n = len(df)
    df_clean = df.dropna(subset=columns)
    n_dropped = initial_n - len(df_clean)
    if n_dropped > 0:
        warnings.warn(
            f"{n_dropped} rows removed due to missing values in columns {columns}",
            UserWarning
        )
    return df_clean, n_dropped


def _split_groups(
    df: pd.DataFrame,
    measure: str,
    group: str,
    order: Optional[Sequence[Any]] = None
) -> Tuple[jnp.ndarray, jnp.ndarray, Tuple[Any, Any]]:
    """
    Split a long-format DataFrame into the two samples being compared.

    :param df: DataFrame already cleaned of NAs in the target columns.
    :param measure: name of the numeric outcome column.
    :param group: name of the grouping column.
    :param order: optional pair of group labels (first, second); defaults
        to the sorted categories.
    :return: (first_values, second_values, (first_label, second_label)).
    :raises ValueError: unless exactly two levels are compared.
    """
    # levels come from the rows present, not unused declared categories
    cat = pd.Categorical(df[group]).remove_unused_categories()
    levels = list(cat.categories)

    if order is None:
        if len(levels) != 2:
            raise ValueError(
                f"Grouping column '{group}' must have exactly 2 levels, "
                f"found {len(levels)}: {levels}; pass `order` to pick two"
            )
        first, second = levels
    else:
        if len(order) != 2:
            raise ValueError(f"order must name exactly two groups, got {order!r}")
        first, second = order
        absent = [lvl for lvl in (first, second) if lvl not in levels]
        if absent:
            raise ValueError(f"Group level(s) {absent} not found in column '{group}'")
        if first == second:
            raise ValueError("order must name two distinct groups")

    a = _as_vector(df.loc[df[group] == first, measure], name=f"{measure}[{first}]")
    b = _as_vector(df.loc[df[group] == second, measure], name=f"{measure}[{second}]")
    return a, b, (first, second)
