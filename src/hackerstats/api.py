# src/hackerstats/api.py

from typing import Any, Callable, Literal, Mapping, Optional, Sequence, Tuple, Union

import pandas as pd
import jax.numpy as jnp

from .core._data_prep import (
    _as_vector,
    _check_alpha,
    _check_n_reps,
    _normalize_weights,
    _split_groups,
    _validate_and_dropna,
)
from .core._reducers import REDUCERS, get_reducer, reducer_name
from .core._resampling import (
    bootstrap_replicates,
    two_sample_bootstrap_replicates,
    permutation_replicates,
    shifted_bootstrap_replicates,
)
from .core._tail import empirical_p_value
from .core._intervals import percentile_ci, bootstrap_se
from .core._poststrat import poststratification_weights, stratum_shares
from .results import ResampleResult, TailTestResult


_Statistic = Union[Literal["mean", "median", "std", "var", "sum", "min", "max"], Callable]
_Alternative = Literal["two-sided", "greater", "less"]

# ───────────────────────────────────────────────────────────────────────────────
# Helpers
# ───────────────────────────────────────────────────────────────────────────────

def _seed(random_state: Optional[int]) -> int:
    return random_state or 0


def _point_estimate(fn, x: jnp.ndarray, p: Optional[jnp.ndarray], reps) -> float:
    """
    Point estimate for the observed sample. With weights only the mean has a
    closed form; for other statistics the estimate is the replicate median.
    """
    if p is None:
        return float(fn(x))
    if fn is REDUCERS["mean"]:
        return float(jnp.sum(p * x))
    return float(jnp.median(reps))


def _resolve_data(
    data: Any,
    column: Optional[str],
    weights: Any
) -> Tuple[jnp.ndarray, Any, int]:
    """
    Pull the sample (and weights, if named by column) out of user input.
    """
    if isinstance(data, pd.DataFrame):
        if column is None:
            raise ValueError("`column` is required when data is a DataFrame")
        cols = [column] + ([weights] if isinstance(weights, str) else [])
        df_clean, n_dropped = _validate_and_dropna(data, cols)
        if isinstance(weights, str):
            weights = df_clean[weights]
        return _as_vector(df_clean[column], name=column), weights, n_dropped
    if isinstance(weights, str):
        raise ValueError("weights may only name a column when data is a DataFrame")
    return _as_vector(data, name="data"), weights, 0


def _summarize(
    method: str,
    statistic: Any,
    observed: float,
    reps: jnp.ndarray,
    n_obs: int,
    alpha: float,
    weighted: bool,
    metadata: dict,
) -> ResampleResult:
    ci_lower, ci_upper = percentile_ci(reps, alpha)
    return ResampleResult(
        method=method,
        statistic=reducer_name(statistic),
        n_obs=n_obs,
        n_reps=int(reps.size),
        observed=observed,
        replicates_mean=float(jnp.mean(reps)),
        se=bootstrap_se(reps),
        ci_lower=ci_lower,
        ci_upper=ci_upper,
        alpha=alpha,
        weighted=weighted,
        replicates=reps,
        metadata=metadata,
    )


# ───────────────────────────────────────────────────────────────────────────────
# Public entry points
# ───────────────────────────────────────────────────────────────────────────────

def bootstrap(
    data: Any,
    statistic: _Statistic = "mean",
    n_reps: int = 10_000,
    weights: Any = None,
    alpha: float = 0.05,
    random_state: Optional[int] = None,
    column: Optional[str] = None,
) -> ResampleResult:
    """
    Bootstrap a statistic of one sample.

    :param data: sequence, numpy array, pandas Series, or DataFrame (with `column`).
    :param statistic: reducer name or JAX-traceable callable.
    :param n_reps: number of bootstrap replicates.
    :param weights: optional per-element selection weights, or a column name
        when data is a DataFrame.
    :param alpha: 1 - confidence level of the percentile interval.
    :param random_state: seed for reproducibility.
    :param column: name of the value column when data is a DataFrame.
    :return: ResampleResult with the replicate distribution and percentile CI.
    :raises ValueError: if inputs invalid.
    """
    alpha = _check_alpha(alpha)
    n_reps = _check_n_reps(n_reps)
    x, weights, n_dropped = _resolve_data(data, column, weights)
    fn = get_reducer(statistic)
    p = _normalize_weights(weights, x.size)

    reps = bootstrap_replicates(x, statistic, n_reps, weights=p, seed=_seed(random_state))
    observed = _point_estimate(fn, x, p, reps)
    return _summarize(
        method="bootstrap",
        statistic=statistic,
        observed=observed,
        reps=reps,
        n_obs=int(x.size),
        alpha=alpha,
        weighted=p is not None,
        metadata={"n_dropped": n_dropped, "column": column},
    )


def bootstrap_two_sample(
    df: pd.DataFrame,
    measure: str,
    group: str,
    statistic: _Statistic = "mean",
    n_reps: int = 10_000,
    alpha: float = 0.05,
    order: Optional[Sequence[Any]] = None,
    random_state: Optional[int] = None,
) -> ResampleResult:
    """
    Bootstrap the difference statistic(first group) - statistic(second group).

    :param df: long-format DataFrame.
    :param measure: name of the outcome column.
    :param group: name of the grouping column (two levels, or pick with `order`).
    :param order: optional (first, second) pair of group labels.
    :return: ResampleResult over the difference.
    """
    alpha = _check_alpha(alpha)
    n_reps = _check_n_reps(n_reps)
    df_clean, n_dropped = _validate_and_dropna(df, [measure, group])
    a, b, labels = _split_groups(df_clean, measure, group, order)
    fn = get_reducer(statistic)

    reps = two_sample_bootstrap_replicates(a, b, statistic, n_reps, seed=_seed(random_state))
    observed = float(fn(a) - fn(b))
    return _summarize(
        method="two-sample bootstrap",
        statistic=f"difference of {reducer_name(statistic)}",
        observed=observed,
        reps=reps,
        n_obs=int(a.size + b.size),
        alpha=alpha,
        weighted=False,
        metadata={
            "n_dropped": n_dropped,
            "groups": labels,
            "group_sizes": (int(a.size), int(b.size)),
            "measure": measure,
            "group": group,
        },
    )


def bootstrap_test(
    data: Any,
    null_value: float,
    statistic: _Statistic = "mean",
    alternative: _Alternative = "two-sided",
    n_reps: int = 10_000,
    random_state: Optional[int] = None,
    column: Optional[str] = None,
) -> TailTestResult:
    """
    One-sample bootstrap hypothesis test of statistic == null_value.

    The sample is shifted so its statistic equals null_value, resampled, and
    the observed statistic is located in that null distribution.
    """
    n_reps = _check_n_reps(n_reps)
    x, _, n_dropped = _resolve_data(data, column, None)
    fn = get_reducer(statistic)

    observed = float(fn(x))
    reps = shifted_bootstrap_replicates(x, null_value, statistic, n_reps, seed=_seed(random_state))
    p_val = float(empirical_p_value(observed, reps, alternative))
    return TailTestResult(
        method="bootstrap test",
        statistic=reducer_name(statistic),
        alternative=alternative,
        n_reps=n_reps,
        observed=observed,
        p_value=p_val,
        null_value=float(null_value),
        replicates=reps,
        metadata={"n_dropped": n_dropped, "n_obs": int(x.size), "column": column},
    )


def permutation_test(
    df: pd.DataFrame,
    measure: str,
    group: str,
    statistic: _Statistic = "mean",
    alternative: _Alternative = "two-sided",
    n_reps: int = 10_000,
    order: Optional[Sequence[Any]] = None,
    random_state: Optional[int] = None,
) -> TailTestResult:
    """
    Two-sample permutation test on statistic(first) - statistic(second).

    :param df: long-format DataFrame.
    :param measure: name of the outcome column.
    :param group: name of the grouping column.
    :param alternative: 'greater' tests first > second, 'less' first < second.
    :param order: optional (first, second) pair of group labels.
    :return: TailTestResult with the permutation null distribution.
    """
    n_reps = _check_n_reps(n_reps)
    df_clean, n_dropped = _validate_and_dropna(df, [measure, group])
    a, b, labels = _split_groups(df_clean, measure, group, order)
    fn = get_reducer(statistic)

    observed = float(fn(a) - fn(b))
    reps = permutation_replicates(a, b, statistic, n_reps, seed=_seed(random_state))
    p_val = float(empirical_p_value(observed, reps, alternative))
    return TailTestResult(
        method="permutation",
        statistic=f"difference of {reducer_name(statistic)}",
        alternative=alternative,
        n_reps=n_reps,
        observed=observed,
        p_value=p_val,
        null_value=None,
        replicates=reps,
        metadata={
            "n_dropped": n_dropped,
            "groups": labels,
            "group_sizes": (int(a.size), int(b.size)),
            "measure": measure,
            "group": group,
        },
    )


def poststratified_bootstrap(
    df: pd.DataFrame,
    measure: str,
    stratum: str,
    population_shares: Mapping[Any, float],
    statistic: _Statistic = "mean",
    n_reps: int = 10_000,
    alpha: float = 0.05,
    random_state: Optional[int] = None,
) -> ResampleResult:
    """
    Bootstrap a statistic after reweighting the sample to known population
    stratum shares.

    :param df: long-format DataFrame.
    :param measure: name of the outcome column.
    :param stratum: name of the stratum column.
    :param population_shares: mapping stratum -> population share.
    :return: ResampleResult; metadata holds sample and population shares.
    """
    alpha = _check_alpha(alpha)
    n_reps = _check_n_reps(n_reps)
    df_clean, n_dropped = _validate_and_dropna(df, [measure, stratum])
    x = _as_vector(df_clean[measure], name=measure)
    strata = df_clean[stratum].to_numpy()
    fn = get_reducer(statistic)

    p = poststratification_weights(strata, population_shares)
    pop = pd.Series(dict(population_shares), dtype=float)
    reps = bootstrap_replicates(x, statistic, n_reps, weights=p, seed=_seed(random_state))
    observed = _point_estimate(fn, x, p, reps)
    return _summarize(
        method="post-stratified bootstrap",
        statistic=statistic,
        observed=observed,
        reps=reps,
        n_obs=int(x.size),
        alpha=alpha,
        weighted=True,
        metadata={
            "n_dropped": n_dropped,
            "measure": measure,
            "stratum": stratum,
            "population_shares": (pop / pop.sum()).to_dict(),
            "sample_shares": stratum_shares(strata).to_dict(),
            "weighted_shares": stratum_shares(strata, p).to_dict(),
            "unweighted_observed": float(fn(x)),
        },
    )


def tail_probability(
    observed: float,
    replicates: Any,
    alternative: _Alternative = "two-sided",
) -> float:
    """
    Empirical tail probability of `observed` within `replicates`.
    """
    return float(empirical_p_value(observed, replicates, alternative))
