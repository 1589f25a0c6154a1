# src/hackerstats/core/_intervals.py

from typing import Any, Tuple

import jax.numpy as jnp
from scipy.stats import norm as _norm_dist  # for normal quantiles

from ._data_prep import _as_vector, _check_alpha


def bootstrap_se(replicates: Any) -> float:
    """
    Standard error estimate: standard deviation of the replicates (ddof=1).
    Returns NaN for a single replicate.
    """
    reps = _as_vector(replicates, name="replicates")
    if reps.size < 2:
        return float("nan")
    return float(jnp.std(reps, ddof=1))


def percentile_ci(
    replicates: Any,
    alpha: float = 0.05
) -> Tuple[float, float]:
    """
    Percentile interval: the alpha/2 and 1 - alpha/2 quantiles of the replicates.
    """
    alpha = _check_alpha(alpha)
    reps = _as_vector(replicates, name="replicates")
    lower = jnp.percentile(reps, 100 * (alpha / 2.0))
    upper = jnp.percentile(reps, 100 * (1.0 - alpha / 2.0))
    return float(lower), float(upper)


def normal_ci(
    estimate: float,
    replicates: Any,
    alpha: float = 0.05
) -> Tuple[float, float]:
    """
    Normal-approximation interval estimate ± z * se, with se taken from the
    bootstrap replicates.
    """
    alpha = _check_alpha(alpha)
    se = bootstrap_se(replicates)
    z = float(_norm_dist.ppf(1.0 - alpha / 2.0))
    return estimate - z * se, estimate + z * se
