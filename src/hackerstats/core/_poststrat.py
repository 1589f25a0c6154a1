# src/hackerstats/core/_poststrat.py

import warnings
from typing import Any, Mapping, Optional

import numpy as np
import pandas as pd
import jax.numpy as jnp

from ._data_prep import _normalize_weights


def stratum_shares(
    strata: Any,
    weights: Optional[Any] = None
) -> pd.Series:
    """
    Share of each stratum in a sample, optionally weighted.

    :param strata: 1D array-like of stratum labels.
    :param weights: optional per-element weights.
    :return: pandas Series indexed by stratum, summing to 1.
    """
    labels = pd.Series(np.asarray(strata), name="stratum")
    if labels.empty:
        raise ValueError("'strata' must contain at least one observation")
    if weights is None:
        return labels.value_counts(normalize=True).sort_index().rename("share")
    w = np.asarray(_normalize_weights(weights, labels.size))
    return (
        pd.Series(w, index=labels.values)
        .groupby(level=0)
        .sum()
        .sort_index()
        .rename("share")
    )


def poststratification_weights(
    strata: Any,
    population_shares: Mapping[Any, float]
) -> jnp.ndarray:
    """
    Per-element selection weights that reweight a sample to a known
    population mix of strata.

    An element in stratum s gets population_share[s] / sample_count[s], so
    resampling with these weights draws each stratum at its population rate.

    :param strata: 1D array-like of stratum labels, one per observation.
    :param population_shares: mapping stratum -> population share; shares
        are renormalised to sum to 1.
    :return: 1D jnp.ndarray of weights summing to 1.
    :raises ValueError: if a sampled stratum has no population share, a share
        is negative, or the shares do not sum to a positive value.
    """
    labels = pd.Series(np.asarray(strata))
    if labels.empty:
        raise ValueError("'strata' must contain at least one observation")

    shares = pd.Series(dict(population_shares), dtype=float)
    if shares.isna().any() or (shares < 0).any():
        raise ValueError("population_shares must be non-negative numbers")
    total = shares.sum()
    if total <= 0:
        raise ValueError("population_shares must have a positive sum")
    shares = shares / total

    counts = labels.value_counts()
    unknown = [s for s in counts.index if s not in shares.index]
    if unknown:
        raise ValueError(f"No population share given for sampled strata {unknown}")

    absent = [s for s in shares.index if s not in counts.index and shares[s] > 0]
    if absent:
        warnings.warn(
            f"Population strata {absent} are absent from the sample; "
            "their share cannot be represented and is dropped",
            UserWarning
        )

    per_element = labels.map(shares / counts.reindex(shares.index)).to_numpy(dtype=float)
    return _normalize_weights(per_element, per_element.size)
