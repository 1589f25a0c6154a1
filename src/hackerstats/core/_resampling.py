# src/hackerstats/core/_resampling.py

from typing import Any, Optional, Union

import jax
import jax.numpy as jnp

from ._data_prep import _as_vector, _check_n_reps, _normalize_weights
from ._reducers import Reducer, get_reducer, reducer_name

# ───────────────────────────────────────────────────────────────────────────────
# Index draws
# ───────────────────────────────────────────────────────────────────────────────

def _draw_indices(
    key: jax.Array,
    n: int,
    weights: Optional[jnp.ndarray]
) -> jnp.ndarray:
    """
    Draw n indices in [0, n) with replacement.

    :param key: JAX PRNGKey for this replicate.
    :param n: sample size (static).
    :param weights: None for uniform draws, else probabilities summing to 1.
    :return: 1D integer array of length n.
    """
    if weights is None:
        return jax.random.randint(key, (n,), 0, n)
    return jax.random.choice(key, n, shape=(n,), replace=True, p=weights)


def _replicate_keys(seed: int, n_reps: int) -> jax.Array:
    key = jax.random.PRNGKey(seed)
    return jax.random.split(key, n_reps)


def _check_finite(reps: jnp.ndarray, reducer: Union[str, Reducer], n: int) -> jnp.ndarray:
    """
    Fail fast when a statistic is undefined on the resampled data.

    :raises ValueError: naming the statistic and the sample size.
    """
    if not bool(jnp.all(jnp.isfinite(reps))):
        raise ValueError(
            f"statistic '{reducer_name(reducer)}' is not finite on samples of size {n}; "
            "std and var require at least 2 observations"
        )
    return reps

# ───────────────────────────────────────────────────────────────────────────────
# Replicate generators
# ───────────────────────────────────────────────────────────────────────────────

def bootstrap_replicates(
    values: Any,
    reducer: Union[str, Reducer],
    n_reps: int,
    weights: Optional[Any] = None,
    seed: int = 0
) -> jnp.ndarray:
    """
    Bootstrap distribution of a statistic.

    Each replicate resamples len(values) observations with replacement,
    optionally with per-element selection weights, and applies the reducer.

    :param values: observed 1D sample.
    :param reducer: statistic name (see REDUCERS) or JAX-traceable callable.
    :param n_reps: number of replicates.
    :param weights: optional non-negative selection weights, one per value.
    :param seed: integer seed for the PRNG.
    :return: 1D JAX array of n_reps replicate statistics.
    """
    x = _as_vector(values)
    n_reps = _check_n_reps(n_reps)
    p = _normalize_weights(weights, x.size)
    fn = get_reducer(reducer)
    n = x.size

    def one_boot(k):
        idx = _draw_indices(k, n, p)
        return fn(x[idx])

    reps = jax.vmap(one_boot)(_replicate_keys(seed, n_reps))
    return _check_finite(reps, reducer, n)


def two_sample_bootstrap_replicates(
    a: Any,
    b: Any,
    reducer: Union[str, Reducer],
    n_reps: int,
    weights_a: Optional[Any] = None,
    weights_b: Optional[Any] = None,
    seed: int = 0
) -> jnp.ndarray:
    """
    Bootstrap distribution of reducer(a) - reducer(b).

    Both samples are resampled independently, each at its own size.
    """
    xa = _as_vector(a, name="a")
    xb = _as_vector(b, name="b")
    n_reps = _check_n_reps(n_reps)
    pa = _normalize_weights(weights_a, xa.size, name="weights_a")
    pb = _normalize_weights(weights_b, xb.size, name="weights_b")
    fn = get_reducer(reducer)
    na, nb = xa.size, xb.size

    def one_boot(k):
        ka, kb = jax.random.split(k)
        sa = xa[_draw_indices(ka, na, pa)]
        sb = xb[_draw_indices(kb, nb, pb)]
        return fn(sa) - fn(sb)

    reps = jax.vmap(one_boot)(_replicate_keys(seed, n_reps))
    return _check_finite(reps, reducer, min(na, nb))


def permutation_replicates(
    a: Any,
    b: Any,
    reducer: Union[str, Reducer],
    n_reps: int,
    seed: int = 0
) -> jnp.ndarray:
    """
    Null distribution of reducer(a) - reducer(b) under exchangeability.

    The two samples are pooled, shuffled and split back into groups of the
    original sizes, so each replicate is a relabelling of the same data.

    :param a: first sample.
    :param b: second sample.
    :param reducer: statistic name or JAX-traceable callable.
    :param n_reps: number of permutations.
    :param seed: integer seed for the PRNG.
    :return: 1D JAX array of permuted statistics.
    """
    xa = _as_vector(a, name="a")
    xb = _as_vector(b, name="b")
    n_reps = _check_n_reps(n_reps)
    fn = get_reducer(reducer)
    pooled = jnp.concatenate([xa, xb])
    na = xa.size

    def perm_stat(k):
        shuffled = jax.random.permutation(k, pooled)
        return fn(shuffled[:na]) - fn(shuffled[na:])

    reps = jax.vmap(perm_stat)(_replicate_keys(seed, n_reps))
    return _check_finite(reps, reducer, min(na, pooled.size - na))


def shifted_bootstrap_replicates(
    values: Any,
    null_value: float,
    reducer: Union[str, Reducer],
    n_reps: int,
    seed: int = 0
) -> jnp.ndarray:
    """
    Bootstrap replicates of a sample shifted so that its statistic equals
    null_value; the resulting distribution is the null for a one-sample test.

    The shift is additive, which suits location statistics (mean, median).
    """
    x = _as_vector(values)
    n_reps = _check_n_reps(n_reps)
    fn = get_reducer(reducer)
    observed = _check_finite(jnp.atleast_1d(fn(x)), reducer, x.size)
    shifted = x - observed[0] + null_value
    return bootstrap_replicates(shifted, reducer, n_reps, seed=seed)
