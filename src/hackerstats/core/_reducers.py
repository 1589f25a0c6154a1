# src/hackerstats/core/_reducers.py

from typing import Callable, Dict, Union

import jax.numpy as jnp

Reducer = Callable[[jnp.ndarray], jnp.ndarray]
TwoSampleReducer = Callable[[jnp.ndarray, jnp.ndarray], jnp.ndarray]

# ───────────────────────────────────────────────────────────────────────────────
# Built-in reductions (all JAX-traceable so they can run under vmap)
# ───────────────────────────────────────────────────────────────────────────────

def _std(x: jnp.ndarray) -> jnp.ndarray:
    return jnp.std(x, ddof=1)


def _var(x: jnp.ndarray) -> jnp.ndarray:
    return jnp.var(x, ddof=1)


REDUCERS: Dict[str, Reducer] = {
    "mean": jnp.mean,
    "median": jnp.median,
    "std": _std,
    "var": _var,
    "sum": jnp.sum,
    "min": jnp.min,
    "max": jnp.max,
}


def get_reducer(reducer: Union[str, Reducer]) -> Reducer:
    """
    Resolve a reduction by name, or pass a callable through unchanged.

    A custom callable must accept a 1D jnp.ndarray and return a scalar using
    jax.numpy operations only, since replicates are computed under jax.vmap.

    :param reducer: one of the names in REDUCERS, or a callable.
    :return: the reduction function.
    :raises ValueError: if the name is not registered.
    :raises TypeError: if reducer is neither a string nor callable.
    """
    if isinstance(reducer, str):
        try:
            return REDUCERS[reducer]
        except KeyError:
            raise ValueError(
                f"Unknown statistic '{reducer}'; choose one of {sorted(REDUCERS)}"
            ) from None
    if callable(reducer):
        return reducer
    raise TypeError(f"statistic must be a name or a callable, got {type(reducer).__name__}")


def reducer_name(reducer: Union[str, Reducer]) -> str:
    """
    Human-readable label for a reducer, used in results.
    """
    if isinstance(reducer, str):
        return reducer
    return getattr(reducer, "__name__", type(reducer).__name__)


def difference_of(reducer: Union[str, Reducer]) -> TwoSampleReducer:
    """
    Build f(a, b) = reducer(a) - reducer(b).
    """
    fn = get_reducer(reducer)

    def _difference(a: jnp.ndarray, b: jnp.ndarray) -> jnp.ndarray:
        return fn(a) - fn(b)

    _difference.__name__ = f"difference_of_{reducer_name(reducer)}"
    return _difference
