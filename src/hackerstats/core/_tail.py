# src/hackerstats/core/_tail.py

from typing import Any, Literal

import numpy as np
import jax.numpy as jnp

Alternative = Literal["two-sided", "greater", "less"]


def empirical_p_value(
    observed: float,
    replicates: Any,
    alternative: Alternative = "two-sided"
) -> jnp.ndarray:
    """
    Compute an empirical tail probability from a replicate distribution.

    'greater' counts replicates at or above the observed statistic, 'less'
    those at or below it. 'two-sided' doubles the smaller of the two tails
    and caps the result at 1, which does not assume the distribution is
    centred on zero.

    :param observed: observed test statistic.
    :param replicates: 1D array of replicate (or null) statistics.
    :param alternative: 'two-sided', 'greater', or 'less'.
    :return: scalar in [0, 1].
    :raises ValueError: for an unknown alternative, or empty or non-finite replicates.
    """
    reps = jnp.ravel(jnp.asarray(replicates))
    if reps.size == 0:
        raise ValueError("replicates must contain at least one value")
    if not bool(jnp.all(jnp.isfinite(reps))):
        raise ValueError("replicates contain NaN or infinite values")
    if not np.isfinite(observed):
        raise ValueError(f"observed statistic must be finite, got {observed}")

    p_greater = jnp.mean(reps >= observed)
    p_less = jnp.mean(reps <= observed)
    if alternative == "two-sided":
        return jnp.minimum(1.0, 2.0 * jnp.minimum(p_less, p_greater))
    elif alternative == "greater":
        return p_greater
    elif alternative == "less":
        return p_less
    else:
        raise ValueError("alternative must be 'two-sided', 'greater', or 'less'")
