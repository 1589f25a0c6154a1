"""
hackerstats.core
----------------
Core kernels for resampling-based inference.

Submodules:
  - _data_prep   : input validation, NA-handling, weight normalisation, group splitting
  - _reducers    : named statistics (mean, median, ...) and two-sample differences
  - _resampling  : bootstrap, two-sample bootstrap, permutation and shifted-bootstrap replicates
  - _tail        : empirical tail probabilities (p-values)
  - _intervals   : percentile / normal intervals and bootstrap standard errors
  - _poststrat   : post-stratification weights and stratum shares
"""

import jax
jax.config.update("jax_enable_x64", True)

__all__ = [
    # submodules
    "_data_prep",
    "_reducers",
    "_resampling",
    "_tail",
    "_intervals",
    "_poststrat",
]

# re-export key functions for convenient import
from ._data_prep    import _as_vector, _check_n_reps, _normalize_weights, \
                           _validate_and_dropna, _split_groups
from ._reducers     import REDUCERS, get_reducer, difference_of
from ._resampling   import (
    bootstrap_replicates,
    two_sample_bootstrap_replicates,
    permutation_replicates,
    shifted_bootstrap_replicates,
)
from ._tail         import empirical_p_value
from ._intervals    import percentile_ci, normal_ci, bootstrap_se
from ._poststrat    import poststratification_weights, stratum_shares
