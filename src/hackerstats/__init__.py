# src/hackerstats/__init__.py

"""
hackerstats
===========

Simulation-based ("hacker") statistics on numeric samples and long-format
pandas DataFrames. Features:

- Bootstrap replicate distributions of any JAX-traceable statistic
- Weighted resampling and post-stratification to known population shares
- Two-sample bootstrap and permutation tests on differences of statistics
- Empirical tail probabilities, percentile intervals and bootstrap SEs
- Unified JAX backend (vmap over PRNG keys) for fast, reproducible replicates
"""

__version__ = "0.1.0"

# High-level API
from .api import (
    bootstrap,
    bootstrap_two_sample,
    bootstrap_test,
    permutation_test,
    poststratified_bootstrap,
    tail_probability,
)

# Result classes
from .results import ResampleResult, TailTestResult

__all__ = [
    "bootstrap",
    "bootstrap_two_sample",
    "bootstrap_test",
    "permutation_test",
    "poststratified_bootstrap",
    "tail_probability",
    "ResampleResult",
    "TailTestResult",
]
