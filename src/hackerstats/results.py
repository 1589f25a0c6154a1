# src/hackerstats/results.py

from __future__ import annotations
import math
from dataclasses import dataclass, asdict, field
from typing import Optional, Any, Dict

import pandas as pd
import jax.numpy as jnp


@dataclass
class ResampleResult:
    """
    Container for a bootstrap (replicate distribution) estimate.
    """
    method: str
    statistic: str
    n_obs: int
    n_reps: int
    observed: float
    replicates_mean: float
    se: float
    ci_lower: float
    ci_upper: float
    alpha: float
    weighted: bool
    replicates: Optional[jnp.ndarray]
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def bias(self) -> float:
        """Bootstrap bias estimate: mean of replicates minus observed."""
        return self.replicates_mean - self.observed

    def summary(self) -> str:
        """
        Return a concise multi-line summary of the estimate.
        """
        lines = [
            f"Method: {self.method}",
            f"Statistic: {self.statistic}",
            f"Observations: {self.n_obs}",
            f"Replicates: {self.n_reps}",
        ]
        if self.weighted:
            lines.append("Weighted resampling: yes")
        lines.extend([
            f"Observed: {self.observed:.4f}",
            f"Replicate mean: {self.replicates_mean:.4f}",
            f"Standard error: {self.se:.4f}",
        ])
        if not (math.isnan(self.ci_lower) or math.isnan(self.ci_upper)):
            level = 100 * (1 - self.alpha)
            lines.append(f"{level:g}% CI: [{self.ci_lower:.4f}, {self.ci_upper:.4f}]")
        return "\n".join(lines)

    def to_dataframe(self) -> pd.DataFrame:
        """
        Return the results as a pandas DataFrame (one row).
        """
        data = asdict(self)
        # Convert ndarray to list for DataFrame compatibility
        if self.replicates is not None:
            data["replicates"] = self.replicates.tolist()
        return pd.DataFrame([data])


@dataclass
class TailTestResult:
    """
    Container for a resampling hypothesis test.
    """
    method: str
    statistic: str
    alternative: str
    n_reps: int
    observed: float
    p_value: float
    null_value: Optional[float]
    replicates: Optional[jnp.ndarray]
    metadata: Dict[str, Any] = field(default_factory=dict)

    def is_significant(self, alpha: float = 0.05) -> bool:
        return self.p_value < alpha

    def summary(self) -> str:
        """
        Return a concise multi-line summary of the test.
        """
        lines = [
            f"Method: {self.method}",
            f"Statistic: {self.statistic}",
            f"Alternative: {self.alternative}",
            f"Replicates: {self.n_reps}",
            f"Observed: {self.observed:.4f}",
        ]
        if self.null_value is not None:
            lines.append(f"Null value: {self.null_value:.4f}")
        lines.append(f"P-value: {self.p_value:.4f}")
        return "\n".join(lines)

    def to_dataframe(self) -> pd.DataFrame:
        """
        Return the results as a pandas DataFrame (one row).
        """
        data = asdict(self)
        if self.replicates is not None:
            data["replicates"] = self.replicates.tolist()
        return pd.DataFrame([data])
