"""
Result containers for LMSim simulations.

``SimulationResult`` is produced once per simulation call and never
modified afterwards; ``build_sweep_table`` collects many of them into a
``pandas.DataFrame``.
"""

from dataclasses import dataclass
from typing import Any, Dict, List

import numpy as np
import pandas as pd

from ..stats.ols import DF_MODEL, f_critical_value, f_p_value

SUMMARY_COLUMNS = [
    "sample_size",
    "effect",
    "noise",
    "seed",
    "intercept",
    "slope",
    "y_mean",
    "ss_explained",
    "ss_residual",
    "ss_total",
    "r_squared",
    "f_statistic",
    "p_value",
]


def _frozen(array: np.ndarray) -> np.ndarray:
    """Return a read-only float copy of *array*."""
    out = np.array(array, dtype=float)
    out.setflags(write=False)
    return out


@dataclass(frozen=True, eq=False)
class SimulationResult:
    """Synthetic regression dataset, its OLS fit and variance decomposition.

    Attributes:
        x: Explanatory variable, one value per observation.
        y: Response, ``effect * x + error``.
        y_mean: Mean of ``y``.
        intercept: OLS intercept.
        slope: OLS slope.
        y_fitted: ``intercept + slope * x``.
        f_statistic: Explained over residual mean square.
        ss_explained: ``sum((y_fitted - y_mean)**2)``.
        ss_residual: ``sum((y - y_fitted)**2)``.
        sample_size, effect, noise, seed: Inputs that produced the result.
    """

    x: np.ndarray
    y: np.ndarray
    y_mean: float
    intercept: float
    slope: float
    y_fitted: np.ndarray
    f_statistic: float
    ss_explained: float
    ss_residual: float
    sample_size: int
    effect: float
    noise: float
    seed: int

    def __post_init__(self):
        for name in ("x", "y", "y_fitted"):
            object.__setattr__(self, name, _frozen(getattr(self, name)))

    @property
    def residuals(self) -> np.ndarray:
        """``y - y_fitted``."""
        return self.y - self.y_fitted

    @property
    def ss_total(self) -> float:
        """Total sum of squares ``sum((y - y_mean)**2)``."""
        centred = self.y - self.y_mean
        return float(np.dot(centred, centred))

    @property
    def df_model(self) -> int:
        return DF_MODEL

    @property
    def df_residual(self) -> int:
        return self.sample_size - 2

    @property
    def r_squared(self) -> float:
        """Proportion of the total sum of squares explained by the fit."""
        total = self.ss_explained + self.ss_residual
        return self.ss_explained / total if total > 0 else 0.0

    @property
    def p_value(self) -> float:
        """Upper-tail probability of ``f_statistic`` under ``F(1, n - 2)``."""
        return f_p_value(self.f_statistic, self.df_residual)

    def is_significant(self, alpha: float = 0.05) -> bool:
        """Whether the F-test rejects a zero slope at level *alpha*."""
        return bool(self.f_statistic > f_critical_value(alpha, self.df_residual))

    def to_dict(self) -> Dict[str, Any]:
        """Scalar summary of the result (no arrays)."""
        return {
            "sample_size": self.sample_size,
            "effect": self.effect,
            "noise": self.noise,
            "seed": self.seed,
            "intercept": self.intercept,
            "slope": self.slope,
            "y_mean": self.y_mean,
            "ss_explained": self.ss_explained,
            "ss_residual": self.ss_residual,
            "ss_total": self.ss_total,
            "r_squared": self.r_squared,
            "f_statistic": self.f_statistic,
            "p_value": self.p_value,
        }

    def to_frame(self) -> pd.DataFrame:
        """Per-observation table with ``x``, ``y``, ``y_fitted`` and ``residual``."""
        return pd.DataFrame(
            {
                "x": self.x,
                "y": self.y,
                "y_fitted": self.y_fitted,
                "residual": self.residuals,
            }
        )

    def __repr__(self) -> str:
        return (
            f"SimulationResult(sample_size={self.sample_size}, effect={self.effect}, noise={self.noise}, "
            f"seed={self.seed}, intercept={self.intercept:.4g}, slope={self.slope:.4g}, "
            f"ss_explained={self.ss_explained:.4g}, ss_residual={self.ss_residual:.4g}, "
            f"f_statistic={self.f_statistic:.4g})"
        )


def build_sweep_table(parameter: str, results: List[SimulationResult]) -> pd.DataFrame:
    """Tabulate sweep results, one row per simulation, indexed by the swept parameter.

    Args:
        parameter: Name of the varied input; becomes the index name.
        results: Results in sweep order.

    Returns:
        DataFrame with ``SUMMARY_COLUMNS`` as columns.
    """
    table = pd.DataFrame([r.to_dict() for r in results], columns=SUMMARY_COLUMNS)
    table.index = pd.Index(table[parameter].to_numpy(), name=parameter)
    return table
