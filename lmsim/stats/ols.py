"""
Simple linear regression for the LMSim simulator.

Closed-form OLS of one response on one explanatory variable, the
explained / residual sum-of-squares decomposition and the F-test built
on it. Everything here is a plain function of numpy arrays so that each
step can be tested on its own.
"""

from typing import NamedTuple, Tuple

import numpy as np

from ..errors import DegenerateSample, InternalInconsistency

FLOAT_NEAR_ZERO = 1e-15
FLOAT_EPS = float(np.finfo(float).eps)

# a perfect fit leaves each residual within a few dozen ulps of max|y|, so
# ss_residual at or below PERFECT_FIT_ULPS * n * (eps * max|y|)**2 counts as zero
PERFECT_FIT_ULPS = 1024

# cancellation in Syy - slope * Sxy grows with Syy; the check allows this many eps of it
DECOMPOSITION_RTOL = 64 * FLOAT_EPS

DF_MODEL = 1


class Moments(NamedTuple):
    """Means and centred cross-products of ``x`` and ``y``."""

    x_mean: float
    y_mean: float
    sxx: float
    sxy: float
    syy: float


def compute_moments(x: np.ndarray, y: np.ndarray) -> Moments:
    """Return the means and centred sums of squares / cross-products."""
    x_mean = float(np.mean(x))
    y_mean = float(np.mean(y))
    dx = x - x_mean
    dy = y - y_mean
    return Moments(x_mean, y_mean, float(np.dot(dx, dx)), float(np.dot(dx, dy)), float(np.dot(dy, dy)))


def fit_simple_ols(x: np.ndarray, y: np.ndarray) -> Tuple[float, float]:
    """Fit ``y = intercept + slope * x`` by ordinary least squares.

    Uses the closed form ``slope = Sxy / Sxx`` and
    ``intercept = y_mean - slope * x_mean``.

    Args:
        x: Explanatory variable, shape ``(n,)``.
        y: Response variable, shape ``(n,)``.

    Returns:
        Tuple ``(intercept, slope)``.

    Raises:
        DegenerateSample: If ``x`` has (numerically) zero variance.
    """
    m = compute_moments(x, y)
    return fit_from_moments(m)


def fit_from_moments(m: Moments) -> Tuple[float, float]:
    """Same as ``fit_simple_ols`` for moments that were already computed."""
    if m.sxx <= FLOAT_NEAR_ZERO:
        raise DegenerateSample("Explanatory variable has zero variance; the slope is undefined")
    slope = m.sxy / m.sxx
    intercept = m.y_mean - slope * m.x_mean
    return intercept, slope


def sum_of_squares(y: np.ndarray, y_fitted: np.ndarray, y_mean: float) -> Tuple[float, float]:
    """Explained and residual sums of squares summed from the fitted line.

    Returns:
        Tuple ``(ss_explained, ss_residual)`` where
        ``ss_explained = sum((y_fitted - y_mean)**2)`` and
        ``ss_residual = sum((y - y_fitted)**2)``.
    """
    explained = y_fitted - y_mean
    residuals = y - y_fitted
    return float(np.dot(explained, explained)), float(np.dot(residuals, residuals))


def closed_form_sum_of_squares(slope: float, m: Moments) -> Tuple[float, float]:
    """Explained and residual sums of squares from the centred moments.

    ``ss_explained = slope**2 * Sxx`` and ``ss_residual = Syy - slope * Sxy``.
    """
    return slope * slope * m.sxx, m.syy - slope * m.sxy


def check_decomposition(
    direct: Tuple[float, float],
    closed_form: Tuple[float, float],
    tolerance: float,
    scale: float = 0.0,
):
    """Abort if the two forms of either sum of squares disagree.

    The allowed difference is *tolerance*, widened to
    ``DECOMPOSITION_RTOL * scale`` when that is larger, so rounding in very
    large sums is not mistaken for a defect.

    Args:
        direct: ``(ss_explained, ss_residual)`` summed from the fitted line.
        closed_form: The same pair from ``closed_form_sum_of_squares``.
        tolerance: Absolute tolerance floor.
        scale: Magnitude of the sums, normally the total sum of squares.

    Raises:
        InternalInconsistency: On the first mismatching quantity.
    """
    allowed = max(tolerance, DECOMPOSITION_RTOL * scale)
    for name, d, c in zip(("ss_explained", "ss_residual"), direct, closed_form):
        if not abs(d - c) <= allowed:
            raise InternalInconsistency(name, d, c, allowed)


def perfect_fit_floor(n: int, y_scale: float) -> float:
    """Largest residual sum of squares that is only rounding noise."""
    return PERFECT_FIT_ULPS * n * (FLOAT_EPS * y_scale) ** 2


def f_statistic(
    ss_explained: float,
    ss_residual: float,
    n: int,
    y_scale: float,
    on_perfect_fit: str = "raise",
) -> float:
    """F-statistic for a one-predictor regression with intercept.

    ``F = (ss_explained / 1) / (ss_residual / (n - 2))``.

    Args:
        ss_explained: Explained sum of squares.
        ss_residual: Residual sum of squares.
        n: Number of observations.
        y_scale: Largest ``|y|``; sets the rounding floor below which
            ``ss_residual`` counts as zero (see ``perfect_fit_floor``).
        on_perfect_fit: ``"raise"`` to raise ``DegenerateSample`` when the
            residual sum of squares is numerically zero, ``"inf"`` to return
            ``numpy.inf`` instead.

    Raises:
        DegenerateSample: If ``n <= 2`` or on a perfect fit with
            ``on_perfect_fit="raise"``.
    """
    df_residual = n - 2
    if df_residual <= 0:
        raise DegenerateSample(f"sample_size={n} leaves {df_residual} residual degrees of freedom; need at least 1")

    if ss_residual <= perfect_fit_floor(n, y_scale):
        if on_perfect_fit == "inf":
            return np.inf
        raise DegenerateSample("Residual sum of squares is zero (perfect fit); the F-statistic is undefined")

    return (ss_explained / DF_MODEL) / (ss_residual / df_residual)


def f_p_value(f_stat: float, df_residual: int) -> float:
    """Upper-tail probability of ``f_stat`` under ``F(1, df_residual)``."""
    from scipy.stats import f as f_dist

    if np.isinf(f_stat):
        return 0.0
    return float(f_dist.sf(f_stat, DF_MODEL, df_residual))


def f_critical_value(alpha: float, df_residual: int) -> float:
    """Critical F value at significance level *alpha* for ``F(1, df_residual)``."""
    from scipy.stats import f as f_dist

    if df_residual <= 0:
        return np.inf
    return float(f_dist.ppf(1 - alpha, DF_MODEL, df_residual))
