"""
Simulation execution for LMSim.

One call draws a synthetic univariate regression dataset from a locally
seeded generator, fits the OLS line and decomposes the variance into
explained and residual sums of squares. The decomposition is computed
twice (summed from the fitted line and from the closed-form moments) and
the two must agree before a result is returned.
"""

from typing import Tuple

import numpy as np

from ..errors import DegenerateSample
from ..stats.ols import (
    check_decomposition,
    closed_form_sum_of_squares,
    compute_moments,
    f_statistic,
    fit_from_moments,
    sum_of_squares,
)
from ..utils.validators import _validate_simulation_inputs
from .results import SimulationResult

DEFAULT_X_RANGE: Tuple[float, float] = (-25.0, 25.0)
DEFAULT_TOLERANCE = 0.01
DEFAULT_PERFECT_FIT_POLICY = "raise"

# spawn key reserved for negative seeds, so they never share a stream with a non-negative one
_NEGATIVE_SEED_SPAWN_KEY = (1,)


def make_generator(seed: int) -> np.random.Generator:
    """Create an independent generator for *seed*.

    Non-negative seeds map directly onto ``numpy.random.default_rng``;
    negative seeds use their magnitude under a dedicated spawn key.
    """
    seed = int(seed)
    if seed >= 0:
        return np.random.default_rng(seed)
    return np.random.default_rng(np.random.SeedSequence(-seed, spawn_key=_NEGATIVE_SEED_SPAWN_KEY))


def draw_sample(
    rng: np.random.Generator,
    sample_size: int,
    effect: float,
    noise: float,
    x_range: Tuple[float, float] = DEFAULT_X_RANGE,
) -> Tuple[np.ndarray, np.ndarray]:
    """Draw ``x ~ U(x_range)`` and ``y = effect * x + N(0, noise)``.

    ``x`` is drawn first, then the errors, both from *rng*.
    """
    x = rng.uniform(x_range[0], x_range[1], sample_size)
    error = rng.normal(0.0, noise, sample_size)
    return x, effect * x + error


def simulate_lm(
    sample_size: int,
    effect: float,
    noise: float,
    seed: int,
    x_range: Tuple[float, float] = DEFAULT_X_RANGE,
    tolerance: float = DEFAULT_TOLERANCE,
    on_perfect_fit: str = DEFAULT_PERFECT_FIT_POLICY,
) -> SimulationResult:
    """Simulate a regression dataset, fit it and decompose its variance.

    Args:
        sample_size: Number of observations (positive integer).
        effect: True slope; zero means no relationship.
        noise: Standard deviation of the error term (> 0).
        seed: Seed of the generator used for every draw in this call.
        x_range: Interval the explanatory variable is drawn from.
        tolerance: Absolute tolerance floor of the sum-of-squares cross-check;
            it widens with the total sum of squares (see
            ``stats.ols.check_decomposition``).
        on_perfect_fit: ``"raise"`` or ``"inf"``; see ``stats.ols.f_statistic``.

    Returns:
        ``SimulationResult``; identical inputs give bit-identical results.

    Raises:
        InvalidParameter: If any input fails validation (all are checked
            before any work is done).
        DegenerateSample: If ``sample_size <= 2`` or the fit is perfect
            under the ``"raise"`` policy.
        InternalInconsistency: If the two computations of a sum of squares
            disagree beyond the allowed tolerance.
    """
    _validate_simulation_inputs(sample_size, effect, noise, seed).raise_if_invalid()

    if sample_size <= 2:
        raise DegenerateSample(
            f"sample_size={sample_size} leaves {sample_size - 2} residual degrees of freedom; need at least 1"
        )

    sample_size, effect, noise, seed = int(sample_size), float(effect), float(noise), int(seed)

    rng = make_generator(seed)
    x, y = draw_sample(rng, sample_size, effect, noise, x_range)

    moments = compute_moments(x, y)
    intercept, slope = fit_from_moments(moments)
    y_fitted = intercept + slope * x

    ss_explained, ss_residual = sum_of_squares(y, y_fitted, moments.y_mean)
    f_stat = f_statistic(ss_explained, ss_residual, sample_size, float(np.max(np.abs(y))), on_perfect_fit)

    check_decomposition(
        (ss_explained, ss_residual),
        closed_form_sum_of_squares(slope, moments),
        tolerance,
        scale=moments.syy,
    )

    return SimulationResult(
        x=x,
        y=y,
        y_mean=moments.y_mean,
        intercept=intercept,
        slope=slope,
        y_fitted=y_fitted,
        f_statistic=f_stat,
        ss_explained=ss_explained,
        ss_residual=ss_residual,
        sample_size=sample_size,
        effect=effect,
        noise=noise,
        seed=seed,
    )
