"""
LMSim - regression simulation for teaching linear models.

This module provides the ``RegressionSimulator`` class, the configurable
front end to the simulation engine in ``lmsim.core``.
"""

from typing import Callable, Optional, Sequence, Tuple

import pandas as pd

from .core import (
    DEFAULT_PERFECT_FIT_POLICY,
    DEFAULT_TOLERANCE,
    DEFAULT_X_RANGE,
    SimulationResult,
    build_sweep_table,
    simulate_lm,
)
from .errors import InvalidParameter
from .progress import ProgressReporter, SimulationCancelled
from .utils.validators import (
    _validate_perfect_fit_policy,
    _validate_sweep,
    _validate_sweep_inputs,
    _validate_tolerance,
    _validate_x_range,
)
from .utils.visualization import plot_explained, plot_residuals, plot_sum_of_squares


def _no_progress(current, total):
    pass


_PLOT_KINDS = {
    "both": plot_sum_of_squares,
    "residual": plot_residuals,
    "explained": plot_explained,
}


class RegressionSimulator:
    """Simulate univariate regressions and decompose their variance.

    Each call to ``simulate`` draws ``x`` uniformly from ``x_range``, builds
    ``y = effect * x + N(0, noise)`` with a generator seeded only for that
    call, fits the OLS line and returns a ``SimulationResult`` with the
    explained and residual sums of squares and the F-statistic.

    The simulator only stores configuration, so one instance can be reused
    and shared freely. The ``set_*`` methods validate their input and return
    ``self`` for method chaining.

    Attributes:
        x_range: Interval of the explanatory variable (default ``(-25, 25)``).
        tolerance: Absolute tolerance of the sum-of-squares cross-check
            (default 0.01).
        on_perfect_fit: ``"raise"`` (default) to raise ``DegenerateSample``
            when the residual sum of squares is zero, ``"inf"`` to report an
            infinite F-statistic instead.

    Example:
        >>> sim = RegressionSimulator()
        >>> result = sim.simulate(sample_size=10, effect=2, noise=5, seed=1)
        >>> result.f_statistic
        >>> sim.sweep("noise", [5, 10], sample_size=10, effect=2, seed=1)
    """

    def __init__(
        self,
        x_range: Tuple[float, float] = DEFAULT_X_RANGE,
        tolerance: float = DEFAULT_TOLERANCE,
        on_perfect_fit: str = DEFAULT_PERFECT_FIT_POLICY,
    ):
        self.x_range = DEFAULT_X_RANGE
        self.tolerance = DEFAULT_TOLERANCE
        self.on_perfect_fit = DEFAULT_PERFECT_FIT_POLICY

        self.set_x_range(*x_range)
        self.set_tolerance(tolerance)
        self.set_perfect_fit_policy(on_perfect_fit)

    def __repr__(self) -> str:
        return (
            f"RegressionSimulator(x_range={self.x_range}, tolerance={self.tolerance}, "
            f"on_perfect_fit={self.on_perfect_fit!r})"
        )

    # =========================================================================
    # Configuration methods
    # =========================================================================

    def set_x_range(self, low: float, high: float):
        """Set the interval the explanatory variable is drawn from.

        Returns:
            self: For method chaining.

        Raises:
            InvalidParameter: If the bounds are not finite or ``low >= high``.
        """
        _validate_x_range(low, high).raise_if_invalid()
        self.x_range = (float(low), float(high))
        return self

    def set_tolerance(self, tolerance: float):
        """Set the absolute tolerance of the sum-of-squares cross-check.

        Returns:
            self: For method chaining.
        """
        _validate_tolerance(tolerance).raise_if_invalid()
        self.tolerance = float(tolerance)
        return self

    def set_perfect_fit_policy(self, policy: str):
        """Choose what happens when the residual sum of squares is zero.

        Args:
            policy: ``"raise"`` or ``"inf"``.

        Returns:
            self: For method chaining.
        """
        _validate_perfect_fit_policy(policy).raise_if_invalid()
        self.on_perfect_fit = policy
        return self

    # =========================================================================
    # Simulation
    # =========================================================================

    def simulate(self, sample_size: int, effect: float, noise: float, seed: int) -> SimulationResult:
        """Simulate one dataset, fit it and decompose its variance.

        Args:
            sample_size: Number of observations (positive integer).
            effect: True slope; any finite real, zero included.
            noise: Standard deviation of the error term (> 0).
            seed: Generator seed; any integer.

        Returns:
            ``SimulationResult``.

        Raises:
            InvalidParameter: If any input fails validation.
            DegenerateSample: If ``sample_size <= 2`` or the fit is perfect
                and the policy is ``"raise"``.
            InternalInconsistency: If the sum-of-squares cross-check fails.
        """
        return simulate_lm(
            sample_size,
            effect,
            noise,
            seed,
            x_range=self.x_range,
            tolerance=self.tolerance,
            on_perfect_fit=self.on_perfect_fit,
        )

    def sweep(
        self,
        parameter: str,
        values: Sequence,
        sample_size: int = 10,
        effect: float = 2.0,
        noise: float = 5.0,
        seed: int = 1,
        progress_callback: Optional[Callable[[int, int], None]] = None,
        cancel_check: Optional[Callable[[], bool]] = None,
    ) -> pd.DataFrame:
        """Simulate once per value of *parameter*, holding the others fixed.

        Args:
            parameter: One of ``"sample_size"``, ``"effect"``, ``"noise"``,
                ``"seed"``.
            values: Values to assign to *parameter*, in order.
            sample_size, effect, noise, seed: Fixed values for the other
                inputs (the one named by *parameter* is ignored).
            progress_callback: Optional ``(current, total)`` callback, e.g.
                ``PrintReporter()``.
            cancel_check: Optional callable returning ``True`` to abort.

        Returns:
            DataFrame indexed by *parameter*, one row per value, with the
            columns of ``SimulationResult.to_dict``.

        Raises:
            InvalidParameter: On an unknown parameter, empty *values* or an
                invalid simulation input; every step is checked before the
                first simulation runs.
            SimulationCancelled: If *cancel_check* returns ``True``.
        """
        result = _validate_sweep(parameter, values)
        for warning in result.warnings:
            print(f"Warning: {warning}")
        result.raise_if_invalid()

        base = {"sample_size": sample_size, "effect": effect, "noise": noise, "seed": seed}
        runs = [dict(base, **{parameter: value}) for value in values]
        _validate_sweep_inputs(runs).raise_if_invalid()

        callback = progress_callback if progress_callback is not None else _no_progress

        results = []
        with ProgressReporter(len(runs), callback) as progress:
            for inputs in runs:
                if cancel_check is not None and cancel_check():
                    raise SimulationCancelled(f"Sweep over {parameter} cancelled after {len(results)} of {len(runs)}")
                results.append(self.simulate(**inputs))
                progress.advance()
        return build_sweep_table(parameter, results)

    def plot(self, result: SimulationResult, kind: str = "both", **kwargs):
        """Draw a result: ``"both"`` (figure), ``"residual"`` or ``"explained"`` (axes).

        Extra keyword arguments are passed to the plotting function.
        """
        if kind not in _PLOT_KINDS:
            raise InvalidParameter(f"Unknown plot kind {kind!r}. Choose from: {', '.join(_PLOT_KINDS)}")
        return _PLOT_KINDS[kind](result, **kwargs)


_default_simulator = RegressionSimulator()


def simulate(sample_size: int, effect: float, noise: float, seed: int) -> SimulationResult:
    """Simulate with the default configuration; see ``RegressionSimulator.simulate``."""
    return _default_simulator.simulate(sample_size, effect, noise, seed)
