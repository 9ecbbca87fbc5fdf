"""
Numeric invariants of the regression simulator.

Determinism, the variance decomposition identity and agreement with an
independent reference fit, over a grid of inputs.
"""

import numpy as np
import pytest

from tests.config import LARGE_N, REF_EFFECT, REF_NOISE, REF_SAMPLE_SIZE, REF_SEED, SS_RTOL, SS_TOLERANCE
from tests.helpers.reference import sklearn_fit

SCENARIOS = [
    (3, 2.0, 5.0, 1),
    (10, 2.0, 5.0, 1),
    (10, 0.0, 1.0, 7),
    (25, -3.0, 0.1, 42),
    (100, 0.5, 50.0, 2137),
    (5000, 2.0, 10.0, -5),
    # high signal to noise: residuals tiny next to the total
    (1000, 1e4, 0.01, 1),
    (1000, 1e6, 1.0, 1),
    # very large sums of squares
    (100, 2.0, 1e8, 1),
]


def _ss_tolerance(ss_total):
    return max(SS_TOLERANCE, SS_RTOL * ss_total)


class TestDeterminism:
    """Identical inputs give bit-identical results."""

    @pytest.mark.parametrize("sample_size, effect, noise, seed", SCENARIOS)
    def test_repeat_calls(self, sample_size, effect, noise, seed):
        from lmsim import simulate

        a = simulate(sample_size, effect, noise, seed)
        b = simulate(sample_size, effect, noise, seed)

        assert np.array_equal(a.x, b.x)
        assert np.array_equal(a.y, b.y)
        assert a.intercept == b.intercept
        assert a.slope == b.slope
        assert a.f_statistic == b.f_statistic

    def test_independent_simulators(self):
        from lmsim import RegressionSimulator

        a = RegressionSimulator().simulate(REF_SAMPLE_SIZE, REF_EFFECT, REF_NOISE, REF_SEED)
        b = RegressionSimulator().simulate(REF_SAMPLE_SIZE, REF_EFFECT, REF_NOISE, REF_SEED)
        assert np.array_equal(a.y, b.y)
        assert a.f_statistic == b.f_statistic

    def test_interleaved_calls_do_not_interfere(self):
        from lmsim import simulate

        first = simulate(REF_SAMPLE_SIZE, REF_EFFECT, REF_NOISE, REF_SEED)
        simulate(50, 1.0, 3.0, 99)
        again = simulate(REF_SAMPLE_SIZE, REF_EFFECT, REF_NOISE, REF_SEED)
        assert np.array_equal(first.y, again.y)

    def test_different_seeds_differ(self):
        from lmsim import simulate

        a = simulate(REF_SAMPLE_SIZE, REF_EFFECT, REF_NOISE, 1)
        b = simulate(REF_SAMPLE_SIZE, REF_EFFECT, REF_NOISE, 2)
        assert not np.array_equal(a.x, b.x)

    def test_concurrent_calls(self):
        from concurrent.futures import ThreadPoolExecutor

        from lmsim import simulate

        expected = [simulate(200, 1.0, 5.0, seed).f_statistic for seed in range(16)]
        with ThreadPoolExecutor(max_workers=4) as pool:
            got = list(pool.map(lambda seed: simulate(200, 1.0, 5.0, seed).f_statistic, range(16)))
        assert got == expected


class TestDecomposition:
    """ss_explained + ss_residual = ss_total, both computed independently."""

    @pytest.mark.parametrize("sample_size, effect, noise, seed", SCENARIOS)
    def test_identity(self, sample_size, effect, noise, seed):
        from lmsim import simulate

        r = simulate(sample_size, effect, noise, seed)
        ss_total = np.sum((r.y - r.y_mean) ** 2)
        assert abs(r.ss_explained + r.ss_residual - ss_total) <= _ss_tolerance(ss_total)

    @pytest.mark.parametrize("sample_size, effect, noise, seed", SCENARIOS)
    def test_recomputation_from_reference_fit(self, sample_size, effect, noise, seed):
        from lmsim import simulate

        r = simulate(sample_size, effect, noise, seed)
        _, _, y_pred = sklearn_fit(r.x, r.y)
        tol = _ss_tolerance(r.ss_total)

        assert abs(r.ss_explained - np.sum((y_pred - np.mean(r.y)) ** 2)) <= tol
        assert abs(r.ss_residual - np.sum((r.y - y_pred) ** 2)) <= tol

    @pytest.mark.parametrize("sample_size, effect, noise, seed", SCENARIOS)
    def test_recomputation_from_own_fields(self, sample_size, effect, noise, seed):
        from lmsim import simulate

        r = simulate(sample_size, effect, noise, seed)
        tol = _ss_tolerance(r.ss_total)
        assert abs(r.ss_explained - np.sum((r.y_fitted - r.y_mean) ** 2)) <= tol
        assert abs(r.ss_residual - np.sum(r.residuals**2)) <= tol


class TestZeroEffect:
    """With no true relationship the fit explains almost nothing."""

    def test_slope_near_zero(self):
        from lmsim import simulate

        r = simulate(LARGE_N, 0.0, 5.0, 3)
        assert abs(r.slope) < 0.02

    def test_explained_small_relative_to_residual(self):
        from lmsim import simulate

        r = simulate(LARGE_N, 0.0, 5.0, 3)
        assert r.ss_explained / r.ss_residual < 0.005


class TestSlopeRecovery:
    """With many observations the fitted slope approaches the true effect."""

    @pytest.mark.parametrize("effect", [-2.0, 0.5, 3.0])
    def test_slope(self, effect):
        from lmsim import simulate

        r = simulate(LARGE_N, effect, 5.0, 11)
        assert r.slope == pytest.approx(effect, abs=0.02)
        assert r.intercept == pytest.approx(0.0, abs=0.3)
