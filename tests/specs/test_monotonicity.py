"""
F-statistic sensitivity to noise and signal.

For a fixed seed the draws are shared between calls, so the F-statistic
depends on effect and noise only through their ratio: doubling the noise
and halving the effect both divide F by roughly four.
"""

import numpy as np
import pytest

from tests.config import N_SEEDS_RATIO, REF_EFFECT, REF_NOISE, REF_SAMPLE_SIZE, REF_SEED


class TestNoiseSensitivity:
    """More noise, smaller F."""

    def test_reference_scenario(self):
        from lmsim import simulate

        f_low = simulate(REF_SAMPLE_SIZE, REF_EFFECT, REF_NOISE, REF_SEED).f_statistic
        f_high = simulate(REF_SAMPLE_SIZE, REF_EFFECT, 2 * REF_NOISE, REF_SEED).f_statistic

        assert f_high < f_low
        assert 2.0 < f_low / f_high < 12.0

    def test_ratio_is_four_on_average(self):
        from lmsim import simulate

        ratios = [
            simulate(REF_SAMPLE_SIZE, REF_EFFECT, REF_NOISE, seed).f_statistic
            / simulate(REF_SAMPLE_SIZE, REF_EFFECT, 2 * REF_NOISE, seed).f_statistic
            for seed in range(N_SEEDS_RATIO)
        ]
        assert 3.5 < np.median(ratios) < 4.6

    def test_residual_scales_with_noise_squared(self):
        from lmsim import simulate

        low = simulate(REF_SAMPLE_SIZE, REF_EFFECT, REF_NOISE, REF_SEED)
        high = simulate(REF_SAMPLE_SIZE, REF_EFFECT, 2 * REF_NOISE, REF_SEED)

        # same x and same standard-normal draws, so residuals double exactly
        assert np.array_equal(low.x, high.x)
        assert high.ss_residual == pytest.approx(4 * low.ss_residual, rel=1e-9)


class TestSignalSensitivity:
    """Less signal, smaller F."""

    def test_reference_scenario(self):
        from lmsim import simulate

        f_strong = simulate(REF_SAMPLE_SIZE, REF_EFFECT, REF_NOISE, REF_SEED).f_statistic
        f_weak = simulate(REF_SAMPLE_SIZE, REF_EFFECT / 2, REF_NOISE, REF_SEED).f_statistic

        assert f_weak < f_strong
        assert 2.0 < f_strong / f_weak < 12.0

    def test_halving_effect_equals_doubling_noise(self):
        from lmsim import simulate

        f_half_effect = simulate(REF_SAMPLE_SIZE, REF_EFFECT / 2, REF_NOISE, REF_SEED).f_statistic
        f_double_noise = simulate(REF_SAMPLE_SIZE, REF_EFFECT, 2 * REF_NOISE, REF_SEED).f_statistic

        assert f_half_effect == pytest.approx(f_double_noise, rel=1e-9)

    @pytest.mark.parametrize("scale", [0.5, 3.0, 10.0])
    def test_f_depends_only_on_effect_to_noise_ratio(self, scale):
        from lmsim import simulate

        base = simulate(50, 1.0, 4.0, 17).f_statistic
        scaled = simulate(50, 1.0 * scale, 4.0 * scale, 17).f_statistic
        assert scaled == pytest.approx(base, rel=1e-9)
