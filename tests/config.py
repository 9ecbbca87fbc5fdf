"""
Shared test configuration constants.

All test files should import from this module to ensure consistency
across the test suite.
"""

SEED = 2137
"""Default random seed for reproducibility."""

# Reference scenario used in the course notes
REF_SAMPLE_SIZE = 10
"""Observations in the reference scenario."""

REF_EFFECT = 2.0
"""True slope in the reference scenario."""

REF_NOISE = 5.0
"""Error standard deviation in the reference scenario."""

REF_SEED = 1
"""Seed of the reference scenario."""

SS_TOLERANCE = 0.01
"""Absolute tolerance for sum-of-squares identities."""

SS_RTOL = 1e-9
"""Relative tolerance for sum-of-squares identities on very large sums."""

N_SEEDS_RATIO = 200
"""Seeds averaged over when checking the approximate factor-of-4 F ratio."""

LARGE_N = 20000
"""Sample size for asymptotic checks (zero effect, slope recovery)."""

# Expression matrices
N_SAMPLES = 6
"""Samples (rows) in the synthetic expression matrix."""

N_GENES = 400
"""Genes (columns) in the synthetic expression matrix."""

FILTER_THRESHOLD = 5.0
"""Mean log-expression cut-off used by the original preprocessing script."""
