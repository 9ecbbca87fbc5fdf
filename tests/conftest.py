"""
Shared pytest fixtures for LMSim tests.
"""

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402
import pandas as pd  # noqa: E402
import pytest  # noqa: E402

from tests.config import (  # noqa: E402
    N_GENES,
    N_SAMPLES,
    REF_EFFECT,
    REF_NOISE,
    REF_SAMPLE_SIZE,
    REF_SEED,
    SEED,
)


@pytest.fixture(autouse=True)
def _close_figures():
    """Close every matplotlib figure a test opened."""
    yield
    plt.close("all")


@pytest.fixture
def simulator():
    """Default-configured RegressionSimulator."""
    from lmsim import RegressionSimulator

    return RegressionSimulator()


@pytest.fixture
def reference_result(simulator):
    """Result of the reference scenario (n=10, effect=2, noise=5, seed=1)."""
    return simulator.simulate(REF_SAMPLE_SIZE, REF_EFFECT, REF_NOISE, REF_SEED)


@pytest.fixture
def raw_expression():
    """Synthetic raw array intensities, samples x genes.

    Gene log-means are spread over (2, 9) so that a threshold of 5 keeps
    some genes and drops others; each sample gets its own scale factor, as
    unnormalized arrays do.
    """
    rng = np.random.default_rng(SEED)
    gene_means = rng.uniform(2.0, 9.0, N_GENES)
    sample_shift = rng.normal(0.0, 0.5, (N_SAMPLES, 1))
    log_values = gene_means + sample_shift + rng.normal(0.0, 0.3, (N_SAMPLES, N_GENES))
    return pd.DataFrame(
        np.exp(log_values),
        index=[f"sample_{i + 1}" for i in range(N_SAMPLES)],
        columns=[f"gene_{j + 1:04d}" for j in range(N_GENES)],
    )
