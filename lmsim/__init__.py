"""LMSim - linear model simulation and expression preprocessing.

Simulates univariate regression datasets, fits the OLS line and
decomposes the variance into explained and residual sums of squares with
the F-statistic; also carries the log / quantile-normalize / filter
pipeline for microarray expression matrices.

Example:
    >>> from lmsim import RegressionSimulator, simulate
    >>>
    >>> result = simulate(sample_size=10, effect=2, noise=5, seed=1)
    >>> result.ss_explained, result.ss_residual, result.f_statistic
    >>>
    >>> RegressionSimulator().sweep("noise", [5, 10], sample_size=10, effect=2, seed=1)
"""

from importlib.metadata import version as _get_version

from .core import SimulationResult
from .errors import DegenerateSample, InternalInconsistency, InvalidParameter, LMSimError
from .model import RegressionSimulator, simulate
from .progress import PrintReporter, ProgressReporter, SimulationCancelled, TqdmReporter
from .stats.expression import (
    PreprocessingResult,
    expression_densities,
    filter_by_mean_expression,
    log_transform,
    preprocess,
    quantile_normalize,
)

__version__ = _get_version("LMSim")

__all__ = [
    "RegressionSimulator",
    "SimulationResult",
    "simulate",
    # Expression preprocessing
    "PreprocessingResult",
    "log_transform",
    "quantile_normalize",
    "filter_by_mean_expression",
    "expression_densities",
    "preprocess",
    # Errors
    "LMSimError",
    "InvalidParameter",
    "DegenerateSample",
    "InternalInconsistency",
    "SimulationCancelled",
    # Progress
    "ProgressReporter",
    "PrintReporter",
    "TqdmReporter",
]
