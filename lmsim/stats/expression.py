"""
Microarray expression preprocessing.

The three-step pipeline used to prepare raw array intensities for
analysis: log-transform, quantile-normalize, then drop lowly expressed
genes. Matrices are ``pandas.DataFrame`` objects with one row per sample
and one column per gene; plain 2-D arrays are wrapped on the way in.
"""

import math
import warnings
from dataclasses import dataclass
from typing import Tuple, Union

import numpy as np
import pandas as pd
from scipy.stats import gaussian_kde, rankdata

from ..errors import DegenerateSample, InvalidParameter
from ..utils.validators import (
    _validate_expression_matrix,
    _validate_log_base,
    _validate_threshold,
)

DEFAULT_FILTER_THRESHOLD = 5.0
DEFAULT_DENSITY_POINTS = 512

MatrixLike = Union[pd.DataFrame, np.ndarray]


@dataclass(frozen=True)
class PreprocessingResult:
    """Every stage of one preprocessing run.

    Attributes:
        raw: Input intensities.
        log: Log-transformed intensities.
        normalized: Quantile-normalized log intensities.
        filtered: ``normalized`` restricted to the kept genes.
        keep: Boolean mask over genes (index = gene names).
        threshold: Mean-expression cut-off that produced ``keep``.
    """

    raw: pd.DataFrame
    log: pd.DataFrame
    normalized: pd.DataFrame
    filtered: pd.DataFrame
    keep: pd.Series
    threshold: float

    @property
    def n_kept(self) -> int:
        """Number of genes that passed the filter."""
        return int(self.keep.sum())

    @property
    def stages(self) -> dict:
        """Stage name to matrix, in pipeline order."""
        return {
            "raw": self.raw,
            "log": self.log,
            "normalized": self.normalized,
            "filtered": self.filtered,
        }


def _as_frame(matrix: MatrixLike) -> pd.DataFrame:
    """Wrap a 2-D array in a DataFrame; DataFrames are returned unchanged."""
    if isinstance(matrix, pd.DataFrame):
        return matrix
    array = np.asarray(matrix)
    if array.ndim != 2:
        raise InvalidParameter(f"Expression matrix must be 2-D, got {array.ndim}-D input")
    return pd.DataFrame(array)


def log_transform(matrix: MatrixLike, base: float = math.e) -> pd.DataFrame:
    """Log-transform every intensity.

    Args:
        matrix: Samples x genes matrix of strictly positive intensities.
        base: Logarithm base (natural log by default).

    Raises:
        InvalidParameter: If any value is missing, non-finite or <= 0, or
            *base* is not a valid logarithm base.
    """
    frame = _as_frame(matrix)
    result = _validate_expression_matrix(frame, positive=True).merge(_validate_log_base(base))
    result.raise_if_invalid()

    values = np.log(frame.to_numpy(dtype=float))
    if base != math.e:
        values = values / math.log(base)
    return pd.DataFrame(values, index=frame.index, columns=frame.columns)


def quantile_normalize(matrix: MatrixLike) -> pd.DataFrame:
    """Give every sample the same empirical distribution.

    The reference distribution is the mean, rank by rank, of the sorted
    samples. Each value is replaced by the reference value at its rank;
    tied values share the reference interpolated at their average rank,
    so they stay tied.

    Args:
        matrix: Samples x genes matrix.

    Returns:
        Normalized matrix with the same index and columns.
    """
    frame = _as_frame(matrix)
    _validate_expression_matrix(frame).raise_if_invalid()

    values = frame.to_numpy(dtype=float)
    n_genes = values.shape[1]
    reference = np.sort(values, axis=1).mean(axis=0)
    positions = np.arange(1, n_genes + 1)

    normalized = np.empty_like(values)
    for i, row in enumerate(values):
        normalized[i] = np.interp(rankdata(row, method="average"), positions, reference)

    return pd.DataFrame(normalized, index=frame.index, columns=frame.columns)


def filter_by_mean_expression(
    matrix: MatrixLike,
    threshold: float = DEFAULT_FILTER_THRESHOLD,
) -> Tuple[pd.DataFrame, pd.Series]:
    """Keep genes whose mean expression across samples exceeds *threshold*.

    Returns:
        Tuple ``(filtered, keep)`` where *keep* is a boolean Series over
        genes and *filtered* holds only the columns where it is ``True``.
    """
    frame = _as_frame(matrix)
    _validate_expression_matrix(frame).merge(_validate_threshold(threshold)).raise_if_invalid()

    keep = frame.mean(axis=0) > threshold
    if not keep.any():
        warnings.warn(
            f"No gene has mean expression above {threshold}; the filtered matrix is empty.",
            UserWarning,
            stacklevel=2,
        )
    return frame.loc[:, keep], keep


def expression_densities(matrix: MatrixLike, n_points: int = DEFAULT_DENSITY_POINTS) -> pd.DataFrame:
    """Kernel density estimate of each sample on a shared grid.

    Args:
        matrix: Samples x genes matrix.
        n_points: Number of grid points.

    Returns:
        DataFrame indexed by the grid (``"value"``), one column per sample.

    Raises:
        DegenerateSample: If a sample has fewer than two genes or all of its
            values are equal.
    """
    frame = _as_frame(matrix)
    _validate_expression_matrix(frame).raise_if_invalid()

    values = frame.to_numpy(dtype=float)
    if values.shape[1] < 2:
        raise DegenerateSample("Density estimation needs at least two genes per sample")

    low, high = float(values.min()), float(values.max())
    pad = 0.1 * (high - low) if high > low else 1.0
    grid = np.linspace(low - pad, high + pad, n_points)

    curves = {}
    for name, row in zip(frame.index, values):
        if np.ptp(row) == 0:
            raise DegenerateSample(f"Sample {name!r} has constant expression; its density is undefined")
        curves[name] = gaussian_kde(row)(grid)

    return pd.DataFrame(curves, index=pd.Index(grid, name="value"))


def preprocess(
    matrix: MatrixLike,
    threshold: float = DEFAULT_FILTER_THRESHOLD,
    base: float = math.e,
    verbose: bool = False,
) -> PreprocessingResult:
    """Run log-transform, quantile normalization and mean-expression filtering.

    Args:
        matrix: Raw samples x genes intensities.
        threshold: Keep genes whose normalized mean exceeds this value.
        base: Logarithm base for the transform.
        verbose: Print how many genes were kept.

    Returns:
        ``PreprocessingResult`` with every intermediate stage.
    """
    raw = _as_frame(matrix)
    logged = log_transform(raw, base=base)
    normalized = quantile_normalize(logged)
    filtered, keep = filter_by_mean_expression(normalized, threshold)

    result = PreprocessingResult(raw, logged, normalized, filtered, keep, float(threshold))
    if verbose:
        print(f"Kept {result.n_kept} of {len(keep)} genes with mean expression > {threshold}")
    return result
