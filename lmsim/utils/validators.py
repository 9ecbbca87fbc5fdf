"""
Validation utilities for LMSim.

This module provides validation functions for simulation inputs, simulator
configuration and expression matrices. Every validator returns a
``_ValidationResult`` so that several checks can be combined and reported
together before any computation starts.
"""

import math
from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence, Union

import numpy as np
import pandas as pd

from ..errors import InvalidParameter

__all__ = []

_INTEGER_TYPES = (int, np.integer)
_REAL_TYPES = (int, float, np.integer, np.floating)

PERFECT_FIT_POLICIES = ("raise", "inf")
SWEEP_PARAMETERS = ("sample_size", "effect", "noise", "seed")


@dataclass
class _ValidationResult:
    """Outcome of a validation check, carrying errors and warnings.

    Attributes:
        is_valid: ``True`` if no errors were found.
        errors: List of error messages (empty when valid).
        warnings: List of non-fatal warning messages.
    """

    is_valid: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def merge(self, other: "_ValidationResult") -> "_ValidationResult":
        """Combine two results; valid only if both are."""
        return _ValidationResult(
            self.is_valid and other.is_valid,
            self.errors + other.errors,
            self.warnings + other.warnings,
        )

    def raise_if_invalid(self):
        """Raise ``InvalidParameter`` if the validation failed."""
        if not self.is_valid:
            error_msg = "Validation failed:\n" + "\n".join(f"• {err}" for err in self.errors)
            raise InvalidParameter(error_msg, self.errors)


class _Validator:
    """Static helpers for type and range checks used by all validators."""

    @staticmethod
    def _check_type(value: Any, expected_types: tuple, name: str) -> Optional[str]:
        """Check if value has expected type (``bool`` never counts as a number)."""
        if isinstance(value, (bool, np.bool_)) or not isinstance(value, expected_types):
            actual_type = type(value).__name__
            expected = "an integer" if expected_types is _INTEGER_TYPES else "a real number"
            return f"{name} must be {expected}, got {actual_type}"
        return None

    @staticmethod
    def _check_range(
        value: Union[int, float],
        min_val: Optional[float],
        max_val: Optional[float],
        name: str,
        min_inclusive: bool = True,
    ) -> Optional[str]:
        """Check if value is within range."""
        if min_val is not None:
            if min_inclusive and value < min_val:
                return f"{name} must be >= {min_val}, got {value}"
            if not min_inclusive and value <= min_val:
                return f"{name} must be > {min_val}, got {value}"
        if max_val is not None and value > max_val:
            return f"{name} must be <= {max_val}, got {value}"
        return None


_validator = _Validator()


def _validate_numeric_parameter(
    value: Any,
    name: str,
    expected_types: tuple = _REAL_TYPES,
    min_val: Optional[float] = None,
    max_val: Optional[float] = None,
    min_inclusive: bool = True,
) -> _ValidationResult:
    """Generic validation for numeric parameters (type, finiteness, range)."""
    errors: List[str] = []

    type_error = _validator._check_type(value, expected_types, name)
    if type_error:
        return _ValidationResult(False, [type_error])

    if not math.isfinite(float(value)):
        return _ValidationResult(False, [f"{name} must be finite, got {value}"])

    range_error = _validator._check_range(value, min_val, max_val, name, min_inclusive)
    if range_error:
        errors.append(range_error)

    return _ValidationResult(len(errors) == 0, errors)


def _validate_sample_size(sample_size: Any) -> _ValidationResult:
    """Validate sample size: a positive integer."""
    return _validate_numeric_parameter(sample_size, "sample_size", _INTEGER_TYPES, min_val=1)


def _validate_effect(effect: Any) -> _ValidationResult:
    """Validate the true slope: any finite real, zero included."""
    return _validate_numeric_parameter(effect, "effect")


def _validate_noise(noise: Any) -> _ValidationResult:
    """Validate the error standard deviation: strictly positive."""
    return _validate_numeric_parameter(noise, "noise", min_val=0, min_inclusive=False)


def _validate_seed(seed: Any) -> _ValidationResult:
    """Validate the generator seed: any integer, negative values included."""
    type_error = _validator._check_type(seed, _INTEGER_TYPES, "seed")
    if type_error:
        return _ValidationResult(False, [type_error])
    return _ValidationResult(True)


def _validate_simulation_inputs(sample_size: Any, effect: Any, noise: Any, seed: Any) -> _ValidationResult:
    """Validate all four simulation inputs together so every failure is reported."""
    result = _validate_sample_size(sample_size)
    for check in (_validate_effect(effect), _validate_noise(noise), _validate_seed(seed)):
        result = result.merge(check)
    return result


def _validate_sweep_inputs(runs: Sequence[dict]) -> _ValidationResult:
    """Validate the simulation inputs of every sweep step up front.

    Each distinct message is reported once, so an invalid fixed input is not
    repeated for every step.
    """
    errors = []
    for inputs in runs:
        for error in _validate_simulation_inputs(**inputs).errors:
            if error not in errors:
                errors.append(error)
    return _ValidationResult(len(errors) == 0, errors)


def _validate_x_range(low: Any, high: Any) -> _ValidationResult:
    """Validate the uniform sampling interval of the explanatory variable."""
    result = _validate_numeric_parameter(low, "x_range low").merge(_validate_numeric_parameter(high, "x_range high"))
    if result.is_valid and not low < high:
        result = _ValidationResult(False, [f"x_range low ({low}) must be less than high ({high})"])
    return result


def _validate_tolerance(tolerance: Any) -> _ValidationResult:
    """Validate the absolute tolerance of the sum-of-squares cross-check."""
    return _validate_numeric_parameter(tolerance, "tolerance", min_val=0, min_inclusive=False)


def _validate_perfect_fit_policy(policy: Any) -> _ValidationResult:
    """Validate the zero-residual policy name."""
    if policy not in PERFECT_FIT_POLICIES:
        return _ValidationResult(
            False,
            [f"Unknown perfect-fit policy: {policy!r}. Valid options: {', '.join(repr(p) for p in PERFECT_FIT_POLICIES)}"],
        )
    return _ValidationResult(True)


def _validate_sweep(parameter: Any, values: Sequence[Any]) -> _ValidationResult:
    """Validate the swept parameter name and that at least one value is given."""
    errors = []
    warnings = []
    if parameter not in SWEEP_PARAMETERS:
        errors.append(f"Cannot sweep {parameter!r}. Choose from: {', '.join(SWEEP_PARAMETERS)}")
    if values is None or len(values) == 0:
        errors.append("values must contain at least one entry")
    elif len(set(values)) < len(values):
        warnings.append(f"Repeated values in {parameter} sweep; the table index will contain duplicates")
    return _ValidationResult(len(errors) == 0, errors, warnings)


def _validate_threshold(threshold: Any) -> _ValidationResult:
    """Validate a mean-expression filter threshold."""
    return _validate_numeric_parameter(threshold, "threshold")


def _validate_log_base(base: Any) -> _ValidationResult:
    """Validate a logarithm base: positive and not 1."""
    result = _validate_numeric_parameter(base, "base", min_val=0, min_inclusive=False)
    if result.is_valid and base == 1:
        result = _ValidationResult(False, ["base must not be 1"])
    return result


def _validate_expression_matrix(matrix: pd.DataFrame, positive: bool = False) -> _ValidationResult:
    """Validate an expression matrix (rows = samples, columns = genes).

    Args:
        matrix: Matrix to check.
        positive: Additionally require every value to be strictly positive
            (needed before a log transform).
    """
    errors = []

    if matrix.ndim != 2 or matrix.shape[0] == 0 or matrix.shape[1] == 0:
        errors.append(f"Expression matrix must be non-empty and 2-D, got shape {matrix.shape}")
        return _ValidationResult(False, errors)

    non_numeric = [str(c) for c, dtype in matrix.dtypes.items() if not pd.api.types.is_numeric_dtype(dtype)]
    if non_numeric:
        errors.append(f"Expression matrix has non-numeric columns: {', '.join(non_numeric[:5])}")
        return _ValidationResult(False, errors)

    values = matrix.to_numpy(dtype=float)
    n_bad = int(np.sum(~np.isfinite(values)))
    if n_bad:
        errors.append(f"Expression matrix contains {n_bad} missing or non-finite values")
    elif positive and np.any(values <= 0):
        errors.append(
            f"Expression matrix contains {int(np.sum(values <= 0))} non-positive values; log transform needs values > 0"
        )

    return _ValidationResult(len(errors) == 0, errors)
