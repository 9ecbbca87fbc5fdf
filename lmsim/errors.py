"""
Exception types raised by LMSim.

All exceptions derive from ``LMSimError`` so callers can catch everything
the package raises with a single clause, while still matching the usual
builtin categories (``ValueError``, ``ArithmeticError``, ``RuntimeError``).
"""

from typing import List, Optional


class LMSimError(Exception):
    """Base class for all LMSim errors."""

    pass


class InvalidParameter(LMSimError, ValueError):
    """One or more inputs failed validation before any work was done.

    Attributes:
        errors: Every failed constraint, one message per entry.
    """

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        super().__init__(message)
        self.errors = list(errors) if errors else [message]


class DegenerateSample(LMSimError, ArithmeticError):
    """The sample cannot support the requested statistic.

    Raised for too few residual degrees of freedom, an explanatory variable
    with zero variance, or a perfect fit (zero residual sum of squares) when
    the simulator is configured to reject it.
    """

    pass


class InternalInconsistency(LMSimError, RuntimeError):
    """Two independently computed sums of squares disagree.

    Attributes:
        quantity: Name of the sum of squares that failed the check.
        direct: Value summed from the fitted line.
        closed_form: Value obtained from the closed-form decomposition.
        tolerance: Absolute tolerance that was exceeded.
    """

    def __init__(self, quantity: str, direct: float, closed_form: float, tolerance: float):
        self.quantity = quantity
        self.direct = direct
        self.closed_form = closed_form
        self.tolerance = tolerance
        super().__init__(
            f"{quantity} mismatch: direct sum {direct!r} vs closed form {closed_form!r} "
            f"(|diff| = {abs(direct - closed_form):.3g} > tolerance {tolerance})"
        )
