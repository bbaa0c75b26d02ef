"""Exception hierarchy shared by all convexkit solvers.

Errors are raised eagerly and propagate unchanged to the caller. No solver
retries, regularizes or falls back to another method after raising.
"""

from __future__ import annotations

from typing import Any, Optional

import numpy as np


class ConvexkitError(Exception):
    """Base class for every error raised by convexkit."""


class InvalidParameterError(ConvexkitError, ValueError):
    """Raised when a solver option lies outside its admissible range."""


class InfeasibleStartError(ConvexkitError, ValueError):
    """Raised when a starting point violates a required feasibility condition.

    Attributes:
        residual: Size of the violation (``‖A x0 - b‖∞`` for equality
            constraints, ``max_i f_i(x0)`` for inequality constraints).
    """

    def __init__(self, message: str, residual: float) -> None:
        super().__init__(message)
        self.residual = float(residual)


class IllConditionedError(ConvexkitError, np.linalg.LinAlgError):
    """Raised when a Hessian or KKT matrix cannot be factorized or solved."""


class NotConvergedError(ConvexkitError, RuntimeError):
    """Raised when a solver exhausts its iteration budget.

    Attributes:
        result: The last, unsuccessful result object, or None when the
            failure happened before a result could be assembled.
    """

    def __init__(self, message: str, result: Optional[Any] = None) -> None:
        super().__init__(message)
        self.result = result


class LineSearchError(NotConvergedError):
    """Raised when backtracking shrinks the step ``maxiter`` times without
    meeting the sufficient-decrease condition."""

    def __init__(self, message: str, step: float) -> None:
        super().__init__(message)
        self.step = float(step)


__all__ = [
    "ConvexkitError",
    "InvalidParameterError",
    "InfeasibleStartError",
    "IllConditionedError",
    "NotConvergedError",
    "LineSearchError",
]
