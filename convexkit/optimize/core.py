"""Core interfaces shared across the descent and Newton solvers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

import numpy as np

from ..exceptions import InvalidParameterError
from .utils import approx_grad, approx_hessian

Array = np.ndarray
Objective = Callable[[Array], float]
Gradient = Callable[[Array], Array]
Hessian = Callable[[Array], Array]

DEFAULT_ALPHA = 0.2
DEFAULT_BETA = 0.7
LINE_SEARCH_ALPHA = 0.1
GRADIENT_TOL = 1e-5
NEWTON_TOL = 1e-5


@dataclass(frozen=True)
class Problem:
    """Container describing a smooth objective.

    ``grad`` and ``hess`` are optional; solvers fall back to central finite
    differences when they are missing.
    """

    fun: Objective
    grad: Optional[Gradient] = None
    hess: Optional[Hessian] = None
    dim: Optional[int] = None


@dataclass
class OptimizeResult:
    """Result returned by the unconstrained solvers.

    Attributes:
        x: Final iterate.
        fun: Objective value at ``x``.
        nit: Number of accepted steps.
        success: True when the stopping test was met.
        message: Human-readable exit reason.
        nfev, njev, nhev: Objective, gradient and Hessian evaluation counts.
        grad_norm: ``‖∇f(x)‖₂`` at the last gradient evaluation.
        decrement: Squared Newton decrement at the last Newton-type iteration.
    """

    x: Array
    fun: float
    nit: int
    success: bool
    message: str
    nfev: int = 0
    njev: int = 0
    nhev: int = 0
    grad_norm: Optional[float] = None
    decrement: Optional[float] = None


class Evaluator:
    """Counting front-end for a :class:`Problem`."""

    def __init__(self, problem: Problem) -> None:
        self.problem = problem
        self.nfev = 0
        self.njev = 0
        self.nhev = 0

    def fun(self, x: Array) -> float:
        self.nfev += 1
        return float(self.problem.fun(x))

    def grad(self, x: Array) -> Array:
        if self.problem.grad is not None:
            self.njev += 1
            return np.asarray(self.problem.grad(x), dtype=float).reshape(-1)
        grad, evals = approx_grad(self.problem.fun, x, return_evals=True)
        self.nfev += int(evals)
        return grad

    def hess(self, x: Array) -> Array:
        if self.problem.hess is not None:
            self.nhev += 1
            return np.atleast_2d(np.asarray(self.problem.hess(x), dtype=float))
        hess, evals = approx_hessian(self.problem.fun, x, return_evals=True)
        self.nfev += int(evals)
        return hess


def as_vector(x0: Array, dim: Optional[int] = None) -> Array:
    """Return a fresh 1-D float copy of ``x0``, checking ``dim`` if given."""
    x = np.array(x0, dtype=float, copy=True).reshape(-1)
    if dim is not None and x.shape[0] != dim:
        raise InvalidParameterError(f"Starting point has dimension {x.shape[0]}, expected {dim}")
    return x


def check_line_search_params(alpha: float, beta: float) -> None:
    """Raise InvalidParameterError unless ``0 < alpha < 0.5`` and ``0 < beta < 1``."""
    if not (0.0 < alpha < 0.5):
        raise InvalidParameterError(f"alpha must lie in (0, 0.5), got {alpha}")
    if not (0.0 < beta < 1.0):
        raise InvalidParameterError(f"beta must lie in (0, 1), got {beta}")


def check_positive(name: str, value: float) -> None:
    if not value > 0:
        raise InvalidParameterError(f"{name} must be positive, got {value}")


def check_maxiter(maxiter: int) -> None:
    if maxiter < 0:
        raise InvalidParameterError(f"maxiter must be non-negative, got {maxiter}")


def gradient_converged(grad_norm: float, tol: float) -> bool:
    """Return True if the gradient norm is strictly below ``tol``."""
    return grad_norm < tol


def decrement_converged(lambda_sq: float, tol: float) -> bool:
    """Newton-family stopping test ``λ²/2 < tol``."""
    return lambda_sq / 2.0 < tol


__all__ = [
    "Array",
    "Objective",
    "Gradient",
    "Hessian",
    "DEFAULT_ALPHA",
    "DEFAULT_BETA",
    "LINE_SEARCH_ALPHA",
    "GRADIENT_TOL",
    "NEWTON_TOL",
    "Problem",
    "OptimizeResult",
    "Evaluator",
    "as_vector",
    "check_line_search_params",
    "check_positive",
    "check_maxiter",
    "gradient_converged",
    "decrement_converged",
]
