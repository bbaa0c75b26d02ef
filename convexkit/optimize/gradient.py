"""First-order descent methods with backtracking line search."""

from __future__ import annotations

from typing import Callable, Optional

import numpy as np

from ..exceptions import NotConvergedError
from ..logging import get_logger
from ..tracking import Tracker, resolve_tracker
from .core import (
    DEFAULT_ALPHA,
    DEFAULT_BETA,
    GRADIENT_TOL,
    Array,
    Evaluator,
    OptimizeResult,
    Problem,
    as_vector,
    check_line_search_params,
    check_maxiter,
    check_positive,
    gradient_converged,
)
from .line_search import backtracking_line_search

logger = get_logger(__name__)

# Fills ``dx`` in place from the gradient at the current point.
DirectionRule = Callable[[Array, Array], None]


def _steepest(grad: Array, dx: Array) -> None:
    np.negative(grad, out=dx)


def _largest_coordinate(grad: Array, dx: Array) -> None:
    # argmax returns the lowest index among ties
    i = int(np.argmax(np.abs(grad)))
    dx[i] = -grad[i]


def _descend(
    name: str,
    rule: DirectionRule,
    reset: bool,
    problem: Problem,
    x0: Array,
    alpha: float,
    beta: float,
    tol: float,
    maxiter: int,
    tracker: Optional[Tracker],
) -> OptimizeResult:
    check_line_search_params(alpha, beta)
    check_positive("tol", tol)
    check_maxiter(maxiter)
    tracker = resolve_tracker(tracker)
    evaluator = Evaluator(problem)
    x = as_vector(x0, problem.dim)
    dx = np.zeros_like(x)
    nit = 0
    while True:
        grad = evaluator.grad(x)
        grad_norm = float(np.linalg.norm(grad))
        if gradient_converged(grad_norm, tol):
            break
        if nit >= maxiter:
            result = OptimizeResult(
                x=x,
                fun=evaluator.fun(x),
                nit=nit,
                success=False,
                message="Maximum iterations reached.",
                nfev=evaluator.nfev,
                njev=evaluator.njev,
                grad_norm=grad_norm,
            )
            logger.warning("%s stopped after %d iterations (|grad| = %.3e)", name, nit, grad_norm)
            raise NotConvergedError(
                f"{name} did not reach |grad| < {tol} within {maxiter} iterations", result
            )
        rule(grad, dx)
        t = backtracking_line_search(evaluator.fun, x, dx, grad, alpha=alpha, beta=beta)
        x += t * dx
        if reset:
            dx[:] = 0.0
        nit += 1
        fx = evaluator.fun(x)
        tracker.record(x, fx)
        logger.debug("%s iter %d: t=%.3e f=%.6e |grad|=%.3e", name, nit, t, fx, grad_norm)

    logger.info("%s converged in %d iterations", name, nit)
    return OptimizeResult(
        x=x,
        fun=evaluator.fun(x),
        nit=nit,
        success=True,
        message="Gradient tolerance satisfied.",
        nfev=evaluator.nfev,
        njev=evaluator.njev,
        grad_norm=grad_norm,
    )


def gradient_descent(
    problem: Problem,
    x0: Array,
    alpha: float = DEFAULT_ALPHA,
    beta: float = DEFAULT_BETA,
    tol: float = GRADIENT_TOL,
    maxiter: int = 10_000,
    tracker: Optional[Tracker] = None,
) -> OptimizeResult:
    """Steepest descent with backtracking line search.

    Steps along ``-grad f(x)`` until ``‖grad f(x)‖₂ < tol``.

    Args:
        problem: Objective and gradient.
        x0: Starting point (copied, never modified).
        alpha, beta: Backtracking parameters.
        tol: Absolute tolerance on the gradient norm.
        maxiter: Maximum number of steps.
        tracker: Receives every accepted iterate and its objective value.

    Raises:
        NotConvergedError: If ``maxiter`` steps did not reach the tolerance.
    """
    return _descend(
        "gradient_descent", _steepest, False, problem, x0, alpha, beta, tol, maxiter, tracker
    )


def coordinate_descent(
    problem: Problem,
    x0: Array,
    alpha: float = DEFAULT_ALPHA,
    beta: float = DEFAULT_BETA,
    tol: float = GRADIENT_TOL,
    maxiter: int = 10_000,
    tracker: Optional[Tracker] = None,
) -> OptimizeResult:
    """Greedy coordinate descent with backtracking line search.

    Each step moves along the single coordinate with the largest absolute
    partial derivative. Convergence is tested on the full gradient norm.
    Arguments match :func:`gradient_descent`.
    """
    return _descend(
        "coordinate_descent",
        _largest_coordinate,
        True,
        problem,
        x0,
        alpha,
        beta,
        tol,
        maxiter,
        tracker,
    )


__all__ = ["gradient_descent", "coordinate_descent"]
