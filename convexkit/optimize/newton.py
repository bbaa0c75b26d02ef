"""Damped Newton method with backtracking line search."""

from __future__ import annotations

from typing import Optional

import numpy as np

from ..exceptions import NotConvergedError
from ..logging import get_logger
from ..tracking import Tracker, resolve_tracker
from .core import (
    DEFAULT_ALPHA,
    DEFAULT_BETA,
    NEWTON_TOL,
    Array,
    Evaluator,
    OptimizeResult,
    Problem,
    as_vector,
    check_line_search_params,
    check_maxiter,
    check_positive,
    decrement_converged,
)
from .line_search import backtracking_line_search
from .utils import newton_direction

logger = get_logger(__name__)


def newton_method(
    problem: Problem,
    x0: Array,
    alpha: float = DEFAULT_ALPHA,
    beta: float = DEFAULT_BETA,
    tol: float = NEWTON_TOL,
    maxiter: int = 500,
    tracker: Optional[Tracker] = None,
) -> OptimizeResult:
    """Newton's method with backtracking line search.

    The Newton step solves ``H dx = -g`` by Cholesky factorization and the
    squared decrement is ``λ² = -dx @ g``. Iteration stops once
    ``λ²/2 < tol``, which bounds ``f(x) - p*`` for self-concordant objectives.
    For a strictly convex quadratic the first step is exact, so the solver
    returns after a single accepted step.

    Args:
        problem: Objective, gradient and Hessian.
        x0: Starting point (copied, never modified).
        alpha, beta: Backtracking parameters.
        tol: Tolerance on half the squared Newton decrement.
        maxiter: Maximum number of Newton steps.
        tracker: Receives every accepted iterate and its objective value.

    Raises:
        IllConditionedError: If a Hessian is not positive definite.
        NotConvergedError: If ``maxiter`` steps did not reach the tolerance.
    """
    check_line_search_params(alpha, beta)
    check_positive("tol", tol)
    check_maxiter(maxiter)
    tracker = resolve_tracker(tracker)
    evaluator = Evaluator(problem)
    x = as_vector(x0, problem.dim)
    nit = 0
    while True:
        grad = evaluator.grad(x)
        dx = newton_direction(evaluator.hess(x), grad)
        lambda_sq = float(-(dx @ grad))
        if decrement_converged(lambda_sq, tol):
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
                nhev=evaluator.nhev,
                grad_norm=float(np.linalg.norm(grad)),
                decrement=lambda_sq,
            )
            logger.warning("newton_method stopped after %d iterations (λ² = %.3e)", nit, lambda_sq)
            raise NotConvergedError(
                f"newton_method did not reach λ²/2 < {tol} within {maxiter} iterations", result
            )
        t = backtracking_line_search(evaluator.fun, x, dx, grad, alpha=alpha, beta=beta)
        x += t * dx
        nit += 1
        fx = evaluator.fun(x)
        tracker.record(x, fx)
        logger.debug("newton_method iter %d: t=%.3e f=%.6e λ²=%.3e", nit, t, fx, lambda_sq)

    logger.info("newton_method converged in %d iterations", nit)
    return OptimizeResult(
        x=x,
        fun=evaluator.fun(x),
        nit=nit,
        success=True,
        message="Newton decrement tolerance satisfied.",
        nfev=evaluator.nfev,
        njev=evaluator.njev,
        nhev=evaluator.nhev,
        grad_norm=float(np.linalg.norm(grad)),
        decrement=lambda_sq,
    )


__all__ = ["newton_method"]
