"""Closed-form tools for convex quadratic objectives.

A quadratic ``f(x) = ½ xᵀPx + qᵀx + r`` with ``P`` symmetric positive
definite has the unique minimizer ``x* = -P⁻¹q``, and the exact minimizing
step along a direction ``dx`` is available in closed form. These are used as
reference solutions and as a baseline descent method.
"""

from __future__ import annotations

from numbers import Real
from typing import Optional, Union

import numpy as np

from ..exceptions import IllConditionedError, InvalidParameterError, NotConvergedError
from ..logging import get_logger
from ..tracking import Tracker, resolve_tracker
from .core import Array, OptimizeResult, Problem, as_vector, check_maxiter, check_positive

logger = get_logger(__name__)


def quadratic(x: Array, P: Array, q: Array, r: float = 0.0) -> float:
    """Evaluate ``½ xᵀPx + qᵀx + r``."""
    x = np.asarray(x, dtype=float)
    return float(0.5 * x @ (np.asarray(P) @ x) + np.asarray(q) @ x + r)


def quadratic_problem(P: Array, q: Array, r: float = 0.0) -> Problem:
    """Build a :class:`Problem` with exact gradient ``Px + q`` and Hessian ``P``."""
    P = np.atleast_2d(np.asarray(P, dtype=float))
    q = np.asarray(q, dtype=float).reshape(-1)
    if P.shape != (q.size, q.size):
        raise InvalidParameterError(f"P of shape {P.shape} does not match q of size {q.size}")
    return Problem(
        fun=lambda x: quadratic(x, P, q, r),
        grad=lambda x: P @ x + q,
        hess=lambda x: P,
        dim=q.size,
    )


def solve_quadratic(p: Union[Real, Array], q: Union[Real, Array]) -> Union[float, Array]:
    """Return the minimizer of a scalar or vector quadratic.

    For scalars ``p > 0`` is required and ``-q / p`` is returned. For a
    matrix ``P`` the linear system ``P x = -q`` is solved.
    """
    if np.ndim(p) == 0:
        if not p > 0:
            raise InvalidParameterError(f"Quadratic coefficient must be positive, got {p}")
        return -float(q) / float(p)
    try:
        return np.linalg.solve(np.asarray(p, dtype=float), -np.asarray(q, dtype=float))
    except np.linalg.LinAlgError as exc:
        raise IllConditionedError("Quadratic term is singular") from exc


def quadratic_line_search(P: Array, q: Array, dx: Array, x: Array) -> float:
    """Exact step ``t`` minimizing ``f(x + t dx)`` for a quadratic ``f``."""
    P = np.asarray(P, dtype=float)
    dx = np.asarray(dx, dtype=float)
    x = np.asarray(x, dtype=float)
    return solve_quadratic(float(dx @ P @ dx), float(dx @ P @ x + dx @ q))


def quadratic_gradient_descent(
    P: Array,
    q: Array,
    x0: Array,
    momentum: float = 0.0,
    tol: float = 1e-6,
    maxiter: int = 10_000,
    tracker: Optional[Tracker] = None,
) -> OptimizeResult:
    """Gradient descent with exact line search and optional momentum.

    The direction is ``dx := (1 - momentum) (-Px - q) + momentum dx`` and the
    iteration stops once ``‖dx‖₂ < tol``.
    """
    if not (0.0 <= momentum < 1.0):
        raise InvalidParameterError(f"momentum must lie in [0, 1), got {momentum}")
    check_positive("tol", tol)
    check_maxiter(maxiter)
    P = np.asarray(P, dtype=float)
    q = np.asarray(q, dtype=float).reshape(-1)
    tracker = resolve_tracker(tracker)
    x = as_vector(x0, q.size)
    dx = np.zeros_like(x)
    nit = 0
    while True:
        dx = (1.0 - momentum) * (-(P @ x) - q) + momentum * dx
        step_norm = float(np.linalg.norm(dx))
        if step_norm < tol:
            break
        if nit >= maxiter:
            result = OptimizeResult(
                x=x,
                fun=quadratic(x, P, q),
                nit=nit,
                success=False,
                message="Maximum iterations reached.",
                grad_norm=float(np.linalg.norm(P @ x + q)),
            )
            logger.warning(
                "quadratic_gradient_descent stopped after %d iterations (|dx| = %.3e)",
                nit,
                step_norm,
            )
            raise NotConvergedError(
                f"quadratic_gradient_descent did not converge within {maxiter} iterations",
                result,
            )
        t = quadratic_line_search(P, q, dx, x)
        x += t * dx
        nit += 1
        fx = quadratic(x, P, q)
        tracker.record(x, fx)
        logger.debug(
            "quadratic_gradient_descent iter %d: t=%.3e f=%.6e |dx|=%.3e", nit, t, fx, step_norm
        )

    logger.info("quadratic_gradient_descent converged in %d iterations", nit)
    return OptimizeResult(
        x=x,
        fun=quadratic(x, P, q),
        nit=nit,
        success=True,
        message="Step norm tolerance satisfied.",
        grad_norm=float(np.linalg.norm(P @ x + q)),
    )


__all__ = [
    "quadratic",
    "quadratic_problem",
    "solve_quadratic",
    "quadratic_line_search",
    "quadratic_gradient_descent",
]
