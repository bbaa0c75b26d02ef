"""
Logarithmic barrier method for convex inequality constraints.

Solves ``min f0(x) s.t. f_i(x) <= 0, A x = b`` by following the central path:
each outer iteration minimizes ``t f0(x) + φ(x)`` with
``φ(x) = -Σ log(-f_i(x))``, warm-started from the previous centering point,
then multiplies ``t`` by ``mu``. The loop stops once the duality-gap bound
``m / t`` drops below ``tol`` (Boyd & Vandenberghe, Algorithm 11.1). A
strictly feasible starting point must be supplied by the caller.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Union

import numpy as np

from ..exceptions import (
    InfeasibleStartError,
    InvalidParameterError,
    LineSearchError,
    NotConvergedError,
)
from ..logging import get_logger
from ..optimize.core import (
    DEFAULT_ALPHA,
    DEFAULT_BETA,
    Array,
    Evaluator,
    Problem,
    as_vector,
    check_line_search_params,
    check_maxiter,
    check_positive,
)
from ..optimize.newton import newton_method
from ..tracking import Tracker, resolve_tracker
from .core import BacktrackingStep, BarrierResult, LinearConstraints
from .equality import linear_constrained_newton

logger = get_logger(__name__)


def linear_inequalities(G: Array, h: Array) -> List[Problem]:
    """
    Express ``G x <= h`` as constraint functions ``f_i(x) = G_i x - h_i``.
    """

    g_mat = np.atleast_2d(np.asarray(G, dtype=float))
    h_vec = np.asarray(h, dtype=float).reshape(-1)
    if g_mat.shape[0] != h_vec.shape[0]:
        raise InvalidParameterError("G and h dimension mismatch")
    n = g_mat.shape[1]
    zeros = np.zeros((n, n))
    return [
        Problem(
            fun=lambda x, row=row, rhs=rhs: float(row @ x - rhs),
            grad=lambda x, row=row: row,
            hess=lambda x: zeros,
            dim=n,
        )
        for row, rhs in zip(g_mat.copy(), h_vec)
    ]


def log_barrier(constraints: Sequence[Union[Problem, Evaluator]], x: Array) -> float:
    """
    Evaluate ``φ(x) = -Σ log(-f_i(x))``, or ``+inf`` outside the strict
    interior ``f_i(x) < 0``.
    """

    values = np.array([c.fun(x) for c in constraints], dtype=float)
    if np.any(values >= 0) or not np.all(np.isfinite(values)):
        return np.inf
    return float(-np.sum(np.log(-values)))


def _centering_problem(objective: Evaluator, constraints: List[Evaluator], t: float) -> Problem:
    """Build ``t f0 + φ`` together with its gradient and Hessian."""

    def values(x: Array) -> Array:
        return np.array([c.fun(x) for c in constraints], dtype=float)

    def fun(x: Array) -> float:
        phi = log_barrier(constraints, x)
        if not np.isfinite(phi):
            return np.inf
        return t * objective.fun(x) + phi

    def grad(x: Array) -> Array:
        fi = values(x)
        total = t * objective.grad(x)
        for f_val, c in zip(fi, constraints):
            total = total + c.grad(x) / -f_val
        return total

    def hess(x: Array) -> Array:
        fi = values(x)
        total = t * objective.hess(x)
        for f_val, c in zip(fi, constraints):
            g = c.grad(x)
            total = total + np.outer(g, g) / f_val**2 + c.hess(x) / -f_val
        return total

    return Problem(fun=fun, grad=grad, hess=hess)


def barrier_method(
    problem: Problem,
    constraints: Sequence[Problem],
    x0: Array,
    a_mat: Optional[Array] = None,
    b_vec: Optional[Array] = None,
    t0: float = 1.0,
    mu: float = 10.0,
    tol: float = 1e-6,
    inner_tol: float = 1e-8,
    alpha: float = DEFAULT_ALPHA,
    beta: float = DEFAULT_BETA,
    feas_tol: float = 1e-8,
    maxiter: int = 100,
    inner_maxiter: int = 500,
    tracker: Optional[Tracker] = None,
) -> BarrierResult:
    """
    Minimize ``f0`` subject to ``f_i(x) <= 0`` and optionally ``A x = b``.

    Centering steps use damped Newton (``A`` absent) or equality-constrained
    Newton with backtracking (``A`` present); both stop at ``λ²/2 <
    inner_tol``. Backtracking treats points outside the strict interior as
    ``+inf``, so iterates never leave it.

    Args:
        problem: Objective ``f0`` with gradient and Hessian.
        constraints: Convex constraint functions ``f_i`` with gradients and
            Hessians (see :func:`linear_inequalities`).
        x0: Strictly feasible starting point.
        a_mat, b_vec: Optional equality constraints; ``x0`` must satisfy them.
        t0: Initial penalty scale, positive.
        mu: Growth factor of ``t``, greater than one. Values between 10 and
            20 balance inner against outer iterations.
        tol: Target duality gap; stop once ``m / t < tol``.
        inner_tol: Newton decrement tolerance of each centering step.
        alpha, beta: Backtracking parameters of the centering steps.
        feas_tol: Tolerance on ``‖A x0 - b‖∞`` (scaled by ``max(1, ‖b‖∞)``).
        maxiter: Maximum number of outer iterations.
        inner_maxiter: Maximum Newton steps per centering step.
        tracker: Receives each centering point and its objective value.

    Raises:
        InvalidParameterError: Bad schedule or line-search parameters.
        InfeasibleStartError: ``x0`` not strictly feasible.
        IllConditionedError: A centering Newton system could not be solved.
        NotConvergedError: An iteration cap was hit.
        LineSearchError: Backtracking failed inside a centering step; ``step``
            is the last trial step.
    """

    check_positive("t0", t0)
    if not mu > 1.0:
        raise InvalidParameterError(f"mu must be greater than 1, got {mu}")
    check_positive("tol", tol)
    check_positive("inner_tol", inner_tol)
    check_line_search_params(alpha, beta)
    check_maxiter(maxiter)
    if (a_mat is None) != (b_vec is None):
        raise InvalidParameterError("A and b must be provided together")

    tracker = resolve_tracker(tracker)
    objective = Evaluator(problem)
    evaluators = [Evaluator(c) for c in constraints]
    m = len(evaluators)
    x = as_vector(x0, problem.dim)

    if m:
        worst = max(c.fun(x) for c in evaluators)
        if not worst < 0:
            raise InfeasibleStartError(
                f"Starting point is not strictly feasible (max f_i(x0) = {worst:.3e})", worst
            )

    equality = None
    if a_mat is not None:
        equality = LinearConstraints(a_mat, b_vec)
        if equality.A.shape[1] != x.size:
            raise InvalidParameterError(
                f"A has {equality.A.shape[1]} columns but x0 has {x.size} entries"
            )
        residual = float(np.linalg.norm(equality.residual(x), ord=np.inf))
        if residual > feas_tol * max(1.0, float(np.max(np.abs(equality.b), initial=0.0))):
            raise InfeasibleStartError(
                f"Starting point violates A x = b (‖A x0 - b‖∞ = {residual:.3e})", residual
            )

    t = float(t0)
    inner_nits: List[int] = []
    multipliers = None
    nit = 0
    while True:
        centering = _centering_problem(objective, evaluators, t)
        try:
            if equality is None:
                inner = newton_method(
                    centering, x, alpha=alpha, beta=beta, tol=inner_tol, maxiter=inner_maxiter
                )
            else:
                inner = linear_constrained_newton(
                    centering,
                    x,
                    equality.A,
                    equality.b,
                    step=BacktrackingStep(alpha, beta),
                    tol=inner_tol,
                    feas_tol=feas_tol,
                    maxiter=inner_maxiter,
                )
                multipliers = inner.multipliers / t
        except LineSearchError as exc:
            raise LineSearchError(f"Centering step at t = {t:.3e}: {exc}", exc.step) from exc
        except NotConvergedError as exc:
            raise NotConvergedError(
                f"Centering step at t = {t:.3e} did not converge", exc.result
            ) from exc

        x = inner.x
        inner_nits.append(inner.nit)
        nit += 1
        gap = m / t
        fx = objective.fun(x)
        tracker.record(x, fx)
        logger.debug(
            "barrier_method outer %d: t=%.3e f0=%.6e gap=%.3e newton=%d",
            nit,
            t,
            fx,
            gap,
            inner.nit,
        )
        if gap < tol:
            break
        if nit >= maxiter:
            result = _assemble(
                x,
                fx,
                nit,
                False,
                "Maximum iterations reached.",
                objective,
                evaluators,
                t,
                inner_nits,
                multipliers,
                equality,
            )
            logger.warning("barrier_method stopped after %d outer iterations (gap %.3e)", nit, gap)
            raise NotConvergedError(
                f"barrier_method did not reach m/t < {tol} within {maxiter} outer iterations",
                result,
            )
        t *= mu

    logger.info("barrier_method converged in %d outer iterations (gap %.3e)", nit, gap)
    return _assemble(
        x,
        fx,
        nit,
        True,
        "Duality gap tolerance satisfied.",
        objective,
        evaluators,
        t,
        inner_nits,
        multipliers,
        equality,
    )


def _assemble(
    x: Array,
    fx: float,
    nit: int,
    success: bool,
    message: str,
    objective: Evaluator,
    constraints: List[Evaluator],
    t: float,
    inner_nits: List[int],
    multipliers: Optional[Array],
    equality: Optional[LinearConstraints],
) -> BarrierResult:
    m = len(constraints)
    fi = np.array([c.fun(x) for c in constraints], dtype=float)
    primal_residual = (
        None if equality is None else float(np.linalg.norm(equality.residual(x), ord=np.inf))
    )
    return BarrierResult(
        x=x,
        fun=fx,
        nit=nit,
        success=success,
        message=message,
        nfev=objective.nfev,
        njev=objective.njev,
        nhev=objective.nhev,
        multipliers=multipliers,
        primal_residual=primal_residual,
        t=t,
        duality_gap=m / t,
        inner_nits=inner_nits,
        inequality_multipliers=-1.0 / (t * fi),
    )


__all__ = ["barrier_method", "linear_inequalities", "log_barrier"]
