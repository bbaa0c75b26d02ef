"""
Newton's method for convex objectives under linear equality constraints.

Each iteration solves the KKT system of the local quadratic model (Boyd &
Vandenberghe, Section 10.2-10.3). The right-hand side carries the residual
``b - A x``, so the same iteration serves a feasible start (residual zero,
iterates stay feasible) and an infeasible start (residual contracts by
``1 - t`` per step).
"""

from __future__ import annotations

from typing import Optional, Union

import numpy as np

from ..exceptions import (
    IllConditionedError,
    InfeasibleStartError,
    InvalidParameterError,
    LineSearchError,
    NotConvergedError,
)
from ..logging import get_logger
from ..optimize.core import (
    Array,
    Evaluator,
    Problem,
    as_vector,
    check_maxiter,
    check_positive,
    decrement_converged,
)
from ..optimize.line_search import backtracking_line_search
from ..tracking import Tracker, resolve_tracker
from .core import BacktrackingStep, ConstrainedResult, LinearConstraints, StepRule, as_step_rule
from .kkt import solve_kkt_system

logger = get_logger(__name__)


def _domain_step(evaluator: Evaluator, x: Array, dx: Array, beta: float, maxiter: int = 100) -> float:
    t = 1.0
    for _ in range(maxiter + 1):
        if np.isfinite(evaluator.fun(x + t * dx)):
            return t
        t *= beta
    raise LineSearchError("Could not find a step keeping the objective finite", step=t)


def _step_length(
    rule: StepRule,
    evaluator: Evaluator,
    x: Array,
    dx: Array,
    grad: Array,
    feasible: bool,
) -> float:
    if not isinstance(rule, BacktrackingStep):
        return rule.t
    if feasible:
        return backtracking_line_search(
            evaluator.fun, x, dx, grad, alpha=rule.alpha, beta=rule.beta
        )
    return _domain_step(evaluator, x, dx, rule.beta)


def linear_constrained_newton(
    problem: Problem,
    x0: Array,
    a_mat: Array,
    b_vec: Array,
    step: Union[StepRule, float] = 0.9,
    tol: float = 1e-6,
    feasible_start: bool = False,
    feas_tol: float = 1e-8,
    maxiter: int = 500,
    tracker: Optional[Tracker] = None,
) -> ConstrainedResult:
    """
    Minimize ``f(x)`` subject to ``A x = b`` with Newton's method.

    Args:
        problem: Objective, gradient and Hessian.
        x0: Starting point; need not be feasible unless ``feasible_start``.
        a_mat, b_vec: Constraint data, ``A`` of shape ``(p, n)``.
        step: Fixed step size in ``(0, 1]`` (float or :class:`FixedStep`) or
            :class:`BacktrackingStep`. Defaults to a fixed step of 0.9.
        tol: Stop once ``λ²/2 < tol`` with ``λ² = dxᵀ H dx``.
        feasible_start: Require ``A x0 = b`` (within ``feas_tol``).
        feas_tol: Feasibility tolerance on ``‖A x - b‖∞``, scaled by
            ``max(1, ‖b‖∞)``. The iteration only stops on a feasible point.
        maxiter: Maximum number of Newton steps.
        tracker: Receives every accepted iterate and its objective value.

    Raises:
        InvalidParameterError: Bad step size, tolerance or dimensions.
        InfeasibleStartError: ``feasible_start`` with ``A x0 != b``.
        IllConditionedError: Singular KKT system or Hessian indefinite on the
            feasible directions.
        NotConvergedError: ``maxiter`` steps without meeting the tolerance.
    """

    rule = as_step_rule(step)
    check_positive("tol", tol)
    check_positive("feas_tol", feas_tol)
    check_maxiter(maxiter)
    constraints = LinearConstraints(a_mat, b_vec)
    tracker = resolve_tracker(tracker)
    evaluator = Evaluator(problem)
    x = as_vector(x0, problem.dim)
    if constraints.A.shape[1] != x.size:
        raise InvalidParameterError(
            f"A has {constraints.A.shape[1]} columns but x0 has {x.size} entries"
        )
    scaled_feas_tol = feas_tol * max(1.0, float(np.max(np.abs(constraints.b), initial=0.0)))

    residual = constraints.residual(x)
    residual_norm = float(np.linalg.norm(residual, ord=np.inf))
    if feasible_start and residual_norm > scaled_feas_tol:
        raise InfeasibleStartError(
            f"Feasible start requested but ‖A x0 - b‖∞ = {residual_norm:.3e}", residual_norm
        )

    nit = 0
    while True:
        grad = evaluator.grad(x)
        hess = evaluator.hess(x)
        dx, w = solve_kkt_system(hess, grad, constraints.A, residual)
        lambda_sq = float(dx @ hess @ dx)
        if lambda_sq < 0:
            if not decrement_converged(-lambda_sq, tol):
                raise IllConditionedError(
                    f"Hessian is indefinite along the Newton step (λ² = {lambda_sq:.3e})"
                )
            lambda_sq = -lambda_sq
        feasible = residual_norm <= scaled_feas_tol
        if feasible and decrement_converged(lambda_sq, tol):
            break
        if nit >= maxiter:
            result = ConstrainedResult(
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
                multipliers=w,
                primal_residual=residual_norm,
            )
            logger.warning(
                "linear_constrained_newton stopped after %d iterations (λ² = %.3e, r = %.3e)",
                nit,
                lambda_sq,
                residual_norm,
            )
            raise NotConvergedError(
                f"linear_constrained_newton did not converge within {maxiter} iterations", result
            )
        t = _step_length(rule, evaluator, x, dx, grad, feasible)
        x += t * dx
        nit += 1
        residual = constraints.residual(x)
        residual_norm = float(np.linalg.norm(residual, ord=np.inf))
        fx = evaluator.fun(x)
        tracker.record(x, fx)
        logger.debug(
            "linear_constrained_newton iter %d: t=%.3e f=%.6e λ²=%.3e r=%.3e",
            nit,
            t,
            fx,
            lambda_sq,
            residual_norm,
        )

    logger.info("linear_constrained_newton converged in %d iterations", nit)
    return ConstrainedResult(
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
        multipliers=w,
        primal_residual=residual_norm,
    )


__all__ = ["linear_constrained_newton"]
