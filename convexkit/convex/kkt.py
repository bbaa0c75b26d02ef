"""
Karush-Kuhn-Tucker systems for equality-constrained quadratic models.
"""

from __future__ import annotations

from typing import Dict, Tuple

import numpy as np

from ..exceptions import IllConditionedError, InvalidParameterError


def solve_kkt_system(
    hessian: np.ndarray,
    grad: np.ndarray,
    a_mat: np.ndarray,
    residual: np.ndarray,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Solve ``[[H, Aᵀ], [A, 0]] [dx; w] = [-g; r]``.

    With ``r = b - A x`` this is the Newton step of the equality-constrained
    problem at ``x``; ``r`` vanishes for a feasible ``x``.

    Returns:
        ``(dx, w)``: primal step and multiplier estimate.

    Raises:
        IllConditionedError: If the block matrix is singular or the solution
            is not finite.
    """

    hessian = np.atleast_2d(np.asarray(hessian, dtype=float))
    grad = np.asarray(grad, dtype=float).reshape(-1)
    a_mat = np.atleast_2d(np.asarray(a_mat, dtype=float))
    residual = np.asarray(residual, dtype=float).reshape(-1)
    p, n = a_mat.shape
    if hessian.shape != (n, n) or grad.shape[0] != n:
        raise InvalidParameterError(
            f"Hessian {hessian.shape} and gradient {grad.shape} do not match A {a_mat.shape}"
        )
    if residual.shape[0] != p:
        raise InvalidParameterError(f"Residual has {residual.shape[0]} entries, expected {p}")

    kkt_matrix = np.block([[hessian, a_mat.T], [a_mat, np.zeros((p, p))]])
    rhs = np.concatenate([-grad, residual])
    try:
        sol = np.linalg.solve(kkt_matrix, rhs)
    except np.linalg.LinAlgError as exc:
        raise IllConditionedError("KKT matrix is singular") from exc
    if not np.all(np.isfinite(sol)):
        raise IllConditionedError("KKT solution is not finite")
    return sol[:n], sol[n:]


def solve_constrained_quadratic(
    P: np.ndarray, q: np.ndarray, A: np.ndarray, b: np.ndarray
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Minimize ``½ xᵀPx + qᵀx`` subject to ``A x = b`` exactly.

    The optimality conditions ``P x + q + Aᵀν = 0``, ``A x = b`` form a single
    linear system, so the minimizer and its Lagrange multipliers come from one
    solve.

    Returns:
        ``(x_star, nu_star)``.
    """

    return solve_kkt_system(P, q, A, b)


def kkt_residuals(
    P: np.ndarray,
    q: np.ndarray,
    A: np.ndarray,
    b: np.ndarray,
    x: np.ndarray,
    nu: np.ndarray,
) -> Dict[str, float]:
    """
    Infinity norms of the primal (``A x - b``) and dual (``P x + q + Aᵀν``)
    residuals of an equality-constrained quadratic program.
    """

    x = np.asarray(x, dtype=float).reshape(-1)
    a_mat = np.atleast_2d(np.asarray(A, dtype=float))
    nu = np.asarray(nu, dtype=float).reshape(-1)
    stationarity = np.asarray(P, dtype=float) @ x + np.asarray(q, dtype=float) + a_mat.T @ nu
    return {
        "primal": float(np.linalg.norm(a_mat @ x - np.asarray(b, dtype=float), ord=np.inf)),
        "dual": float(np.linalg.norm(stationarity, ord=np.inf)),
    }


def is_kkt_optimal(
    P: np.ndarray,
    q: np.ndarray,
    A: np.ndarray,
    b: np.ndarray,
    x: np.ndarray,
    nu: np.ndarray,
    tol: float = 1e-6,
) -> bool:
    """
    Return True if all KKT residuals are below ``tol``.
    """

    residuals = kkt_residuals(P, q, A, b, x, nu)
    return all(value <= tol for value in residuals.values())


__all__ = ["solve_kkt_system", "solve_constrained_quadratic", "kkt_residuals", "is_kkt_optimal"]
