"""Utility helpers for finite differences and Newton linear algebra.

These utilities avoid any dependency on SciPy and provide deterministic,
pure NumPy implementations suitable for small to medium scale problems.
"""

from __future__ import annotations

from typing import Callable

import numpy as np

from ..exceptions import IllConditionedError, InvalidParameterError

Array = np.ndarray
Objective = Callable[[Array], float]


def approx_grad(
    fun: Objective, x: Array, eps: float = 1e-6, return_evals: bool = False
) -> Array | tuple[Array, int]:
    """Compute a central-difference gradient approximation.

    Parameters
    ----------
    fun:
        Objective function returning a scalar given x.
    x:
        Point where the gradient is approximated.
    eps:
        Perturbation size for finite differences.
    """
    if eps <= 0:
        raise InvalidParameterError("eps must be positive")
    x = np.asarray(x, dtype=float).copy()
    grad = np.zeros_like(x, dtype=float)
    evals = 0
    for i in range(x.size):
        ei = np.zeros_like(x)
        ei[i] = eps
        grad[i] = (fun(x + ei) - fun(x - ei)) / (2.0 * eps)
        evals += 2
    if return_evals:
        return grad, evals
    return grad


def approx_hessian(
    fun: Objective, x: Array, eps: float = 1e-4, return_evals: bool = False
) -> Array | tuple[Array, int]:
    """Approximate the Hessian using second-order central differences."""
    if eps <= 0:
        raise InvalidParameterError("eps must be positive")
    x = np.asarray(x, dtype=float)
    n = x.size
    hess = np.zeros((n, n), dtype=float)
    fx = fun(x)
    evals = 1
    for i in range(n):
        ei = np.zeros_like(x)
        ei[i] = eps
        f_ip = fun(x + ei)
        f_im = fun(x - ei)
        evals += 2
        hess[i, i] = (f_ip - 2 * fx + f_im) / (eps**2)
        for j in range(i + 1, n):
            ej = np.zeros_like(x)
            ej[j] = eps
            f_pp = fun(x + ei + ej)
            f_pm = fun(x + ei - ej)
            f_mp = fun(x - ei + ej)
            f_mm = fun(x - ei - ej)
            evals += 4
            value = (f_pp - f_pm - f_mp + f_mm) / (4 * eps**2)
            hess[i, j] = value
            hess[j, i] = value
    if return_evals:
        return hess, evals
    return hess


def newton_direction(hess: Array, grad: Array) -> Array:
    """Solve ``hess @ dx = -grad`` through a Cholesky factorization.

    The factorization doubles as the positive-definiteness check: a singular
    or indefinite Hessian raises :class:`IllConditionedError` instead of being
    regularized.
    """
    hess = np.atleast_2d(np.asarray(hess, dtype=float))
    grad = np.asarray(grad, dtype=float).reshape(-1)
    if hess.shape != (grad.size, grad.size):
        raise InvalidParameterError(
            f"Hessian of shape {hess.shape} does not match gradient of size {grad.size}"
        )
    try:
        lower = np.linalg.cholesky(0.5 * (hess + hess.T))
    except np.linalg.LinAlgError as exc:
        raise IllConditionedError("Hessian is not positive definite") from exc
    step = np.linalg.solve(lower.T, np.linalg.solve(lower, -grad))
    if not np.all(np.isfinite(step)):
        raise IllConditionedError("Newton step is not finite")
    return step


__all__ = [
    "Array",
    "Objective",
    "approx_grad",
    "approx_hessian",
    "newton_direction",
]
