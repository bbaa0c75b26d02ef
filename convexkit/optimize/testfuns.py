"""Standard test objectives for optimization routines.

The first group are classic (mostly non-convex) benchmark surfaces on
``R²`` or ``Rⁿ``. The second group are two convex toy problems with analytic
gradients and Hessians, used throughout the tests and examples.
"""

from __future__ import annotations

import numpy as np

from .core import Array, Problem


def ackley(x: Array, a: float = 20.0, b: float = 0.2, c: float = 2 * np.pi) -> float:
    x = np.asarray(x, dtype=float)
    d = x.size
    return float(
        -a * np.exp(-b * np.sqrt(np.sum(x**2) / d)) - np.exp(np.sum(np.cos(c * x)) / d)
    )


def branin(
    x: Array,
    a: float = 1.0,
    b: float = 5.1 / (4 * np.pi**2),
    c: float = 5 / np.pi,
    r: float = 6.0,
    s: float = 10.0,
    t: float = 1 / (8 * np.pi),
) -> float:
    x1, x2 = np.asarray(x, dtype=float)
    return float(a * (x2 - b * x1**2 + c * x1 - r) ** 2 + s * (1 - t) * np.cos(x1) + s)


def booth(x: Array) -> float:
    x1, x2 = np.asarray(x, dtype=float)
    return float((x1 + 2 * x2 - 7) ** 2 + (2 * x1 + x2 - 5) ** 2)


def rosenbrock(x: Array, a: float = 1.0, b: float = 5.0) -> float:
    x1, x2 = np.asarray(x, dtype=float)
    return float((a - x1) ** 2 + b * (x2 - x1**2) ** 2)


def rastrigin(x: Array, A: float = 10.0) -> float:
    x = np.asarray(x, dtype=float)
    return float(x.size * A + np.sum(x**2 - A * np.cos(2 * np.pi * x)))


def flower(x: Array, a: float = 1.0, b: float = 1.0, c: float = 4.0) -> float:
    x = np.asarray(x, dtype=float)
    return float(a * np.linalg.norm(x) + b * np.sin(c * np.arctan2(x[1], x[0])))


# Convex toy problems
# -------------------


def fquadr(x: Array, gamma: float = 10.0) -> float:
    """Ill-conditioned quadratic ``½(x₁² + γ x₂²)``."""
    x1, x2 = np.asarray(x, dtype=float)
    return float(0.5 * (x1**2 + gamma * x2**2))


def grad_fquadr(x: Array, gamma: float = 10.0) -> Array:
    x1, x2 = np.asarray(x, dtype=float)
    return np.array([x1, gamma * x2])


def hess_fquadr(x: Array, gamma: float = 10.0) -> Array:
    return np.array([[1.0, 0.0], [0.0, gamma]])


_NONQUADR_A = np.array([[1.0, 3.0], [1.0, -3.0], [-1.0, 0.0]])
_NONQUADR_B = np.array([-0.1, -0.1, -0.1])


def _softmax_terms(x: Array) -> tuple[Array, float]:
    z = _NONQUADR_A @ np.asarray(x, dtype=float) + _NONQUADR_B
    shift = float(np.max(z))
    w = np.exp(z - shift)
    return w, shift


def fnonquadr(x: Array) -> float:
    """Log-sum-exp ``log(e^{x₁+3x₂-0.1} + e^{x₁-3x₂-0.1} + e^{-x₁-0.1})``."""
    w, shift = _softmax_terms(x)
    return float(shift + np.log(np.sum(w)))


def grad_fnonquadr(x: Array) -> Array:
    w, _ = _softmax_terms(x)
    p = w / np.sum(w)
    return _NONQUADR_A.T @ p


def hess_fnonquadr(x: Array) -> Array:
    w, _ = _softmax_terms(x)
    p = w / np.sum(w)
    return _NONQUADR_A.T @ (np.diag(p) - np.outer(p, p)) @ _NONQUADR_A


def fquadr_problem(gamma: float = 10.0) -> Problem:
    return Problem(
        fun=lambda x: fquadr(x, gamma),
        grad=lambda x: grad_fquadr(x, gamma),
        hess=lambda x: hess_fquadr(x, gamma),
        dim=2,
    )


def fnonquadr_problem() -> Problem:
    return Problem(fun=fnonquadr, grad=grad_fnonquadr, hess=hess_fnonquadr, dim=2)


__all__ = [
    "ackley",
    "branin",
    "booth",
    "rosenbrock",
    "rastrigin",
    "flower",
    "fquadr",
    "grad_fquadr",
    "hess_fquadr",
    "fnonquadr",
    "grad_fnonquadr",
    "hess_fnonquadr",
    "fquadr_problem",
    "fnonquadr_problem",
]
