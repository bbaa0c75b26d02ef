"""Backtracking line search following Boyd & Vandenberghe, Algorithm 9.2."""

from __future__ import annotations

from typing import Union

import numpy as np

from ..exceptions import LineSearchError
from ..logging import get_logger
from .core import (
    DEFAULT_BETA,
    LINE_SEARCH_ALPHA,
    Array,
    Gradient,
    Objective,
    check_line_search_params,
)

logger = get_logger(__name__)


def backtracking_line_search(
    f: Objective,
    x: Array,
    dx: Array,
    grad: Union[Array, Gradient],
    alpha: float = LINE_SEARCH_ALPHA,
    beta: float = DEFAULT_BETA,
    maxiter: int = 100,
) -> float:
    """Shrink ``t`` from 1 by ``beta`` until the Armijo condition holds.

    Returns the first ``t = beta**k`` with
    ``f(x + t dx) <= f(x) + alpha * t * grad(x) @ dx``. A trial value that
    does not satisfy the inequality, including NaN, shrinks the step, so an
    objective returning ``inf`` outside its domain keeps the search inside it.

    Args:
        f: Objective function.
        x: Current point.
        dx: Descent direction (``grad(x) @ dx < 0``, not verified).
        grad: Gradient vector at ``x``, or a gradient callable evaluated once
            at ``x``.
        alpha: Sufficient-decrease fraction in ``(0, 0.5)``.
        beta: Shrink factor in ``(0, 1)``.
        maxiter: Number of shrinks before giving up.

    Raises:
        InvalidParameterError: If ``alpha`` or ``beta`` is out of range.
        LineSearchError: If no acceptable step was found after ``maxiter``
            shrinks.
    """
    check_line_search_params(alpha, beta)
    x = np.asarray(x, dtype=float)
    dx = np.asarray(dx, dtype=float)
    grad_x = grad(x) if callable(grad) else grad
    slope = float(np.sum(np.asarray(grad_x, dtype=float) * dx))
    fx = f(x)
    t = 1.0
    for _ in range(maxiter + 1):
        if f(x + t * dx) <= fx + alpha * t * slope:
            return t
        t *= beta
    logger.warning("Backtracking failed after %d shrinks (slope %.3e)", maxiter, slope)
    raise LineSearchError(
        f"No step satisfying the Armijo condition after {maxiter} shrinks; "
        "is dx a descent direction?",
        step=t,
    )


__all__ = ["backtracking_line_search"]
