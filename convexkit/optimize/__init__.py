"""Unconstrained descent and Newton methods.

Example
-------
>>> import numpy as np
>>> from convexkit.optimize import newton_method, quadratic_problem
>>> problem = quadratic_problem(np.diag([1.0, 10.0]), np.zeros(2))
>>> res = newton_method(problem, np.array([9.0, 2.0]))
>>> res.nit
1
"""

from .core import (
    DEFAULT_ALPHA,
    DEFAULT_BETA,
    GRADIENT_TOL,
    LINE_SEARCH_ALPHA,
    NEWTON_TOL,
    Evaluator,
    OptimizeResult,
    Problem,
)
from .gradient import coordinate_descent, gradient_descent
from .line_search import backtracking_line_search
from .newton import newton_method
from .quadratic import (
    quadratic,
    quadratic_gradient_descent,
    quadratic_line_search,
    quadratic_problem,
    solve_quadratic,
)
from .utils import approx_grad, approx_hessian, newton_direction

__all__ = [
    "DEFAULT_ALPHA",
    "DEFAULT_BETA",
    "GRADIENT_TOL",
    "LINE_SEARCH_ALPHA",
    "NEWTON_TOL",
    "Evaluator",
    "OptimizeResult",
    "Problem",
    "approx_grad",
    "approx_hessian",
    "backtracking_line_search",
    "coordinate_descent",
    "gradient_descent",
    "newton_direction",
    "newton_method",
    "quadratic",
    "quadratic_gradient_descent",
    "quadratic_line_search",
    "quadratic_problem",
    "solve_quadratic",
]
