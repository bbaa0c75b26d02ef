"""
Constrained convex optimization: equality-constrained Newton and the
logarithmic barrier method.

Both solvers build on the unconstrained machinery in :mod:`convexkit.optimize`
(backtracking line search, Newton directions) and share the KKT primitive in
:mod:`convexkit.convex.kkt`.
"""

from . import barrier, core, equality, kkt
from .barrier import barrier_method, linear_inequalities, log_barrier
from .core import (
    BacktrackingStep,
    BarrierResult,
    ConstrainedResult,
    FixedStep,
    LinearConstraints,
    StepRule,
)
from .equality import linear_constrained_newton
from .kkt import is_kkt_optimal, kkt_residuals, solve_constrained_quadratic, solve_kkt_system

__all__ = [
    "barrier",
    "core",
    "equality",
    "kkt",
    # Core types
    "LinearConstraints",
    "FixedStep",
    "BacktrackingStep",
    "StepRule",
    "ConstrainedResult",
    "BarrierResult",
    # Algorithms
    "solve_kkt_system",
    "solve_constrained_quadratic",
    "kkt_residuals",
    "is_kkt_optimal",
    "linear_constrained_newton",
    "barrier_method",
    "linear_inequalities",
    "log_barrier",
]
