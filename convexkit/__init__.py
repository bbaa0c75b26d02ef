"""convexkit - gradient-based and Newton-based convex optimization solvers."""

__version__ = "0.1.0"

# Constrained solvers
from .convex import (
    BacktrackingStep,
    BarrierResult,
    ConstrainedResult,
    FixedStep,
    LinearConstraints,
    barrier_method,
    is_kkt_optimal,
    kkt_residuals,
    linear_constrained_newton,
    linear_inequalities,
    log_barrier,
    solve_constrained_quadratic,
    solve_kkt_system,
)

# Errors
from .exceptions import (
    ConvexkitError,
    IllConditionedError,
    InfeasibleStartError,
    InvalidParameterError,
    LineSearchError,
    NotConvergedError,
)

# Logging
from .logging import configure_logging, get_logger, set_log_level

# Unconstrained solvers
from .optimize import (
    OptimizeResult,
    Problem,
    backtracking_line_search,
    coordinate_descent,
    gradient_descent,
    newton_method,
    quadratic,
    quadratic_gradient_descent,
    quadratic_line_search,
    quadratic_problem,
    solve_quadratic,
)

# Trajectories
from .tracking import NullTracker, PathTracker, Tracker

__all__ = [
    "__version__",
    # Unconstrained
    "Problem",
    "OptimizeResult",
    "backtracking_line_search",
    "gradient_descent",
    "coordinate_descent",
    "newton_method",
    "quadratic",
    "quadratic_problem",
    "solve_quadratic",
    "quadratic_line_search",
    "quadratic_gradient_descent",
    # Constrained
    "LinearConstraints",
    "FixedStep",
    "BacktrackingStep",
    "ConstrainedResult",
    "BarrierResult",
    "solve_kkt_system",
    "solve_constrained_quadratic",
    "kkt_residuals",
    "is_kkt_optimal",
    "linear_constrained_newton",
    "barrier_method",
    "linear_inequalities",
    "log_barrier",
    # Trajectories
    "Tracker",
    "NullTracker",
    "PathTracker",
    # Errors
    "ConvexkitError",
    "InvalidParameterError",
    "InfeasibleStartError",
    "IllConditionedError",
    "NotConvergedError",
    "LineSearchError",
    # Logging
    "get_logger",
    "set_log_level",
    "configure_logging",
]
