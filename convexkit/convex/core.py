"""
Problem data, step rules and result containers for constrained solvers.

Equality constraints use the pair ``(A, b)`` to represent ``A x = b``, with
``A`` of shape ``(p, n)`` and full row rank ``p < n``. Rank is not checked;
a rank-deficient ``A`` surfaces as a singular KKT system during the solve.

References:
    - Boyd & Vandenberghe, *Convex Optimization* (2004), Chapters 10-11
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Union

import numpy as np

from ..exceptions import InvalidParameterError
from ..optimize.core import DEFAULT_ALPHA, DEFAULT_BETA, OptimizeResult, check_line_search_params


@dataclass(frozen=True)
class LinearConstraints:
    """Affine constraint system ``A x = b``."""

    A: np.ndarray
    b: np.ndarray

    def __post_init__(self) -> None:
        a_mat = np.atleast_2d(np.asarray(self.A, dtype=float))
        b_vec = np.asarray(self.b, dtype=float).reshape(-1)
        if a_mat.ndim != 2:
            raise InvalidParameterError(f"A must be 2D, got shape {a_mat.shape}")
        if a_mat.shape[0] != b_vec.shape[0]:
            raise InvalidParameterError(
                f"A has {a_mat.shape[0]} rows but b has {b_vec.shape[0]} entries"
            )
        object.__setattr__(self, "A", a_mat)
        object.__setattr__(self, "b", b_vec)

    @property
    def shape(self) -> tuple[int, int]:
        return self.A.shape

    def residual(self, x: np.ndarray) -> np.ndarray:
        """Return ``b - A x``; zero exactly on the feasible set."""
        return self.b - self.A @ x

    def is_feasible(self, x: np.ndarray, tol: float = 1e-8) -> bool:
        return bool(np.linalg.norm(self.residual(x), ord=np.inf) <= tol)


@dataclass(frozen=True)
class FixedStep:
    """Take ``x := x + t dx`` with a constant ``t`` in ``(0, 1]``."""

    t: float = 0.9

    def __post_init__(self) -> None:
        if not (0.0 < self.t <= 1.0):
            raise InvalidParameterError(f"step size t must lie in (0, 1], got {self.t}")


@dataclass(frozen=True)
class BacktrackingStep:
    """Choose the step by backtracking line search."""

    alpha: float = DEFAULT_ALPHA
    beta: float = DEFAULT_BETA

    def __post_init__(self) -> None:
        check_line_search_params(self.alpha, self.beta)


StepRule = Union[FixedStep, BacktrackingStep]


def as_step_rule(step: Union[StepRule, float]) -> StepRule:
    """Accept a bare float as shorthand for :class:`FixedStep`."""
    if isinstance(step, (FixedStep, BacktrackingStep)):
        return step
    return FixedStep(float(step))


@dataclass
class ConstrainedResult(OptimizeResult):
    """Result of an equality-constrained solve.

    Attributes:
        multipliers: Dual estimate for ``A x = b`` from the last KKT solve.
        primal_residual: ``‖A x - b‖∞`` at the returned point.
    """

    multipliers: Optional[np.ndarray] = None
    primal_residual: Optional[float] = None


@dataclass
class BarrierResult(ConstrainedResult):
    """Result of the barrier method.

    Attributes:
        t: Penalty scale of the last centering step.
        duality_gap: Certified suboptimality bound ``m / t``.
        inner_nits: Newton steps taken by each centering step.
        inequality_multipliers: Central-path dual point ``-1 / (t f_i(x))``.
    """

    t: float = 0.0
    duality_gap: float = np.inf
    inner_nits: List[int] = field(default_factory=list)
    inequality_multipliers: Optional[np.ndarray] = None


__all__ = [
    "LinearConstraints",
    "FixedStep",
    "BacktrackingStep",
    "StepRule",
    "as_step_rule",
    "ConstrainedResult",
    "BarrierResult",
]
