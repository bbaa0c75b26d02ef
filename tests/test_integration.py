"""The public names are importable from the package root."""

import numpy as np

import convexkit
from convexkit import (
    BacktrackingStep,
    PathTracker,
    Problem,
    backtracking_line_search,
    barrier_method,
    coordinate_descent,
    gradient_descent,
    linear_constrained_newton,
    linear_inequalities,
    newton_method,
    solve_constrained_quadratic,
)


def test_version():
    assert convexkit.__version__ == "0.1.0"


def test_all_solvers_agree_on_diagonal_quadratic():
    problem = Problem(
        fun=lambda x: float(0.5 * (x[0] ** 2 + 10 * x[1] ** 2)),
        grad=lambda x: np.array([x[0], 10 * x[1]]),
        hess=lambda x: np.diag([1.0, 10.0]),
    )
    x0 = np.array([9.0, 2.0])
    for solver in (gradient_descent, coordinate_descent, newton_method):
        assert np.allclose(solver(problem, x0).x, 0.0, atol=1e-4)
    assert newton_method(problem, x0).nit == 1
    t = backtracking_line_search(problem.fun, x0, -problem.grad(x0), problem.grad)
    assert 0 < t <= 1


def test_barrier_matches_equality_solver_when_constraints_inactive():
    P = np.diag([1.0, 4.0])
    A = np.array([[1.0, -2.0]])
    b = np.array([3.0])
    problem = Problem(fun=lambda x: float(0.5 * x @ P @ x), grad=lambda x: P @ x, hess=lambda x: P)
    xstar, _ = solve_constrained_quadratic(P, np.zeros(2), A, b)
    eq = linear_constrained_newton(problem, np.zeros(2), A, b, step=BacktrackingStep())
    bar = barrier_method(
        problem,
        linear_inequalities(np.eye(2), [10.0, 10.0]),
        np.array([3.0, 0.0]),
        a_mat=A,
        b_vec=b,
        tracker=PathTracker(),
    )
    assert np.allclose(eq.x, xstar, atol=1e-6)
    assert np.allclose(bar.x, xstar, atol=1e-4)
