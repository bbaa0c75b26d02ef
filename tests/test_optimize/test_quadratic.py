import logging
from io import StringIO

import numpy as np
import pytest

from convexkit.exceptions import IllConditionedError, InvalidParameterError, NotConvergedError
from convexkit.logging import configure_logging
from convexkit.optimize.quadratic import (
    quadratic,
    quadratic_gradient_descent,
    quadratic_line_search,
    quadratic_problem,
    solve_quadratic,
)
from convexkit.tracking import PathTracker

P = np.array([[4.0, 1.0], [1.0, 2.0]])
q = np.array([-3.0, 1.0])


def test_solve_scalar_quadratic():
    assert solve_quadratic(4.0, 3.0) == pytest.approx(-3.0 / 4.0)
    with pytest.raises(InvalidParameterError):
        solve_quadratic(-3.0, 1.0)


def test_solve_matrix_quadratic():
    xstar = solve_quadratic(P, q)
    assert np.allclose(xstar, -np.linalg.solve(P, q))
    assert np.linalg.norm(P @ xstar + q) < 1e-10


def test_solve_singular_quadratic():
    with pytest.raises(IllConditionedError):
        solve_quadratic(np.zeros((2, 2)), q)


def test_quadratic_value_and_problem():
    x = np.array([1.0, -1.0])
    assert quadratic(x, P, q, 2.0) == pytest.approx(0.5 * x @ P @ x + q @ x + 2.0)
    problem = quadratic_problem(P, q, 2.0)
    assert problem.fun(x) == pytest.approx(quadratic(x, P, q, 2.0))
    assert np.allclose(problem.grad(x), P @ x + q)
    assert np.array_equal(problem.hess(x), P)
    with pytest.raises(InvalidParameterError):
        quadratic_problem(P, np.zeros(3))


def test_exact_line_search_minimizes_along_direction():
    x = np.array([2.0, 2.0])
    dx = -(P @ x + q)
    t = quadratic_line_search(P, q, dx, x)
    best = quadratic(x + t * dx, P, q)
    for eps in (1e-3, -1e-3):
        assert best <= quadratic(x + (t + eps) * dx, P, q)
    # directional derivative vanishes at the exact step
    assert abs(dx @ (P @ (x + t * dx) + q)) < 1e-10


@pytest.mark.parametrize("momentum", [0.0, 0.2])
def test_quadratic_gradient_descent(momentum):
    x0 = np.zeros(2)
    res = quadratic_gradient_descent(P, q, x0, momentum=momentum, tol=1e-10)
    assert res.success
    assert np.allclose(res.x, solve_quadratic(P, q))


def test_quadratic_gradient_descent_tracks_steps():
    tracker = PathTracker(np.zeros(2))
    quadratic_gradient_descent(P, q, np.zeros(2), tracker=tracker)
    assert tracker.nsteps > 1


def test_quadratic_gradient_descent_rejects_bad_momentum():
    with pytest.raises(InvalidParameterError):
        quadratic_gradient_descent(P, q, np.zeros(2), momentum=1.0)


def test_quadratic_gradient_descent_logs_iterations_and_cap():
    stream = StringIO()
    try:
        configure_logging(level=logging.DEBUG, stream=stream)
        with pytest.raises(NotConvergedError):
            quadratic_gradient_descent(P, q, np.zeros(2), maxiter=1)
        output = stream.getvalue()
        assert "quadratic_gradient_descent iter 1" in output
        assert "quadratic_gradient_descent stopped after 1 iterations" in output
    finally:
        configure_logging(level=logging.WARNING)
