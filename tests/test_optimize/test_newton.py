import numpy as np
import pytest

from convexkit.exceptions import IllConditionedError, InvalidParameterError, NotConvergedError
from convexkit.optimize import Problem, newton_method, quadratic_problem
from convexkit.optimize.testfuns import fnonquadr_problem, fquadr_problem
from convexkit.tracking import PathTracker


def test_newton_solves_quadratic_in_one_step(spd_matrix, rng):
    P = spd_matrix(4)
    q = rng.standard_normal(4)
    problem = quadratic_problem(P, q)
    for _ in range(3):
        x0 = rng.standard_normal(4) * 10
        res = newton_method(problem, x0)
        assert res.success
        assert res.nit == 1
        assert np.allclose(res.x, -np.linalg.solve(P, q), atol=1e-10)


def test_newton_diagonal_quadratic_one_step():
    res = newton_method(fquadr_problem(), np.array([9.0, 2.0]))
    assert res.nit == 1
    assert np.allclose(res.x, 0.0, atol=1e-12)
    assert res.njev == 2
    assert res.nhev == 2


def test_newton_nonquadratic():
    problem = fnonquadr_problem()
    x0 = np.array([2.0, 1.0])
    tracker = PathTracker(x0, record_values=True)
    res = newton_method(problem, x0, tol=1e-10, tracker=tracker)
    assert res.success
    assert np.allclose(res.x, [-np.log(2) / 2, 0.0], atol=1e-4)
    assert res.decrement / 2 < 1e-10
    values = [problem.fun(x0)] + tracker.values
    assert all(b <= a for a, b in zip(values, values[1:]))
    assert tracker.nsteps == res.nit


def test_decrement_bounds_suboptimality():
    problem = fnonquadr_problem()
    pstar = problem.fun(np.array([-np.log(2) / 2, 0.0]))
    res = newton_method(problem, np.array([1.0, 0.5]), tol=1e-4)
    assert res.fun - pstar < 2e-4


def test_newton_finite_difference_fallback():
    problem = Problem(fun=lambda x: float(np.sum((x - 1.0) ** 2) + np.sum(x**4)), dim=2)
    res = newton_method(problem, np.array([2.5, -3.0]), tol=1e-8)
    assert res.success
    assert res.nhev == 0
    assert res.grad_norm < 1e-3


def test_indefinite_hessian_raises():
    problem = Problem(
        fun=lambda x: float(0.5 * (x[0] ** 2 - x[1] ** 2)),
        grad=lambda x: np.array([x[0], -x[1]]),
        hess=lambda x: np.diag([1.0, -1.0]),
    )
    with pytest.raises(IllConditionedError):
        newton_method(problem, np.array([1.0, 1.0]))


def test_singular_hessian_raises():
    problem = Problem(
        fun=lambda x: float(x[0] ** 2),
        grad=lambda x: np.array([2 * x[0], 0.0]),
        hess=lambda x: np.diag([2.0, 0.0]),
    )
    with pytest.raises(IllConditionedError) as excinfo:
        newton_method(problem, np.array([1.0, 1.0]))
    assert isinstance(excinfo.value, np.linalg.LinAlgError)


def test_iteration_cap():
    problem = fnonquadr_problem()
    with pytest.raises(NotConvergedError) as excinfo:
        newton_method(problem, np.array([3.0, 2.0]), tol=1e-12, maxiter=1)
    assert excinfo.value.result.nit == 1
    assert excinfo.value.result.decrement > 0


def test_invalid_line_search_parameters():
    with pytest.raises(InvalidParameterError):
        newton_method(fquadr_problem(), np.ones(2), alpha=0.5)
