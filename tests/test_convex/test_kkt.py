import numpy as np
import pytest

from convexkit.convex.kkt import (
    is_kkt_optimal,
    kkt_residuals,
    solve_constrained_quadratic,
    solve_kkt_system,
)
from convexkit.exceptions import IllConditionedError, InvalidParameterError

P = np.diag([1.0, 4.0])
q = np.zeros(2)
A = np.array([[1.0, -2.0]])
b = np.array([3.0])


def test_constrained_quadratic_solution():
    x, nu = solve_constrained_quadratic(P, q, A, b)
    assert np.allclose(x, [1.5, -0.75])
    assert np.allclose(nu, [-1.5])
    # substitution into both optimality conditions
    assert np.allclose(A @ x, b)
    assert np.allclose(P @ x + q + A.T @ nu, 0.0)
    assert is_kkt_optimal(P, q, A, b, x, nu)


def test_kkt_residuals_detect_wrong_point():
    residuals = kkt_residuals(P, q, A, b, np.array([3.0, 0.0]), np.array([0.0]))
    assert residuals["primal"] == pytest.approx(0.0)
    assert residuals["dual"] == pytest.approx(3.0)
    assert not is_kkt_optimal(P, q, A, b, np.array([3.0, 0.0]), np.array([0.0]))


def test_random_constrained_quadratic(spd_matrix, rng):
    n, p = 5, 2
    P_rand = spd_matrix(n)
    q_rand = rng.standard_normal(n)
    A_rand = rng.standard_normal((p, n))
    b_rand = rng.standard_normal(p)
    x, nu = solve_constrained_quadratic(P_rand, q_rand, A_rand, b_rand)
    assert is_kkt_optimal(P_rand, q_rand, A_rand, b_rand, x, nu, tol=1e-8)


def test_newton_step_from_feasible_point_keeps_feasibility():
    x = np.array([3.0, 0.0])
    dx, _ = solve_kkt_system(P, P @ x + q, A, b - A @ x)
    assert np.allclose(A @ dx, 0.0)
    assert np.allclose(x + dx, [1.5, -0.75])


def test_singular_kkt_system():
    with pytest.raises(IllConditionedError):
        solve_kkt_system(np.zeros((2, 2)), np.ones(2), np.array([[1.0, 0.0]]), np.zeros(1))


def test_kkt_dimension_mismatch():
    with pytest.raises(InvalidParameterError):
        solve_kkt_system(np.eye(3), np.ones(3), A, b)
    with pytest.raises(InvalidParameterError):
        solve_kkt_system(P, np.ones(2), A, np.zeros(2))


def test_rank_deficient_constraints_are_singular():
    a_dep = np.array([[1.0, 1.0, 0.0], [2.0, 2.0, 0.0]])
    with pytest.raises(IllConditionedError):
        solve_constrained_quadratic(np.eye(3), np.zeros(3), a_dep, np.array([1.0, 2.0]))
