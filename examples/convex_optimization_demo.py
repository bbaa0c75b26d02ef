"""
Example: Descent, Newton and Barrier Methods in convexkit

Runs each solver on a small problem with a known answer: gradient and
coordinate descent against Newton's method on an ill-conditioned quadratic,
equality-constrained Newton from a feasible and an infeasible start, and the
log-barrier method on a linear program and a simplex projection.
"""

import numpy as np

from convexkit import (
    BacktrackingStep,
    PathTracker,
    barrier_method,
    coordinate_descent,
    gradient_descent,
    is_kkt_optimal,
    kkt_residuals,
    linear_constrained_newton,
    linear_inequalities,
    newton_method,
    quadratic_problem,
    solve_constrained_quadratic,
)
from convexkit.optimize import Problem
from convexkit.optimize.testfuns import fnonquadr_problem, fquadr_problem


def example_unconstrained():
    """Example: Gradient, coordinate and Newton descent on f(x) = ½(x₁² + 10x₂²)."""
    print("=" * 60)
    print("Example 1: Unconstrained Descent Methods")
    print("=" * 60)

    problem = fquadr_problem(gamma=10.0)
    x0 = np.array([9.0, 2.0])
    for solver in (gradient_descent, coordinate_descent, newton_method):
        tracker = PathTracker(x0)
        result = solver(problem, x0, tracker=tracker)
        print(f"{solver.__name__:>20}: x = {result.x}, steps = {tracker.nsteps}")

    result = newton_method(fnonquadr_problem(), np.array([2.0, 1.0]), tol=1e-10)
    print(f"Newton on log-sum-exp: x = {result.x}, expected ({-np.log(2) / 2:.6f}, 0)")
    print()


def example_equality_constrained():
    """Example: Minimize ½(x₁² + 4x₂²) subject to x₁ - 2x₂ = 3."""
    print("=" * 60)
    print("Example 2: Equality-Constrained Newton")
    print("=" * 60)

    P = np.diag([1.0, 4.0])
    q = np.zeros(2)
    A = np.array([[1.0, -2.0]])
    b = np.array([3.0])

    x_star, nu_star = solve_constrained_quadratic(P, q, A, b)
    print(f"Closed form: x* = {x_star}, nu* = {nu_star}")
    residuals = kkt_residuals(P, q, A, b, x_star, nu_star)
    print(f"KKT optimal: {is_kkt_optimal(P, q, A, b, x_star, nu_star)}")
    print(f"Primal residual: {residuals['primal']:.2e}, dual residual: {residuals['dual']:.2e}")

    problem = quadratic_problem(P, q)
    feasible = linear_constrained_newton(problem, np.array([3.0, 0.0]), A, b, feasible_start=True)
    print(f"Feasible start:   x = {feasible.x}, iterations = {feasible.nit}")

    tracker = PathTracker(np.zeros(2))
    infeasible = linear_constrained_newton(problem, np.zeros(2), A, b, step=0.9, tracker=tracker)
    history = [float(np.abs(A @ x - b)[0]) for x in tracker.xs]
    print(f"Infeasible start: x = {infeasible.x}, iterations = {infeasible.nit}")
    print(f"  residual history: {', '.join(f'{r:.1e}' for r in history[:5])}, ...")

    backtracking = linear_constrained_newton(
        fnonquadr_problem(), np.zeros(2), np.array([[1.0, 3.0]]), [0.0], step=BacktrackingStep()
    )
    print(f"Log-sum-exp on x1 + 3 x2 = 0: x = {backtracking.x}, nu = {backtracking.multipliers}")
    print()


def example_barrier():
    """Example: Log-barrier method for an LP and a projection onto the simplex."""
    print("=" * 60)
    print("Example 3: Barrier Method")
    print("=" * 60)

    # Maximize 3x + 5y subject to x + 2y <= 4, 3x + 2y <= 6, x >= 0, y >= 0
    c = np.array([-3.0, -5.0])
    G = np.array([[1.0, 2.0], [3.0, 2.0], [-1.0, 0.0], [0.0, -1.0]])
    h = np.array([4.0, 6.0, 0.0, 0.0])
    lp = Problem(fun=lambda x: float(c @ x), grad=lambda x: c, hess=lambda x: np.zeros((2, 2)))

    result = barrier_method(lp, linear_inequalities(G, h), np.array([0.5, 0.5]))
    print(f"LP solution: x = {result.x}, objective = {result.fun:.6f}")
    print(f"Outer iterations: {result.nit}, Newton steps per centering: {result.inner_nits}")
    print(f"Duality gap bound: {result.duality_gap:.2e}")

    # Euclidean projection of a onto the probability simplex
    a = np.array([0.8, 0.6, -0.5])
    result = barrier_method(
        quadratic_problem(np.eye(3), -a, 0.5 * a @ a),
        linear_inequalities(-np.eye(3), np.zeros(3)),
        np.full(3, 1.0 / 3.0),
        a_mat=np.ones((1, 3)),
        b_vec=np.array([1.0]),
    )
    print(f"Simplex projection of {a}: {np.round(result.x, 6)}")
    print(f"Half squared distance = {result.fun:.6f}, nu = {result.multipliers}")
    print()


if __name__ == "__main__":
    print("\n" + "=" * 60)
    print("convexkit - Convex Optimization Examples")
    print("=" * 60 + "\n")

    example_unconstrained()
    example_equality_constrained()
    example_barrier()

    print("=" * 60)
    print("All examples completed successfully!")
    print("=" * 60)
