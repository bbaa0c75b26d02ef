"""Pytest configuration and shared fixtures for convexkit tests.

This module provides:
- A deterministic NumPy RNG fixture
- Global seeding so tests are reproducible
"""

import os

import numpy as np
import pytest


@pytest.fixture(scope="function")
def rng() -> np.random.Generator:
    """Provide a deterministic numpy RNG for tests.

    Uses seed from TEST_RNG_SEED environment variable (default: 0).
    This ensures tests are reproducible while allowing override for debugging.
    """
    seed = int(os.environ.get("TEST_RNG_SEED", "0"))
    return np.random.default_rng(seed)


@pytest.fixture(scope="function", autouse=True)
def set_random_seeds() -> None:
    """Auto-use fixture seeding the global numpy RNG for every test."""
    np.random.seed(int(os.environ.get("TEST_RNG_SEED", "0")))


@pytest.fixture
def spd_matrix(rng: np.random.Generator):
    """Factory for random symmetric positive definite matrices."""

    def _make(n: int, shift: float = 1.0) -> np.ndarray:
        m = rng.standard_normal((n, n))
        return m @ m.T + shift * np.eye(n)

    return _make
