import numpy as np
import pytest

from convexkit.exceptions import (
    ConvexkitError,
    IllConditionedError,
    InfeasibleStartError,
    InvalidParameterError,
    LineSearchError,
    NotConvergedError,
)


@pytest.mark.parametrize(
    "exc, base",
    [
        (InvalidParameterError("bad"), ValueError),
        (InfeasibleStartError("bad", 1.0), ValueError),
        (IllConditionedError("bad"), np.linalg.LinAlgError),
        (NotConvergedError("bad"), RuntimeError),
        (LineSearchError("bad", 1e-3), NotConvergedError),
    ],
)
def test_hierarchy(exc, base):
    assert isinstance(exc, ConvexkitError)
    assert isinstance(exc, base)


def test_attributes():
    assert InfeasibleStartError("x", 2).residual == 2.0
    assert NotConvergedError("x").result is None
    err = LineSearchError("x", 0.5)
    assert err.step == 0.5
    assert err.result is None
