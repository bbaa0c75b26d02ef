"""Trajectory recording for iterative solvers.

Solvers call ``tracker.record(x, fx)`` once per accepted step and never read
the tracker back. Passing a :class:`PathTracker` keeps a copy of every iterate
for later inspection; the default :class:`NullTracker` keeps nothing.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional

import numpy as np


class Tracker(ABC):
    """Receiver for the iterates produced by a solver."""

    @abstractmethod
    def record(self, x: np.ndarray, fx: Optional[float] = None) -> None:
        """Store (or ignore) the iterate ``x`` and its objective value."""


class NullTracker(Tracker):
    """Tracker that discards everything."""

    def record(self, x: np.ndarray, fx: Optional[float] = None) -> None:
        return None


class PathTracker(Tracker):
    """Append-only record of the iterates visited by a solver.

    Args:
        x0: Optional starting point stored as the first entry. It is not
            counted by :attr:`nsteps`.
        record_values: Also store the objective value passed with each
            iterate.
    """

    def __init__(self, x0: Optional[np.ndarray] = None, record_values: bool = False) -> None:
        self.record_values = record_values
        self.xs: List[np.ndarray] = []
        self.values: List[float] = []
        self._seeded = x0 is not None
        if x0 is not None:
            self.xs.append(np.array(x0, dtype=float, copy=True))

    def record(self, x: np.ndarray, fx: Optional[float] = None) -> None:
        self.xs.append(np.array(x, dtype=float, copy=True))
        if self.record_values:
            self.values.append(float("nan") if fx is None else float(fx))

    @property
    def nsteps(self) -> int:
        """Number of recorded steps, excluding a seeded starting point."""
        return len(self.xs) - 1 if self._seeded else len(self.xs)

    def as_array(self) -> np.ndarray:
        """Return the recorded iterates stacked into an ``(k, n)`` array."""
        if not self.xs:
            return np.zeros((0, 0))
        return np.vstack(self.xs)

    def __len__(self) -> int:
        return len(self.xs)


def resolve_tracker(tracker: Optional[Tracker]) -> Tracker:
    """Return ``tracker`` or a fresh :class:`NullTracker` when it is None."""
    return NullTracker() if tracker is None else tracker


__all__ = ["Tracker", "NullTracker", "PathTracker", "resolve_tracker"]
