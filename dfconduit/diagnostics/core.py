"""Invariant checks for optimizer state."""

from __future__ import annotations

from typing import Sized

import numpy as np


def bounds_violation(x: np.ndarray, lower: np.ndarray, upper: np.ndarray) -> float:
    """
    Largest amount by which any coordinate of ``x`` leaves ``[lower, upper]``.

    Parameters
    ----------
    x:
        Point (n,) or stack of points (..., n).
    lower, upper:
        Per-dimension bounds with shape (n,).

    Returns
    -------
    float
        0.0 when every coordinate lies inside its interval.
    """
    x = np.asarray(x, dtype=float)
    below = np.max(lower - x, initial=0.0)
    above = np.max(x - upper, initial=0.0)
    return float(max(below, above))


def assert_within_bounds(
    x: np.ndarray,
    lower: np.ndarray,
    upper: np.ndarray,
) -> None:
    """
    Assert that every coordinate of ``x`` lies inside the box.

    Raises
    ------
    ValueError
        If a coordinate is outside its bounds or not finite.
    """
    x = np.asarray(x, dtype=float)
    if not np.all(np.isfinite(x)):
        raise ValueError("Point contains non-finite coordinates.")
    violation = bounds_violation(x, lower, upper)
    if violation > 0.0:
        raise ValueError(f"Point leaves the search bounds by {violation:.3e}.")


def assert_population_size(population: Sized, expected: int) -> None:
    """
    Assert that a population still holds exactly ``expected`` members.

    Raises
    ------
    ValueError
        If the population has grown or shrunk.
    """
    size = len(population)
    if size != expected:
        raise ValueError(f"Population size changed: expected {expected}, found {size}.")
