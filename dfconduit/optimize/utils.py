"""Random-number helpers shared by the stochastic optimizers.

Every optimizer owns its own ``numpy.random.Generator``; nothing here touches
the global NumPy random state.
"""

from __future__ import annotations

from typing import Optional, Union

import numpy as np

Array = np.ndarray


def make_rng(seed: Union[None, int, np.random.Generator] = None) -> np.random.Generator:
    """Return a generator for ``seed``.

    Args:
        seed: An existing generator (returned unchanged), an integer seed, or
            None for fresh OS entropy.

    Examples:
        >>> rng = make_rng(42)
        >>> make_rng(rng) is rng
        True
    """
    if isinstance(seed, np.random.Generator):
        return seed
    return np.random.default_rng(seed)


def uniform_in_box(
    rng: np.random.Generator,
    lower: Array,
    upper: Array,
    size: Optional[int] = None,
) -> Array:
    """Draw points uniformly from the box ``[lower, upper]``.

    Args:
        rng: Random source.
        lower, upper: Bounds with shape (n,).
        size: Number of points. None returns a single point of shape (n,),
            otherwise an array of shape (size, n).
    """
    shape = lower.shape if size is None else (size,) + lower.shape
    return lower + (upper - lower) * rng.random(shape)


__all__ = ["Array", "make_rng", "uniform_in_box"]
