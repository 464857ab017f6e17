"""Sequential sampling without replacement and CRS trial-point construction.

``sample_slots`` implements "Method A" from

    Jeffrey Scott Vitter, "An efficient algorithm for sequential random
    sampling", ACM Trans. Math. Softw. 13 (1), 58-67 (1987)

(Knuth's "Method S"): it walks the slots in increasing order and decides how
many to skip before each pick, so ``n`` distinct slots are chosen uniformly
over all n-subsets in O(N) time without building a shuffled index array.
"""

from __future__ import annotations

from typing import Iterator, Tuple

import numpy as np

from .core import Bounds


def _skip_reserved(i: int, reserved: int) -> int:
    return i + 1 if i == reserved else i


def sample_slots(
    npts: int,
    n: int,
    reserved: int,
    rng: np.random.Generator,
) -> Iterator[Tuple[int, bool]]:
    """Pick ``n`` distinct slots from ``range(npts)`` excluding ``reserved``.

    Slots are yielded in increasing order as ``(slot, is_pivot)``. Exactly one
    of the ``n`` picks, chosen uniformly, is flagged as the reflection pivot.

    Args:
        npts: Size of the index range.
        n: Number of slots to pick, ``1 <= n <= npts - 1``.
        reserved: Slot that is never picked.
        rng: Random source.

    Raises:
        ValueError: If the pool is too small or ``reserved`` is out of range.

    Example:
        >>> rng = np.random.default_rng(0)
        >>> picks = list(sample_slots(10, 3, reserved=4, rng=rng))
        >>> len(picks), sum(p for _, p in picks)
        (3, 1)
    """
    if n < 1:
        raise ValueError(f"n must be at least 1, got {n}")
    if not 0 <= reserved < npts:
        raise ValueError(f"reserved slot {reserved} outside range(0, {npts})")
    if n > npts - 1:
        raise ValueError(f"cannot pick {n} slots from a pool of {npts - 1}")

    pivot = int(rng.integers(n))
    picked = 0
    nptsleft = npts - 1
    nleft = n
    nptsfree = nptsleft - nleft
    i = _skip_reserved(0, reserved)

    while nleft > 1:
        # probability of skipping the current slot, updated for each skip
        q = nptsfree / nptsleft
        v = rng.random()
        while q > v:
            i = _skip_reserved(i + 1, reserved)
            nptsfree -= 1
            nptsleft -= 1
            q = q * nptsfree / nptsleft
        yield i, picked == pivot
        picked += 1
        i = _skip_reserved(i + 1, reserved)
        nptsleft -= 1
        nleft -= 1

    # last pick: uniform over the remaining pool, renumbered around the reserved slot
    j = i + int(rng.integers(nptsleft))
    if i < reserved <= j:
        j += 1
    yield j, picked == pivot


def random_trial(
    points: np.ndarray,
    best_slot: int,
    bounds: Bounds,
    rng: np.random.Generator,
    out: np.ndarray,
) -> np.ndarray:
    """Build a CRS trial point in ``out`` by reflecting through a random simplex.

    The simplex is the best point plus ``n`` random population members. One
    member (the pivot) is reflected through the centroid of the remaining
    ``n`` vertices: ``x = 2 * (best + sum(others)) / n - pivot``. The result
    is clamped into ``bounds``.

    Args:
        points: Population coordinates, shape (npts, n).
        best_slot: Row of the best point; never sampled.
        bounds: Search box.
        rng: Random source.
        out: Buffer of shape (n,) receiving the trial point.

    Returns:
        ``out``.
    """
    npts, n = points.shape
    np.copyto(out, points[best_slot])
    for slot, is_pivot in sample_slots(npts, n, best_slot, rng):
        if is_pivot:
            out -= 0.5 * n * points[slot]
        else:
            out += points[slot]
    out *= 2.0 / n
    return bounds.clip(out)


__all__ = ["sample_slots", "random_trial"]
