"""Competitive swarm optimizer (CSO) with optional ring topology.

Particles are paired at random every generation; in each pair only the loser
learns from the winner (and from its neighborhood mean) and is re-evaluated,
so a generation of ``m`` particles costs ``m / 2`` evaluations.

References:
    - R. Cheng and Y. Jin, "A competitive swarm optimizer for large scale
      optimization", IEEE Trans. Cybern. 45 (2), 191-204 (2015).
    - J. Kennedy and R. Mendes, "Population structure and particle swarm
      performance", Proc. IEEE CEC 2002, 1671-1676.
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from .core import RELEPS, Array, DerivativeFreeOptimizer, Seed
from .utils import uniform_in_box

MAX_VELOCITY_FRACTION = 0.2


def default_phi(swarm_size: int) -> float:
    """Social factor recommended by Cheng and Jin for a swarm of ``swarm_size``.

    Zero up to 100 particles, otherwise the midpoint of the published range
    for the size band.
    """
    if swarm_size <= 100:
        return 0.0
    if swarm_size <= 200:
        lo, hi = 0.0, 0.1
    elif swarm_size <= 600:
        lo, hi = 0.1, 0.2
    else:
        lo, hi = 0.1, 0.3
    return 0.5 * (lo + hi)


class CompetitiveSwarm(DerivativeFreeOptimizer):
    """
    Competitive swarm optimizer.

    Parameters
    ----------
    tol:
        Convergence band on ``|f_best - f_worst|`` (plus a relative machine
        epsilon term).
    stdev_tol:
        Convergence bound on the sample standard deviation of the particles'
        distances from the origin. Both tests must pass.
    swarm_size:
        Number of particles; odd sizes are rounded up to the next even number.
    max_evaluations:
        Evaluation budget. The last generation may overshoot it by fewer than
        ``swarm_size / 2`` evaluations.
    phi:
        Weight of the attraction towards the neighborhood mean. None selects
        :func:`default_phi`.
    ring_topology:
        Use the mean of each particle and its two ring neighbors instead of
        the swarm mean.
    clip_to_bounds:
        Clamp loser positions into the box after each move.
    rng:
        Generator, integer seed or None.
    """

    def __init__(
        self,
        tol: float = 1e-6,
        stdev_tol: float = 1e-6,
        swarm_size: int = 40,
        max_evaluations: int = 10000,
        phi: Optional[float] = None,
        ring_topology: bool = False,
        clip_to_bounds: bool = False,
        rng: Seed = None,
    ) -> None:
        super().__init__(max_evaluations, rng)
        if tol < 0 or stdev_tol < 0:
            raise ValueError("tolerances must be non-negative")
        if swarm_size < 2:
            raise ValueError(f"swarm_size must be at least 2, got {swarm_size}")
        self.tol = float(tol)
        self.stdev_tol = float(stdev_tol)
        self.swarm_size = swarm_size if swarm_size % 2 == 0 else swarm_size + 1
        self.phi = default_phi(swarm_size) if phi is None else float(phi)
        self.ring_topology = bool(ring_topology)
        self.clip_to_bounds = bool(clip_to_bounds)

        self.positions: Optional[Array] = None
        self.velocities: Optional[Array] = None
        self.means: Optional[Array] = None
        self.fitness: Optional[Array] = None

    def _setup(self, guess: Optional[Array]) -> None:
        # the guess only defines the default search box
        del guess
        m = self.swarm_size
        self.positions = uniform_in_box(self.rng, self.bounds.lower, self.bounds.upper, size=m)
        # zero initial velocity keeps early moves inside the box
        self.velocities = np.zeros_like(self.positions)
        self.fitness = np.array([self._objective(x) for x in self.positions])
        self.means = np.empty_like(self.positions)
        self._update_means()

    def _update_means(self) -> None:
        x = self.positions
        if self.ring_topology:
            # neighbors of i are (i - 1) % m and (i + 1) % m
            self.means[:] = (np.roll(x, 1, axis=0) + x + np.roll(x, -1, axis=0)) / 3.0
        else:
            self.means[:] = x.mean(axis=0)

    def _compete(self, first: int, second: int) -> None:
        if self.fitness[first] > self.fitness[second]:
            loser, winner = first, second
        else:
            loser, winner = second, first

        x = self.positions[loser]
        v = self.velocities[loser]
        r1, r2, r3 = self.rng.random((3, x.size))
        v[:] = r1 * v + r2 * (self.positions[winner] - x) + self.phi * r3 * (self.means[loser] - x)
        vmax = MAX_VELOCITY_FRACTION * self.bounds.width
        np.clip(v, -vmax, vmax, out=v)
        x += v
        if self.clip_to_bounds:
            self.bounds.clip(x)
        self.fitness[loser] = self._objective(x)

    def _step(self) -> bool:
        half = self.swarm_size // 2
        order = self.rng.permutation(self.swarm_size)
        for i in range(half):
            self._compete(order[i], order[i + half])
        self._update_means()
        return self._swarm_converged()

    def _swarm_converged(self) -> bool:
        f_best = float(self.fitness.min())
        f_worst = float(self.fitness.max())
        spread = abs(f_best - f_worst)
        if spread > self.tol + RELEPS * abs(0.5 * (f_best + f_worst)):
            return False
        radii = np.linalg.norm(self.positions, axis=1)
        return float(np.std(radii, ddof=1)) <= self.stdev_tol

    def best(self) -> tuple[Array, float]:
        i = int(np.argmin(self.fitness))
        return self.positions[i], float(self.fitness[i])

    def _check_invariants(self) -> None:
        if self.clip_to_bounds:
            super()._check_invariants()
        if self.positions.shape[0] % 2:
            raise ValueError("swarm size must stay even")


__all__ = ["CompetitiveSwarm", "default_phi"]
