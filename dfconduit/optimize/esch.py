"""Evolution strategy with Cauchy mutation (ESCH).

A (mu + lambda) strategy: offspring come from single-point crossover of two
random parents, a tenth of all offspring genes receive a truncated Cauchy
mutation, and the best ``mu`` of parents and offspring survive. There is no
convergence test; a run always ends on its evaluation budget.

References:
    - C. H. da Silva Santos, M. S. Goncalves and H. E. Hernandez-Figueroa,
      "Designing novel photonic devices by bio-inspired computing", IEEE
      Photonics Technology Letters 22 (15), 1177-1179 (2010).
    - S. G. Johnson, The NLopt nonlinear-optimization package.
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from .core import Array, DerivativeFreeOptimizer, Seed

MUTATION_RATE = 0.1

CAUCHY_LOCATION = 0.0
CAUCHY_SCALE = 1.0
CAUCHY_BAND = 10.0


def truncated_cauchy(
    rng: np.random.Generator,
    lower: float,
    upper: float,
    location: float = CAUCHY_LOCATION,
    scale: float = CAUCHY_SCALE,
    band: float = CAUCHY_BAND,
) -> float:
    """Draw from a Cauchy distribution folded into ``[lower, upper]``.

    Samples ``scale * tan(pi * (u - 1/2)) + location`` are rejected until they
    fall in the window ``location +/- band / 2``. Negative samples are
    mirrored and non-negative ones shifted by ``band / 2``, which maps the
    window onto ``[0, 1]`` after division by ``band``; the unit value is then
    scaled into the bounds.
    """
    half = 0.5 * band
    while True:
        c = scale * np.tan((rng.random() - 0.5) * np.pi) + location
        if location - half <= c <= location + half:
            break
    c = -c if c < 0.0 else c + half
    return lower + (upper - lower) * (c / band)


class EvolutionStrategy(DerivativeFreeOptimizer):
    """
    ESCH evolutionary algorithm.

    Parameters
    ----------
    max_evaluations:
        Evaluation budget; generations run while it is not exhausted and the
        last one may overshoot it by fewer than ``num_offspring`` evaluations.
    num_parents:
        Number of parents (mu).
    num_offspring:
        Number of offspring per generation (lambda).
    rng:
        Generator, integer seed or None.
    """

    def __init__(
        self,
        max_evaluations: int = 10000,
        num_parents: int = 40,
        num_offspring: int = 60,
        rng: Seed = None,
    ) -> None:
        super().__init__(max_evaluations, rng)
        if num_parents < 1 or num_offspring < 1:
            raise ValueError("num_parents and num_offspring must be positive")
        self.num_parents = int(num_parents)
        self.num_offspring = int(num_offspring)

        self.parents: Optional[Array] = None
        self.parent_fitness: Optional[Array] = None
        self.offspring: Optional[Array] = None
        self.offspring_fitness: Optional[Array] = None

    def _random_genes(self, count: int) -> Array:
        lower, upper = self.bounds.lower, self.bounds.upper
        genes = np.empty((count, self.bounds.dim))
        for row in genes:
            for j in range(row.size):
                row[j] = truncated_cauchy(self.rng, lower[j], upper[j])
        return genes

    def _setup(self, guess: Optional[Array]) -> None:
        self.parents = self._random_genes(self.num_parents)
        if guess is not None:
            self.parents[0] = guess
        self.offspring = np.empty((self.num_offspring, self.bounds.dim))
        self.offspring_fitness = np.full(self.num_offspring, np.inf)
        self.parent_fitness = np.array([self._objective(x) for x in self.parents])

    def _crossover(self) -> None:
        n = self.bounds.dim
        p1 = self.rng.integers(self.num_parents, size=self.num_offspring)
        p2 = self.rng.integers(self.num_parents, size=self.num_offspring)
        cut = self.rng.integers(n, size=self.num_offspring)
        # genes before the cut come from the first parent, the rest from the second
        from_first = np.arange(n)[None, :] < cut[:, None]
        self.offspring[:] = np.where(from_first, self.parents[p1], self.parents[p2])

    def _mutate(self) -> None:
        n = self.bounds.dim
        count = max(1, int(self.num_offspring * n * MUTATION_RATE))
        for _ in range(count):
            i = int(self.rng.integers(self.num_offspring))
            j = int(self.rng.integers(n))
            self.offspring[i, j] = truncated_cauchy(
                self.rng, self.bounds.lower[j], self.bounds.upper[j]
            )

    def _select(self) -> None:
        pool = np.concatenate([self.parents, self.offspring])
        fitness = np.concatenate([self.parent_fitness, self.offspring_fitness])
        order = np.argsort(fitness, kind="stable")
        pool, fitness = pool[order], fitness[order]
        mu = self.num_parents
        self.parents[:], self.parent_fitness[:] = pool[:mu], fitness[:mu]
        self.offspring[:], self.offspring_fitness[:] = pool[mu:], fitness[mu:]

    def _step(self) -> bool:
        self._crossover()
        self._mutate()
        for i, x in enumerate(self.offspring):
            self.offspring_fitness[i] = self._objective(x)
        self._select()
        return False

    def best(self) -> tuple[Array, float]:
        # parents are sorted after every generation but not before the first
        i = int(np.argmin(self.parent_fitness))
        return self.parents[i], float(self.parent_fitness[i])


__all__ = ["EvolutionStrategy", "truncated_cauchy"]
