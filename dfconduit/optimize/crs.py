"""Controlled random search (CRS) with local mutation.

Each iteration reflects a random simplex drawn from the population through its
centroid and, when the reflected point does not beat the worst member, retries
with mutations that pull the trial towards the best point. An accepted trial
replaces the worst member, so the population size never changes.

References:
    - W. L. Price, "Global optimization by controlled random search",
      J. Optim. Theory Appl. 40 (3), 333-348 (1983).
    - P. Kaelo and M. M. Ali, "Some variants of the controlled random search
      algorithm for global optimization", J. Optim. Theory Appl. 130 (2),
      253-264 (2006).
    - S. G. Johnson, The NLopt nonlinear-optimization package.

Example
-------
>>> import numpy as np
>>> from dfconduit.optimize import ControlledRandomSearch
>>> crs = ControlledRandomSearch(tol_x=1e-8, tol_f=1e-8, max_evaluations=4000, rng=0)
>>> res = crs.optimize(lambda x: float(x @ x), [-10, -10], [10, 10], [5.0, 5.0])
>>> bool(np.linalg.norm(res.x) < 1e-2)
True
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from ..diagnostics import assert_population_size, assert_within_bounds
from ..logging import get_logger
from .core import Array, DerivativeFreeOptimizer, Seed
from .population import Candidate, OrderedPopulation
from .sampling import random_trial
from .utils import uniform_in_box

logger = get_logger(__name__)


def default_population_size(dim: int) -> int:
    """Kaelo and Ali's heuristic population size ``10 * (dim + 1)``."""
    return 10 * (dim + 1)


class ControlledRandomSearch(DerivativeFreeOptimizer):
    """
    CRS2 with local mutation (CRS2-LM).

    Parameters
    ----------
    tol_x:
        Stop when an improvement moves the best point by at most this
        Euclidean distance.
    tol_f:
        Stop when an improvement changes the best value by at most
        ``tol_f * max(1, |f_best|)``.
    max_evaluations:
        Evaluation budget. The initial population is always evaluated in
        full, even when it alone exceeds the budget.
    population_size:
        Number of points; 0 selects ``10 * (dim + 1)``. An explicit size must
        be at least ``dim + 1``.
    max_mutations:
        Mutation retries before a fresh random trial is drawn.
    rng:
        Generator, integer seed or None.
    """

    def __init__(
        self,
        tol_x: float = 1e-8,
        tol_f: float = 1e-8,
        max_evaluations: int = 10000,
        population_size: int = 0,
        max_mutations: int = 1,
        rng: Seed = None,
    ) -> None:
        super().__init__(max_evaluations, rng)
        if tol_x < 0 or tol_f < 0:
            raise ValueError("tolerances must be non-negative")
        if population_size < 0:
            raise ValueError(f"population_size must be non-negative, got {population_size}")
        if max_mutations < 0:
            raise ValueError(f"max_mutations must be non-negative, got {max_mutations}")
        self.tol_x = float(tol_x)
        self.tol_f = float(tol_f)
        self.population_size = int(population_size)
        self.max_mutations = int(max_mutations)

        self.npts = 0
        self.population: Optional[OrderedPopulation] = None
        self.points: Optional[Array] = None
        self._trial: Optional[Array] = None
        self._best_x: Optional[Array] = None
        self._best_f = np.inf

    def _setup(self, guess: Optional[Array]) -> None:
        n = self.bounds.dim
        npts = self.population_size or default_population_size(n)
        if npts < n + 1:
            raise ValueError(
                f"population_size {npts} is too small for a simplex in {n} dimensions "
                f"(need at least {n + 1})"
            )
        self.npts = npts

        # slot 0 holds the starting guess, the rest are uniform in the box
        self.points = uniform_in_box(self.rng, self.bounds.lower, self.bounds.upper, size=npts)
        if guess is not None:
            self.points[0] = guess
        self._trial = np.empty(n)

        self.population = OrderedPopulation()
        for slot in range(npts):
            value = self._objective(self.points[slot])
            self.population.insert(Candidate(self.points[slot], value, slot))

        best = self.population.peek_min()
        self._best_x = best.point.copy()
        self._best_f = best.value

    def _step(self) -> bool:
        population = self.population
        best = population.peek_min()
        worst = population.peek_max()
        trial = self._trial

        random_trial(self.points, best.slot, self.bounds, self.rng, trial)
        mutations = self.max_mutations
        while True:
            f_trial = self._objective(trial)
            if f_trial < worst.value:
                break
            if self.nfev >= self.max_evaluations:
                return False
            if mutations > 0:
                w = self.rng.random(trial.size)
                trial[:] = best.point * (1.0 + w) - w * trial
                self.bounds.clip(trial)
                mutations -= 1
            else:
                random_trial(self.points, best.slot, self.bounds, self.rng, trial)
                mutations = self.max_mutations

        # the accepted trial takes over the worst member's row
        slot = worst.slot
        self.points[slot] = trial
        population.replace(worst, Candidate(self.points[slot], f_trial, slot))
        return self._improved_within_tolerance()

    def _improved_within_tolerance(self) -> bool:
        best = self.population.peek_min()
        if not best.value < self._best_f:
            return False
        df = abs(best.value - self._best_f)
        dx = float(np.linalg.norm(best.point - self._best_x))
        converged = df <= self.tol_f * max(1.0, abs(self._best_f)) or dx <= self.tol_x
        logger.debug("best improved: f=%.6g, df=%.3e, dx=%.3e", best.value, df, dx)
        self._best_f = best.value
        np.copyto(self._best_x, best.point)
        return converged

    def best(self) -> tuple[Array, float]:
        best = self.population.peek_min()
        return best.point, best.value

    def _check_invariants(self) -> None:
        super()._check_invariants()
        assert_population_size(self.population, self.npts)
        assert_within_bounds(self.points, self.bounds.lower, self.bounds.upper)


__all__ = ["ControlledRandomSearch", "default_population_size"]
