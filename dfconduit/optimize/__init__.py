"""Derivative-free population-based optimization algorithms.

Example
-------
>>> import numpy as np
>>> from dfconduit.optimize import ControlledRandomSearch
>>> def sphere(x):
...     return float(x @ x)
>>> crs = ControlledRandomSearch(tol_x=1e-6, tol_f=1e-6, population_size=22, rng=0)
>>> res = crs.optimize(sphere, lower=[-10, -10], upper=[10, 10], guess=[5.0, 5.0])
>>> res.njev
0
"""

from .config import OptimizerConfig, create_optimizer
from .core import (
    DEFAULT_BOUND_RADIUS,
    RELEPS,
    Bounds,
    DerivativeFreeOptimizer,
    OptimizeResult,
    Status,
    resolve_problem,
)
from .crs import ControlledRandomSearch, default_population_size
from .cso import CompetitiveSwarm, default_phi
from .esch import EvolutionStrategy, truncated_cauchy
from .objective import ObjectiveFunction, as_float
from .population import Candidate, OrderedPopulation
from .sampling import random_trial, sample_slots
from .utils import make_rng, uniform_in_box

__all__ = [
    "Bounds",
    "Candidate",
    "CompetitiveSwarm",
    "ControlledRandomSearch",
    "DEFAULT_BOUND_RADIUS",
    "DerivativeFreeOptimizer",
    "EvolutionStrategy",
    "ObjectiveFunction",
    "OptimizeResult",
    "OptimizerConfig",
    "OrderedPopulation",
    "RELEPS",
    "Status",
    "as_float",
    "create_optimizer",
    "default_phi",
    "default_population_size",
    "make_rng",
    "random_trial",
    "resolve_problem",
    "sample_slots",
    "truncated_cauchy",
    "uniform_in_box",
]
