"""Factory for creating derivative-free optimizers from configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .core import DerivativeFreeOptimizer, Seed
from .crs import ControlledRandomSearch
from .cso import CompetitiveSwarm
from .esch import EvolutionStrategy


@dataclass(frozen=True)
class OptimizerConfig:
    """
    Configuration for creating a derivative-free optimizer.

    One flat record covers all algorithms; fields an algorithm does not use
    are ignored.

    Args:
        name: Algorithm name. Supported values: "crs", "cso", "esch".
        max_evaluations: Evaluation budget. Must be positive.
        tol_x: CRS position tolerance.
        tol_f: CRS function tolerance; also the CSO fitness band.
        population_size: CRS population size, 0 for ``10 * (dim + 1)``.
        max_mutations: CRS mutation retries per fresh trial.
        swarm_size: CSO swarm size (rounded up to even).
        stdev_tol: CSO tolerance on the spread of particle norms.
        phi: CSO social factor, None for the size-based default.
        ring_topology: CSO ring neighborhood instead of the swarm mean.
        clip_to_bounds: CSO clamping of positions into the box.
        num_parents: ESCH parent count.
        num_offspring: ESCH offspring count.
    """

    name: str
    max_evaluations: int = 10000
    tol_x: float = 1e-8
    tol_f: float = 1e-8
    population_size: int = 0
    max_mutations: int = 1
    swarm_size: int = 40
    stdev_tol: float = 1e-6
    phi: Optional[float] = None
    ring_topology: bool = False
    clip_to_bounds: bool = False
    num_parents: int = 40
    num_offspring: int = 60


def create_optimizer(config: OptimizerConfig, rng: Seed = None) -> DerivativeFreeOptimizer:
    """
    Create an optimizer from a configuration.

    Args:
        config: Optimizer configuration.
        rng: Generator or seed handed to the optimizer.

    Returns:
        A freshly constructed optimizer in the ``CREATED`` state.

    Raises:
        ValueError: If the name is not supported or a parameter is invalid.
    """
    name_lower = config.name.lower()

    if name_lower == "crs":
        return ControlledRandomSearch(
            tol_x=config.tol_x,
            tol_f=config.tol_f,
            max_evaluations=config.max_evaluations,
            population_size=config.population_size,
            max_mutations=config.max_mutations,
            rng=rng,
        )
    elif name_lower == "cso":
        return CompetitiveSwarm(
            tol=config.tol_f,
            stdev_tol=config.stdev_tol,
            swarm_size=config.swarm_size,
            max_evaluations=config.max_evaluations,
            phi=config.phi,
            ring_topology=config.ring_topology,
            clip_to_bounds=config.clip_to_bounds,
            rng=rng,
        )
    elif name_lower == "esch":
        return EvolutionStrategy(
            max_evaluations=config.max_evaluations,
            num_parents=config.num_parents,
            num_offspring=config.num_offspring,
            rng=rng,
        )
    else:
        raise ValueError(
            f"Unsupported optimizer name '{config.name}'. "
            "Supported names: 'crs', 'cso', 'esch'."
        )


__all__ = ["OptimizerConfig", "create_optimizer"]
