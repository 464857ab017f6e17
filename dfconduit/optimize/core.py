"""Core interfaces shared across derivative-free optimization algorithms."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Union

import numpy as np

from ..diagnostics import assert_within_bounds, is_debug_enabled
from ..logging import get_logger
from .objective import ObjectiveFunction
from .utils import make_rng

Array = np.ndarray
Objective = Callable[[Array], float]
Seed = Union[None, int, np.random.Generator]

RELEPS = float(np.finfo(float).eps)
DEFAULT_BOUND_RADIUS = 4.0

logger = get_logger(__name__)


class Status(Enum):
    """Lifecycle state of an optimizer instance."""

    CREATED = "created"
    INITIALIZED = "initialized"
    ITERATING = "iterating"
    CONVERGED = "converged"
    EXHAUSTED = "exhausted"

    @property
    def terminal(self) -> bool:
        return self in (Status.CONVERGED, Status.EXHAUSTED)


_MESSAGES = {
    Status.CONVERGED: "Convergence tolerance satisfied.",
    Status.EXHAUSTED: "Maximum number of function evaluations reached.",
}


@dataclass(frozen=True)
class Bounds:
    """
    Box constraints ``lower <= x <= upper``.

    Both arrays are converted to float64 copies on construction. Equal lower and
    upper values are allowed and pin the coordinate.
    """

    lower: Array
    upper: Array

    def __post_init__(self) -> None:
        lower = np.array(self.lower, dtype=float).reshape(-1)
        upper = np.array(self.upper, dtype=float).reshape(-1)
        if lower.shape != upper.shape:
            raise ValueError(
                f"lower and upper bounds must have the same shape, got "
                f"{lower.shape} and {upper.shape}"
            )
        if lower.size == 0:
            raise ValueError("bounds must have at least one dimension")
        if not (np.all(np.isfinite(lower)) and np.all(np.isfinite(upper))):
            raise ValueError("all bounds must be finite")
        if np.any(lower > upper):
            bad = int(np.argmax(lower > upper))
            raise ValueError(
                f"lower bound exceeds upper bound in dimension {bad}: "
                f"{lower[bad]} > {upper[bad]}"
            )
        object.__setattr__(self, "lower", lower)
        object.__setattr__(self, "upper", upper)

    @classmethod
    def around(cls, center: Array, radius: float) -> "Bounds":
        """Box of half-width ``radius`` centered on ``center``."""
        if radius < 0:
            raise ValueError("radius must be non-negative")
        center = np.asarray(center, dtype=float).reshape(-1)
        return cls(center - radius, center + radius)

    @property
    def dim(self) -> int:
        return int(self.lower.size)

    @property
    def width(self) -> Array:
        return self.upper - self.lower

    def clip(self, x: Array) -> Array:
        """Clamp ``x`` into the box in place and return it."""
        return np.clip(x, self.lower, self.upper, out=x)

    def contains(self, x: Array) -> bool:
        x = np.asarray(x, dtype=float)
        return bool(np.all(x >= self.lower) and np.all(x <= self.upper))


def resolve_problem(
    lower: Optional[Array],
    upper: Optional[Array],
    guess: Optional[Array],
) -> tuple[Bounds, Optional[Array]]:
    """
    Build the search box and the clamped starting point.

    Without explicit bounds the box is ``guess +/- DEFAULT_BOUND_RADIUS``.
    Returns ``(bounds, x0)`` where ``x0`` is None when no guess was given.
    """
    if (lower is None) != (upper is None):
        raise ValueError("lower and upper bounds must be given together")
    if lower is None:
        if guess is None:
            raise ValueError("either bounds or an initial guess must be given")
        bounds = Bounds.around(guess, DEFAULT_BOUND_RADIUS)
    else:
        bounds = Bounds(lower, upper)
    if guess is None:
        return bounds, None
    x0 = np.array(guess, dtype=float).reshape(-1)
    if x0.size != bounds.dim:
        raise ValueError(
            f"guess has {x0.size} coordinates but bounds have {bounds.dim} dimensions"
        )
    if not np.all(np.isfinite(x0)):
        raise ValueError("guess must be finite")
    return bounds, bounds.clip(x0)


@dataclass
class OptimizeResult:
    """Result returned by every optimizer in this module.

    ``njev`` is always zero: none of the algorithms evaluate derivatives.
    """

    x: Array
    fun: float
    nit: int
    success: bool
    status: Status
    message: str
    nfev: int
    njev: int = 0

    def __str__(self) -> str:
        coords = " ".join(f"{v:.6f}" for v in np.asarray(self.x, dtype=float))
        return (
            f"x*: [{coords}]\n"
            f"calls to f: {self.nfev}\n"
            f"calls to df/dx: {self.njev}\n"
            f"converged: {self.success}"
        )


class DerivativeFreeOptimizer(ABC):
    """
    Three-phase lifecycle shared by all population-based optimizers.

    ``initialize`` binds the objective and bounds and builds the population,
    ``iterate`` advances the search by one generation, and ``optimize`` runs
    both until a terminal state. Subclasses implement ``_setup`` (population
    construction), ``_step`` (one generation, returning True when their
    convergence test passes) and ``best``.
    """

    def __init__(self, max_evaluations: int, rng: Seed = None) -> None:
        if max_evaluations <= 0:
            raise ValueError(f"max_evaluations must be positive, got {max_evaluations}")
        self.max_evaluations = int(max_evaluations)
        self.rng = make_rng(rng)
        self.status = Status.CREATED
        self.nit = 0
        self.bounds: Optional[Bounds] = None
        self._objective = None

    @property
    def done(self) -> bool:
        return self.status.terminal

    @property
    def nfev(self) -> int:
        return 0 if self._objective is None else self._objective.nfev

    def initialize(
        self,
        fun: Objective,
        lower: Optional[Array] = None,
        upper: Optional[Array] = None,
        guess: Optional[Array] = None,
        torch_input: bool = False,
    ) -> None:
        """
        Bind the problem and build the initial population.

        Parameters
        ----------
        fun:
            Objective mapping a point to a scalar. NumPy arrays are passed in
            unless ``torch_input`` is set, in which case a float64 tensor is.
        lower, upper:
            Box bounds. When both are omitted they default to ``guess +/- 4``.
        guess:
            Starting point. Clamped into the bounds before use.

        Raises
        ------
        ValueError
            On malformed bounds, dimension mismatches or parameters that are
            incompatible with the problem dimension.
        """
        bounds, x0 = resolve_problem(lower, upper, guess)
        self.bounds = bounds
        self._objective = ObjectiveFunction(fun, torch_input=torch_input)
        self.nit = 0
        self._setup(x0)
        self.status = Status.INITIALIZED
        logger.debug(
            "%s initialized: dim=%d, nfev=%d",
            type(self).__name__,
            bounds.dim,
            self.nfev,
        )
        if self.nfev >= self.max_evaluations:
            self._terminate(Status.EXHAUSTED)

    def iterate(self) -> None:
        """Advance one generation. A no-op once a terminal state is reached."""
        if self.status is Status.CREATED:
            raise RuntimeError("initialize() must be called before iterate()")
        if self.done:
            return
        self.status = Status.ITERATING
        converged = self._step()
        self.nit += 1
        if is_debug_enabled():
            self._check_invariants()
        if converged:
            self.status = Status.CONVERGED
        if self.nfev >= self.max_evaluations:
            self.status = Status.EXHAUSTED
        if self.done:
            self._terminate(self.status)

    def optimize(
        self,
        fun: Objective,
        lower: Optional[Array] = None,
        upper: Optional[Array] = None,
        guess: Optional[Array] = None,
        torch_input: bool = False,
    ) -> OptimizeResult:
        """Initialize, iterate until a terminal state and return the result."""
        self.initialize(fun, lower, upper, guess, torch_input=torch_input)
        while not self.done:
            self.iterate()
        return self.result()

    def result(self) -> OptimizeResult:
        """Snapshot of the current best point and counters."""
        if self.status is Status.CREATED:
            raise RuntimeError("initialize() must be called before result()")
        x, fx = self.best()
        return OptimizeResult(
            x=x.copy(),
            fun=float(fx),
            nit=self.nit,
            success=self.status is Status.CONVERGED,
            status=self.status,
            message=_MESSAGES.get(self.status, "Optimization in progress."),
            nfev=self.nfev,
        )

    def _terminate(self, status: Status) -> None:
        self.status = status
        _, fx = self.best()
        logger.info(
            "%s stopped (%s) after %d iterations, %d evaluations, f=%.6g",
            type(self).__name__,
            status.value,
            self.nit,
            self.nfev,
            fx,
        )

    def _check_invariants(self) -> None:
        x, _ = self.best()
        assert_within_bounds(x, self.bounds.lower, self.bounds.upper)

    @abstractmethod
    def _setup(self, guess: Optional[Array]) -> None:
        """Build the initial population for the bound problem."""

    @abstractmethod
    def _step(self) -> bool:
        """Run one generation; return True when the convergence test passes."""

    @abstractmethod
    def best(self) -> tuple[Array, float]:
        """Current best point and its objective value."""


__all__ = [
    "Array",
    "Objective",
    "Seed",
    "RELEPS",
    "DEFAULT_BOUND_RADIUS",
    "Status",
    "Bounds",
    "resolve_problem",
    "OptimizeResult",
    "DerivativeFreeOptimizer",
]
