"""dfconduit - derivative-free black-box optimization on NumPy."""

__version__ = "0.1.0"

# Diagnostics
from .diagnostics import (
    assert_population_size,
    assert_within_bounds,
    debug_context,
    is_debug_enabled,
    set_debug_enabled,
)

# Logging
from .logging import configure_logging, get_logger, set_log_level

# Optimizers
from .optimize import (
    Bounds,
    CompetitiveSwarm,
    ControlledRandomSearch,
    DerivativeFreeOptimizer,
    EvolutionStrategy,
    ObjectiveFunction,
    OptimizeResult,
    OptimizerConfig,
    Status,
    create_optimizer,
)

__all__ = [
    "__version__",
    "Bounds",
    "CompetitiveSwarm",
    "ControlledRandomSearch",
    "DerivativeFreeOptimizer",
    "EvolutionStrategy",
    "ObjectiveFunction",
    "OptimizeResult",
    "OptimizerConfig",
    "Status",
    "assert_population_size",
    "assert_within_bounds",
    "configure_logging",
    "create_optimizer",
    "debug_context",
    "get_logger",
    "is_debug_enabled",
    "set_debug_enabled",
    "set_log_level",
]
