"""Diagnostics and debugging utilities for dfconduit."""

from .core import (
    assert_population_size,
    assert_within_bounds,
    bounds_violation,
)
from .debug_mode import (
    debug_context,
    is_debug_enabled,
    set_debug_enabled,
)

__all__ = [
    "bounds_violation",
    "assert_within_bounds",
    "assert_population_size",
    "is_debug_enabled",
    "set_debug_enabled",
    "debug_context",
]
