"""Pytest configuration and shared fixtures for dfconduit tests.

This module provides:
- Deterministic RNG fixtures for numpy and torch
- Reset of debug mode so invariant checks run in every test
"""

import os

import numpy as np
import pytest
import torch

from dfconduit.diagnostics import debug_context


def _seed() -> int:
    return int(os.environ.get("TEST_RNG_SEED", "0"))


@pytest.fixture(scope="function")
def rng() -> np.random.Generator:
    """Provide a deterministic numpy RNG for tests.

    Uses seed from TEST_RNG_SEED environment variable (default: 0).
    """
    return np.random.default_rng(_seed())


@pytest.fixture(scope="function")
def torch_rng() -> torch.Generator:
    """Provide a deterministic torch RNG for tests."""
    generator = torch.Generator()
    generator.manual_seed(_seed())
    return generator


@pytest.fixture(scope="function", autouse=True)
def set_random_seeds() -> None:
    """Seed the global numpy and torch states for code that draws from them."""
    np.random.seed(_seed())
    torch.manual_seed(_seed())


@pytest.fixture(scope="function", autouse=True)
def debug_checks():
    """Run every test with optimizer invariant checks enabled."""
    with debug_context(True):
        yield
