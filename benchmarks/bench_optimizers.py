"""Benchmark derivative-free optimizer hot paths."""

import time
from typing import Dict

import numpy as np

from dfconduit.optimize import (
    CompetitiveSwarm,
    ControlledRandomSearch,
    EvolutionStrategy,
    sample_slots,
)


def sphere(x: np.ndarray) -> float:
    return float(x @ x)


def benchmark_sample_slots(npts: int, n: int, repeats: int = 10000) -> Dict[str, float]:
    """Benchmark simplex slot sampling.

    Args:
        npts: Population size.
        n: Problem dimension (slots drawn per call).
        repeats: Number of simplices drawn.

    Returns:
        Dictionary with timing results.
    """
    rng = np.random.default_rng(0)

    # Warmup
    for _ in range(100):
        list(sample_slots(npts, n, 0, rng))

    start = time.perf_counter()
    for _ in range(repeats):
        list(sample_slots(npts, n, 0, rng))
    end = time.perf_counter()

    total_time = end - start
    return {
        "npts": npts,
        "n": n,
        "total_time_sec": total_time,
        "time_per_call_sec": total_time / repeats,
    }


def benchmark_optimizer(name: str, dim: int, max_evaluations: int = 20000) -> Dict[str, float]:
    """Benchmark a full run of one optimizer on the sphere function.

    Args:
        name: One of "crs", "cso", "esch".
        dim: Problem dimension.
        max_evaluations: Evaluation budget.

    Returns:
        Dictionary with timing results and the final objective value.
    """
    if name == "crs":
        opt = ControlledRandomSearch(tol_x=0.0, tol_f=0.0, max_evaluations=max_evaluations, rng=0)
    elif name == "cso":
        opt = CompetitiveSwarm(tol=0.0, stdev_tol=0.0, max_evaluations=max_evaluations, rng=0)
    else:
        opt = EvolutionStrategy(max_evaluations=max_evaluations, rng=0)

    lower, upper = -5.0 * np.ones(dim), 5.0 * np.ones(dim)
    start = time.perf_counter()
    res = opt.optimize(sphere, lower, upper, np.full(dim, 2.5))
    end = time.perf_counter()

    total_time = end - start
    return {
        "dim": dim,
        "nfev": res.nfev,
        "fun": res.fun,
        "total_time_sec": total_time,
        "evals_per_sec": res.nfev / total_time,
    }


if __name__ == "__main__":
    print("Benchmarking simplex sampling...")
    results = benchmark_sample_slots(npts=110, n=10)
    print("Sampling (110 points, dim 10):")
    print(f"  Time per simplex: {results['time_per_call_sec']*1e6:.2f} us")

    for name in ("crs", "cso", "esch"):
        results = benchmark_optimizer(name, dim=10)
        print(f"{name} (dim 10, {results['nfev']} evaluations):")
        print(f"  Evaluations per second: {results['evals_per_sec']:.0f}")
        print(f"  Final value: {results['fun']:.3e}")
