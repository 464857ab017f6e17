import numpy as np
import pytest

from dfconduit.optimize import EvolutionStrategy, Status, truncated_cauchy


def sphere(x: np.ndarray) -> float:
    return float(x @ x)


def test_truncated_cauchy_stays_in_bounds(rng):
    draws = np.array([truncated_cauchy(rng, -2.0, 3.0) for _ in range(5000)])
    assert np.all(draws >= -2.0) and np.all(draws <= 3.0)
    # negative Cauchy samples fold onto the lower half of the box
    assert np.mean(draws <= 0.5) == pytest.approx(0.5, abs=0.03)
    # P(-1 < c < 0 | |c| <= 5) = atan(1) / (2 atan(5)) ~ 0.286
    assert np.mean(draws < -1.5) == pytest.approx(0.286, abs=0.03)


def test_runs_until_budget_and_never_reports_convergence(rng):
    esch = EvolutionStrategy(max_evaluations=500, num_parents=10, num_offspring=20, rng=rng)
    res = esch.optimize(sphere, -np.ones(3), np.ones(3), np.full(3, 0.5))
    assert res.status is Status.EXHAUSTED
    assert not res.success
    # 10 parents, then generations of 20 offspring: 10 + 25 * 20 = 510
    assert res.nfev == 510
    assert res.nit == 25


def test_truncation_selection_is_elitist(rng):
    esch = EvolutionStrategy(max_evaluations=2000, num_parents=6, num_offspring=12, rng=rng)
    esch.initialize(sphere, -2 * np.ones(2), 2 * np.ones(2), np.array([1.0, 1.0]))
    previous = esch.best()[1]
    while not esch.done:
        esch.iterate()
        assert np.all(np.diff(esch.parent_fitness) >= 0)
        assert esch.parent_fitness[-1] <= esch.offspring_fitness.min()
        assert esch.best()[1] <= previous
        previous = esch.best()[1]


def test_guess_is_first_parent(rng):
    esch = EvolutionStrategy(max_evaluations=100, num_parents=4, num_offspring=4, rng=rng)
    esch.initialize(sphere, -np.ones(2), np.ones(2), np.array([0.25, -0.75]))
    np.testing.assert_array_equal(esch.parents[0], [0.25, -0.75])
    assert esch.parent_fitness[0] == pytest.approx(0.625)
    assert esch.nfev == 4


def test_offspring_stay_in_bounds(rng):
    lower, upper = np.array([0.0, -5.0, 10.0]), np.array([1.0, 5.0, 11.0])
    esch = EvolutionStrategy(max_evaluations=400, num_parents=5, num_offspring=10, rng=rng)
    esch.initialize(sphere, lower, upper, np.array([0.5, 0.0, 10.5]))
    while not esch.done:
        esch.iterate()
        assert np.all(esch.offspring >= lower) and np.all(esch.offspring <= upper)
        assert np.all(esch.parents >= lower) and np.all(esch.parents <= upper)


def test_improves_on_sphere(rng):
    esch = EvolutionStrategy(max_evaluations=6000, num_parents=20, num_offspring=40, rng=rng)
    res = esch.optimize(sphere, -5 * np.ones(2), 5 * np.ones(2), np.array([4.0, 4.0]))
    assert res.fun < 0.05


def test_invalid_sizes_raise():
    with pytest.raises(ValueError):
        EvolutionStrategy(num_parents=0)
    with pytest.raises(ValueError):
        EvolutionStrategy(num_offspring=0)
