import numpy as np
import pytest

from dfconduit.optimize import ControlledRandomSearch, Status


def sphere(x: np.ndarray) -> float:
    return float(x @ x)


def rosenbrock(x: np.ndarray) -> float:
    return (1 - x[0]) ** 2 + 100 * (x[1] - x[0] ** 2) ** 2


class Recorder:
    """Objective wrapper keeping a copy of every evaluated point."""

    def __init__(self, fun):
        self.fun = fun
        self.points = []

    def __call__(self, x):
        self.points.append(np.array(x, copy=True))
        return self.fun(x)


def test_sphere_converges_from_offset_guess(rng):
    crs = ControlledRandomSearch(
        tol_x=1e-6, tol_f=1e-6, max_evaluations=5000, population_size=22, rng=rng
    )
    res = crs.optimize(sphere, lower=[-10, -10], upper=[10, 10], guess=[5.0, 5.0])
    assert np.linalg.norm(res.x) < 1e-2
    assert res.nfev <= 5000
    assert res.njev == 0


def test_optimize_reports_convergence_flag(rng):
    """A run stopped by the tolerance test reports success=True.

    Deviation from the reference behavior, which always reported
    converged=False from optimize().
    """
    crs = ControlledRandomSearch(tol_x=1e-4, tol_f=1e-4, max_evaluations=100000, rng=rng)
    res = crs.optimize(sphere, [-5, -5], [5, 5], [1.0, 1.0])
    assert res.status is Status.CONVERGED
    assert res.success
    assert res.nfev < 100000


def test_budget_smaller_than_population_exhausts_after_initialization(rng):
    crs = ControlledRandomSearch(max_evaluations=50, rng=rng)
    res = crs.optimize(sphere, -np.ones(5), np.ones(5), np.zeros(5))
    assert res.status is Status.EXHAUSTED
    assert not res.success
    # the initial population of 10 * (5 + 1) points is evaluated as one batch
    assert res.nfev == 60
    assert res.nit == 0


def test_budget_is_respected_during_iterations(rng):
    crs = ControlledRandomSearch(tol_x=0.0, tol_f=0.0, max_evaluations=150, rng=rng)
    res = crs.optimize(rosenbrock, [-2, -2], [2, 2], [-1.2, 1.0])
    assert res.status is Status.EXHAUSTED
    assert res.nfev == 150


def test_best_value_is_monotone_and_points_stay_in_bounds(rng):
    lower, upper = np.array([-1.0, 0.0, 2.0]), np.array([1.0, 0.5, 3.0])
    recorder = Recorder(lambda x: float(np.sum((x - 1.7) ** 2)))
    crs = ControlledRandomSearch(tol_x=0.0, tol_f=0.0, max_evaluations=800, max_mutations=3, rng=rng)
    crs.initialize(recorder, lower, upper, guess=np.array([0.0, 0.25, 2.5]))
    history = [crs.best()[1]]
    while not crs.done:
        crs.iterate()
        history.append(crs.best()[1])
        assert len(crs.population) == crs.npts
    assert all(b <= a for a, b in zip(history, history[1:]))
    evaluated = np.array(recorder.points)
    assert np.all(evaluated >= lower) and np.all(evaluated <= upper)
    assert len(evaluated) == crs.nfev


def test_guess_occupies_slot_zero_and_is_clamped(rng):
    crs = ControlledRandomSearch(population_size=5, rng=rng)
    crs.initialize(sphere, [-1, -1], [1, 1], guess=[0.5, 3.0])
    np.testing.assert_array_equal(crs.points[0], [0.5, 1.0])
    assert crs.status is Status.INITIALIZED
    assert crs.nfev == 5


def test_iterate_after_termination_is_a_noop(rng):
    crs = ControlledRandomSearch(max_evaluations=100, rng=rng)
    res = crs.optimize(sphere, [-3, -3], [3, 3], [1.0, 2.0])
    nfev, x = crs.nfev, res.x.copy()
    for _ in range(5):
        crs.iterate()
    assert crs.nfev == nfev
    np.testing.assert_array_equal(crs.best()[0], x)
    assert crs.status is res.status


def test_iterate_before_initialize_raises():
    crs = ControlledRandomSearch()
    with pytest.raises(RuntimeError):
        crs.iterate()
    assert crs.status is Status.CREATED


def test_default_bounds_surround_guess(rng):
    crs = ControlledRandomSearch(max_evaluations=200, rng=rng)
    crs.initialize(sphere, guess=[10.0, -10.0])
    np.testing.assert_array_equal(crs.bounds.lower, [6.0, -14.0])
    np.testing.assert_array_equal(crs.bounds.upper, [14.0, -6.0])


def test_default_population_size(rng):
    crs = ControlledRandomSearch(rng=rng)
    crs.initialize(sphere, np.zeros(3), np.ones(3), np.full(3, 0.5))
    assert crs.npts == 40
    assert len(crs.population) == 40


def test_population_too_small_for_dimension_raises(rng):
    crs = ControlledRandomSearch(population_size=3, rng=rng)
    with pytest.raises(ValueError):
        crs.initialize(sphere, np.zeros(3), np.ones(3), np.zeros(3))


@pytest.mark.parametrize(
    "kwargs",
    [
        {"tol_x": -1.0},
        {"tol_f": -1e-3},
        {"max_evaluations": 0},
        {"population_size": -1},
        {"max_mutations": -2},
    ],
)
def test_invalid_parameters_raise(kwargs):
    with pytest.raises(ValueError):
        ControlledRandomSearch(**kwargs)


def test_malformed_bounds_raise(rng):
    crs = ControlledRandomSearch(rng=rng)
    with pytest.raises(ValueError):
        crs.initialize(sphere, [1.0, 0.0], [0.0, 1.0], [0.5, 0.5])
    with pytest.raises(ValueError):
        crs.initialize(sphere, [0.0, 0.0], [1.0, 1.0], [0.5, 0.5, 0.5])
    with pytest.raises(ValueError):
        crs.initialize(sphere, [0.0], None, [0.5])


def test_zero_mutations_always_draws_fresh_trials(rng):
    crs = ControlledRandomSearch(tol_x=1e-10, tol_f=1e-10, max_evaluations=3000, max_mutations=0, rng=rng)
    res = crs.optimize(sphere, [-2, -2], [2, 2], [1.5, -1.5])
    assert res.fun < 1e-2


def test_result_string_summary(rng):
    crs = ControlledRandomSearch(max_evaluations=100, rng=rng)
    res = crs.optimize(sphere, [-1], [1], [0.5])
    text = str(res)
    assert text.startswith("x*: [")
    assert f"calls to f: {res.nfev}" in text
    assert "calls to df/dx: 0" in text
