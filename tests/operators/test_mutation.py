import numpy as np
import pytest

from mapo.foundation.exceptions import ProblemDimensionError
from mapo.operators.real import PolynomialMutation

LOWER = np.zeros(4)
UPPER = np.array([1.0, 2.0, 10.0, 1.0])


def test_mutation_stays_in_bounds():
    rng = np.random.default_rng(7)
    X = rng.uniform(LOWER, UPPER, size=(200, 4))
    out = PolynomialMutation(rate=4.0, eta=5.0, lower=LOWER, upper=UPPER)(X, rng)
    assert np.all(out >= LOWER) and np.all(out <= UPPER)
    assert not np.allclose(out, X)


def test_mutation_does_not_modify_input():
    rng = np.random.default_rng(1)
    X = rng.uniform(LOWER, UPPER, size=(10, 4))
    before = X.copy()
    PolynomialMutation(rate=4.0, lower=LOWER, upper=UPPER)(X, rng)
    np.testing.assert_array_equal(X, before)


def test_rate_is_normalized_by_dimension():
    assert PolynomialMutation(rate=1.0, lower=LOWER, upper=UPPER).prob_var == pytest.approx(0.25)


def test_zero_rate_is_identity():
    rng = np.random.default_rng(0)
    X = rng.uniform(LOWER, UPPER, size=(20, 4))
    out = PolynomialMutation(rate=0.0, lower=LOWER, upper=UPPER)(X, rng)
    np.testing.assert_array_equal(out, X)


def test_degenerate_dimension_is_skipped():
    lower = np.array([0.0, 0.5])
    upper = np.array([1.0, 0.5])
    X = np.array([[0.3, 0.5]] * 30)
    out = PolynomialMutation(rate=2.0, lower=lower, upper=upper)(X, np.random.default_rng(2))
    assert np.all(out[:, 1] == 0.5)


def test_higher_eta_gives_smaller_steps():
    X = np.full((500, 4), 0.5) * UPPER
    small = PolynomialMutation(rate=4.0, eta=100.0, lower=LOWER, upper=UPPER)(X, np.random.default_rng(3))
    large = PolynomialMutation(rate=4.0, eta=1.0, lower=LOWER, upper=UPPER)(X, np.random.default_rng(3))
    assert np.mean(np.abs(small - X)) < np.mean(np.abs(large - X))


class ScriptedRandom:
    """Generator stand-in returning queued grids from ``random``, one per call."""

    def __init__(self, *grids):
        self.grids = list(grids)

    def random(self, size=None):
        grid = np.asarray(self.grids.pop(0), dtype=float)
        return np.broadcast_to(grid, size).copy()


def _reference_deltaq(y, u, eta):
    delta1, delta2 = y, 1.0 - y
    if u <= 0.5:
        return (2.0 * u + (1.0 - 2.0 * u) * (1.0 - delta1) ** (eta + 1.0)) ** (1.0 / (eta + 1.0)) - 1.0
    return 1.0 - (2.0 * (1.0 - u) + 2.0 * (u - 0.5) * (1.0 - delta2) ** (eta + 1.0)) ** (1.0 / (eta + 1.0))


@pytest.mark.parametrize("eta", [1.0, 20.0])
def test_forced_draws_match_closed_form_step(eta):
    u = np.array([0.1, 0.3, 0.7, 0.95])
    y = 0.4
    X = np.full((1, 4), y)
    # first grid is the mutation mask (0 < rate / n_var), second is u
    rng = ScriptedRandom(np.zeros(4), u)
    out = PolynomialMutation(rate=1.0, eta=eta, lower=np.zeros(4), upper=np.ones(4))(X, rng)

    expected = [np.clip(y + _reference_deltaq(y, ui, eta), 0.0, 1.0) for ui in u]
    np.testing.assert_allclose(out[0], expected)
    assert np.all(out[0, :2] < y) and np.all(out[0, 2:] > y)


def test_step_scales_with_bound_width():
    u = np.array([0.3, 0.7])
    X = np.array([[4.0, 4.0]])
    rng = ScriptedRandom(np.zeros(2), u)
    out = PolynomialMutation(rate=1.0, eta=20.0, lower=np.zeros(2), upper=np.full(2, 10.0))(X, rng)
    expected = [4.0 + 10.0 * _reference_deltaq(0.4, ui, 20.0) for ui in u]
    np.testing.assert_allclose(out[0], expected)


def test_width_mismatch_is_a_dimension_error():
    with pytest.raises(ProblemDimensionError):
        PolynomialMutation(lower=LOWER, upper=UPPER)(np.zeros((3, 2)), np.random.default_rng(0))
