"""SBX crossover behaviour."""

import numpy as np
import pytest
from numpy.testing import assert_allclose

from mapo.foundation.exceptions import BoundsError, ProblemDimensionError
from mapo.operators.real import SBXCrossover, sbx_crossover

LOWER = np.array([-5.0, -5.0, -5.0])
UPPER = np.array([5.0, 5.0, 5.0])


class ConstantRandom:
    """Generator stand-in whose uniform draws are all ``value``."""

    def __init__(self, value):
        self.value = value

    def random(self, size=None):
        if size is None:
            return self.value
        return np.full(size, self.value)


def test_sbx_forced_u_keeps_children_in_bounds_and_distinct():
    # u = 0.3 also makes the per-variable coin (0.3 > 0.5 is False) cross the variable
    c1, c2 = sbx_crossover(np.array([0.2]), np.array([0.8]), 20.0, np.array([0.0]), np.array([1.0]), ConstantRandom(0.3))

    beta = 0.6 ** (1.0 / 21.0)
    assert_allclose(c1, [0.5 * (1.0 - beta * 0.6)])
    assert_allclose(c2, [0.5 * (1.0 + beta * 0.6)])
    assert 0.0 <= c1[0] <= 1.0 and 0.0 <= c2[0] <= 1.0
    assert c1[0] != c2[0]


def test_coin_above_half_leaves_parents_untouched():
    parents = np.array([[[0.2, -1.0, 3.0], [0.8, 2.0, -4.0]]])
    out = SBXCrossover(15.0, lower=LOWER, upper=UPPER)(parents, ConstantRandom(0.7))
    assert_allclose(out, parents)


def test_near_equal_parents_are_not_crossed():
    parents = np.array([[[1.0, 1.0, 1.0], [1.0, 1.0 + 1e-16, 1.0]]])
    out = SBXCrossover(15.0, lower=LOWER, upper=UPPER)(parents, np.random.default_rng(0))
    assert_allclose(out, parents)


def test_children_respect_bounds_and_preserve_mean_when_unclamped():
    rng = np.random.default_rng(4)
    parents = rng.uniform(-4.0, 4.0, size=(50, 2, 3))
    out = SBXCrossover(2.0, lower=LOWER, upper=UPPER)(parents, rng)

    assert out.shape == parents.shape
    assert np.all(out >= LOWER) and np.all(out <= UPPER)
    inside = np.all((out > LOWER) & (out < UPPER), axis=1)
    assert_allclose(out.sum(axis=1)[inside], parents.sum(axis=1)[inside], atol=1e-9)


def test_spread_factor_branches():
    sbx = SBXCrossover(1.0, lower=LOWER, upper=UPPER)
    beta = sbx.spread_factor(np.array([0.125, 0.5, 0.875]))
    assert_allclose(beta, [0.5, 1.0, 2.0])


def test_parents_shape_validation():
    sbx = SBXCrossover(20.0, lower=LOWER, upper=UPPER)
    with pytest.raises(ValueError):
        sbx(np.zeros((4, 3)), np.random.default_rng(0))
    with pytest.raises(ProblemDimensionError):
        sbx(np.zeros((1, 2, 2)), np.random.default_rng(0))


def test_invalid_bounds_use_problem_error_kinds():
    with pytest.raises(BoundsError):
        SBXCrossover(20.0, lower=np.array([0.0, 2.0]), upper=np.array([1.0, 1.0]))
    with pytest.raises(ProblemDimensionError):
        SBXCrossover(20.0, lower=np.zeros(2), upper=np.ones(3))


def test_negative_eta_rejected():
    with pytest.raises(ValueError):
        SBXCrossover(-1.0, lower=LOWER, upper=UPPER)
