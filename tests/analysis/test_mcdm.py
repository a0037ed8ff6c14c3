"""TOPSIS decision helper."""

import numpy as np
import pytest

from mapo.analysis import topsis_scores


def test_topsis_scores_in_unit_interval_and_best_is_argmax():
    F = np.array([[1.0, 5.0], [2.0, 2.0], [5.0, 1.0], [3.0, 3.5]])
    res = topsis_scores(F)

    assert np.all((res.scores >= 0.0) & (res.scores <= 1.0))
    assert res.best_index == int(np.nanargmax(res.scores))
    np.testing.assert_allclose(res.best_point, F[res.best_index])
    assert res.best_index == 1


def test_dominating_point_scores_one():
    F = np.array([[0.0, 0.0], [1.0, 1.0], [2.0, 0.5]])
    res = topsis_scores(F)
    assert res.best_index == 0
    assert res.scores[0] == pytest.approx(1.0)


def test_weights_shift_the_choice():
    F = np.array([[1.0, 10.0], [10.0, 1.0]])
    assert topsis_scores(F, weights=[0.9, 0.1]).best_index == 0
    assert topsis_scores(F, weights=[0.1, 0.9]).best_index == 1


def test_feasible_points_only_when_available():
    F = np.array([[0.0, 0.0], [1.0, 1.0], [2.0, 0.5]])
    res = topsis_scores(F, feasible=np.array([False, True, True]))

    assert res.feasible_only
    assert np.isnan(res.scores[0])
    assert res.best_index in (1, 2)


def test_no_feasible_points_falls_back_to_all(caplog):
    F = np.array([[0.0, 0.0], [1.0, 1.0]])
    with caplog.at_level("WARNING", logger="mapo.analysis.mcdm"):
        res = topsis_scores(F, feasible=np.array([False, False]))
    assert not res.feasible_only
    assert res.best_index == 0
    assert "no feasible candidates" in caplog.text


def test_non_finite_rows_get_nan():
    F = np.array([[np.inf, 1.0], [1.0, 2.0], [np.nan, 0.0], [2.0, 1.0]])
    res = topsis_scores(F)
    assert np.isnan(res.scores[0]) and np.isnan(res.scores[2])
    assert res.best_index in (1, 3)


def test_zero_column_does_not_divide_by_zero():
    F = np.array([[0.0, 1.0], [0.0, 2.0], [0.0, 3.0]])
    res = topsis_scores(F)
    assert np.all(np.isfinite(res.scores))
    assert res.best_index == 0


def test_single_point():
    res = topsis_scores(np.array([[3.0, 4.0]]))
    assert res.best_index == 0
    assert 0.0 <= res.scores[0] <= 1.0


@pytest.mark.parametrize(
    "weights",
    [[1.0], [-1.0, 2.0], [0.0, 0.0], [np.nan, 1.0]],
)
def test_invalid_weights(weights):
    with pytest.raises(ValueError):
        topsis_scores(np.array([[1.0, 2.0], [2.0, 1.0]]), weights=weights)


def test_all_rows_non_finite_raises():
    with pytest.raises(ValueError):
        topsis_scores(np.array([[np.inf, 1.0], [np.nan, 2.0]]))
