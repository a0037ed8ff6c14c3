import numpy as np

from mapo.foundation.constraints import compute_violation, is_feasible


def test_compute_violation_basic():
    # Arrange
    G = np.array([[-1.0, 0.0], [0.2, -0.1], [0.5, 0.5]])

    # Act
    cv = compute_violation(G)

    # Assert
    assert np.allclose(cv, [0.0, 0.2, 1.0])
    assert is_feasible(G).tolist() == [True, False, False]


def test_unconstrained_is_all_feasible():
    assert np.array_equal(compute_violation(None, n=3), np.zeros(3))
    assert is_feasible(None, n=3).tolist() == [True, True, True]


def test_nan_constraint_counts_as_infinite_violation():
    G = np.array([[np.nan], [0.3]])
    cv = compute_violation(G)
    assert np.isinf(cv[0])
    assert cv[1] == 0.3
    assert not is_feasible(G)[0]


def test_feasibility_tolerance():
    G = np.array([[1e-9], [1e-3]])
    assert is_feasible(G, eps=1e-6).tolist() == [True, False]


def test_zero_width_constraint_matrix():
    G = np.empty((4, 0))
    assert np.array_equal(compute_violation(G), np.zeros(4))
