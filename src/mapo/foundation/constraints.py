"""
Utility helpers for constraint handling.

Sign convention everywhere: ``g(x) <= 0`` is satisfied.
"""

from __future__ import annotations

import numpy as np


def compute_violation(G: np.ndarray | None, *, n: int | None = None) -> np.ndarray:
    """Sum of positive parts per-solution; assumes G shape (N, n_constr).

    When *G* is ``None`` (unconstrained), returns zeros of length *n* (or 0).
    ``NaN`` entries count as an infinite violation.
    """
    if G is None:
        return np.zeros(n or 0, dtype=float)
    G = np.asarray(G, dtype=float)
    if G.ndim == 1:
        G = G.reshape(1, -1)
    if G.shape[1] == 0:
        return np.zeros(G.shape[0], dtype=float)
    positive = np.maximum(np.where(np.isnan(G), np.inf, G), 0.0)
    return np.asarray(np.sum(positive, axis=1), dtype=float)


def is_feasible(G: np.ndarray | None, *, n: int | None = None, eps: float = 0.0) -> np.ndarray:
    """Boolean feasibility mask; assumes G shape (N, n_constr).

    When *G* is ``None`` (unconstrained), returns an all-``True`` mask of length *n*.
    *eps* is a feasibility tolerance: constraints with ``g(x) <= eps`` are satisfied.
    """
    if G is None:
        return np.ones(n or 0, dtype=bool)
    G = np.asarray(G, dtype=float)
    if G.ndim == 1:
        G = G.reshape(1, -1)
    return np.asarray(np.all(G <= eps, axis=1), dtype=bool)


__all__ = ["compute_violation", "is_feasible"]
