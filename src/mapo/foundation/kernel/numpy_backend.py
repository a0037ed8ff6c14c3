"""NumPy kernel backend.

Assumes F is float64 of shape (N, M) and G is float64 of shape (N, C) or None.
Comparator everywhere: smaller rank wins, then larger crowding distance.
"""

from __future__ import annotations

import numpy as np

from mapo.foundation.constraints import compute_violation

from .backend import KernelBackend


def _sanitize_objectives(F: np.ndarray) -> np.ndarray:
    """NaN objectives compare as +inf so failed evaluations never look good."""
    F = np.asarray(F, dtype=float)
    if F.ndim == 1:
        F = F.reshape(-1, 1)
    return np.where(np.isnan(F), np.inf, F)


def constrained_dominance_matrix(F: np.ndarray, G: np.ndarray | None = None) -> np.ndarray:
    """
    Boolean matrix D with D[i, j] True when i dominates j.

    Feasible beats infeasible; two infeasible compare by total violation
    (smaller wins); two feasible use plain Pareto dominance.
    """
    F = _sanitize_objectives(F)
    N = F.shape[0]
    cv = compute_violation(G, n=N)
    feasible = cv <= 0.0

    less_equal = F[:, None, :] <= F[None, :, :]
    strictly_less = F[:, None, :] < F[None, :, :]
    pareto = np.logical_and(np.all(less_equal, axis=2), np.any(strictly_less, axis=2))

    both_feasible = feasible[:, None] & feasible[None, :]
    feasible_vs_not = feasible[:, None] & ~feasible[None, :]
    both_infeasible = ~feasible[:, None] & ~feasible[None, :]
    less_violation = cv[:, None] < cv[None, :]

    return (both_feasible & pareto) | feasible_vs_not | (both_infeasible & less_violation)


def _fast_non_dominated_sort(F: np.ndarray, G: np.ndarray | None = None):
    """
    Classic O(N^2) fast non-dominated sort with constrained dominance.
    Returns:
      - fronts: list of index arrays per front (best first)
      - rank: array with the 1-based front rank for each solution
    """
    N = np.asarray(F).shape[0]
    if N == 0:
        return [], np.empty(0, dtype=int)

    dom_matrix = constrained_dominance_matrix(F, G)
    dominated_count = dom_matrix.sum(axis=0).astype(np.int64)
    rank = np.empty(N, dtype=int)
    fronts = []

    current = np.flatnonzero(dominated_count == 0)
    level = 1
    while current.size > 0:
        fronts.append(current)
        rank[current] = level
        dom_contrib = dom_matrix[current].sum(axis=0)
        dominated_count -= dom_contrib
        dominated_count[current] = -1
        dom_matrix[current] = False
        level += 1
        current = np.flatnonzero(dominated_count == 0)

    return fronts, rank


def _compute_crowding(F: np.ndarray, fronts) -> np.ndarray:
    """
    Crowding distance per front: boundaries get inf, interior points sum the
    normalized gap between neighbours. Objectives with a zero or non-finite
    range contribute nothing beyond the boundary markers.
    """
    F = _sanitize_objectives(F)
    N = F.shape[0]
    crowding = np.zeros(N)

    for front in fronts:
        front_arr = np.asarray(front, dtype=int)
        if front_arr.size == 0:
            continue
        if front_arr.size <= 2:
            crowding[front_arr] = np.inf
            continue

        fvals = F[front_arr]
        d = np.zeros(front_arr.size, dtype=float)

        for m in range(fvals.shape[1]):
            order = np.argsort(fvals[:, m], kind="mergesort")
            sorted_vals = fvals[order, m]

            d[order[0]] = np.inf
            d[order[-1]] = np.inf

            span = sorted_vals[-1] - sorted_vals[0]
            if not np.isfinite(span) or span <= 0.0:
                continue

            contrib = (sorted_vals[2:] - sorted_vals[:-2]) / span
            d[order[1:-1]] += contrib

        crowding[front_arr] = d

    return crowding


class NumPyKernel(KernelBackend):
    """
    Backend with pure NumPy implementations of the NSGA-II kernels.
    """

    def nsga2_ranking(self, F: np.ndarray, G: np.ndarray | None = None) -> tuple[np.ndarray, np.ndarray]:
        fronts, ranks = _fast_non_dominated_sort(F, G)
        crowding = _compute_crowding(F, fronts)
        return ranks, crowding

    def fronts(self, F: np.ndarray, G: np.ndarray | None = None) -> list[np.ndarray]:
        fronts, _ = _fast_non_dominated_sort(F, G)
        return fronts

    def tournament_selection(
        self,
        ranks: np.ndarray,
        crowding: np.ndarray,
        rng: np.random.Generator,
        n_parents: int,
    ) -> np.ndarray:
        """
        Binary tournament with replacement: smallest rank wins, ties broken by
        larger crowding; a full tie goes to the second contestant.
        """
        N = ranks.shape[0]
        if n_parents <= 0 or N == 0:
            return np.empty(0, dtype=int)
        contestants = rng.integers(0, N, size=(n_parents, 2))
        a = contestants[:, 0]
        b = contestants[:, 1]
        a_wins = (ranks[a] < ranks[b]) | ((ranks[a] == ranks[b]) & (crowding[a] > crowding[b]))
        return np.where(a_wins, a, b).astype(int)

    def survival_order(self, ranks: np.ndarray, crowding: np.ndarray, n_keep: int) -> np.ndarray:
        order = np.lexsort((-np.asarray(crowding, dtype=float), np.asarray(ranks)))
        return order[: max(int(n_keep), 0)]


__all__ = [
    "NumPyKernel",
    "constrained_dominance_matrix",
]
