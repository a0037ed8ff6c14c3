from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np


def _logger() -> logging.Logger:
    return logging.getLogger(__name__)


@dataclass
class MCDMResult:
    scores: np.ndarray
    best_index: int
    best_point: np.ndarray
    candidates: np.ndarray | None = None
    feasible_only: bool = False


def _validate_front(F: np.ndarray) -> np.ndarray:
    F = np.asarray(F, dtype=float)
    if F.ndim != 2 or F.shape[0] == 0 or F.shape[1] == 0:
        raise ValueError("F must be a 2D array with at least one point and one objective.")
    return F


def _validate_weights(weights: np.ndarray | None, n_obj: int) -> np.ndarray:
    if weights is None:
        return np.full(n_obj, 1.0 / n_obj)
    w = np.asarray(weights, dtype=float).reshape(-1)
    if w.shape[0] != n_obj:
        raise ValueError("weights must be 1D with length equal to number of objectives.")
    if np.any(w < 0) or not np.all(np.isfinite(w)):
        raise ValueError("weights must be finite and non-negative.")
    if np.allclose(w.sum(), 0):
        raise ValueError("weights must not sum to zero.")
    return w / w.sum()


def topsis_scores(
    F: np.ndarray,
    weights: np.ndarray | None = None,
    feasible: np.ndarray | None = None,
    *,
    eps: float = np.finfo(float).eps,
) -> MCDMResult:
    """
    Rank points by TOPSIS closeness (all objectives minimized).

    Candidates are rows with finite objectives; when any candidate is
    feasible, infeasible ones are dropped. Columns are vector-normalized
    (zero norms treated as 1) and weighted; the ideal point is the column
    minimum and the anti-ideal the column maximum. Closeness is
    ``d- / (d+ + d- + eps)``, in ``[0, 1]``, higher is better.
    Non-candidates get a ``NaN`` score.
    """
    F = _validate_front(F)
    w = _validate_weights(weights, F.shape[1])

    candidates = np.all(np.isfinite(F), axis=1)
    if not np.any(candidates):
        raise ValueError("TOPSIS needs at least one point with finite objectives.")

    feasible_only = False
    if feasible is not None:
        feas = np.asarray(feasible, dtype=bool).reshape(-1)
        if feas.shape[0] != F.shape[0]:
            raise ValueError("feasible must have one entry per point.")
        if np.any(candidates & feas):
            candidates = candidates & feas
            feasible_only = True
        else:
            _logger().warning("TOPSIS: no feasible candidates; ranking all finite points.")

    idx = np.flatnonzero(candidates)
    sub = F[idx]
    norms = np.sqrt(np.sum(sub**2, axis=0))
    norms[norms == 0.0] = 1.0
    V = (sub / norms) * w

    ideal = np.min(V, axis=0)
    anti_ideal = np.max(V, axis=0)
    d_plus = np.sqrt(np.sum((V - ideal) ** 2, axis=1))
    d_minus = np.sqrt(np.sum((V - anti_ideal) ** 2, axis=1))
    closeness = d_minus / (d_plus + d_minus + eps)

    scores = np.full(F.shape[0], np.nan)
    scores[idx] = closeness
    best_idx = int(idx[int(np.argmax(closeness))])
    return MCDMResult(
        scores=scores,
        best_index=best_idx,
        best_point=F[best_idx].copy(),
        candidates=candidates,
        feasible_only=feasible_only,
    )


__all__ = ["MCDMResult", "topsis_scores"]
