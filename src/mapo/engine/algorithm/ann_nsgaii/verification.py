"""
Exact re-evaluation of surrogate results and final TOPSIS decision.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import numpy as np

from mapo.analysis.mcdm import topsis_scores
from mapo.engine.algorithm.config import VerificationSettings
from mapo.engine.algorithm.population import Population
from mapo.foundation.eval import EvaluationBackend
from mapo.foundation.eval.backends import SerialEvalBackend
from mapo.foundation.kernel import KernelBackend


def _logger() -> logging.Logger:
    return logging.getLogger(__name__)


@dataclass
class TopsisDecision:
    """Compromise solution picked by TOPSIS from a front."""

    index: int
    score: float
    variables: np.ndarray
    objectives: np.ndarray
    feasible: bool
    scores: np.ndarray
    source: str
    exact_objectives: np.ndarray | None = None
    exact_constraints: np.ndarray | None = None
    exact_feasible: bool | None = None


@dataclass
class VerificationInfo:
    enabled: bool
    verify_pareto_front: bool = False
    verify_topsis: bool = False
    verified_pareto_count: int = 0
    exact_front_size: int = 0
    exact_evaluations: int = 0


def _evaluate_exact(
    X: np.ndarray,
    evaluator: Any,
    backend: EvaluationBackend,
    n_obj: int,
    n_constr: int,
) -> Population:
    results = backend.evaluate(X, evaluator, n_obj, n_constr)
    return Population.from_results(X, results, n_obj, n_constr)


def select_by_topsis(front: Population, weights: Any = None, *, source: str = "surrogate") -> TopsisDecision | None:
    """Pick the TOPSIS winner of ``front``; ``None`` when no member has finite objectives."""
    if len(front) == 0 or not np.any(np.all(np.isfinite(front.F), axis=1)):
        return None
    res = topsis_scores(front.F, weights, front.feasible)
    idx = res.best_index
    return TopsisDecision(
        index=idx,
        score=float(res.scores[idx]),
        variables=front.X[idx].copy(),
        objectives=front.F[idx].copy(),
        feasible=bool(front.feasible[idx]),
        scores=res.scores,
        source=source,
    )


def verify_solutions(
    surrogate_front: Population,
    evaluator: Any,
    settings: VerificationSettings,
    n_obj: int,
    n_constr: int,
    *,
    eval_backend: EvaluationBackend | None = None,
    kernel: KernelBackend | None = None,
) -> tuple[Population | None, TopsisDecision | None, VerificationInfo]:
    """
    Re-evaluate the surrogate front exactly and choose a compromise solution.

    With ``verify_pareto_front`` the first ``verify_pareto_limit`` members
    (all when the limit is ``<= 0`` or too large) are evaluated exactly and
    re-ranked; their first front becomes the exact front. TOPSIS runs on the
    exact front when there is one, otherwise on the surrogate front, in which
    case ``verify_topsis`` re-evaluates just the chosen member.
    """
    backend = eval_backend or SerialEvalBackend()
    info = VerificationInfo(
        enabled=True,
        verify_pareto_front=bool(settings.verify_pareto_front),
        verify_topsis=bool(settings.verify_topsis),
    )
    if len(surrogate_front) == 0:
        return None, None, info

    exact_front: Population | None = None
    if settings.verify_pareto_front:
        n = len(surrogate_front)
        limit = int(settings.verify_pareto_limit)
        if limit <= 0 or limit > n:
            limit = n
        _logger().info("Verifying %d surrogate front members with the exact evaluator", limit)
        verified = _evaluate_exact(surrogate_front.X[:limit], evaluator, backend, n_obj, n_constr)
        info.verified_pareto_count = limit
        info.exact_evaluations += limit
        exact_front = verified.rank_and_crowd(kernel).pareto_front(kernel)
        info.exact_front_size = len(exact_front)

    if exact_front is not None and len(exact_front) > 0:
        decision = select_by_topsis(exact_front, settings.topsis_weights, source="exact")
    else:
        exact_front = None
        decision = select_by_topsis(surrogate_front, settings.topsis_weights, source="surrogate")
        if decision is not None and settings.verify_topsis:
            checked = _evaluate_exact(decision.variables.reshape(1, -1), evaluator, backend, n_obj, n_constr)
            info.exact_evaluations += 1
            decision.exact_objectives = checked.F[0].copy()
            decision.exact_constraints = None if checked.G is None else checked.G[0].copy()
            decision.exact_feasible = bool(checked.feasible[0])

    if decision is not None:
        _logger().info("TOPSIS selected index %d (score %.4f) from the %s front", decision.index, decision.score, decision.source)
    return exact_front, decision, info


__all__ = ["TopsisDecision", "VerificationInfo", "select_by_topsis", "verify_solutions"]
