"""
Training-set collection for the surrogate.

Candidates are drawn once (uniform or Latin hypercube) and evaluated with the
exact evaluator until enough samples are accepted or the attempt budget is
spent. Falling short is reported, not raised.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Any

import numpy as np

from mapo.engine.algorithm.config import TrainingSettings
from mapo.foundation.eval import EvaluationBackend, EvaluationResult
from mapo.foundation.eval.backends import SerialEvalBackend
from mapo.foundation.exceptions import InvalidSamplingError
from mapo.operators.real.initialize import sample_latin_hypercube, sample_uniform


def _logger() -> logging.Logger:
    return logging.getLogger(__name__)


@dataclass
class TrainingInfo:
    requested_samples: int
    accepted_samples: int
    attempts: int
    sampling_method: str
    rejected: dict[str, int] = field(default_factory=dict)

    @property
    def shortfall(self) -> int:
        return max(0, self.requested_samples - self.accepted_samples)

    def to_dict(self) -> dict[str, Any]:
        return {
            "requested_samples": self.requested_samples,
            "accepted_samples": self.accepted_samples,
            "attempts": self.attempts,
            "sampling_method": self.sampling_method,
            "rejected": dict(self.rejected),
            "shortfall": self.shortfall,
        }


def generate_candidates(
    n: int,
    lower: np.ndarray,
    upper: np.ndarray,
    method: str,
    rng: np.random.Generator,
) -> np.ndarray:
    key = str(method).lower()
    if key == "lhs":
        return sample_latin_hypercube(n, lower, upper, rng)
    if key == "uniform":
        return sample_uniform(n, lower, upper, rng)
    raise InvalidSamplingError(str(method))


def rejection_reason(
    result: EvaluationResult,
    n_obj: int,
    n_constr: int,
    *,
    require_success: bool,
    require_feasible: bool,
) -> str | None:
    """Return why ``result`` cannot be a training sample, or ``None`` if it can."""
    if result.objectives.size == 0:
        return "empty_objectives"
    if result.objectives.size != n_obj:
        return "objective_mismatch"
    if require_success and not result.success:
        return "failed"
    constraints = result.constraints if result.constraints is not None else np.zeros(n_constr)
    if require_feasible and np.any(constraints > 0.0):
        return "infeasible"
    if not (np.all(np.isfinite(result.objectives)) and np.all(np.isfinite(constraints))):
        return "non_finite"
    return None


def collect_training_data(
    evaluator: Any,
    lower: np.ndarray,
    upper: np.ndarray,
    n_obj: int,
    n_constr: int,
    settings: TrainingSettings,
    rng: np.random.Generator,
    eval_backend: EvaluationBackend | None = None,
) -> tuple[np.ndarray, np.ndarray, TrainingInfo]:
    """
    Evaluate candidates until ``settings.samples`` are accepted or
    ``settings.max_attempts`` candidates were tried.

    Candidates are dispatched in batches no larger than the number still
    needed, so the attempt count matches one-at-a-time evaluation.

    Returns ``(X, Y, info)`` where ``Y`` stacks objectives then constraints.
    """
    backend = eval_backend or SerialEvalBackend()
    n_var = int(lower.shape[0])
    target = int(settings.samples)
    max_attempts = int(settings.max_attempts)
    n_out = n_obj + n_constr

    candidates = generate_candidates(max_attempts, lower, upper, settings.sampling_method, rng)
    X = np.empty((target, n_var))
    Y = np.empty((target, n_out))
    accepted = 0
    attempts = 0
    rejected: Counter[str] = Counter()

    while accepted < target and attempts < max_attempts:
        batch = min(target - accepted, max_attempts - attempts)
        X_batch = candidates[attempts : attempts + batch]
        results = backend.evaluate(X_batch, evaluator, n_obj, n_constr)
        for x, res in zip(X_batch, results):
            attempts += 1
            reason = rejection_reason(
                res,
                n_obj,
                n_constr,
                require_success=settings.require_success,
                require_feasible=settings.require_feasible,
            )
            if reason is not None:
                rejected[reason] += 1
                continue
            constraints = res.constraints if res.constraints is not None else np.zeros(n_constr)
            X[accepted] = x
            Y[accepted] = np.concatenate([res.objectives, constraints[:n_constr]])
            accepted += 1

    info = TrainingInfo(
        requested_samples=target,
        accepted_samples=accepted,
        attempts=attempts,
        sampling_method=str(settings.sampling_method),
        rejected=dict(rejected),
    )
    if info.shortfall:
        _logger().warning(
            "Training data shortfall: accepted %d of %d requested samples after %d attempts (rejected: %s)",
            accepted,
            target,
            attempts,
            info.rejected,
        )
    else:
        _logger().info("Collected %d training samples in %d attempts", accepted, attempts)
    return X[:accepted], Y[:accepted], info


__all__ = ["TrainingInfo", "collect_training_data", "generate_candidates", "rejection_reason"]
