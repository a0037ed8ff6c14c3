from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

import numpy as np

from mapo.engine.algorithm.registry import get_algorithms_registry, resolve_algorithm
from mapo.foundation.eval import EvaluationBackend
from mapo.foundation.exceptions import ConfigurationError
from mapo.foundation.kernel import KernelBackend
from mapo.foundation.problem.types import ProblemProtocol


class OptimizationResult:
    """Simple container returned by optimize()."""

    def __init__(self, payload: Mapping[str, Any]):
        self.F = payload.get("F")
        self.X = payload.get("X")
        self.data = dict(payload)

    @property
    def termination_reason(self) -> str | None:
        return self.data.get("termination_reason")

    @property
    def topsis(self) -> Any:
        return self.data.get("topsis")

    def summary_text(self) -> str:
        F = np.asarray(self.F) if self.F is not None else np.empty((0, 0))
        lines = [
            f"Solutions on front: {F.shape[0]}",
            f"Generations: {self.data.get('generations')}",
            f"Evaluations: {self.data.get('evaluations')}",
            f"Termination: {self.termination_reason}",
        ]
        if "exact_evaluations" in self.data:
            lines.append(f"Exact evaluations: {self.data['exact_evaluations']}")
        if F.size:
            for j in range(F.shape[1]):
                lines.append(f"  f{j + 1}: min={np.min(F[:, j]):.6g} max={np.max(F[:, j]):.6g}")
        decision = self.topsis
        if decision is not None:
            lines.append(f"TOPSIS choice ({decision.source}): score={decision.score:.4f}")
        return "\n".join(lines)


@dataclass
class OptimizeConfig:
    """
    Canonical configuration for a single optimization run.

    ``algorithm_config`` may be a frozen config, an unfrozen builder, a plain
    mapping (camelCase keys accepted) or None for the algorithm defaults.
    """

    problem: ProblemProtocol
    algorithm: str = "nsgaii"
    algorithm_config: Any = None
    seed: int | None = None
    evaluator: Any = None
    eval_backend: EvaluationBackend | str | None = None  # name or backend instance
    kernel: KernelBackend | None = None


def _normalize_cfg(cfg: Any) -> Any:
    if cfg is None or isinstance(cfg, Mapping):
        return cfg
    if hasattr(cfg, "fixed") and callable(cfg.fixed):
        return cfg.fixed()
    return cfg


def _available_algorithms() -> str:
    return ", ".join(get_algorithms_registry().list())


def optimize(
    config: OptimizeConfig,
) -> OptimizationResult:
    """
    Run a single optimization for the provided problem/config pair.
    """
    if not isinstance(config, OptimizeConfig):
        raise TypeError("optimize() expects an OptimizeConfig instance.")
    cfg = config

    if not cfg.algorithm:
        raise ConfigurationError(
            "OptimizeConfig.algorithm must be specified.",
            suggestion=f"Available algorithms: {_available_algorithms()}",
        )
    algo_ctor = resolve_algorithm(cfg.algorithm)
    algorithm = algo_ctor(_normalize_cfg(cfg.algorithm_config), cfg.kernel)

    result = algorithm.optimize(
        cfg.problem,
        cfg.evaluator,
        seed=cfg.seed,
        eval_backend=cfg.eval_backend,
    )
    return OptimizationResult(result)


__all__ = ["OptimizeConfig", "optimize", "OptimizationResult"]
