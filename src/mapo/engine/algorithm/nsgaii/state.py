# algorithm/nsgaii/state.py
"""
State container and result building for NSGA-II.

This module provides the NSGAIIState dataclass and result-building functions,
keeping the main algorithm file focused on the evolutionary loop.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

import numpy as np

from mapo.engine.algorithm.population import Population


class RunStatus(str, Enum):
    INITIALIZED = "initialized"
    EVOLVING = "evolving"
    TERMINATED = "terminated"


@dataclass(frozen=True)
class IterationRecord:
    """Per-generation snapshot of the non-dominated front."""

    iteration: int
    evaluations: int
    front_size: int
    best_objectives: np.ndarray
    front_objectives: np.ndarray


@dataclass
class NSGAIIState:
    """Mutable state container for one NSGA-II run."""

    population: Population
    rng: np.random.Generator
    lower: np.ndarray
    upper: np.ndarray
    n_obj: int
    n_constr: int = 0

    generation: int = 0
    evaluations: int = 0
    start_time: float = field(default_factory=time.perf_counter)
    history: list[IterationRecord] = field(default_factory=list)
    archive: Population | None = None
    termination_reason: str = ""

    @property
    def elapsed(self) -> float:
        return time.perf_counter() - self.start_time

    def record_evaluated(self, batch: Population) -> None:
        """Append evaluated individuals to the archive (only when archiving is enabled)."""
        if self.archive is None:
            return
        self.archive = self.archive.merge(batch)

    def snapshot(self) -> IterationRecord:
        front = self.population.pareto_front()
        F = front.F.copy()
        best = np.min(F, axis=0) if F.shape[0] else np.full(self.n_obj, np.nan)
        return IterationRecord(
            iteration=self.generation,
            evaluations=self.evaluations,
            front_size=int(F.shape[0]),
            best_objectives=best,
            front_objectives=F,
        )


def build_result(state: NSGAIIState, *, stopped: bool) -> dict[str, Any]:
    """Build the result dictionary from algorithm state.

    ``X``/``F``/``G`` hold the rank-1 members of the final population; the
    full population stays available under ``population``.
    """
    population = state.population
    front = population.pareto_front()
    result: dict[str, Any] = {
        "population": population,
        "pareto_front": front,
        "X": front.X,
        "F": front.F,
        "G": front.G,
        "evaluations": state.evaluations,
        "generations": state.generation,
        "history": list(state.history),
        "elapsed_time": state.elapsed,
        "stopped": bool(stopped),
        "termination_reason": state.termination_reason,
    }
    if state.archive is not None:
        result["all_evaluated"] = state.archive
    return result


__all__ = ["IterationRecord", "NSGAIIState", "RunStatus", "build_result"]
