"""Read-only view of a single population member."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from mapo.foundation.constraints import compute_violation


@dataclass(frozen=True)
class Individual:
    variables: np.ndarray
    objectives: np.ndarray
    constraints: np.ndarray | None = None
    success: bool = True
    message: str = ""
    rank: int = 0
    crowding: float = 0.0

    @property
    def feasible(self) -> bool:
        if self.constraints is None or self.constraints.size == 0:
            return True
        return bool(np.all(self.constraints <= 0.0))

    @property
    def violation(self) -> float:
        if self.constraints is None:
            return 0.0
        return float(compute_violation(self.constraints.reshape(1, -1))[0])

    def dominates(self, other: "Individual") -> bool:
        """Constrained dominance: feasibility first, then violation, then Pareto."""
        if self.feasible and not other.feasible:
            return True
        if not self.feasible and other.feasible:
            return False
        if not self.feasible:
            return self.violation < other.violation
        a = np.where(np.isnan(self.objectives), np.inf, self.objectives)
        b = np.where(np.isnan(other.objectives), np.inf, other.objectives)
        return bool(np.all(a <= b) and np.any(a < b))


__all__ = ["Individual"]
