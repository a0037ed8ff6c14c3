from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

import numpy as np


@dataclass
class EvaluationResult:
    """Outcome of evaluating one decision vector.

    ``success=False`` marks a failed evaluation; ``message`` carries the
    reason. Failures are data, they never abort a run.
    """

    objectives: np.ndarray
    constraints: np.ndarray | None = None
    success: bool = True
    message: str = ""
    extras: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.objectives = np.atleast_1d(np.asarray(self.objectives, dtype=float)).reshape(-1)
        if self.constraints is not None:
            self.constraints = np.atleast_1d(np.asarray(self.constraints, dtype=float)).reshape(-1)
        self.success = bool(self.success)

    @property
    def feasible(self) -> bool:
        if self.constraints is None or self.constraints.size == 0:
            return True
        return bool(np.all(self.constraints <= 0.0))

    @classmethod
    def failure(cls, n_obj: int, n_constr: int = 0, message: str = "", *, fill: float = np.inf) -> "EvaluationResult":
        """Failed result with every objective and constraint set to ``fill``."""
        constraints = np.full(n_constr, fill, dtype=float) if n_constr > 0 else None
        return cls(np.full(n_obj, fill, dtype=float), constraints, success=False, message=message)


@runtime_checkable
class Evaluator(Protocol):
    """Anything that maps one decision vector to an EvaluationResult."""

    def evaluate(self, x: np.ndarray) -> EvaluationResult: ...


class EvaluationBackend(Protocol):
    """Protocol for batch evaluation backends.

    ``evaluate`` returns one result per row of ``X``, in input order.
    ``n_obj``/``n_constr`` default to the evaluator attributes of the same name.
    """

    def evaluate(
        self, X: np.ndarray, evaluator: Any, n_obj: int | None = None, n_constr: int | None = None
    ) -> list[EvaluationResult]: ...

    def close(self) -> None:  # pragma: no cover - optional for pooled backends
        """Clean up any resources (executors, pools)."""
        return None


__all__ = ["EvaluationBackend", "EvaluationResult", "Evaluator"]
