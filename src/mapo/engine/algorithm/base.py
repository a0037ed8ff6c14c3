"""
Problem validation and evaluator resolution shared by all algorithms.
"""

from __future__ import annotations

from typing import Any, Protocol

import numpy as np

from mapo.foundation.exceptions import MissingEvaluatorError, ProblemDimensionError
from mapo.foundation.problem.base import normalize_bounds


class Optimizer(Protocol):
    def optimize(self, problem: Any, evaluator: Any = None, **kwargs: Any) -> dict[str, Any]: ...

    def stop(self) -> None: ...


def problem_dimensions(problem: Any) -> tuple[int, int, int]:
    """Return ``(n_var, n_obj, n_constr)`` after validating them."""
    try:
        n_var = int(problem.n_var)
        n_obj = int(problem.n_obj)
    except (AttributeError, TypeError, ValueError) as exc:
        raise ProblemDimensionError(f"Problem must define integer n_var and n_obj ({exc}).") from exc
    n_constr = int(getattr(problem, "n_constr", getattr(problem, "n_constraints", 0)) or 0)
    if n_var <= 0:
        raise ProblemDimensionError("Problem must have at least one variable.", n_var=n_var, n_obj=n_obj)
    if n_obj <= 0:
        raise ProblemDimensionError("Problem must have at least one objective.", n_var=n_var, n_obj=n_obj)
    if n_constr < 0:
        raise ProblemDimensionError("n_constr must be non-negative.", n_var=n_var, n_obj=n_obj)
    return n_var, n_obj, n_constr


def problem_bounds(problem: Any, n_var: int) -> tuple[np.ndarray, np.ndarray]:
    if hasattr(problem, "bounds") and callable(problem.bounds):
        return problem.bounds()
    return normalize_bounds(problem.xl, problem.xu, n_var)


def resolve_evaluator(problem: Any, evaluator: Any = None) -> Any:
    """Explicit evaluator, else ``problem.evaluator``, else the problem itself."""
    if evaluator is not None:
        return evaluator
    attached = getattr(problem, "evaluator", None)
    if attached is not None:
        return attached
    if callable(getattr(problem, "evaluate", None)):
        return problem
    raise MissingEvaluatorError(problem)


__all__ = ["Optimizer", "problem_dimensions", "problem_bounds", "resolve_evaluator"]
