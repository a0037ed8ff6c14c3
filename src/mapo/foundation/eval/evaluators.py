"""
Ready-made evaluators and the guard that keeps evaluator failures out of the core loop.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

import numpy as np

from . import EvaluationResult


def _logger() -> logging.Logger:
    return logging.getLogger(__name__)


class FunctionEvaluator:
    """
    Wrap a plain callable as an evaluator.

    ``fn(x)`` may return the objective vector, a ``(objectives, constraints)``
    tuple, or an EvaluationResult.

    Example::

        ev = FunctionEvaluator(lambda x: [x[0], 1.0 - x[0]], n_obj=2)
        ev.evaluate(np.array([0.3]))
    """

    def __init__(self, fn: Callable[[np.ndarray], Any], n_obj: int, n_constr: int = 0) -> None:
        if not callable(fn):
            raise TypeError("fn must be callable.")
        self.fn = fn
        self.n_obj = int(n_obj)
        self.n_constr = int(n_constr)

    def evaluate(self, x: np.ndarray) -> EvaluationResult:
        out = self.fn(np.asarray(x, dtype=float))
        if isinstance(out, EvaluationResult):
            return out
        if isinstance(out, tuple) and len(out) == 2:
            return EvaluationResult(out[0], out[1])
        return EvaluationResult(out)


def evaluate_guarded(evaluator: Any, x: np.ndarray, n_obj: int, n_constr: int = 0) -> EvaluationResult:
    """
    Evaluate ``x`` and never raise.

    Exceptions escaping the evaluator, non-result return values and objective
    vectors of the wrong length become failed results with ``inf`` outputs.
    """
    try:
        result = evaluator.evaluate(np.asarray(x, dtype=float))
    except Exception as exc:  # evaluator failures are data, not control flow
        _logger().debug("Evaluator raised %s: %s", type(exc).__name__, exc)
        return EvaluationResult.failure(n_obj, n_constr, f"{type(exc).__name__}: {exc}")

    if not isinstance(result, EvaluationResult):
        _logger().debug("Evaluator returned %s instead of EvaluationResult", type(result).__name__)
        return EvaluationResult.failure(n_obj, n_constr, "evaluator did not return an EvaluationResult")

    if result.objectives.size != n_obj:
        _logger().debug("Evaluator returned %d objectives, expected %d", result.objectives.size, n_obj)
        return EvaluationResult.failure(
            n_obj,
            n_constr,
            f"expected {n_obj} objectives, got {result.objectives.size}",
        )

    if n_constr > 0:
        cons = result.constraints
        if cons is None or cons.size != n_constr:
            got = 0 if cons is None else cons.size
            _logger().debug("Evaluator returned %d constraints, expected %d", got, n_constr)
            fixed = np.full(n_constr, np.inf)
            return EvaluationResult(
                result.objectives,
                fixed,
                success=False,
                message=result.message or f"expected {n_constr} constraints, got {got}",
            )
    return result


__all__ = ["FunctionEvaluator", "evaluate_guarded"]
