from __future__ import annotations

import logging

import numpy as np

from mapo.foundation.eval import EvaluationResult

from .surrogate import SurrogateModel


def _logger() -> logging.Logger:
    return logging.getLogger(__name__)


class SurrogateEvaluator:
    """
    Evaluator adapter backed by a fitted SurrogateModel.

    Never raises: any prediction failure yields the model's penalty value
    for every objective and constraint with ``success=False``.
    """

    def __init__(self, model: SurrogateModel) -> None:
        if model is None:
            raise ValueError("Surrogate model is required.")
        self.model = model
        self.n_obj = int(model.n_obj)
        self.n_constr = int(model.n_constr)
        self.evaluation_count = 0

    def evaluate(self, x: np.ndarray) -> EvaluationResult:
        self.evaluation_count += 1
        try:
            y = self.model.predict(np.asarray(x, dtype=float).reshape(1, -1))[0]
            if not np.all(np.isfinite(y)):
                raise ValueError("Non-finite surrogate prediction.")
        except Exception as exc:  # any model failure becomes a penalized result
            penalty = float(getattr(self.model, "penalty_value", 1e12))
            _logger().debug("Surrogate prediction failed (%s); returning penalty %g", exc, penalty)
            return EvaluationResult.failure(self.n_obj, self.n_constr, str(exc), fill=penalty)
        constraints = y[self.n_obj : self.n_obj + self.n_constr] if self.n_constr > 0 else None
        return EvaluationResult(y[: self.n_obj], constraints)

    def reset_count(self) -> None:
        self.evaluation_count = 0


__all__ = ["SurrogateEvaluator"]
