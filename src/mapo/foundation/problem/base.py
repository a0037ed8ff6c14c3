"""
Base class for class-based custom optimization problems.
"""

from __future__ import annotations

import numpy as np

from mapo.foundation.eval import EvaluationResult
from mapo.foundation.exceptions import BoundsError, ProblemDimensionError


def normalize_bounds(xl, xu, n_var: int) -> tuple[np.ndarray, np.ndarray]:
    """Broadcast scalar bounds to ``n_var`` and validate shape and order."""
    lower = np.asarray(xl, dtype=float)
    upper = np.asarray(xu, dtype=float)
    if lower.ndim == 0 or lower.size == 1:
        lower = np.full(n_var, float(lower.reshape(-1)[0]))
    if upper.ndim == 0 or upper.size == 1:
        upper = np.full(n_var, float(upper.reshape(-1)[0]))
    lower = lower.reshape(-1)
    upper = upper.reshape(-1)
    if lower.shape != (n_var,) or upper.shape != (n_var,):
        raise ProblemDimensionError(
            f"Bounds must have length n_var={n_var}, got {lower.shape[0]} and {upper.shape[0]}.",
            n_var=n_var,
        )
    if np.any(np.isnan(lower)) or np.any(np.isnan(upper)):
        raise BoundsError("Bounds must not contain NaN.")
    bad = np.flatnonzero(lower > upper)
    if bad.size:
        raise BoundsError(f"Lower bound exceeds upper bound for variable(s) {bad.tolist()}.")
    return lower, upper


class Problem:
    """Base class for class-based custom optimization problems.

    A Problem is also an evaluator: ``evaluate(x)`` maps one decision
    vector to an EvaluationResult.

    **Required:** set ``n_var``, ``n_obj``, ``xl``, ``xu`` in ``__init__``.
    **Optional:** override ``n_constraints`` as a class-level attribute.

    Example, constrained::

        class MyConstrainedProblem(Problem):
            n_constraints = 1          # declare at class level

            def __init__(self):
                self.n_var = 3
                self.n_obj = 2
                self.xl = np.zeros(3)
                self.xu = np.ones(3)

            def objectives(self, X):
                f1 = np.sum(X ** 2, axis=1)
                f2 = np.sum((X - 1) ** 2, axis=1)
                return np.column_stack([f1, f2])

            def constraints(self, X):
                # Sign convention: g(x) <= 0 means feasible.
                g = np.sum(X, axis=1) - 2.0   # sum(x) <= 2
                return g.reshape(-1, 1)
    """

    n_constraints: int = 0
    """Number of inequality constraints.  Default: ``0`` (unconstrained)."""

    evaluator = None
    """Optional external evaluator used instead of :meth:`evaluate`."""

    @property
    def n_constr(self) -> int:
        """Alias for :attr:`n_constraints`, used by evaluation backends."""
        return self.n_constraints

    def bounds(self) -> tuple[np.ndarray, np.ndarray]:
        """Return ``(lower, upper)`` as float arrays of length ``n_var``."""
        return normalize_bounds(self.xl, self.xu, int(self.n_var))

    def objectives(self, X: np.ndarray) -> np.ndarray:
        """Compute objective values for a batch of solutions.

        Args:
            X: Decision matrix of shape ``(N, n_var)``.

        Returns:
            Array of shape ``(N, n_obj)`` with objective values to **minimize**.
        """
        raise NotImplementedError(f"{type(self).__name__} must implement objectives(self, X).")

    def constraints(self, X: np.ndarray) -> np.ndarray | None:
        """Compute constraint values ``g(x)`` for a batch; ``g <= 0`` is satisfied."""
        return None

    def evaluate(self, x: np.ndarray) -> EvaluationResult:
        """Evaluate one decision vector.  Override the hooks instead."""
        X = np.asarray(x, dtype=float).reshape(1, -1)
        F = np.asarray(self.objectives(X), dtype=float).reshape(-1)
        G = None
        if self.n_constraints > 0:
            G_raw = self.constraints(X)
            if G_raw is not None:
                G = np.asarray(G_raw, dtype=float).reshape(-1)
        return EvaluationResult(F, G)


__all__ = ["Problem", "normalize_bounds"]
