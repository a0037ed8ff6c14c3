"""Bounds and array-shape checks shared by the real-coded operators."""

from __future__ import annotations

import numpy as np

from mapo.foundation.exceptions import BoundsError, ProblemDimensionError

ArrayLike = np.ndarray


def operator_bounds(lower: ArrayLike, upper: ArrayLike) -> tuple[np.ndarray, np.ndarray]:
    """
    Return float copies of ``lower``/``upper``.

    Raises the same error kinds as problem bound normalization:
    ``ProblemDimensionError`` for shape problems, ``BoundsError`` for NaN or
    ``lower > upper``.
    """
    lo = np.array(lower, dtype=float)
    hi = np.array(upper, dtype=float)
    if lo.ndim != 1 or hi.ndim != 1:
        raise ProblemDimensionError("Operator bounds must be one-dimensional arrays.")
    if lo.shape != hi.shape:
        raise ProblemDimensionError(
            f"Lower and upper bounds differ in length ({lo.shape[0]} vs {hi.shape[0]}).",
            n_var=lo.shape[0],
        )
    if np.any(np.isnan(lo)) or np.any(np.isnan(hi)):
        raise BoundsError("Bounds must not contain NaN.")
    bad = np.flatnonzero(lo > hi)
    if bad.size:
        raise BoundsError(f"Lower bound exceeds upper bound for variable(s) {bad.tolist()}.")
    return lo, hi


class RealOperator:
    """Holds the box ``[lower, upper]`` and validates operator inputs against it."""

    lower: np.ndarray
    upper: np.ndarray

    @property
    def n_var(self) -> int:
        return int(self.lower.shape[0])

    def _check_width(self, width: int) -> None:
        if width != self.n_var:
            raise ProblemDimensionError(
                f"Operator expects {self.n_var} variables, got {width}.",
                n_var=self.n_var,
            )

    def _matings(self, parents: ArrayLike) -> np.ndarray:
        """Working copy of ``parents`` shaped ``(n_matings, 2, n_var)``."""
        arr = np.array(parents, dtype=float)
        if arr.ndim != 3 or arr.shape[1] != 2:
            raise ValueError("parents must have shape (n_matings, 2, n_var).")
        self._check_width(arr.shape[2])
        return arr

    def _rows(self, values: ArrayLike, name: str) -> np.ndarray:
        """Working copy of ``values`` shaped ``(n_individuals, n_var)``."""
        arr = np.array(values, dtype=float)
        if arr.ndim != 2:
            raise ValueError(f"{name} must have shape (n_individuals, n_var).")
        self._check_width(arr.shape[1])
        return arr


__all__ = [
    "ArrayLike",
    "RealOperator",
    "operator_bounds",
]
