"""Real-valued mutation operators."""

from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np

from .utils import ArrayLike, RealOperator, operator_bounds


class Mutation(RealOperator, ABC):
    """Base class for real-coded mutation operators."""

    @abstractmethod
    def __call__(self, offspring: ArrayLike, rng: np.random.Generator) -> ArrayLike:
        raise NotImplementedError


class PolynomialMutation(Mutation):
    """Standard polynomial mutation used in NSGA-II.

    ``rate`` is normalized: each variable mutates with probability
    ``rate / n_var``.
    """

    def __init__(
        self,
        rate: float = 1.0,
        eta: float = 20.0,
        *,
        lower: ArrayLike,
        upper: ArrayLike,
    ) -> None:
        self.rate = float(rate)
        self.eta = float(eta)
        if self.eta < 0.0:
            raise ValueError("eta must be non-negative.")
        self.lower, self.upper = operator_bounds(lower, upper)

    @property
    def prob_var(self) -> float:
        return self.rate / self.n_var if self.n_var else 0.0

    def __call__(self, offspring: ArrayLike, rng: np.random.Generator) -> ArrayLike:
        X = self._rows(offspring, "offspring")
        if X.shape[0] == 0:
            return X

        # Full grids keep RNG consumption independent of how many variables fire.
        rnd_mask = rng.random(X.shape)
        rnd_delta = rng.random(X.shape)
        mask = rnd_mask < self.prob_var
        if not np.any(mask):
            return X

        mut_pow = 1.0 / (self.eta + 1.0)
        rows, cols = np.nonzero(mask)
        for i, j in zip(rows, cols):
            y = X[i, j]
            yl = self.lower[j]
            yu = self.upper[j]
            if yu <= yl:
                continue
            delta1 = (y - yl) / (yu - yl)
            delta2 = (yu - y) / (yu - yl)
            rnd = rnd_delta[i, j]
            if rnd <= 0.5:
                xy = 1.0 - delta1
                val = 2.0 * rnd + (1.0 - 2.0 * rnd) * (xy ** (self.eta + 1.0))
                deltaq = val**mut_pow - 1.0
            else:
                xy = 1.0 - delta2
                val = 2.0 * (1.0 - rnd) + 2.0 * (rnd - 0.5) * (xy ** (self.eta + 1.0))
                deltaq = 1.0 - val**mut_pow
            y += deltaq * (yu - yl)
            X[i, j] = min(max(y, yl), yu)
        return X


__all__ = ["Mutation", "PolynomialMutation"]
