"""Real-valued crossover operators."""

from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np

from .utils import ArrayLike, RealOperator, operator_bounds


class Crossover(RealOperator, ABC):
    """Base class for real-coded crossover operators."""

    @abstractmethod
    def __call__(self, parents: ArrayLike, rng: np.random.Generator) -> ArrayLike:
        raise NotImplementedError


class SBXCrossover(Crossover):
    """Simulated Binary Crossover (SBX) operator.

    Applied unconditionally to every mating passed in; the caller decides
    whether a pair is crossed at all. Per variable, a coin ``rand > 0.5``
    leaves the variable untouched, as do parents closer than ``1e-14``.
    Otherwise the unbounded spread factor

        βq = (2u)^(1/(η+1))            if u <= 0.5
        βq = (1/(2(1-u)))^(1/(η+1))    otherwise

    produces ``0.5 * ((y1 + y2) ∓ βq (y2 - y1))``, clamped to the bounds.
    Child 1 always receives the lower value of the pair.
    """

    EPS = 1.0e-14

    def __init__(
        self,
        eta: float = 20.0,
        *,
        lower: ArrayLike,
        upper: ArrayLike,
    ) -> None:
        self.eta = float(eta)
        if self.eta < 0.0:
            raise ValueError("eta must be non-negative.")
        self.lower, self.upper = operator_bounds(lower, upper)

    def spread_factor(self, u: np.ndarray) -> np.ndarray:
        u = np.asarray(u, dtype=float)
        inv_eta = 1.0 / (self.eta + 1.0)
        betaq = np.empty_like(u)
        low = u <= 0.5
        betaq[low] = np.power(2.0 * u[low], inv_eta)
        betaq[~low] = np.power(1.0 / (2.0 * (1.0 - u[~low])), inv_eta)
        return betaq

    def __call__(self, parents: ArrayLike, rng: np.random.Generator) -> ArrayLike:
        parents_arr = self._matings(parents)
        if parents_arr.shape[0] == 0:
            return parents_arr

        p1 = parents_arr[:, 0, :]
        p2 = parents_arr[:, 1, :]
        shape = p1.shape

        skip = rng.random(shape) > 0.5
        u = rng.random(shape)
        y1 = np.minimum(p1, p2)
        y2 = np.maximum(p1, p2)
        diff = y2 - y1
        active = ~skip & (np.abs(diff) >= self.EPS)
        if not np.any(active):
            return parents_arr

        betaq = self.spread_factor(u)
        c1 = np.clip(0.5 * ((y1 + y2) - betaq * diff), self.lower, self.upper)
        c2 = np.clip(0.5 * ((y1 + y2) + betaq * diff), self.lower, self.upper)

        offspring = parents_arr
        offspring[:, 0, :] = np.where(active, c1, p1)
        offspring[:, 1, :] = np.where(active, c2, p2)
        return offspring


def sbx_crossover(
    parent1: ArrayLike,
    parent2: ArrayLike,
    eta: float,
    lower: ArrayLike,
    upper: ArrayLike,
    rng: np.random.Generator,
) -> tuple[np.ndarray, np.ndarray]:
    """Cross a single pair of variable vectors and return both children."""
    pair = np.stack([np.asarray(parent1, dtype=float), np.asarray(parent2, dtype=float)])[None, :, :]
    out = SBXCrossover(eta, lower=lower, upper=upper)(pair, rng)
    return out[0, 0].copy(), out[0, 1].copy()


__all__ = ["Crossover", "SBXCrossover", "sbx_crossover"]
