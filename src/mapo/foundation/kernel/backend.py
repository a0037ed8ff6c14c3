from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np


class KernelBackend(ABC):
    """
    Interface for the numeric primitives behind the NSGA-II loop.
    Backends work on structure-of-arrays populations (F, G, ranks, crowding).
    """

    @abstractmethod
    def nsga2_ranking(self, F: np.ndarray, G: np.ndarray | None = None) -> tuple[np.ndarray, np.ndarray]:
        """
        Return 1-based ranks and per-front crowding distances under constrained dominance.
        """

    @abstractmethod
    def fronts(self, F: np.ndarray, G: np.ndarray | None = None) -> list[np.ndarray]:
        """
        Return index arrays of the non-dominated fronts, best first.
        """

    @abstractmethod
    def tournament_selection(
        self,
        ranks: np.ndarray,
        crowding: np.ndarray,
        rng: np.random.Generator,
        n_parents: int,
    ) -> np.ndarray:
        """
        Select n_parents indices by binary tournament with replacement.
        """

    @abstractmethod
    def survival_order(self, ranks: np.ndarray, crowding: np.ndarray, n_keep: int) -> np.ndarray:
        """
        Return the indices of the n_keep best individuals in comparator order.
        """


__all__ = ["KernelBackend"]
