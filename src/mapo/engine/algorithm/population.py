"""
Structure-of-arrays population.

Rows of ``X``, ``F`` and ``G`` describe one individual each. Fronts and
ranks are integer indices into these arrays; no individual objects are
stored. Ranking and crowding are owned here, evaluation is not.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Sequence

import numpy as np

from mapo.foundation.constraints import compute_violation, is_feasible
from mapo.foundation.eval import EvaluationResult
from mapo.foundation.kernel import KernelBackend, default_kernel
from mapo.operators.real.initialize import sample_uniform

from .individual import Individual


def _as_rows(values: np.ndarray, n: int) -> np.ndarray:
    arr = np.asarray(values, dtype=float)
    if arr.ndim == 2 and arr.shape[0] == n:
        return arr
    # reshape(0, -1) is ambiguous for empty arrays
    return arr.reshape(n, -1) if n else arr.reshape(0, 0)


@dataclass
class Population:
    X: np.ndarray
    F: np.ndarray
    G: np.ndarray | None = None
    success: np.ndarray | None = None
    messages: list[str] = field(default_factory=list)
    rank: np.ndarray | None = None
    crowding: np.ndarray | None = None

    def __post_init__(self) -> None:
        self.X = np.atleast_2d(np.asarray(self.X, dtype=float))
        n = self.X.shape[0]
        self.F = _as_rows(self.F, n)
        if self.G is not None:
            self.G = _as_rows(self.G, n)
        if self.success is None:
            self.success = np.ones(n, dtype=bool)
        else:
            self.success = np.asarray(self.success, dtype=bool).reshape(n)
        if not self.messages:
            self.messages = [""] * n

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def empty(cls, n_var: int, n_obj: int, n_constr: int = 0) -> "Population":
        G = np.empty((0, n_constr)) if n_constr > 0 else None
        return cls(np.empty((0, n_var)), np.empty((0, n_obj)), G)

    @classmethod
    def from_results(
        cls,
        X: np.ndarray,
        results: Sequence[EvaluationResult],
        n_obj: int,
        n_constr: int = 0,
    ) -> "Population":
        X = np.atleast_2d(np.asarray(X, dtype=float))
        n = X.shape[0]
        if len(results) != n:
            raise ValueError(f"Expected {n} evaluation results, got {len(results)}.")
        F = np.full((n, n_obj), np.inf)
        G = np.full((n, n_constr), np.inf) if n_constr > 0 else None
        success = np.zeros(n, dtype=bool)
        messages = [""] * n
        for i, res in enumerate(results):
            if res.objectives.size == n_obj:
                F[i] = res.objectives
            if G is not None and res.constraints is not None and res.constraints.size == n_constr:
                G[i] = res.constraints
            success[i] = res.success
            messages[i] = res.message
        return cls(X, F, G, success, messages)

    @classmethod
    def random(
        cls,
        n: int,
        lower: np.ndarray,
        upper: np.ndarray,
        rng: np.random.Generator,
        n_obj: int,
        n_constr: int = 0,
    ) -> "Population":
        """Uniform sample inside the bounds with objectives not yet evaluated (NaN)."""
        X = sample_uniform(n, lower, upper, rng)
        G = np.full((n, n_constr), np.nan) if n_constr > 0 else None
        return cls(X, np.full((n, n_obj), np.nan), G)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return int(self.X.shape[0])

    def __iter__(self) -> Iterator[Individual]:
        for i in range(len(self)):
            yield self.individual(i)

    def __getitem__(self, idx: int) -> Individual:
        return self.individual(idx)

    @property
    def n_var(self) -> int:
        return int(self.X.shape[1])

    @property
    def n_obj(self) -> int:
        return int(self.F.shape[1])

    @property
    def n_constr(self) -> int:
        return 0 if self.G is None else int(self.G.shape[1])

    @property
    def feasible(self) -> np.ndarray:
        return is_feasible(self.G, n=len(self))

    @property
    def violation(self) -> np.ndarray:
        return compute_violation(self.G, n=len(self))

    def individual(self, idx: int) -> Individual:
        idx = int(idx)
        return Individual(
            variables=self.X[idx].copy(),
            objectives=self.F[idx].copy(),
            constraints=None if self.G is None else self.G[idx].copy(),
            success=bool(self.success[idx]),
            message=self.messages[idx],
            rank=int(self.rank[idx]) if self.rank is not None else 0,
            crowding=float(self.crowding[idx]) if self.crowding is not None else 0.0,
        )

    # ------------------------------------------------------------------
    # Ranking
    # ------------------------------------------------------------------

    def rank_and_crowd(self, kernel: KernelBackend | None = None) -> "Population":
        """Assign 1-based ranks and per-front crowding distances in place."""
        kernel = kernel or default_kernel()
        if len(self) == 0:
            self.rank = np.empty(0, dtype=int)
            self.crowding = np.empty(0, dtype=float)
            return self
        self.rank, self.crowding = kernel.nsga2_ranking(self.F, self.G)
        return self

    def fronts(self, kernel: KernelBackend | None = None) -> list[np.ndarray]:
        kernel = kernel or default_kernel()
        if len(self) == 0:
            return []
        return kernel.fronts(self.F, self.G)

    def pareto_front(self, kernel: KernelBackend | None = None) -> "Population":
        """Sub-population of rank-1 members (ranking computed if missing)."""
        if self.rank is None or self.rank.shape[0] != len(self):
            self.rank_and_crowd(kernel)
        return self.take(np.flatnonzero(self.rank == 1))

    # ------------------------------------------------------------------
    # Arena operations
    # ------------------------------------------------------------------

    def take(self, indices: np.ndarray | Sequence[int]) -> "Population":
        idx = np.asarray(indices, dtype=int).reshape(-1)
        return Population(
            X=self.X[idx].copy(),
            F=self.F[idx].copy(),
            G=None if self.G is None else self.G[idx].copy(),
            success=self.success[idx].copy(),
            messages=[self.messages[i] for i in idx],
            rank=None if self.rank is None else self.rank[idx].copy(),
            crowding=None if self.crowding is None else self.crowding[idx].copy(),
        )

    def merge(self, other: "Population") -> "Population":
        """Concatenate two populations; ranking must be recomputed afterwards."""
        if self.n_var != other.n_var or self.n_obj != other.n_obj or self.n_constr != other.n_constr:
            raise ValueError("Cannot merge populations with different dimensions.")
        G = None if self.G is None else np.vstack([self.G, other.G])
        return Population(
            X=np.vstack([self.X, other.X]),
            F=np.vstack([self.F, other.F]),
            G=G,
            success=np.concatenate([self.success, other.success]),
            messages=list(self.messages) + list(other.messages),
        )

    def truncate(self, n_keep: int, kernel: KernelBackend | None = None) -> "Population":
        """Keep the ``n_keep`` best members by (rank, -crowding); ranks are recomputed first."""
        kernel = kernel or default_kernel()
        self.rank_and_crowd(kernel)
        order = kernel.survival_order(self.rank, self.crowding, n_keep)
        return self.take(order)


__all__ = ["Population"]
