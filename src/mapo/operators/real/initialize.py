from __future__ import annotations

import numpy as np
from typing import Optional

from .utils import operator_bounds


class UniformInitializer:
    """
    Uniform random initializer for real-valued variables.
    Generates n_solutions points inside [lower, upper].
    """

    def __init__(self, n_solutions: int, lower: np.ndarray, upper: np.ndarray, rng: Optional[np.random.Generator] = None):
        self.n_solutions = int(n_solutions)
        if self.n_solutions < 0:
            raise ValueError("n_solutions must be non-negative.")
        self.lower, self.upper = operator_bounds(lower, upper)
        self.n_var = self.lower.shape[0]
        self.rng = rng or np.random.default_rng()

    def __call__(self) -> np.ndarray:
        span = self.upper - self.lower
        return self.lower + self.rng.random((self.n_solutions, self.n_var)) * span


class LatinHypercubeInitializer:
    """
    Latin Hypercube Sampling initializer for real-valued variables.

    Each dimension is split into n_solutions equal strata; a random permutation
    assigns one stratum per point and the point is jittered uniformly inside it.
    """

    def __init__(self, n_solutions: int, lower: np.ndarray, upper: np.ndarray, rng: Optional[np.random.Generator] = None):
        self.n_solutions = int(n_solutions)
        if self.n_solutions < 0:
            raise ValueError("n_solutions must be non-negative.")
        self.lower, self.upper = operator_bounds(lower, upper)
        self.n_var = self.lower.shape[0]
        self.rng = rng or np.random.default_rng()

    def __call__(self) -> np.ndarray:
        n = self.n_solutions
        d = self.n_var
        samples = np.empty((n, d), dtype=float)
        if n == 0:
            return samples
        for j in range(d):
            # strata 1..n, jitter subtracted so every u lies in ((k-1)/n, k/n]
            perm = self.rng.permutation(n) + 1.0
            samples[:, j] = (perm - self.rng.random(n)) / n
        span = self.upper - self.lower
        return np.clip(self.lower + samples * span, self.lower, self.upper)


def sample_uniform(n: int, lower: np.ndarray, upper: np.ndarray, rng: np.random.Generator) -> np.ndarray:
    return UniformInitializer(n, lower, upper, rng=rng)()


def sample_latin_hypercube(n: int, lower: np.ndarray, upper: np.ndarray, rng: np.random.Generator) -> np.ndarray:
    return LatinHypercubeInitializer(n, lower, upper, rng=rng)()


__all__ = [
    "UniformInitializer",
    "LatinHypercubeInitializer",
    "sample_uniform",
    "sample_latin_hypercube",
]
