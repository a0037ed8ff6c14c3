"""
Helper functions for the NSGA-II generation step.

This module contains mating and survival logic that is independent of the
main loop so it can be reused and tested directly.
"""

from __future__ import annotations

import numpy as np

from mapo.engine.algorithm.population import Population
from mapo.foundation.kernel import KernelBackend, default_kernel
from mapo.operators.real import PolynomialMutation, SBXCrossover


def generate_offspring(
    population: Population,
    n_offspring: int,
    lower: np.ndarray,
    upper: np.ndarray,
    *,
    crossover_rate: float,
    mutation_rate: float,
    crossover_eta: float,
    mutation_eta: float,
    rng: np.random.Generator,
    kernel: KernelBackend | None = None,
) -> np.ndarray:
    """
    Produce ``n_offspring`` decision vectors.

    Per child: two binary tournaments pick the parents; with probability
    ``crossover_rate`` SBX is applied and one of the two children is kept at
    random, otherwise one parent is copied at random; then polynomial
    mutation. Returns an ``(n_offspring, n_var)`` array inside the bounds.
    """
    kernel = kernel or default_kernel()
    n_var = population.n_var
    if n_offspring <= 0:
        return np.empty((0, n_var))
    if population.rank is None or population.crowding is None:
        population.rank_and_crowd(kernel)

    winners = kernel.tournament_selection(population.rank, population.crowding, rng, 2 * n_offspring)
    matings = population.X[winners.reshape(n_offspring, 2)]

    do_cross = rng.random(n_offspring) < crossover_rate
    pick_first = rng.random(n_offspring) < 0.5

    if np.any(do_cross):
        sbx = SBXCrossover(crossover_eta, lower=lower, upper=upper)
        matings[do_cross] = sbx(matings[do_cross], rng)

    rows = np.arange(n_offspring)
    X_off = matings[rows, np.where(pick_first, 0, 1)]

    mutation = PolynomialMutation(mutation_rate, mutation_eta, lower=lower, upper=upper)
    return mutation(X_off, rng)


def environmental_selection(
    parents: Population,
    offspring: Population,
    pop_size: int,
    kernel: KernelBackend | None = None,
) -> Population:
    """Merge, re-rank and keep the first ``pop_size`` by (rank asc, crowding desc)."""
    combined = parents.merge(offspring)
    return combined.truncate(pop_size, kernel)


__all__ = ["generate_offspring", "environmental_selection"]
