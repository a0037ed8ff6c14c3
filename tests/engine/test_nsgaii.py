"""NSGA-II loop behaviour."""

import numpy as np
import pytest

from mapo.engine.algorithm import NSGAII, RunStatus
from mapo.engine.algorithm.config import NSGAIIConfig
from mapo.engine.algorithm.nsgaii import environmental_selection, generate_offspring
from mapo.engine.algorithm.population import Population
from mapo.foundation.eval import EvaluationResult
from mapo.foundation.exceptions import (
    ConfigurationError,
    MissingEvaluatorError,
    OptimizationError,
    ProblemDimensionError,
)
from mapo.foundation.kernel import constrained_dominance_matrix
from mapo.foundation.problem import Problem, ZDT1Problem


class Schaffer(Problem):
    def __init__(self):
        self.n_var = 1
        self.n_obj = 2
        self.xl = -10.0
        self.xu = 10.0

    def objectives(self, X):
        return np.column_stack([X[:, 0] ** 2, (X[:, 0] - 2.0) ** 2])


class ConstrainedBox(Problem):
    n_constraints = 1

    def __init__(self):
        self.n_var = 2
        self.n_obj = 2
        self.xl = np.zeros(2)
        self.xu = np.ones(2)

    def objectives(self, X):
        return X.copy()

    def constraints(self, X):
        # x0 + x1 >= 0.5
        return (0.5 - X[:, 0] - X[:, 1]).reshape(-1, 1)


class SometimesFails:
    n_obj = 2
    n_constr = 0

    def evaluate(self, x):
        if x[0] > 0.8:
            raise RuntimeError("simulation crashed")
        return EvaluationResult([x[0], 1.0 - x[0] + x[1]])


def _cfg(pop_size=20, generations=5, **kw):
    builder = NSGAIIConfig().pop_size(pop_size).max_generations(generations)
    for key, value in kw.items():
        getattr(builder, key)(value)
    return builder.fixed()


def test_result_contains_only_nondominated():
    result = NSGAII(_cfg(20, 15)).optimize(ZDT1Problem(n_var=6), seed=42)

    F = result["F"]
    assert F.shape[0] > 0
    for i in range(F.shape[0]):
        for j in range(F.shape[0]):
            if i == j:
                continue
            dominates = np.all(F[j] <= F[i]) and np.any(F[j] < F[i])
            assert not dominates, f"Solution {i} is dominated by solution {j}"


def test_population_size_and_bounds_are_preserved():
    problem = ZDT1Problem(n_var=4)
    result = NSGAII(_cfg(16, 6)).optimize(problem, seed=1)

    pop = result["population"]
    assert len(pop) == 16
    assert pop.X.shape == (16, 4)
    assert np.all(pop.X >= 0.0) and np.all(pop.X <= 1.0)
    assert result["evaluations"] == 16 * 7
    assert result["generations"] == 6
    assert result["termination_reason"] == "max_generations"
    assert len(result["history"]) == 6


def test_seeded_runs_are_reproducible():
    a = NSGAII(_cfg(12, 4)).optimize(Schaffer(), seed=7)
    b = NSGAII(_cfg(12, 4)).optimize(Schaffer(), seed=7)
    np.testing.assert_array_equal(a["population"].X, b["population"].X)
    np.testing.assert_array_equal(a["F"], b["F"])


def test_config_seed_used_when_no_explicit_seed():
    cfg = _cfg(10, 3, seed=11)
    a = NSGAII(cfg).optimize(Schaffer())
    b = NSGAII(cfg).optimize(Schaffer())
    np.testing.assert_array_equal(a["population"].X, b["population"].X)


def test_schaffer_front_converges_between_minima():
    result = NSGAII(_cfg(30, 30)).optimize(Schaffer(), seed=0)
    X = result["X"][:, 0]
    assert np.all((X > -0.5) & (X < 2.5))


def test_constraints_drive_population_feasible():
    result = NSGAII(_cfg(24, 20)).optimize(ConstrainedBox(), seed=2)
    front = result["pareto_front"]
    assert front.feasible.all()
    assert result["G"].shape == (len(front), 1)
    assert not constrained_dominance_matrix(front.F, front.G).any()


def test_evaluator_failures_do_not_abort_run():
    problem = Schaffer()
    problem.xl, problem.xu = np.zeros(2), np.ones(2)
    problem.n_var = 2
    result = NSGAII(_cfg(16, 8)).optimize(problem, SometimesFails(), seed=5)
    assert len(result["population"]) == 16
    assert np.all(result["F"][:, 0] <= 0.8)


def test_max_evaluations_stops_early():
    result = NSGAII(_cfg(10, 50, max_evaluations=35)).optimize(Schaffer(), seed=3)
    assert result["termination_reason"] == "max_evaluations"
    # budget is checked before each generation
    assert result["evaluations"] == 40
    assert result["generations"] == 3


def test_stop_from_callback():
    algo = NSGAII(_cfg(10, 50))
    seen = []

    def callback(record):
        seen.append(record.iteration)
        if record.iteration == 2:
            algo.stop()

    result = algo.optimize(Schaffer(), seed=0, iteration_callback=callback)
    assert seen == [1, 2]
    assert result["stopped"]
    assert result["termination_reason"] == "stopped"
    assert algo.status is RunStatus.TERMINATED


def test_iteration_records_track_front():
    records = []
    NSGAII(_cfg(10, 3)).optimize(Schaffer(), seed=0, iteration_callback=records.append)
    assert [r.iteration for r in records] == [1, 2, 3]
    assert [r.evaluations for r in records] == [20, 30, 40]
    for r in records:
        assert r.front_objectives.shape == (r.front_size, 2)
        np.testing.assert_allclose(r.best_objectives, r.front_objectives.min(axis=0))


def test_zero_generations_is_rejected():
    with pytest.raises(ConfigurationError, match="max_generations"):
        NSGAII(_cfg(8, 0)).optimize(Schaffer(), seed=0)


def test_single_generation_runs_one_offspring_batch():
    result = NSGAII(_cfg(8, 1)).optimize(Schaffer(), seed=0)
    assert result["generations"] == 1
    assert result["evaluations"] == 16
    assert len(result["population"]) == 8


def test_keep_all_evaluated_archives_every_individual():
    cfg = NSGAIIConfig().pop_size(6).max_generations(2).keep_all_evaluated().fixed()
    result = NSGAII(cfg).optimize(Schaffer(), seed=0)
    assert len(result["all_evaluated"]) == 18


def test_thread_backend_matches_serial():
    serial = NSGAII(_cfg(10, 3)).optimize(Schaffer(), seed=9)
    threaded = NSGAII(_cfg(10, 3)).optimize(Schaffer(), seed=9, eval_backend="threads")
    np.testing.assert_allclose(serial["population"].F, threaded["population"].F)


def test_problem_validation():
    class NoObjectives:
        n_var = 2
        n_obj = 0
        xl = 0.0
        xu = 1.0

    with pytest.raises(ProblemDimensionError):
        NSGAII(_cfg()).optimize(NoObjectives())

    class NoEvaluator:
        n_var = 1
        n_obj = 1
        xl = 0.0
        xu = 1.0

    with pytest.raises(MissingEvaluatorError):
        NSGAII(_cfg()).optimize(NoEvaluator())


def test_reentrant_run_rejected():
    algo = NSGAII(_cfg(6, 2))

    def callback(record):
        algo.run(Schaffer(), Schaffer(), np.random.default_rng(0), None)

    with pytest.raises(OptimizationError):
        algo.optimize(Schaffer(), seed=0, iteration_callback=callback)


def test_from_mapping_config():
    result = NSGAII({"populationSize": 8, "maxGenerations": 2}).optimize(Schaffer(), seed=0)
    assert len(result["population"]) == 8


class TestGenerationStep:
    def test_offspring_inside_bounds(self):
        rng = np.random.default_rng(0)
        lower, upper = np.zeros(3), np.ones(3)
        parents = Population(rng.random((10, 3)), rng.random((10, 2))).rank_and_crowd()
        X_off = generate_offspring(
            parents,
            10,
            lower,
            upper,
            crossover_rate=0.9,
            mutation_rate=1.0,
            crossover_eta=5.0,
            mutation_eta=5.0,
            rng=rng,
        )
        assert X_off.shape == (10, 3)
        assert np.all(X_off >= lower) and np.all(X_off <= upper)

    def test_no_variation_copies_parents(self):
        rng = np.random.default_rng(1)
        parents = Population(rng.random((6, 2)), rng.random((6, 2))).rank_and_crowd()
        X_off = generate_offspring(
            parents,
            6,
            np.zeros(2),
            np.ones(2),
            crossover_rate=0.0,
            mutation_rate=0.0,
            crossover_eta=20.0,
            mutation_eta=20.0,
            rng=rng,
        )
        for row in X_off:
            assert np.any(np.all(np.isclose(parents.X, row), axis=1))

    def test_environmental_selection_size(self):
        rng = np.random.default_rng(2)
        parents = Population(rng.random((8, 2)), rng.random((8, 2)))
        offspring = Population(rng.random((8, 2)), rng.random((8, 2)))
        survivors = environmental_selection(parents, offspring, 8)
        assert len(survivors) == 8
        assert survivors.rank is not None
