"""Surrogate-assisted NSGA-II end to end."""

import numpy as np
import pytest

from mapo.engine.algorithm import ANNNSGAII
from mapo.engine.algorithm.ann_nsgaii import (
    SurrogateModel,
    TrainingInfo,
    VerificationInfo,
    select_by_topsis,
    verify_solutions,
)
from mapo.engine.algorithm.config import ANNNSGAIIConfig, VerificationSettings
from mapo.engine.algorithm.population import Population
from mapo.foundation.eval import EvaluationResult
from mapo.foundation.exceptions import ConfigurationError, DependencyError
from mapo.foundation.kernel import constrained_dominance_matrix
from mapo.foundation.problem import Problem


class QuadraticPair(Problem):
    """Two convex quadratics; exactly representable by the poly2 surrogate."""

    def __init__(self):
        self.n_var = 2
        self.n_obj = 2
        self.xl = np.zeros(2)
        self.xu = np.ones(2)

    def objectives(self, X):
        f1 = X[:, 0] ** 2 + X[:, 1] ** 2
        f2 = (X[:, 0] - 1.0) ** 2 + (X[:, 1] - 1.0) ** 2
        return np.column_stack([f1, f2])


class CountingEvaluator:
    def __init__(self, problem):
        self.problem = problem
        self.n_obj = problem.n_obj
        self.n_constr = problem.n_constr
        self.calls = 0

    def evaluate(self, x):
        self.calls += 1
        return self.problem.evaluate(x)


def _builder(pop=16, gens=10, samples=40):
    return ANNNSGAIIConfig().pop_size(pop).max_generations(gens).training(samples=samples, max_attempts=samples)


def test_end_to_end_with_verification_and_topsis():
    problem = QuadraticPair()
    counter = CountingEvaluator(problem)
    cfg = _builder().verification(verify_pareto_front=True, verify_pareto_limit=5).fixed()

    result = ANNNSGAII(cfg).optimize(problem, counter, seed=3)

    info = result["training_info"]
    assert isinstance(info, TrainingInfo)
    assert info.accepted_samples == 40 and info.attempts == 40
    assert isinstance(result["surrogate_model"], SurrogateModel)

    vinfo = result["verification_info"]
    assert isinstance(vinfo, VerificationInfo)
    expected_checked = min(5, len(result["surrogate_pareto_front"]))
    assert vinfo.verified_pareto_count == expected_checked
    assert result["exact_evaluations"] == 40 + expected_checked
    assert counter.calls == result["exact_evaluations"]

    exact = result["exact_pareto_front"]
    assert exact is not None and len(exact) >= 1
    assert result["pareto_front"] is exact
    np.testing.assert_allclose(result["F"], exact.F)
    assert not constrained_dominance_matrix(exact.F).any()

    decision = result["topsis"]
    assert decision.source == "exact"
    assert 0.0 <= decision.score <= 1.0
    np.testing.assert_allclose(decision.objectives, problem.evaluate(decision.variables).objectives)


def test_topsis_choice_verified_without_front_verification():
    problem = QuadraticPair()
    counter = CountingEvaluator(problem)
    result = ANNNSGAII(_builder().fixed()).optimize(problem, counter, seed=1)

    assert result["exact_pareto_front"] is None
    decision = result["topsis"]
    assert decision.source == "surrogate"
    assert decision.exact_objectives is not None
    # quadratic problem, so the poly2 surrogate is essentially exact
    np.testing.assert_allclose(decision.exact_objectives, decision.objectives, atol=1e-4)
    assert result["exact_evaluations"] == 40 + 1
    assert counter.calls == 41


def test_verification_disabled_skips_topsis():
    problem = QuadraticPair()
    cfg = _builder().verification(enabled=False).fixed()
    result = ANNNSGAII(cfg).optimize(problem, seed=0)

    assert result["topsis"] is None
    assert result["exact_pareto_front"] is None
    assert not result["verification_info"].enabled
    assert result["exact_evaluations"] == 40
    assert len(result["population"]) == 16


def test_surrogate_front_is_non_dominated_and_in_bounds():
    result = ANNNSGAII(_builder(pop=20, gens=15).fixed()).optimize(QuadraticPair(), seed=4)
    front = result["surrogate_pareto_front"]
    assert len(front) > 0
    assert np.all(front.X >= 0.0) and np.all(front.X <= 1.0)
    assert not constrained_dominance_matrix(front.F).any()


def test_seeded_runs_are_reproducible():
    cfg = _builder().fixed()
    a = ANNNSGAII(cfg).optimize(QuadraticPair(), seed=9)
    b = ANNNSGAII(cfg).optimize(QuadraticPair(), seed=9)
    np.testing.assert_array_equal(a["X"], b["X"])


def test_training_seed_decouples_training_set():
    cfg = _builder().training(random_seed=123).fixed()
    a = ANNNSGAII(cfg).optimize(QuadraticPair(), seed=1)
    b = ANNNSGAII(cfg).optimize(QuadraticPair(), seed=2)
    np.testing.assert_allclose(a["surrogate_model"].input_mean, b["surrogate_model"].input_mean)


def test_all_training_failures_still_complete():
    class Broken:
        n_obj = 2
        n_constr = 0

        def evaluate(self, x):
            return EvaluationResult([np.nan, np.nan], success=False)

    cfg = _builder(pop=8, gens=3, samples=10).verification(verify_topsis=False).fixed()
    result = ANNNSGAII(cfg).optimize(QuadraticPair(), Broken(), seed=0)

    assert result["training_info"].accepted_samples == 0
    assert np.all(result["population"].F == 1e12)
    assert len(result["population"]) == 8


def test_topsis_weights_must_match_objectives():
    cfg = _builder().verification(topsis_weights=(1.0, 1.0, 1.0)).fixed()
    with pytest.raises(ConfigurationError, match="topsis_weights"):
        ANNNSGAII(cfg).optimize(QuadraticPair(), seed=0)


def test_ann_surrogate_requires_sklearn_or_runs():
    cfg = _builder(pop=10, gens=3, samples=60).surrogate(type="ann", hidden_layers=(8,), max_epochs=50).fixed()
    try:
        import sklearn  # noqa: F401
    except ImportError:
        with pytest.raises(DependencyError, match="scikit-learn"):
            ANNNSGAII(cfg).optimize(QuadraticPair(), seed=0)
        return
    result = ANNNSGAII(cfg).optimize(QuadraticPair(), seed=0)
    assert result["surrogate_model"].kind == "ann"
    assert result["topsis"] is not None


def test_stop_during_surrogate_phase():
    algo = ANNNSGAII(_builder(gens=50).fixed())

    def callback(record):
        if record.iteration == 3:
            algo.stop()

    result = algo.optimize(QuadraticPair(), seed=0, iteration_callback=callback)
    assert result["termination_reason"] == "stopped"
    assert result["generations"] == 3


class TestVerification:
    def _front(self):
        X = np.array([[0.0, 0.0], [0.5, 0.5], [1.0, 1.0]])
        return Population(X, QuadraticPair().objectives(X))

    def test_limit_larger_than_front_verifies_all(self):
        settings = VerificationSettings(verify_pareto_front=True, verify_pareto_limit=10)
        exact, decision, info = verify_solutions(self._front(), QuadraticPair(), settings, 2, 0)
        assert info.verified_pareto_count == 3
        assert info.exact_evaluations == 3
        assert len(exact) == 3
        assert decision.source == "exact"
        assert decision.index == 1

    def test_empty_front(self):
        empty = Population.empty(2, 2)
        exact, decision, info = verify_solutions(empty, QuadraticPair(), VerificationSettings(), 2, 0)
        assert exact is None and decision is None
        assert info.exact_evaluations == 0

    def test_select_by_topsis_ignores_non_finite_members(self):
        front = self._front()
        front.F[1] = np.inf
        decision = select_by_topsis(front)
        assert decision.index != 1
        assert np.isnan(decision.scores[1])
