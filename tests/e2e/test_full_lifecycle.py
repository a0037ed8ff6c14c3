"""Full runs through the public API."""

import logging

import numpy as np
import pytest

import mapo
from mapo import (
    ANNNSGAIIConfig,
    FunctionEvaluator,
    NSGAII,
    NSGAIIConfig,
    OptimizeConfig,
    Problem,
    ZDT1Problem,
    configure_mapo_logging,
    optimize,
)
from mapo.foundation.kernel import constrained_dominance_matrix


class UnitSquare(Problem):
    def __init__(self):
        self.n_var = 2
        self.n_obj = 2
        self.xl = np.zeros(2)
        self.xu = np.ones(2)

    def objectives(self, X):
        return np.column_stack([X[:, 0], (1.0 + X[:, 1]) * (1.0 - np.sqrt(X[:, 0]))])


def test_box_constrained_run_keeps_population_and_returns_front():
    cfg = NSGAIIConfig().pop_size(20).max_generations(5).seed(2024).fixed()
    result = NSGAII(cfg).optimize(UnitSquare())

    assert len(result["population"]) == 20
    front = result["pareto_front"]
    assert len(front) > 0
    assert not constrained_dominance_matrix(front.F).any()
    assert np.all(front.X >= 0.0) and np.all(front.X <= 1.0)


@pytest.mark.slow
def test_zdt1_front_approaches_true_front():
    cfg = OptimizeConfig(
        problem=ZDT1Problem(n_var=10),
        algorithm_config=NSGAIIConfig().pop_size(40).max_generations(120),
        seed=1,
    )
    result = optimize(cfg)
    F = result.F
    # true front: f2 = 1 - sqrt(f1)
    gap = F[:, 1] - (1.0 - np.sqrt(F[:, 0]))
    assert np.median(gap) < 0.3


def test_surrogate_run_on_function_evaluator():
    def fn(x):
        return [np.sum(x**2), np.sum((x - 1.0) ** 2)], [0.25 - x[0]]

    class Box(Problem):
        n_constraints = 1

        def __init__(self):
            self.n_var = 2
            self.n_obj = 2
            self.xl = 0.0
            self.xu = 1.0

    cfg = (
        ANNNSGAIIConfig()
        .pop_size(12)
        .max_generations(6)
        .training(samples=30, max_attempts=30)
        .verification(verify_pareto_front=True)
        .fixed()
    )
    result = optimize(
        OptimizeConfig(
            problem=Box(),
            algorithm="ann_nsgaii",
            algorithm_config=cfg,
            evaluator=FunctionEvaluator(fn, n_obj=2, n_constr=1),
            seed=5,
        )
    )
    decision = result.topsis
    assert decision is not None
    assert decision.feasible
    assert decision.variables[0] >= 0.25 - 1e-9


def test_configure_logging_is_opt_in(monkeypatch):
    root = logging.getLogger()
    mapo_logger = logging.getLogger("mapo")
    monkeypatch.setattr(root, "handlers", [])
    monkeypatch.setattr(mapo_logger, "handlers", [])
    monkeypatch.setattr(mapo_logger, "propagate", True)
    monkeypatch.setattr(mapo_logger, "level", logging.NOTSET)

    configure_mapo_logging(level=logging.DEBUG)
    assert len(mapo_logger.handlers) == 1
    assert mapo_logger.level == logging.DEBUG
    configure_mapo_logging()
    assert len(mapo_logger.handlers) == 1


def test_version_is_exposed():
    assert isinstance(mapo.__version__, str)
