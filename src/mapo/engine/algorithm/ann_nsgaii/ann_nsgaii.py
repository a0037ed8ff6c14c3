# algorithm/ann_nsgaii/ann_nsgaii.py
"""
Surrogate-assisted NSGA-II.

Phases:
1. collect a training set with the exact evaluator
2. fit the surrogate and evolve an NSGA-II population against it
3. verify the surrogate front with the exact evaluator and pick a TOPSIS compromise
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

import numpy as np

from mapo.engine.algorithm.base import problem_bounds, problem_dimensions, resolve_evaluator
from mapo.engine.algorithm.config import ANNNSGAIIConfig, ANNNSGAIIConfigData
from mapo.engine.algorithm.nsgaii import NSGAII
from mapo.engine.algorithm.nsgaii.nsgaii import IterationCallback
from mapo.foundation.eval import EvaluationBackend
from mapo.foundation.eval.backends import SerialEvalBackend, resolve_eval_backend
from mapo.foundation.exceptions import ConfigurationError
from mapo.foundation.kernel import KernelBackend

from .evaluator import SurrogateEvaluator
from .surrogate import fit_surrogate, require_sklearn
from .training import collect_training_data
from .verification import VerificationInfo, verify_solutions


def _logger() -> logging.Logger:
    return logging.getLogger(__name__)


def _coerce_config(config: ANNNSGAIIConfigData | Mapping[str, Any] | None) -> ANNNSGAIIConfigData:
    if config is None:
        return ANNNSGAIIConfig().fixed()
    if isinstance(config, ANNNSGAIIConfigData):
        return config
    return ANNNSGAIIConfig.from_dict(config)


class ANNNSGAII:
    """
    NSGA-II driven by a surrogate model trained once up front.

    The generational loop is an :class:`NSGAII` instance bound to a
    :class:`SurrogateEvaluator`; the exact evaluator is only used for the
    training set and for verification.

    Example::

        cfg = ANNNSGAIIConfig().pop_size(40).max_generations(40).training(samples=80).fixed()
        result = ANNNSGAII(cfg).optimize(ZDT1Problem(n_var=5), seed=3)
        result["topsis"].variables
    """

    def __init__(
        self,
        config: ANNNSGAIIConfigData | Mapping[str, Any] | None = None,
        kernel: KernelBackend | None = None,
    ) -> None:
        self.cfg = _coerce_config(config)
        self._loop = NSGAII(self.cfg, kernel)

    @property
    def kernel(self) -> KernelBackend:
        return self._loop.kernel

    @property
    def status(self):
        return self._loop.status

    def stop(self) -> None:
        """Request termination of the evolutionary phase at the next generation boundary."""
        self._loop.stop()

    def _check_problem(self, n_obj: int) -> None:
        weights = self.cfg.verification.topsis_weights
        if weights is not None and len(weights) != n_obj:
            raise ConfigurationError(
                f"topsis_weights has {len(weights)} entries but the problem has {n_obj} objectives.",
                suggestion="Provide one weight per objective or leave topsis_weights unset for equal weights.",
            )
        if str(self.cfg.surrogate.type).lower() == "ann":
            require_sklearn()

    def optimize(
        self,
        problem: Any,
        evaluator: Any = None,
        *,
        seed: int | None = None,
        eval_backend: str | EvaluationBackend | None = None,
        iteration_callback: IterationCallback | None = None,
    ) -> dict[str, Any]:
        cfg = self.cfg.validate()
        n_var, n_obj, n_constr = problem_dimensions(problem)
        lower, upper = problem_bounds(problem, n_var)
        exact = resolve_evaluator(problem, evaluator)
        self._check_problem(n_obj)

        seed = cfg.random_seed if seed is None else seed
        rng = np.random.default_rng(seed)
        training_rng = rng if cfg.training.random_seed is None else np.random.default_rng(cfg.training.random_seed)
        backend = resolve_eval_backend(
            eval_backend if eval_backend is not None else cfg.eval_backend,
            n_workers=cfg.n_workers,
        )

        try:
            _logger().info("ANN-NSGA-II: collecting training samples (%s)", cfg.training.sampling_method)
            X_train, Y_train, training_info = collect_training_data(
                exact, lower, upper, n_obj, n_constr, cfg.training, training_rng, backend
            )

            _logger().info("ANN-NSGA-II: training surrogate (%s)", cfg.surrogate.type)
            model = fit_surrogate(X_train, Y_train, n_obj, n_constr, cfg.surrogate, rng)
            surrogate = SurrogateEvaluator(model)

            _logger().info("ANN-NSGA-II: starting evolution")
            result = self._loop.run(
                problem,
                surrogate,
                rng,
                SerialEvalBackend(),
                iteration_callback=iteration_callback,
            )
            surrogate_front = result["pareto_front"]

            exact_front = None
            topsis = None
            if cfg.verification.enabled:
                exact_front, topsis, verification_info = verify_solutions(
                    surrogate_front,
                    exact,
                    cfg.verification,
                    n_obj,
                    n_constr,
                    eval_backend=backend,
                    kernel=self.kernel,
                )
            else:
                verification_info = VerificationInfo(enabled=False)
        finally:
            backend.close()

        result.update(
            {
                "training_info": training_info,
                "surrogate_model": model,
                "surrogate_pareto_front": surrogate_front,
                "exact_pareto_front": exact_front,
                "verification_info": verification_info,
                "topsis": topsis,
                "exact_evaluations": training_info.attempts + verification_info.exact_evaluations,
            }
        )
        if exact_front is not None:
            result["pareto_front"] = exact_front
            result["X"] = exact_front.X
            result["F"] = exact_front.F
            result["G"] = exact_front.G
        return result


__all__ = ["ANNNSGAII"]
