# algorithm/nsgaii/nsgaii.py
"""
NSGA-II evolutionary algorithm core.

This module contains the NSGAII class with the generational loop.
- State and results: state.py
- Mating and survival: helpers.py
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Mapping

import numpy as np

from mapo.engine.algorithm.base import problem_bounds, problem_dimensions, resolve_evaluator
from mapo.engine.algorithm.config import NSGAIIConfig, NSGAIIConfigData
from mapo.engine.algorithm.population import Population
from mapo.foundation.eval import EvaluationBackend
from mapo.foundation.eval.backends import resolve_eval_backend
from mapo.foundation.exceptions import OptimizationError
from mapo.foundation.kernel import KernelBackend, default_kernel
from mapo.operators.real import EtaSchedule

from .helpers import environmental_selection, generate_offspring
from .state import IterationRecord, NSGAIIState, RunStatus, build_result

IterationCallback = Callable[[IterationRecord], Any]


def _logger() -> logging.Logger:
    return logging.getLogger(__name__)


def _coerce_config(config: NSGAIIConfigData | Mapping[str, Any] | None) -> NSGAIIConfigData:
    if config is None:
        return NSGAIIConfig.default()
    if isinstance(config, NSGAIIConfigData):
        return config
    return NSGAIIConfig.from_dict(config)


class NSGAII:
    """
    Vectorized/SoA-style NSGA-II evolutionary core.
    Individuals are represented as array rows (X, F, G) without per-object instances.

    Example::

        algo = NSGAII(NSGAIIConfig().pop_size(40).max_generations(50).fixed())
        result = algo.optimize(ZDT1Problem(n_var=10), seed=1)
        result["F"]  # non-dominated objectives
    """

    def __init__(
        self,
        config: NSGAIIConfigData | Mapping[str, Any] | None = None,
        kernel: KernelBackend | None = None,
    ) -> None:
        self.cfg = _coerce_config(config)
        self.kernel = kernel or default_kernel()
        self.status = RunStatus.INITIALIZED
        self._stop_event = threading.Event()
        self._st: NSGAIIState | None = None

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def stop(self) -> None:
        """Request termination; honoured at the next generation boundary."""
        self._stop_event.set()

    @property
    def state(self) -> NSGAIIState | None:
        return self._st

    def optimize(
        self,
        problem: Any,
        evaluator: Any = None,
        *,
        seed: int | None = None,
        eval_backend: str | EvaluationBackend | None = None,
        iteration_callback: IterationCallback | None = None,
    ) -> dict[str, Any]:
        """Run NSGA-II on ``problem`` and return the result mapping."""
        self.cfg.validate()
        problem_dimensions(problem)
        evaluator = resolve_evaluator(problem, evaluator)
        seed = self.cfg.random_seed if seed is None else seed
        rng = np.random.default_rng(seed)
        backend = resolve_eval_backend(
            eval_backend if eval_backend is not None else self.cfg.eval_backend,
            n_workers=self.cfg.n_workers,
        )
        try:
            return self.run(problem, evaluator, rng, backend, iteration_callback=iteration_callback)
        finally:
            backend.close()

    # ------------------------------------------------------------------
    # Loop
    # ------------------------------------------------------------------

    def run(
        self,
        problem: Any,
        evaluator: Any,
        rng: np.random.Generator,
        eval_backend: EvaluationBackend,
        *,
        iteration_callback: IterationCallback | None = None,
    ) -> dict[str, Any]:
        """Run the generational loop with an injected RNG and backend."""
        if self.status is RunStatus.EVOLVING:
            raise OptimizationError(
                "NSGA-II is already running.",
                suggestion="Create a separate NSGAII instance per concurrent run.",
            )
        cfg = self.cfg
        n_var, n_obj, n_constr = problem_dimensions(problem)
        lower, upper = problem_bounds(problem, n_var)
        pop_size = int(cfg.pop_size)
        max_gen = int(cfg.max_generations)
        budget = cfg.evaluation_budget
        schedule = EtaSchedule(
            crossover_eta=cfg.crossover_eta,
            mutation_eta=cfg.mutation_eta,
            dynamic=cfg.use_dynamic_operators,
            crossover_eta_start=cfg.crossover_eta_start,
            crossover_eta_end=cfg.crossover_eta_end,
            mutation_eta_start=cfg.mutation_eta_start,
            mutation_eta_end=cfg.mutation_eta_end,
        )

        self._stop_event.clear()
        self.status = RunStatus.EVOLVING
        _logger().info(
            "NSGA-II: starting (n_var=%d, n_obj=%d, n_constr=%d, pop_size=%d, generations=%d)",
            n_var,
            n_obj,
            n_constr,
            pop_size,
            max_gen,
        )
        try:
            X0 = Population.random(pop_size, lower, upper, rng, n_obj, n_constr).X
            initial = self._evaluate(X0, evaluator, eval_backend, n_obj, n_constr)
            st = NSGAIIState(
                population=initial.rank_and_crowd(self.kernel),
                rng=rng,
                lower=lower,
                upper=upper,
                n_obj=n_obj,
                n_constr=n_constr,
                evaluations=len(initial),
                archive=initial.take(np.arange(len(initial))) if cfg.keep_all_evaluated else None,
            )
            self._st = st

            while not self._should_stop(st, max_gen, budget):
                st.generation += 1
                eta_c, eta_m = schedule.at(st.generation, max_gen)
                X_off = generate_offspring(
                    st.population,
                    pop_size,
                    lower,
                    upper,
                    crossover_rate=cfg.crossover_rate,
                    mutation_rate=cfg.mutation_rate,
                    crossover_eta=eta_c,
                    mutation_eta=eta_m,
                    rng=rng,
                    kernel=self.kernel,
                )
                offspring = self._evaluate(X_off, evaluator, eval_backend, n_obj, n_constr)
                st.evaluations += len(offspring)
                st.record_evaluated(offspring)
                st.population = environmental_selection(st.population, offspring, pop_size, self.kernel)

                record = st.snapshot()
                st.history.append(record)
                if iteration_callback is not None:
                    iteration_callback(record)
                if st.generation % 10 == 0 or self._should_stop(st, max_gen, budget):
                    _logger().info(
                        "Generation %d: evaluations=%d, front size=%d",
                        st.generation,
                        st.evaluations,
                        record.front_size,
                    )
        finally:
            self.status = RunStatus.TERMINATED

        stopped = st.termination_reason == "stopped"
        _logger().info(
            "NSGA-II: finished after %d generations (%s), %d evaluations in %.2fs",
            st.generation,
            st.termination_reason,
            st.evaluations,
            st.elapsed,
        )
        return build_result(st, stopped=stopped)

    def _should_stop(self, st: NSGAIIState, max_gen: int, budget: int) -> bool:
        if self._stop_event.is_set():
            st.termination_reason = "stopped"
        elif st.generation >= max_gen:
            st.termination_reason = "max_generations"
        elif st.evaluations >= budget:
            st.termination_reason = "max_evaluations"
        elif self.cfg.max_time is not None and st.elapsed >= float(self.cfg.max_time):
            st.termination_reason = "max_time"
        else:
            return False
        return True

    @staticmethod
    def _evaluate(
        X: np.ndarray,
        evaluator: Any,
        backend: EvaluationBackend,
        n_obj: int,
        n_constr: int,
    ) -> Population:
        results = backend.evaluate(X, evaluator, n_obj, n_constr)
        return Population.from_results(X, results, n_obj, n_constr)


__all__ = ["NSGAII"]
