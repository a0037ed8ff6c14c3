from __future__ import annotations

import math
import os
from concurrent.futures import ProcessPoolExecutor, ThreadPoolExecutor
from typing import Any, Optional

import numpy as np

from mapo.foundation.exceptions import ConfigurationError

from . import EvaluationBackend, EvaluationResult
from .evaluators import evaluate_guarded


def _counts(evaluator: Any, n_obj: int | None, n_constr: int | None) -> tuple[int, int]:
    if n_obj is None:
        n_obj = int(getattr(evaluator, "n_obj", 1))
    if n_constr is None:
        n_constr = int(getattr(evaluator, "n_constr", getattr(evaluator, "n_constraints", 0)) or 0)
    return n_obj, n_constr


def _eval_chunk(evaluator: Any, X_chunk: np.ndarray, n_obj: int, n_constr: int) -> list[EvaluationResult]:
    """Worker helper to evaluate a chunk; kept at module level for pickling."""
    return [evaluate_guarded(evaluator, x, n_obj, n_constr) for x in X_chunk]


def _chunk_slices(n: int, n_workers: int, chunk_size: Optional[int]) -> list[tuple[int, int]]:
    if chunk_size is not None and chunk_size > 0:
        size = chunk_size
    else:
        size = max(1, math.ceil(n / n_workers))
    return [(i, min(i + size, n)) for i in range(0, n, size)]


class SerialEvalBackend(EvaluationBackend):
    """Synchronous in-process evaluation (default)."""

    def evaluate(
        self,
        X: np.ndarray,
        evaluator: Any,
        n_obj: int | None = None,
        n_constr: int | None = None,
    ) -> list[EvaluationResult]:
        n_obj, n_constr = _counts(evaluator, n_obj, n_constr)
        return _eval_chunk(evaluator, np.atleast_2d(np.asarray(X, dtype=float)), n_obj, n_constr)

    def close(self) -> None:
        return None


class _PooledEvalBackend(EvaluationBackend):
    executor_cls: type = ThreadPoolExecutor

    def __init__(self, n_workers: Optional[int] = None, chunk_size: Optional[int] = None) -> None:
        self.n_workers = max(1, n_workers or os.cpu_count() or 1)
        self.chunk_size = chunk_size

    def evaluate(
        self,
        X: np.ndarray,
        evaluator: Any,
        n_obj: int | None = None,
        n_constr: int | None = None,
    ) -> list[EvaluationResult]:
        X = np.atleast_2d(np.asarray(X, dtype=float))
        n_obj, n_constr = _counts(evaluator, n_obj, n_constr)
        n = X.shape[0]
        if self.n_workers <= 1 or n <= 1:
            return _eval_chunk(evaluator, X, n_obj, n_constr)

        results: list[EvaluationResult] = []
        with self.executor_cls(max_workers=self.n_workers) as ex:
            futures = [
                ex.submit(_eval_chunk, evaluator, X[start:end], n_obj, n_constr)
                for start, end in _chunk_slices(n, self.n_workers, self.chunk_size)
            ]
            # Chunks are contiguous and submitted in order; collecting in
            # submission order restores input order.
            for fut in futures:
                results.extend(fut.result())
        return results

    def close(self) -> None:
        return None


class ThreadEvalBackend(_PooledEvalBackend):
    """
    Parallel evaluation on a thread pool.

    Suited to evaluators that release the GIL or wait on external processes.
    """

    executor_cls = ThreadPoolExecutor


class MultiprocessingEvalBackend(_PooledEvalBackend):
    """
    Parallel evaluation using multiprocessing.

    Notes:
        - Requires the evaluator instance to be picklable.
        - Best suited for expensive evaluations; overhead dominates for tiny problems.
    """

    executor_cls = ProcessPoolExecutor


_BACKENDS = {
    "serial": SerialEvalBackend,
    "threads": ThreadEvalBackend,
    "multiprocessing": MultiprocessingEvalBackend,
}


def resolve_eval_backend(
    name: str | EvaluationBackend | None,
    *,
    n_workers: Optional[int] = None,
    chunk_size: Optional[int] = None,
) -> EvaluationBackend:
    if name is not None and not isinstance(name, str):
        return name
    key = (name or "serial").strip().lower()
    if key == "serial":
        return SerialEvalBackend()
    if key in ("threads", "multiprocessing"):
        return _BACKENDS[key](n_workers=n_workers, chunk_size=chunk_size)
    raise ConfigurationError(
        f"Unknown evaluation backend '{name}'.",
        suggestion=f"Available backends: {', '.join(_BACKENDS)}",
        details={"eval_backend": name},
    )


__all__ = [
    "SerialEvalBackend",
    "ThreadEvalBackend",
    "MultiprocessingEvalBackend",
    "resolve_eval_backend",
]
