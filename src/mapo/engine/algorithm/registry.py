"""
Algorithm registry.

Maps algorithm names to builder callables so orchestration code avoids
hard-coded conditionals. Builders accept (config, kernel) and return an
initialized algorithm instance.
"""

from __future__ import annotations

from typing import Any, Callable

from mapo.foundation.exceptions import InvalidAlgorithmError
from mapo.foundation.kernel import KernelBackend
from mapo.foundation.registry import Registry

from .ann_nsgaii import ANNNSGAII
from .base import Optimizer
from .nsgaii import NSGAII

AlgorithmBuilder = Callable[[Any, KernelBackend | None], Optimizer]

_ALGORITHMS: Registry[AlgorithmBuilder] | None = None


def _build_nsgaii(cfg: Any, kernel: KernelBackend | None) -> Optimizer:
    return NSGAII(cfg, kernel=kernel)


def _build_ann_nsgaii(cfg: Any, kernel: KernelBackend | None) -> Optimizer:
    return ANNNSGAII(cfg, kernel=kernel)


def _register_algorithms(registry: Registry[AlgorithmBuilder]) -> None:
    registry.register("nsgaii", _build_nsgaii)
    registry.register("ann_nsgaii", _build_ann_nsgaii)


def get_algorithms_registry() -> Registry[AlgorithmBuilder]:
    global _ALGORITHMS
    if _ALGORITHMS is None:
        registry: Registry[AlgorithmBuilder] = Registry("Algorithms")
        _register_algorithms(registry)
        _ALGORITHMS = registry
    return _ALGORITHMS


def _normalize_name(name: str) -> str:
    return name.strip().lower().replace("-", "_")


def resolve_algorithm(name: str) -> AlgorithmBuilder:
    registry = get_algorithms_registry()
    key = _normalize_name(name or "")
    if key in registry:
        return registry[key]
    raise InvalidAlgorithmError(name, registry.list(), registry.suggest(key))


def __getattr__(name: str) -> Any:
    if name == "ALGORITHMS":
        return get_algorithms_registry()
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = ["get_algorithms_registry", "resolve_algorithm", "AlgorithmBuilder"]
