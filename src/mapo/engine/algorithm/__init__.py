"""
Algorithm layer: population model, configs, NSGA-II and its surrogate-assisted variant.
"""

from .ann_nsgaii import ANNNSGAII
from .individual import Individual
from .nsgaii import NSGAII, IterationRecord, RunStatus
from .population import Population
from .registry import get_algorithms_registry, resolve_algorithm

__all__ = [
    "ANNNSGAII",
    "NSGAII",
    "Individual",
    "IterationRecord",
    "Population",
    "RunStatus",
    "get_algorithms_registry",
    "resolve_algorithm",
]
