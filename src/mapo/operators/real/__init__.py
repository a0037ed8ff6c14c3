"""Real-coded variation operators, initializers and the η schedule."""

from .crossover import Crossover, SBXCrossover, sbx_crossover
from .initialize import (
    LatinHypercubeInitializer,
    UniformInitializer,
    sample_latin_hypercube,
    sample_uniform,
)
from .mutation import Mutation, PolynomialMutation
from .schedule import EtaSchedule, interpolate_eta

__all__ = [
    "Crossover",
    "SBXCrossover",
    "sbx_crossover",
    "Mutation",
    "PolynomialMutation",
    "UniformInitializer",
    "LatinHypercubeInitializer",
    "sample_uniform",
    "sample_latin_hypercube",
    "EtaSchedule",
    "interpolate_eta",
]
