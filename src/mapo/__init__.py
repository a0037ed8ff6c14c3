"""
MAPO: multi-objective optimization with NSGA-II and surrogate-assisted ANN-NSGA-II.

Quick start::

    from mapo import OptimizeConfig, ZDT1Problem, optimize

    result = optimize(OptimizeConfig(problem=ZDT1Problem(n_var=10), seed=1))
    print(result.summary_text())
"""

from .analysis import MCDMResult, topsis_scores
from .engine.algorithm import ANNNSGAII, NSGAII, Individual, Population, resolve_algorithm
from .engine.algorithm.config import (
    ANNNSGAIIConfig,
    ANNNSGAIIConfigData,
    NSGAIIConfig,
    NSGAIIConfigData,
    SurrogateSettings,
    TrainingSettings,
    VerificationSettings,
)
from .foundation.eval import EvaluationResult
from .foundation.eval.evaluators import FunctionEvaluator
from .foundation.exceptions import (
    BoundsError,
    ConfigurationError,
    DependencyError,
    InvalidAlgorithmError,
    InvalidSamplingError,
    InvalidSurrogateError,
    MAPOError,
    MissingEvaluatorError,
    OptimizationError,
    ProblemDimensionError,
    ProblemError,
)
from .foundation.logging import configure_mapo_logging
from .foundation.problem import Problem, ZDT1Problem
from .foundation.version import get_version
from .optimize import OptimizationResult, OptimizeConfig, optimize


def __getattr__(name: str):
    if name == "__version__":
        return get_version()
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "optimize",
    "OptimizeConfig",
    "OptimizationResult",
    "NSGAII",
    "ANNNSGAII",
    "NSGAIIConfig",
    "NSGAIIConfigData",
    "ANNNSGAIIConfig",
    "ANNNSGAIIConfigData",
    "TrainingSettings",
    "SurrogateSettings",
    "VerificationSettings",
    "Population",
    "Individual",
    "resolve_algorithm",
    "Problem",
    "ZDT1Problem",
    "EvaluationResult",
    "FunctionEvaluator",
    "MCDMResult",
    "topsis_scores",
    "configure_mapo_logging",
    "MAPOError",
    "ConfigurationError",
    "InvalidAlgorithmError",
    "InvalidSurrogateError",
    "InvalidSamplingError",
    "ProblemError",
    "ProblemDimensionError",
    "BoundsError",
    "MissingEvaluatorError",
    "OptimizationError",
    "DependencyError",
]
