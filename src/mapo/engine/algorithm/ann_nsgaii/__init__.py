"""
Surrogate-assisted NSGA-II package.

Modules:
- ann_nsgaii: ANNNSGAII driver (training, evolution, verification)
- training: training-set collection
- surrogate: poly2 / MLP surrogate fitting
- evaluator: surrogate-backed evaluator adapter
- verification: exact re-evaluation and TOPSIS selection
"""

from .ann_nsgaii import ANNNSGAII
from .evaluator import SurrogateEvaluator
from .surrogate import SurrogateModel, fit_surrogate, poly2_features
from .training import TrainingInfo, collect_training_data
from .verification import TopsisDecision, VerificationInfo, select_by_topsis, verify_solutions

__all__ = [
    "ANNNSGAII",
    "SurrogateEvaluator",
    "SurrogateModel",
    "fit_surrogate",
    "poly2_features",
    "TrainingInfo",
    "collect_training_data",
    "TopsisDecision",
    "VerificationInfo",
    "select_by_topsis",
    "verify_solutions",
]
