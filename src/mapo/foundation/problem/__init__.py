from .base import Problem, normalize_bounds
from .types import ProblemProtocol
from .zdt1 import ZDT1Problem

__all__ = ["Problem", "ProblemProtocol", "ZDT1Problem", "normalize_bounds"]
