"""
NSGA-II algorithm package.

Modules:
- nsgaii: NSGAII class with the generational loop
- state: NSGAIIState, IterationRecord and result building
- helpers: offspring generation and environmental selection
"""

from .nsgaii import NSGAII
from .state import IterationRecord, NSGAIIState, RunStatus, build_result
from .helpers import environmental_selection, generate_offspring

__all__ = [
    "NSGAII",
    "NSGAIIState",
    "IterationRecord",
    "RunStatus",
    "build_result",
    "generate_offspring",
    "environmental_selection",
]
