"""Decision-making helpers applied to finished Pareto fronts."""

from .mcdm import MCDMResult, topsis_scores

__all__ = ["MCDMResult", "topsis_scores"]
