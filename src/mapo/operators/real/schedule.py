"""Generation-dependent distribution indices for SBX and polynomial mutation."""

from __future__ import annotations

from dataclasses import dataclass


def interpolate_eta(start: float, end: float, generation: int, max_generations: int) -> float:
    """
    Linear schedule from ``start`` (generation 1) to ``end`` (``max_generations``).

    Returns ``end`` when there is at most one generation.
    """
    if max_generations <= 1:
        return float(end)
    progress = (generation - 1) / (max_generations - 1)
    progress = min(max(progress, 0.0), 1.0)
    return float(start + (end - start) * progress)


@dataclass(frozen=True)
class EtaSchedule:
    crossover_eta: float = 20.0
    mutation_eta: float = 20.0
    dynamic: bool = False
    crossover_eta_start: float = 5.0
    crossover_eta_end: float = 30.0
    mutation_eta_start: float = 5.0
    mutation_eta_end: float = 30.0

    def at(self, generation: int, max_generations: int) -> tuple[float, float]:
        """Return ``(crossover_eta, mutation_eta)`` for a 1-based generation."""
        if not self.dynamic:
            return float(self.crossover_eta), float(self.mutation_eta)
        return (
            interpolate_eta(self.crossover_eta_start, self.crossover_eta_end, generation, max_generations),
            interpolate_eta(self.mutation_eta_start, self.mutation_eta_end, generation, max_generations),
        )


__all__ = ["EtaSchedule", "interpolate_eta"]
