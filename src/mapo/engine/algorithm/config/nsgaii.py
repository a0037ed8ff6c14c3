"""NSGA-II configuration."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from .base import _SerializableConfig, _check, _normalize_keys, _reject_unknown

EVAL_BACKENDS = ("serial", "threads", "multiprocessing")

_ALIASES: Dict[str, str] = {
    "populationSize": "pop_size",
    "population_size": "pop_size",
    "maxGenerations": "max_generations",
    "generations": "max_generations",
    "crossoverRate": "crossover_rate",
    "mutationRate": "mutation_rate",
    "crossoverDistIndex": "crossover_eta",
    "mutationDistIndex": "mutation_eta",
    "useDynamicOperators": "use_dynamic_operators",
    "crossoverDistIndexStart": "crossover_eta_start",
    "crossoverDistIndexEnd": "crossover_eta_end",
    "mutationDistIndexStart": "mutation_eta_start",
    "mutationDistIndexEnd": "mutation_eta_end",
    "maxEvaluations": "max_evaluations",
    "maxTime": "max_time",
    "randomSeed": "random_seed",
    "seed": "random_seed",
    "keepAllEvaluated": "keep_all_evaluated",
    "evalBackend": "eval_backend",
    "nWorkers": "n_workers",
}


@dataclass(frozen=True)
class NSGAIIConfigData(_SerializableConfig):
    pop_size: int = 100
    max_generations: int = 250
    crossover_rate: float = 0.9
    mutation_rate: float = 1.0
    crossover_eta: float = 20.0
    mutation_eta: float = 20.0
    use_dynamic_operators: bool = False
    crossover_eta_start: float = 5.0
    crossover_eta_end: float = 30.0
    mutation_eta_start: float = 5.0
    mutation_eta_end: float = 30.0
    max_evaluations: Optional[int] = None
    max_time: Optional[float] = None
    random_seed: Optional[int] = None
    keep_all_evaluated: bool = False
    eval_backend: str = "serial"
    n_workers: Optional[int] = None

    @property
    def evaluation_budget(self) -> int:
        """Evaluation cap; defaults to one initial population plus one per generation."""
        if self.max_evaluations is not None:
            return int(self.max_evaluations)
        return int(self.pop_size) * (int(self.max_generations) + 1)

    def validate(self) -> "NSGAIIConfigData":
        _check(int(self.pop_size) >= 2, "pop_size must be at least 2.", pop_size=self.pop_size)
        _check(int(self.max_generations) >= 1, "max_generations must be at least 1.", max_generations=self.max_generations)
        _check(0.0 <= float(self.crossover_rate) <= 1.0, "crossover_rate must be in [0, 1].")
        _check(float(self.mutation_rate) >= 0.0, "mutation_rate must be non-negative.")
        for name in (
            "crossover_eta",
            "mutation_eta",
            "crossover_eta_start",
            "crossover_eta_end",
            "mutation_eta_start",
            "mutation_eta_end",
        ):
            value = float(getattr(self, name))
            _check(math.isfinite(value) and value >= 0.0, f"{name} must be a finite non-negative number.")
        if self.max_evaluations is not None:
            _check(int(self.max_evaluations) > 0, "max_evaluations must be positive.")
        if self.max_time is not None:
            _check(float(self.max_time) > 0.0, "max_time must be positive seconds.")
        _check(
            str(self.eval_backend).lower() in EVAL_BACKENDS,
            f"eval_backend must be one of: {', '.join(EVAL_BACKENDS)}",
            eval_backend=self.eval_backend,
        )
        if self.n_workers is not None:
            _check(int(self.n_workers) >= 1, "n_workers must be at least 1.")
        return self


def _flatten_operators(config: Dict[str, Any], aliases: Mapping[str, str]) -> Dict[str, Any]:
    """Lift keys from a nested ``operators`` block; the block wins over top-level keys."""
    ops = config.pop("operators", None)
    if isinstance(ops, Mapping):
        config.update(_normalize_keys(ops, aliases))
    return config


class NSGAIIConfig:
    """
    Declarative configuration holder for NSGA-II.
    Provides a fluent builder that yields an immutable NSGAIIConfigData.

    Examples:
        # Fluent builder
        cfg = NSGAIIConfig().pop_size(100).max_generations(50).crossover(rate=0.9, eta=15).fixed()

        # Quick default configuration
        cfg = NSGAIIConfig.default()

        # From dictionary (snake_case or camelCase keys)
        cfg = NSGAIIConfig.from_dict({"populationSize": 40, "operators": {"crossoverRate": 0.8}})
    """

    data_cls: type = NSGAIIConfigData
    aliases: Dict[str, str] = _ALIASES

    def __init__(self) -> None:
        self._cfg: Dict[str, Any] = {}

    @classmethod
    def default(cls, pop_size: int = 100, max_generations: int = 250):
        """
        Create a default configuration.

        Args:
            pop_size: Population size (default: 100)
            max_generations: Generation budget (default: 250)
        """
        return cls().pop_size(pop_size).max_generations(max_generations).fixed()

    @classmethod
    def _prepare(cls, config: Mapping[str, Any]) -> Dict[str, Any]:
        return _flatten_operators(_normalize_keys(config, cls.aliases), cls.aliases)

    @classmethod
    def from_dict(cls, config: Mapping[str, Any]):
        """
        Create configuration from a dictionary.

        Unknown keys raise ConfigurationError; missing keys take defaults.
        """
        cfg = cls._prepare(config)
        _reject_unknown(cfg, cls.data_cls, "NSGA-II")
        builder = cls()
        builder._cfg.update(cfg)
        return builder.fixed()

    def pop_size(self, value: int) -> "NSGAIIConfig":
        self._cfg["pop_size"] = int(value)
        return self

    def max_generations(self, value: int) -> "NSGAIIConfig":
        self._cfg["max_generations"] = int(value)
        return self

    def crossover(self, *, rate: float | None = None, eta: float | None = None) -> "NSGAIIConfig":
        if rate is not None:
            self._cfg["crossover_rate"] = float(rate)
        if eta is not None:
            self._cfg["crossover_eta"] = float(eta)
        return self

    def mutation(self, *, rate: float | None = None, eta: float | None = None) -> "NSGAIIConfig":
        if rate is not None:
            self._cfg["mutation_rate"] = float(rate)
        if eta is not None:
            self._cfg["mutation_eta"] = float(eta)
        return self

    def dynamic_operators(
        self,
        enabled: bool = True,
        *,
        crossover_eta: tuple[float, float] | None = None,
        mutation_eta: tuple[float, float] | None = None,
    ) -> "NSGAIIConfig":
        """Enable the linear η schedule; ranges are ``(start, end)``."""
        self._cfg["use_dynamic_operators"] = bool(enabled)
        if crossover_eta is not None:
            self._cfg["crossover_eta_start"], self._cfg["crossover_eta_end"] = map(float, crossover_eta)
        if mutation_eta is not None:
            self._cfg["mutation_eta_start"], self._cfg["mutation_eta_end"] = map(float, mutation_eta)
        return self

    def max_evaluations(self, value: int | None) -> "NSGAIIConfig":
        self._cfg["max_evaluations"] = None if value is None else int(value)
        return self

    def max_time(self, seconds: float | None) -> "NSGAIIConfig":
        self._cfg["max_time"] = None if seconds is None else float(seconds)
        return self

    def seed(self, value: int | None) -> "NSGAIIConfig":
        self._cfg["random_seed"] = value
        return self

    def keep_all_evaluated(self, enabled: bool = True) -> "NSGAIIConfig":
        self._cfg["keep_all_evaluated"] = bool(enabled)
        return self

    def eval_backend(self, name: str, *, n_workers: int | None = None) -> "NSGAIIConfig":
        self._cfg["eval_backend"] = str(name)
        if n_workers is not None:
            self._cfg["n_workers"] = int(n_workers)
        return self

    def fixed(self) -> NSGAIIConfigData:
        return NSGAIIConfigData(**self._cfg)


__all__ = ["NSGAIIConfig", "NSGAIIConfigData", "EVAL_BACKENDS"]
