"""ANN-NSGA-II configuration: NSGA-II settings plus training, surrogate and verification blocks."""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Mapping, Optional, Tuple

from mapo.foundation.exceptions import ConfigurationError, InvalidSamplingError, InvalidSurrogateError

from .base import _SerializableConfig, _check, _normalize_keys, _reject_unknown
from .nsgaii import NSGAIIConfig, NSGAIIConfigData

SAMPLING_METHODS = ("lhs", "uniform")
SURROGATE_TYPES = ("poly2", "ann")


@dataclass(frozen=True)
class TrainingSettings(_SerializableConfig):
    samples: int = 200
    max_attempts: int = 2000
    sampling_method: str = "lhs"
    require_success: bool = True
    require_feasible: bool = False
    random_seed: Optional[int] = None

    def validate(self) -> "TrainingSettings":
        _check(int(self.samples) >= 1, "training.samples must be at least 1.", samples=self.samples)
        _check(
            int(self.max_attempts) >= int(self.samples),
            "training.max_attempts must be >= training.samples.",
            samples=self.samples,
            max_attempts=self.max_attempts,
        )
        if str(self.sampling_method).lower() not in SAMPLING_METHODS:
            raise InvalidSamplingError(str(self.sampling_method), list(SAMPLING_METHODS))
        return self


@dataclass(frozen=True)
class SurrogateSettings(_SerializableConfig):
    type: str = "poly2"
    ridge_lambda: float = 1e-6
    hidden_layers: Tuple[int, ...] = (25, 25)
    max_epochs: int = 500
    train_ratio: float = 0.7
    val_ratio: float = 0.2
    test_ratio: float = 0.1
    penalty_value: float = 1e12

    def validate(self) -> "SurrogateSettings":
        if str(self.type).lower() not in SURROGATE_TYPES:
            raise InvalidSurrogateError(str(self.type), list(SURROGATE_TYPES))
        _check(float(self.ridge_lambda) >= 0.0, "surrogate.ridge_lambda must be non-negative.")
        _check(1 <= len(self.hidden_layers) <= 2, "surrogate.hidden_layers must list 1 or 2 layer sizes.")
        _check(all(int(n) >= 1 for n in self.hidden_layers), "surrogate.hidden_layers sizes must be positive.")
        _check(int(self.max_epochs) >= 1, "surrogate.max_epochs must be at least 1.")
        ratios = (float(self.train_ratio), float(self.val_ratio), float(self.test_ratio))
        _check(all(r >= 0.0 for r in ratios), "surrogate split ratios must be non-negative.")
        _check(ratios[0] > 0.0, "surrogate.train_ratio must be positive.")
        _check(math.isfinite(float(self.penalty_value)), "surrogate.penalty_value must be finite.")
        return self


@dataclass(frozen=True)
class VerificationSettings(_SerializableConfig):
    enabled: bool = True
    verify_pareto_front: bool = False
    verify_pareto_limit: int = 0
    verify_topsis: bool = True
    topsis_weights: Optional[Tuple[float, ...]] = None

    def validate(self) -> "VerificationSettings":
        if self.topsis_weights is not None:
            w = [float(v) for v in self.topsis_weights]
            _check(all(math.isfinite(v) and v >= 0.0 for v in w), "topsis_weights must be finite and non-negative.")
            _check(sum(w) > 0.0, "topsis_weights must not sum to zero.")
        return self


@dataclass(frozen=True)
class ANNNSGAIIConfigData(NSGAIIConfigData):
    use_dynamic_operators: bool = True
    training: TrainingSettings = field(default_factory=TrainingSettings)
    surrogate: SurrogateSettings = field(default_factory=SurrogateSettings)
    verification: VerificationSettings = field(default_factory=VerificationSettings)

    def validate(self) -> "ANNNSGAIIConfigData":
        super().validate()
        self.training.validate()
        self.surrogate.validate()
        self.verification.validate()
        return self


_TRAINING_ALIASES: Dict[str, str] = {
    "maxAttempts": "max_attempts",
    "samplingMethod": "sampling_method",
    "requireSuccess": "require_success",
    "requireFeasible": "require_feasible",
    "randomSeed": "random_seed",
}
_SURROGATE_ALIASES: Dict[str, str] = {
    "ridgeLambda": "ridge_lambda",
    "annHiddenLayers": "hidden_layers",
    "hiddenLayers": "hidden_layers",
    "annMaxEpochs": "max_epochs",
    "maxEpochs": "max_epochs",
    "annTrainRatio": "train_ratio",
    "annValRatio": "val_ratio",
    "annTestRatio": "test_ratio",
    "penaltyValue": "penalty_value",
}
_VERIFICATION_ALIASES: Dict[str, str] = {
    "verifyParetoFront": "verify_pareto_front",
    "verifyParetoLimit": "verify_pareto_limit",
    "verifyTOPSIS": "verify_topsis",
    "verifyTopsis": "verify_topsis",
    "topsisWeights": "topsis_weights",
}
# Flat legacy keys that belong to the training block.
_FLAT_TRAINING: Dict[str, str] = {
    "trainingSamples": "samples",
    "trainingMaxAttempts": "max_attempts",
    "samplingMethod": "sampling_method",
}


def _block(value: Any, cls: type, aliases: Mapping[str, str], name: str):
    if value is None:
        return cls()
    if isinstance(value, cls):
        return value
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"{name} must be a mapping or {cls.__name__}.")
    cfg = _normalize_keys(value, aliases)
    _reject_unknown(cfg, cls, name)
    for key in ("hidden_layers", "topsis_weights"):
        if key in cfg and cfg[key] is not None:
            raw = cfg[key]
            cfg[key] = tuple(raw) if isinstance(raw, (list, tuple)) else (raw,)
    return cls(**cfg)


class ANNNSGAIIConfig(NSGAIIConfig):
    """
    Fluent builder for the surrogate-assisted variant.

    Examples:
        cfg = (
            ANNNSGAIIConfig()
            .pop_size(40)
            .max_generations(30)
            .training(samples=100, sampling_method="lhs")
            .surrogate(type="poly2", ridge_lambda=1e-6)
            .verification(verify_pareto_front=True, verify_pareto_limit=10)
            .fixed()
        )
    """

    data_cls = ANNNSGAIIConfigData

    def __init__(self) -> None:
        super().__init__()
        self._training: Dict[str, Any] = {}
        self._surrogate: Dict[str, Any] = {}
        self._verification: Dict[str, Any] = {}

    @classmethod
    def from_dict(cls, config: Mapping[str, Any]) -> ANNNSGAIIConfigData:
        cfg = cls._prepare(config)
        training = dict(cfg.pop("training", None) or {})
        for flat, key in _FLAT_TRAINING.items():
            if flat in cfg:
                training.setdefault(key, cfg.pop(flat))
        surrogate = cfg.pop("surrogate", None)
        verification = cfg.pop("verification", None)
        _reject_unknown(cfg, NSGAIIConfigData, "ANN-NSGA-II")
        builder = cls()
        builder._cfg.update(cfg)
        data = builder.fixed()
        return replace(
            data,
            training=_block(training, TrainingSettings, _TRAINING_ALIASES, "training"),
            surrogate=_block(surrogate, SurrogateSettings, _SURROGATE_ALIASES, "surrogate"),
            verification=_block(verification, VerificationSettings, _VERIFICATION_ALIASES, "verification"),
        )

    def training(self, **kwargs: Any) -> "ANNNSGAIIConfig":
        self._training.update(kwargs)
        return self

    def surrogate(self, **kwargs: Any) -> "ANNNSGAIIConfig":
        self._surrogate.update(kwargs)
        return self

    def verification(self, **kwargs: Any) -> "ANNNSGAIIConfig":
        self._verification.update(kwargs)
        return self

    def fixed(self) -> ANNNSGAIIConfigData:
        return ANNNSGAIIConfigData(
            **self._cfg,
            training=_block(self._training, TrainingSettings, _TRAINING_ALIASES, "training"),
            surrogate=_block(self._surrogate, SurrogateSettings, _SURROGATE_ALIASES, "surrogate"),
            verification=_block(self._verification, VerificationSettings, _VERIFICATION_ALIASES, "verification"),
        )


__all__ = [
    "ANNNSGAIIConfig",
    "ANNNSGAIIConfigData",
    "TrainingSettings",
    "SurrogateSettings",
    "VerificationSettings",
    "SAMPLING_METHODS",
    "SURROGATE_TYPES",
]
