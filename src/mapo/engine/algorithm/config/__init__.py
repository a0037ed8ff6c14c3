"""Typed configuration objects for the algorithms."""

from .ann_nsgaii import (
    ANNNSGAIIConfig,
    ANNNSGAIIConfigData,
    SurrogateSettings,
    TrainingSettings,
    VerificationSettings,
)
from .nsgaii import NSGAIIConfig, NSGAIIConfigData

__all__ = [
    "NSGAIIConfig",
    "NSGAIIConfigData",
    "ANNNSGAIIConfig",
    "ANNNSGAIIConfigData",
    "TrainingSettings",
    "SurrogateSettings",
    "VerificationSettings",
]
