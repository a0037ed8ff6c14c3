"""
MAPO exception hierarchy.

Provides user-friendly exceptions with helpful error messages and suggestions.
All MAPO-specific exceptions inherit from MAPOError for easy catching.

Only fatal conditions are raised. Evaluation failures, surrogate prediction
failures and training shortfalls are carried as data (penalties, flags and
diagnostics) so that a long run is never lost to a single bad evaluation.

Example:
    try:
        result = optimize(config)
    except MAPOError as e:
        logger.error("Optimization failed: %s", e.message)
        logger.error("Suggestion: %s", e.suggestion)
"""

from __future__ import annotations

from typing import Any


class MAPOError(Exception):
    """
    Base exception for all MAPO errors.

    Attributes:
        message: Human-readable error description
        suggestion: Optional suggestion for fixing the error
        details: Optional dict with additional context
    """

    def __init__(
        self,
        message: str,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        msg = self.message
        if self.suggestion:
            msg += f"\n\nSuggestion: {self.suggestion}"
        return msg


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(MAPOError):
    """Raised when configuration is invalid or incomplete."""

    pass


class InvalidAlgorithmError(ConfigurationError):
    """Raised when an unknown algorithm is specified."""

    def __init__(
        self,
        algorithm: str,
        available: list[str] | None = None,
        close_matches: list[str] | None = None,
    ) -> None:
        available = available or ["nsgaii", "ann_nsgaii"]
        close_matches = close_matches or []
        message = f"Unknown algorithm '{algorithm}'."
        suggestion = f"Available algorithms: {', '.join(available)}"
        if close_matches:
            suggestion = f"Did you mean '{close_matches[0]}'? {suggestion}"
        super().__init__(
            message,
            suggestion,
            {"algorithm": algorithm, "available": available, "close_matches": close_matches},
        )


class InvalidSurrogateError(ConfigurationError):
    """Raised when an unknown surrogate model type is requested."""

    def __init__(self, surrogate_type: str, available: list[str] | None = None) -> None:
        available = available or ["poly2", "ann"]
        message = f"Unknown surrogate type '{surrogate_type}'."
        suggestion = f"Available surrogate types: {', '.join(available)}"
        super().__init__(message, suggestion, {"surrogate_type": surrogate_type, "available": available})


class InvalidSamplingError(ConfigurationError):
    """Raised when an unknown training sampling method is requested."""

    def __init__(self, method: str, available: list[str] | None = None) -> None:
        available = available or ["lhs", "uniform"]
        message = f"Unknown sampling method '{method}'."
        suggestion = f"Available sampling methods: {', '.join(available)}"
        super().__init__(message, suggestion, {"method": method, "available": available})


# =============================================================================
# Problem Errors
# =============================================================================


class ProblemError(MAPOError):
    """Base class for problem-related errors."""

    pass


class ProblemDimensionError(ProblemError):
    """Raised when problem dimensions are invalid."""

    def __init__(
        self,
        message: str,
        n_var: int | None = None,
        n_obj: int | None = None,
    ) -> None:
        suggestion = "Check problem dimensions: n_var (variables), n_obj (objectives)"
        super().__init__(message, suggestion, {"n_var": n_var, "n_obj": n_obj})


class BoundsError(ProblemError):
    """Raised when bounds are invalid or inconsistent."""

    def __init__(self, message: str) -> None:
        suggestion = "Ensure xl <= xu for all variables and bounds have correct shape"
        super().__init__(message, suggestion)


class MissingEvaluatorError(ProblemError):
    """Raised when no evaluator can be resolved for a problem."""

    def __init__(self, problem: Any = None) -> None:
        name = type(problem).__name__ if problem is not None else "problem"
        message = f"No evaluator available for {name}."
        suggestion = "Pass evaluator=..., set problem.evaluator, or implement evaluate(x) on the problem"
        super().__init__(message, suggestion, {"problem": name})


# =============================================================================
# Runtime Errors
# =============================================================================


class OptimizationError(MAPOError):
    """Raised when an optimizer is driven through an invalid state transition."""

    pass


# =============================================================================
# Dependency Errors
# =============================================================================


class DependencyError(MAPOError):
    """Raised when an optional dependency is missing."""

    def __init__(
        self,
        package: str,
        feature: str,
        install_cmd: str | None = None,
        fallback: str | None = None,
    ) -> None:
        message = f"'{package}' is required for {feature} but not installed."
        install_cmd = install_cmd or f"pip install {package}"
        suggestion = f"Install with: {install_cmd}"
        if fallback:
            suggestion += f", or {fallback}"
        super().__init__(message, suggestion, {"package": package, "feature": feature})


__all__ = [
    # Base
    "MAPOError",
    # Configuration
    "ConfigurationError",
    "InvalidAlgorithmError",
    "InvalidSurrogateError",
    "InvalidSamplingError",
    # Problem
    "ProblemError",
    "ProblemDimensionError",
    "BoundsError",
    "MissingEvaluatorError",
    # Runtime
    "OptimizationError",
    # Dependencies
    "DependencyError",
]
