"""
Surrogate models fitted on standardized training data.

Two kinds are supported:

- ``poly2``: full quadratic response surface (bias, linear terms, squares and
  pairwise products) solved as a ridge regression.
- ``ann``: a scikit-learn ``MLPRegressor`` with ReLU hidden layers and an
  identity output, trained with early stopping on a validation split.

Both predict every objective and constraint jointly in the standardized
space; :meth:`SurrogateModel.predict` maps back to original units.
"""

from __future__ import annotations

import logging
import warnings
from dataclasses import dataclass, field
from typing import Any

import numpy as np

from mapo.engine.algorithm.config import SurrogateSettings
from mapo.foundation.exceptions import DependencyError, InvalidSurrogateError


def _logger() -> logging.Logger:
    return logging.getLogger(__name__)


@dataclass
class SurrogateModel:
    kind: str
    n_obj: int
    n_constr: int
    input_mean: np.ndarray
    input_std: np.ndarray
    output_mean: np.ndarray
    output_std: np.ndarray
    penalty_value: float = 1e12
    weights: np.ndarray | None = None
    network: Any = None
    diagnostics: dict[str, Any] = field(default_factory=dict)

    @property
    def n_outputs(self) -> int:
        return self.n_obj + self.n_constr

    def predict(self, X: np.ndarray) -> np.ndarray:
        """Predict ``(N, n_obj + n_constr)`` outputs; raises ``ValueError`` when the model cannot."""
        X = np.atleast_2d(np.asarray(X, dtype=float))
        if X.shape[1] != self.input_mean.shape[0]:
            raise ValueError(f"Expected {self.input_mean.shape[0]} variables, got {X.shape[1]}.")
        Xz = (X - self.input_mean) / self.input_std

        kind = str(self.kind).lower()
        if kind == "poly2":
            if self.weights is None:
                raise ValueError("Surrogate has no fitted weights.")
            Yz = poly2_features(Xz) @ self.weights
        elif kind == "ann":
            if self.network is None:
                raise ValueError("Surrogate has no fitted network.")
            Yz = np.asarray(self.network.predict(Xz), dtype=float).reshape(X.shape[0], -1)
        else:
            raise ValueError(f"Unknown surrogate type: {self.kind}")

        Y = Yz * self.output_std + self.output_mean
        if Y.shape[1] != self.n_outputs:
            raise ValueError(f"Surrogate produced {Y.shape[1]} outputs, expected {self.n_outputs}.")
        return Y


def standardize(A: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """Column mean and sample std (ddof=1); std of 0 or undefined becomes 1."""
    A = np.asarray(A, dtype=float)
    if A.shape[0] == 0:
        return np.zeros(A.shape[1]), np.ones(A.shape[1])
    mean = A.mean(axis=0)
    if A.shape[0] > 1:
        std = A.std(axis=0, ddof=1)
    else:
        std = np.ones(A.shape[1])
    std = np.where((std == 0.0) | ~np.isfinite(std), 1.0, std)
    return mean, std


def poly2_features(Xz: np.ndarray) -> np.ndarray:
    """Quadratic feature matrix with ``1 + 2d + d(d-1)/2`` columns."""
    Xz = np.atleast_2d(np.asarray(Xz, dtype=float))
    n, d = Xz.shape
    iu, ju = np.triu_indices(d, k=1)
    return np.hstack([np.ones((n, 1)), Xz, Xz**2, Xz[:, iu] * Xz[:, ju]])


def fit_poly2(Xz: np.ndarray, Yz: np.ndarray, ridge_lambda: float) -> np.ndarray:
    """Ridge solution of ``(ΦᵀΦ + λI) W = ΦᵀY``; minimum-norm least squares when ``λ <= 0``."""
    Phi = poly2_features(Xz)
    if float(ridge_lambda) <= 0.0:
        return np.linalg.lstsq(Phi, Yz, rcond=None)[0]
    A = Phi.T @ Phi + float(ridge_lambda) * np.eye(Phi.shape[1])
    B = Phi.T @ Yz
    try:
        return np.linalg.solve(A, B)
    except np.linalg.LinAlgError:
        # singular when lambda is 0 and samples are fewer than features
        return np.linalg.lstsq(A, B, rcond=None)[0]


def require_sklearn() -> None:
    """Fail fast when the neural surrogate is requested without scikit-learn."""
    try:
        import sklearn  # noqa: F401
    except ImportError as exc:
        raise DependencyError(
            "scikit-learn",
            "the 'ann' surrogate",
            install_cmd="pip install mapo[ann]",
            fallback="use surrogate type 'poly2'",
        ) from exc


def fit_ann(
    Xz: np.ndarray,
    Yz: np.ndarray,
    settings: SurrogateSettings,
    rng: np.random.Generator,
) -> tuple[Any, dict[str, Any]]:
    """Train an MLPRegressor; returns the network and fit diagnostics."""
    require_sklearn()
    from sklearn.exceptions import ConvergenceWarning
    from sklearn.neural_network import MLPRegressor

    n = Xz.shape[0]
    total = float(settings.train_ratio) + float(settings.val_ratio) + float(settings.test_ratio)
    test_frac = float(settings.test_ratio) / total
    val_frac = float(settings.val_ratio) / max(float(settings.train_ratio) + float(settings.val_ratio), 1e-12)

    perm = rng.permutation(n)
    n_test = int(np.floor(test_frac * n))
    if n - n_test < 2:
        n_test = 0
    test_idx, fit_idx = perm[:n_test], perm[n_test:]

    # MLPRegressor needs at least a couple of validation rows for early stopping.
    early_stopping = 0.0 < val_frac < 1.0 and fit_idx.size * val_frac >= 2
    net = MLPRegressor(
        hidden_layer_sizes=tuple(int(h) for h in settings.hidden_layers),
        activation="relu",
        max_iter=int(settings.max_epochs),
        early_stopping=early_stopping,
        validation_fraction=val_frac if early_stopping else 0.1,
        random_state=int(rng.integers(0, 2**31 - 1)),
    )
    y_fit = Yz[fit_idx]
    if y_fit.shape[1] == 1:
        y_fit = y_fit.ravel()
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", category=ConvergenceWarning)
        net.fit(Xz[fit_idx], y_fit)

    diagnostics: dict[str, Any] = {
        "n_fit": int(fit_idx.size),
        "n_test": int(n_test),
        "epochs": int(net.n_iter_),
        "early_stopping": bool(early_stopping),
        "train_r2": float(net.score(Xz[fit_idx], y_fit)) if fit_idx.size >= 2 else float("nan"),
    }
    if early_stopping and getattr(net, "best_validation_score_", None) is not None:
        diagnostics["validation_r2"] = float(net.best_validation_score_)
    if n_test >= 2:
        y_test = Yz[test_idx].ravel() if Yz.shape[1] == 1 else Yz[test_idx]
        diagnostics["test_r2"] = float(net.score(Xz[test_idx], y_test))
    return net, diagnostics


def fit_surrogate(
    X: np.ndarray,
    Y: np.ndarray,
    n_obj: int,
    n_constr: int,
    settings: SurrogateSettings,
    rng: np.random.Generator,
) -> SurrogateModel:
    """
    Standardize inputs/outputs and fit the configured surrogate.

    With no training rows the model is returned unfitted; every prediction
    then falls back to the penalty value.
    """
    kind = str(settings.type).lower()
    if kind not in ("poly2", "ann"):
        raise InvalidSurrogateError(str(settings.type))

    X = np.atleast_2d(np.asarray(X, dtype=float))
    Y = np.asarray(Y, dtype=float).reshape(X.shape[0], n_obj + n_constr)
    in_mean, in_std = standardize(X)
    out_mean, out_std = standardize(Y)
    model = SurrogateModel(
        kind=kind,
        n_obj=n_obj,
        n_constr=n_constr,
        input_mean=in_mean,
        input_std=in_std,
        output_mean=out_mean,
        output_std=out_std,
        penalty_value=float(settings.penalty_value),
        diagnostics={"n_samples": int(X.shape[0])},
    )
    if X.shape[0] == 0 or model.n_outputs == 0:
        _logger().warning("Surrogate left unfitted: no training samples available")
        model.diagnostics["fitted"] = False
        return model

    Xz = (X - in_mean) / in_std
    Yz = (Y - out_mean) / out_std
    if kind == "poly2":
        model.weights = fit_poly2(Xz, Yz, settings.ridge_lambda)
        residual = poly2_features(Xz) @ model.weights - Yz
        model.diagnostics["train_rmse"] = float(np.sqrt(np.mean(residual**2)))
    else:
        model.network, ann_diag = fit_ann(Xz, Yz, settings, rng)
        model.diagnostics.update(ann_diag)
    model.diagnostics["fitted"] = True
    _logger().info("Fitted %s surrogate on %d samples: %s", kind, X.shape[0], model.diagnostics)
    return model


__all__ = [
    "SurrogateModel",
    "fit_ann",
    "fit_poly2",
    "fit_surrogate",
    "poly2_features",
    "require_sklearn",
    "standardize",
]
