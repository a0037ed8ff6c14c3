"""
Surrogate-assisted NSGA-II on an "expensive" constrained two-objective problem.

The exact evaluator is only called for the training set and for the final
verification; the evolutionary loop runs on a quadratic response surface.
TOPSIS then picks one compromise design from the verified front.

Usage:
    python examples/surrogate_assisted.py

Requirements:
    pip install -e .            # poly2 surrogate
    pip install -e ".[ann]"     # for surrogate type "ann"
"""
from __future__ import annotations

import time

import numpy as np

from mapo import ANNNSGAIIConfig, OptimizeConfig, Problem, configure_mapo_logging, optimize


class SlowBeamDesign(Problem):
    """
    Toy cantilever design: minimize mass and tip deflection.

    Decision variables:
        x0 width in [0.1, 1.0], x1 height in [0.1, 1.0]
    Constraint:
        stress proxy 1 / (x0 * x1^2) <= 20
    """

    n_constraints = 1

    def __init__(self, delay: float = 0.001) -> None:
        self.n_var = 2
        self.n_obj = 2
        self.xl = np.array([0.1, 0.1])
        self.xu = np.array([1.0, 1.0])
        self.delay = delay

    def objectives(self, X: np.ndarray) -> np.ndarray:
        time.sleep(self.delay * X.shape[0])
        mass = X[:, 0] * X[:, 1]
        deflection = 1.0 / (X[:, 0] * X[:, 1] ** 3)
        return np.column_stack([mass, deflection])

    def constraints(self, X: np.ndarray) -> np.ndarray:
        return (1.0 / (X[:, 0] * X[:, 1] ** 2) - 20.0).reshape(-1, 1)


def main() -> None:
    configure_mapo_logging()

    config = (
        ANNNSGAIIConfig()
        .pop_size(60)
        .max_generations(80)
        .training(samples=150, max_attempts=300, sampling_method="lhs")
        .surrogate(type="poly2", ridge_lambda=1e-6)
        .verification(verify_pareto_front=True, verify_pareto_limit=20, topsis_weights=(0.5, 0.5))
    )
    result = optimize(
        OptimizeConfig(
            problem=SlowBeamDesign(),
            algorithm="ann_nsgaii",
            algorithm_config=config,
            seed=7,
        )
    )

    print(result.summary_text())
    print("Training:", result.data["training_info"].to_dict())
    decision = result.topsis
    if decision is not None:
        print(f"Chosen design: width={decision.variables[0]:.3f}, height={decision.variables[1]:.3f}")
        print(f"Objectives: mass={decision.objectives[0]:.4f}, deflection={decision.objectives[1]:.4f}")


if __name__ == "__main__":
    main()
