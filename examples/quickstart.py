"""
Minimal MAPO quickstart example.

Runs NSGA-II on the ZDT1 benchmark problem and prints the Pareto front summary.

Usage:
    python examples/quickstart.py

Requirements:
    pip install -e .
"""
from __future__ import annotations

from mapo import NSGAIIConfig, OptimizeConfig, ZDT1Problem, configure_mapo_logging, optimize


def main():
    configure_mapo_logging()

    # 1. Define the problem
    problem = ZDT1Problem(n_var=30)

    # 2. Configure the algorithm
    config = NSGAIIConfig().pop_size(100).max_generations(100).crossover(rate=0.9, eta=20.0).mutation(eta=20.0)

    # 3. Run optimization
    result = optimize(
        OptimizeConfig(
            problem=problem,
            algorithm="nsgaii",
            algorithm_config=config,
            seed=42,
        )
    )

    # 4. Analyze results
    print(result.summary_text())


if __name__ == "__main__":
    main()
