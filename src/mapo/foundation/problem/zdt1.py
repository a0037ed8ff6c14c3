# problem/zdt1.py
import numpy as np
from mapo.foundation.problem.base import Problem


class ZDT1Problem(Problem):
    def __init__(self, n_var: int = 30) -> None:
        self.n_var = n_var
        self.n_obj = 2
        # Bounds (identical for all decision variables in this problem)
        self.xl = 0.0
        self.xu = 1.0

    def objectives(self, X: np.ndarray) -> np.ndarray:
        """
        X: array shape (N, n_var)
        returns: array shape (N, 2)
        """
        f1 = X[:, 0]
        if X.shape[1] > 1:
            g = 1.0 + 9.0 * np.mean(X[:, 1:], axis=1)
        else:
            g = np.ones_like(f1)
        f2 = g * (1.0 - np.sqrt(f1 / g))
        return np.column_stack([f1, f2])
