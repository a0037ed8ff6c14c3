from __future__ import annotations

from typing import Protocol

import numpy as np


class ProblemProtocol(Protocol):
    n_var: int
    n_obj: int
    n_constr: int
    xl: float | int | np.ndarray
    xu: float | int | np.ndarray


__all__ = ["ProblemProtocol"]
