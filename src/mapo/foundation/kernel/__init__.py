from __future__ import annotations

from .backend import KernelBackend
from .numpy_backend import NumPyKernel, constrained_dominance_matrix

_DEFAULT_KERNEL: KernelBackend | None = None


def default_kernel() -> KernelBackend:
    """Shared NumPy kernel instance (stateless)."""
    global _DEFAULT_KERNEL
    if _DEFAULT_KERNEL is None:
        _DEFAULT_KERNEL = NumPyKernel()
    return _DEFAULT_KERNEL


__all__ = ["KernelBackend", "NumPyKernel", "constrained_dominance_matrix", "default_kernel"]
