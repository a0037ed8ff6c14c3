from __future__ import annotations

import logging


def configure_mapo_logging(*, level: int = logging.INFO, fmt: str = "%(message)s") -> None:
    """
    Configure a minimal console logger for MAPO.

    Notes:
        - This is opt-in (library code must not call logging.basicConfig()).
        - The handler is only attached if neither the root logger nor the "mapo" logger has handlers.
    """
    root = logging.getLogger()
    mapo_logger = logging.getLogger("mapo")

    # If the user already configured logging, don't interfere.
    if root.handlers or mapo_logger.handlers:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(fmt))
    mapo_logger.addHandler(handler)
    mapo_logger.setLevel(level)
    mapo_logger.propagate = False


__all__ = ["configure_mapo_logging"]
