"""
Named-component registry used to resolve algorithms by name.
"""

from __future__ import annotations

from difflib import get_close_matches
from typing import Any, Callable, Generic, Iterator, TypeVar

T = TypeVar("T")


class Registry(Generic[T]):
    """
    Maps case-insensitive names to items (builders, classes, ...).

    Supports usage as a decorator::

        ALGORITHMS = Registry("algorithms")

        @ALGORITHMS.register("nsgaii")
        def _build(cfg): ...
    """

    def __init__(self, name: str = "Registry") -> None:
        self._name = name
        self._items: dict[str, T] = {}

    @staticmethod
    def _key(key: str) -> str:
        return key.strip().lower()

    def register(self, key: str, item: T | None = None, *, override: bool = False) -> Callable[[T], T] | T:
        def _do_register(obj: T) -> T:
            norm = self._key(key)
            if norm in self._items and not override:
                raise ValueError(f"Key '{norm}' already exists in registry '{self._name}'")
            self._items[norm] = obj
            return obj

        if item is None:
            return _do_register
        return _do_register(item)

    def get(self, key: str, default: Any = ...) -> T:
        norm = self._key(key)
        if norm not in self._items:
            if default is not ...:
                return default
            raise KeyError(f"Key '{key}' not found in registry '{self._name}'")
        return self._items[norm]

    def suggest(self, key: str, n: int = 3) -> list[str]:
        """Return up to ``n`` registered names that look like ``key``."""
        if not key:
            return []
        return get_close_matches(self._key(key), list(self._items), n=n, cutoff=0.6)

    def list(self) -> list[str]:
        return sorted(self._items.keys())

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self._key(key) in self._items

    def __getitem__(self, key: str) -> T:
        return self.get(key)

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)


__all__ = ["Registry"]
