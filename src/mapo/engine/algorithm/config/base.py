"""Base utilities for algorithm configuration."""

from __future__ import annotations

import json
from dataclasses import asdict, fields
from typing import Any, Dict, Mapping, Tuple

from mapo.foundation.exceptions import ConfigurationError


class _SerializableConfig:
    """Mixin to serialize dataclass configs."""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), sort_keys=True)


def _normalize_keys(config: Mapping[str, Any], aliases: Mapping[str, str]) -> Dict[str, Any]:
    """Map camelCase/legacy keys onto snake_case field names."""
    out: Dict[str, Any] = {}
    for key, value in config.items():
        out[aliases.get(key, key)] = value
    return out


def _reject_unknown(config: Mapping[str, Any], cls: type, name: str, extra: Tuple[str, ...] = ()) -> None:
    known = {f.name for f in fields(cls)} | set(extra)
    unknown = sorted(set(config) - known)
    if unknown:
        raise ConfigurationError(
            f"Unknown {name} configuration key(s): {', '.join(unknown)}",
            suggestion=f"Valid keys: {', '.join(sorted(known))}",
            details={"unknown": unknown},
        )


def _check(condition: bool, message: str, **details: Any) -> None:
    if not condition:
        raise ConfigurationError(message, details=details or None)


__all__ = ["_SerializableConfig", "_normalize_keys", "_reject_unknown", "_check"]
