"""Utility helpers for reading raw settings."""
from __future__ import annotations

from typing import Any, Dict

import yaml

_TRUE = {"true", "yes", "on", "1"}
_FALSE = {"false", "no", "off", "0"}


def read_yaml(path: str) -> Dict[str, Any]:
    """Read a YAML file and return its content as a dictionary."""
    with open(path, "r", encoding="utf-8") as fh:
        return yaml.safe_load(fh) or {}


def to_bool(name: str, value: Any) -> bool:
    """Coerce a raw setting into a boolean, raising ``ValueError`` on junk."""
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ValueError(f"Invalid boolean for {name}: {value!r}")


def to_int(name: str, value: Any) -> int:
    """Coerce a raw setting into an integer, raising ``ValueError`` on junk."""
    if isinstance(value, bool):
        raise ValueError(f"Invalid integer for {name}: {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid integer for {name}: {value!r}") from exc


__all__ = ["read_yaml", "to_bool", "to_int"]
