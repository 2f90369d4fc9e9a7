"""Exceptions raised by the masking engine."""

from typing import Any


class DataShieldError(Exception):
    """Base exception for masking errors."""

    pass


class MalformedInputError(DataShieldError, ValueError):
    """Raised when JSON input is not valid JSON or not a top-level object."""

    pass


class SensitiveValueTypeError(DataShieldError, TypeError):
    """Raised when a sensitive JSON key holds a nested object or array."""

    def __init__(self, key: str, value: Any) -> None:
        self.key = key
        super().__init__(
            f"Sensitive field {key!r} holds a {type(value).__name__}; "
            "only scalar values can be masked"
        )


__all__ = ["DataShieldError", "MalformedInputError", "SensitiveValueTypeError"]
