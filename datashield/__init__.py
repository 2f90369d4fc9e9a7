"""Masking of sensitive header, query-parameter and JSON fields."""

from .config import Config, create_engine, load_config
from .core.engine import MaskingEngine, mask_value
from .errors import DataShieldError, MalformedInputError, SensitiveValueTypeError

__all__ = [
    "Config",
    "MaskingEngine",
    "mask_value",
    "load_config",
    "create_engine",
    "DataShieldError",
    "MalformedInputError",
    "SensitiveValueTypeError",
]
