"""Configuration helpers for the masking engine."""

from .models import Config
from .loader import load_config, create_engine

__all__ = ["Config", "load_config", "create_engine"]
