import logging
import os
from functools import lru_cache
from typing import Optional

from datashield.config import Config, load_config
from datashield.core.engine import MaskingEngine

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "datashield.yaml"


def resolve_config_path(path: Optional[str] = None) -> Optional[str]:
    """Pick the configuration file to read, if any.

    An explicit *path* wins, then the ``DATASHIELD_CONFIG_PATH`` environment
    variable, then ``datashield.yaml`` in the working directory when it
    exists. ``None`` means defaults plus environment overrides only.
    """
    if path:
        return path
    env_path = os.getenv("DATASHIELD_CONFIG_PATH")
    if env_path:
        return env_path
    if os.path.exists(DEFAULT_CONFIG_PATH):
        return DEFAULT_CONFIG_PATH
    return None


@lru_cache()
def get_config(path: Optional[str] = None) -> Config:
    """Load the masking configuration once per process and path."""

    cfg_path = resolve_config_path(path)
    logger.debug("Initialising masking configuration from %s", cfg_path or "environment")
    if cfg_path:
        return Config.from_yaml(cfg_path)
    return load_config()


@lru_cache()
def get_engine(path: Optional[str] = None) -> MaskingEngine:
    """Initialise and cache a :class:`MaskingEngine` instance."""

    cfg = get_config(path)
    return MaskingEngine(cfg)
