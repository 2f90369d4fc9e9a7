"""Configuration loader for the masking engine."""
from __future__ import annotations

import logging
import os
import warnings
from typing import Any, Dict, Mapping, Optional

from .models import Config
from ..utils.io import read_yaml
from ..core.engine import MaskingEngine

logger = logging.getLogger(__name__)

SECTION = "datashield"
ENV_PREFIX = "DATASHIELD_"
SETTINGS = (
    "sensitive_fields",
    "mask_token",
    "min_length",
    "keep_start",
    "keep_start_count",
    "keep_end",
    "keep_end_count",
)


def env_overrides(environ: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
    """Collect ``DATASHIELD_*`` settings from the environment."""
    environ = os.environ if environ is None else environ
    found = {}
    for name in SETTINGS:
        var = ENV_PREFIX + name.upper()
        if var in environ:
            found[name] = environ[var]
    return found


def load_config(
    path: Optional[str] = None, environ: Optional[Mapping[str, str]] = None
) -> Config:
    """Load the masking configuration.

    Parameters
    ----------
    path: Optional[str]
        YAML file holding a ``datashield:`` section. When omitted only the
        defaults and the environment are used.
    environ: Optional[Mapping[str, str]]
        Environment to read ``DATASHIELD_*`` overrides from. Defaults to
        ``os.environ``.
    """
    section: Dict[str, Any] = {}
    if path:
        raw = read_yaml(path)
        if not isinstance(raw, dict):
            raise ValueError(f"{path}: expected a mapping at the top level")
        found = raw.get(SECTION) or {}
        if not isinstance(found, dict):
            raise ValueError(f"{path}: the '{SECTION}' section must be a mapping")
        section.update(found)
        logger.debug("Loaded %d masking settings from %s", len(section), path)

    overrides = env_overrides(environ)
    if overrides:
        logger.debug("Applying environment overrides: %s", sorted(overrides))
    section.update(overrides)

    cfg = Config.from_mapping(section)
    _warn_suspicious(cfg)
    return cfg


def _warn_suspicious(cfg: Config) -> None:
    for name in ("keep_start_count", "keep_end_count"):
        value = getattr(cfg, name)
        if value < 0:
            warnings.warn(
                f"{SECTION}.{name} is negative ({value}); it will be treated as 0.",
                UserWarning,
            )
    if cfg.min_length < 0:
        warnings.warn(
            f"{SECTION}.min_length is negative ({cfg.min_length}); every value will be masked.",
            UserWarning,
        )


def create_engine(config_path: Optional[str] = None) -> MaskingEngine:
    """Application factory creating a configured :class:`MaskingEngine`."""

    return MaskingEngine(load_config(config_path))


__all__ = ["load_config", "create_engine", "env_overrides", "SECTION", "ENV_PREFIX"]
