"""Configuration model for the masking engine."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Tuple

from ..utils.io import to_bool, to_int

DEFAULT_SENSITIVE_FIELDS = "Authorization,Secret,Token"


def split_fields(raw: str) -> Tuple[str, ...]:
    """Split a comma-joined field list, dropping empty fragments."""
    if not raw:
        return ()
    return tuple(name for name in raw.split(",") if name)


@dataclass(frozen=True)
class Config:
    """Masking parameters and the list of sensitive field names.

    ``sensitive_fields`` is derived from ``sensitive_fields_raw`` once, at
    construction. Numeric fields are not validated; negative keep counts are
    accepted and treated as zero by the engine.
    """

    sensitive_fields_raw: str = DEFAULT_SENSITIVE_FIELDS
    mask_token: str = "*"
    min_length: int = 4
    keep_start: bool = True
    keep_start_count: int = 2
    keep_end: bool = True
    keep_end_count: int = 2
    sensitive_fields: Tuple[str, ...] = field(init=False, default=())

    def __post_init__(self) -> None:
        object.__setattr__(self, "sensitive_fields", split_fields(self.sensitive_fields_raw))

    @classmethod
    def from_mapping(cls, section: Mapping[str, Any]) -> "Config":
        """Build a configuration from raw settings, coercing their types.

        Keys missing from ``section`` keep their defaults and unknown keys are
        ignored. ``sensitive_fields`` may be a comma-joined string or a list.
        """
        kwargs: dict = {}
        if section.get("sensitive_fields") is not None:
            names = section["sensitive_fields"]
            if isinstance(names, (list, tuple)):
                names = ",".join(str(n) for n in names)
            kwargs["sensitive_fields_raw"] = str(names)
        if section.get("mask_token") is not None:
            kwargs["mask_token"] = str(section["mask_token"])
        for name in ("min_length", "keep_start_count", "keep_end_count"):
            if section.get(name) is not None:
                kwargs[name] = to_int(name, section[name])
        for name in ("keep_start", "keep_end"):
            if section.get(name) is not None:
                kwargs[name] = to_bool(name, section[name])
        return cls(**kwargs)

    @classmethod
    def from_yaml(cls, path: str) -> "Config":
        """Load configuration from *path*; env overrides still apply."""
        from .loader import load_config

        return load_config(path)
