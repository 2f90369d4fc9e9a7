from __future__ import annotations
import copy
import json
import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence

from typing import TYPE_CHECKING

from ..errors import MalformedInputError, SensitiveValueTypeError

if TYPE_CHECKING:  # pragma: no cover
    from ..config.models import Config

logger = logging.getLogger(__name__)


# -----------------------------
# Value masking
# -----------------------------
def _effective_count(keep: bool, count: int, length: int) -> int:
    count = max(0, count)
    if keep and count > length:
        return length
    return count


def mask_value(
    value: Optional[str],
    min_length: int,
    keep_start: bool,
    keep_start_count: int,
    keep_end: bool,
    keep_end_count: int,
    mask_token: str,
) -> str:
    """Mask ``value`` keeping an optional prefix and suffix.

    ``None`` becomes ``""`` and values shorter than ``min_length`` are returned
    untouched. Enabled keep counts are clamped to the value length and negative
    counts count as zero. The masked body is always shortened by both counts;
    the flags only decide whether the prefix and suffix are emitted. When both
    kept regions together exceed the length, the excess is taken half from the
    start and the rest from the end.
    """
    if value is None:
        return ""
    length = len(value)
    if length < min_length:
        return value

    start = _effective_count(keep_start, keep_start_count, length)
    end = _effective_count(keep_end, keep_end_count, length)

    if keep_start and keep_end and start + end > length:
        overlap = start + end - length
        start -= overlap // 2
        end -= overlap - overlap // 2

    head = value[:start] if keep_start and start > 0 else ""
    tail = value[length - end:] if keep_end and end > 0 else ""
    body = max(0, length - start - end)
    return "".join((head, mask_token * body, tail))


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Non-standard JSON constant {name}")


# -----------------------------
# Orchestrator
# -----------------------------
class MaskingEngine:
    """Facade filtering and masking sensitive fields of maps and flat JSON."""

    def __init__(self, cfg: Config):
        """Create a new instance bound to ``cfg``."""

        self.cfg = cfg

    @property
    def sensitive_fields(self) -> Sequence[str]:
        return self.cfg.sensitive_fields

    def filter_sensitive(self, fields: Mapping[str, Any]) -> Dict[str, Any]:
        """Return a copy of ``fields`` without the sensitive entries."""

        sensitive = set(self.cfg.sensitive_fields)
        filtered = {k: v for k, v in fields.items() if k not in sensitive}
        logger.debug("Filtered %d sensitive fields", len(fields) - len(filtered))
        return filtered

    def mask_sensitive(self, fields: Mapping[str, Any]) -> Dict[str, Any]:
        """Return a copy of ``fields`` with the sensitive values masked.

        Multi-valued entries (lists or tuples, as in query strings) are masked
        element by element.
        """

        masked = dict(fields)
        hits = 0
        for key in self.cfg.sensitive_fields:
            if key not in masked:
                continue
            value = masked[key]
            if isinstance(value, (list, tuple)):
                masked[key] = self.mask_values(value)
            else:
                masked[key] = self.mask_value(value)
            hits += 1
        logger.debug("Masked %d sensitive fields", hits)
        return masked

    def mask_value(self, value: Optional[str], **overrides: Any) -> str:
        """Mask ``value`` with the configured parameters.

        Any of ``min_length``, ``keep_start``, ``keep_start_count``,
        ``keep_end``, ``keep_end_count`` and ``mask_token`` may be passed to
        override the configuration for this call.
        """

        cfg = self.cfg
        params = {
            "min_length": cfg.min_length,
            "keep_start": cfg.keep_start,
            "keep_start_count": cfg.keep_start_count,
            "keep_end": cfg.keep_end,
            "keep_end_count": cfg.keep_end_count,
            "mask_token": cfg.mask_token,
        }
        unknown = set(overrides) - set(params)
        if unknown:
            raise TypeError(f"Unknown masking parameters: {', '.join(sorted(unknown))}")
        params.update(overrides)
        return mask_value(value, **params)

    def mask_values(self, values: Optional[Sequence[Optional[str]]]) -> List[str]:
        """Mask every item of ``values``; ``None`` gives an empty list."""

        if values is None:
            return []
        return [self.mask_value(v) for v in values]

    def mask_json_object(self, obj: Mapping[str, Any]) -> Dict[str, Any]:
        """Mask the sensitive top-level keys of a parsed flat JSON object.

        Strings are masked, other scalars are masked as their JSON text and
        ``null`` is left alone. A nested object or array under a sensitive key
        raises :class:`SensitiveValueTypeError`. The input is not modified.
        """

        return self._mask_json_fields(copy.deepcopy(dict(obj)))

    def _mask_json_fields(self, out: Dict[str, Any]) -> Dict[str, Any]:
        # masks ``out`` in place
        for key in self.cfg.sensitive_fields:
            if key not in out:
                continue
            value = out[key]
            if value is None:
                continue
            if isinstance(value, (dict, list)):
                logger.debug("Refusing to mask nested value under %r", key)
                raise SensitiveValueTypeError(key, value)
            text = value if isinstance(value, str) else json.dumps(value)
            out[key] = self.mask_value(text)
        return out

    def mask_flat_json(self, json_text: str) -> str:
        """Mask sensitive keys of a flat JSON object given as text.

        Raises :class:`MalformedInputError` when ``json_text`` is not valid
        JSON (``NaN`` and ``Infinity`` included), nests too deeply to decode,
        or its top level is not an object.
        """

        try:
            obj = json.loads(json_text, parse_constant=_reject_constant)
        except (TypeError, ValueError, RecursionError) as e:
            logger.debug("Rejecting malformed JSON input: %s", e)
            raise MalformedInputError(f"Invalid JSON input: {e}") from e
        if not isinstance(obj, dict):
            raise MalformedInputError(
                f"Expected a JSON object at the top level, got {type(obj).__name__}"
            )
        # freshly parsed, nothing else holds a reference
        masked = self._mask_json_fields(obj)
        try:
            return json.dumps(masked, ensure_ascii=False, allow_nan=False, separators=(",", ":"))
        except RecursionError as e:
            raise MalformedInputError(f"JSON input nests too deeply: {e}") from e

    def describe_config(self) -> str:
        """Return a human readable summary of the masking parameters."""

        cfg = self.cfg
        return "\n".join([
            "Masking configuration summary:",
            f"Minimum length to mask: {cfg.min_length}",
            f"Keep start: {'Yes' if cfg.keep_start else 'No'} ({cfg.keep_start_count} characters)",
            f"Keep end: {'Yes' if cfg.keep_end else 'No'} ({cfg.keep_end_count} characters)",
            f"Mask token: '{cfg.mask_token}'",
        ])
