"""Request input parsing and validation."""

from __future__ import annotations

import json
from typing import Any, Mapping

from .errors import InputValidationError
from .models import MAX_LEVEL, MIN_LEVEL, IntensityAssignment, RenderOptions


def _require_int(item: Mapping[str, Any], key: str, idx: int) -> int:
    if key not in item:
        raise InputValidationError(f"Invalid scale data format: item {idx} is missing '{key}'")
    value = item[key]
    if isinstance(value, bool) or not isinstance(value, int):
        raise InputValidationError(
            f"Invalid scale data format: item {idx} field '{key}' must be an integer"
        )
    return value


def parse_intensity_payload(raw: str | None) -> IntensityAssignment:
    """Parse `[{"id": 13, "scale": 5}, ...]`; later duplicates override earlier ones."""
    if raw is None or not raw.strip():
        raise InputValidationError("scale parameter is required")
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise InputValidationError(f"Invalid scale data format: {exc}") from exc
    if not isinstance(payload, list):
        raise InputValidationError("Invalid scale data format: expected a JSON list")

    pairs: list[tuple[int, int]] = []
    for idx, item in enumerate(payload):
        if not isinstance(item, Mapping):
            raise InputValidationError(f"Invalid scale data format: item {idx} is not an object")
        region_id = _require_int(item, "id", idx)
        scale = _require_int(item, "scale", idx)
        if scale < MIN_LEVEL or scale > MAX_LEVEL:
            raise InputValidationError(f"Invalid scale value for ID {region_id}: {scale}")
        pairs.append((region_id, scale))
    return IntensityAssignment.from_pairs(pairs)


def resolve_multiplier(size_class: str | None, multipliers: Mapping[str, float]) -> float:
    if size_class is None:
        return 1.0
    return float(multipliers.get(size_class, 1.0))


def parse_bool_flag(raw: str | None) -> bool:
    return raw == "true"


def build_render_options(
    *,
    size_class: str | None,
    multipliers: Mapping[str, float],
    footer_text: str | None = None,
    show_labels: bool = False,
    font_weight: int = 400,
) -> RenderOptions:
    return RenderOptions(
        multiplier=resolve_multiplier(size_class, multipliers),
        footer_text=footer_text or None,
        show_labels=show_labels,
        font_weight=font_weight,
    )
