"""Build the exact field sets written on create and on partial update."""

from __future__ import annotations

import math
from typing import Any, Type

from leaguepanel.errors import ValidationError
from leaguepanel.models import ResourcePayload


Number = int | float


def coerce_number(value: Any) -> Number:
    """Coerce JSON input to a finite number.

    Accepts ints, floats, booleans and numeric strings; a blank string counts
    as zero. Raises ``ValueError`` for anything else.
    """
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValueError(f"{value!r} is not a finite number")
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0
        try:
            return int(text)
        except ValueError:
            parsed = float(text)
        if not math.isfinite(parsed):
            raise ValueError(f"{value!r} is not a finite number")
        return parsed
    raise ValueError(f"{type(value).__name__} is not numeric")


def _unique(items: list[Any]) -> list[Any]:
    seen: list[Any] = []
    for item in items:
        if item not in seen:
            seen.append(item)
    return seen


def _coerce_list(payload_type: Type[ResourcePayload], key: str, value: list[Any]) -> list[Any]:
    items = list(value)
    if key in payload_type.set_fields:
        return _unique(items)
    return items


def build_create_fields(payload: ResourcePayload) -> dict[str, Any]:
    """Full field set for a new document; no schema field is omitted."""
    payload_type = type(payload)
    supplied = payload.supplied()
    fields: dict[str, Any] = {}
    for key in payload_type.stored_keys():
        value = supplied.get(key)
        if key in payload_type.numeric_fields:
            try:
                fields[key] = coerce_number(value) if value is not None else 0
            except ValueError:
                fields[key] = 0
        elif key in payload_type.list_fields:
            fields[key] = _coerce_list(payload_type, key, value) if isinstance(value, list) else []
        else:
            fields[key] = value or payload_type.create_defaults.get(key, "")
    return fields


def build_update_fields(payload: ResourcePayload) -> dict[str, Any]:
    """Write set for a partial update: supplied fields only, coerced.

    Fields the caller did not send are left out so the stored values stay
    untouched. List fields given a non-list value are treated as absent.
    """
    payload_type = type(payload)
    fields: dict[str, Any] = {}
    for key, value in payload.supplied().items():
        if key in payload_type.numeric_fields:
            try:
                fields[key] = coerce_number(value)
            except ValueError as exc:
                raise ValidationError(f"{payload_type.resource.capitalize()} {key} must be numeric.") from exc
        elif key in payload_type.list_fields:
            if isinstance(value, list):
                fields[key] = _coerce_list(payload_type, key, value)
        else:
            fields[key] = value
    return fields
