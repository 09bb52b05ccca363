"""Field validation rules for resource writes.

Rules run in a fixed order and the first failure wins:

1. required fields are present (create only),
2. enumerated fields hold an allowed value (whenever supplied),
3. ``DD-MM-YYYY`` date fields match the literal pattern (whenever supplied).
"""

from __future__ import annotations

import re
from typing import Any, Mapping, Type

from leaguepanel.errors import ValidationError
from leaguepanel.models import ResourcePayload


DATE_PATTERN = re.compile(r"^\d{2}-\d{2}-\d{4}$")


def is_valid_date(value: Any) -> bool:
    return isinstance(value, str) and DATE_PATTERN.fullmatch(value) is not None


def _label(payload_type: Type[ResourcePayload]) -> str:
    return payload_type.resource.capitalize() or "Resource"


def _join(values: tuple[str, ...]) -> str:
    if len(values) == 1:
        return values[0]
    return ", ".join(values[:-1]) + f", or {values[-1]}"


def check_required(payload_type: Type[ResourcePayload], fields: Mapping[str, Any]) -> None:
    missing = [key for key in payload_type.required_fields if not _is_present(fields.get(key))]
    if missing:
        raise ValidationError(
            f"{_label(payload_type)} {', '.join(missing)} {'is' if len(missing) == 1 else 'are'} required."
        )


def _is_present(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return value != ""
    return True


def check_enums(payload_type: Type[ResourcePayload], fields: Mapping[str, Any]) -> None:
    for key, allowed in payload_type.enum_fields.items():
        if key not in fields:
            continue
        if fields[key] not in allowed:
            raise ValidationError(
                f"Invalid {payload_type.resource} {key}. Must be {_join(allowed)}."
            )


def check_dates(payload_type: Type[ResourcePayload], fields: Mapping[str, Any]) -> None:
    for key in sorted(payload_type.date_fields):
        if key in fields and not is_valid_date(fields[key]):
            raise ValidationError(f'{_label(payload_type)} {key} must be in "DD-MM-YYYY" format.')


def validate_create(payload_type: Type[ResourcePayload], fields: Mapping[str, Any]) -> None:
    """Validate a fully defaulted create field set."""
    check_required(payload_type, fields)
    check_enums(payload_type, fields)
    check_dates(payload_type, fields)


def validate_update(payload_type: Type[ResourcePayload], fields: Mapping[str, Any]) -> None:
    """Validate only the fields present in an update write set."""
    check_enums(payload_type, fields)
    check_dates(payload_type, fields)
