"""Completeness filtering and canonical shape validation for shifts."""

from __future__ import annotations

import math
from typing import Any, Callable, Iterable, Mapping, Union

from volunteer_shifts.common.constants import OPTIONAL_SHIFT_FIELDS, SHIFT_FIELDS, STATE_CODES, UNKNOWN_STATE
from volunteer_shifts.common.errors import SchemaValidationError
from volunteer_shifts.common.models import Shift

VALID_STATES = frozenset(STATE_CODES) | {UNKNOWN_STATE}

ShiftLike = Union[Shift, Mapping[str, Any]]


def _as_record(item: ShiftLike) -> dict[str, Any]:
    if isinstance(item, Shift):
        return item.to_dict()
    return dict(item)


def is_complete(item: ShiftLike) -> bool:
    record = _as_record(item)
    if not record.get("service_name") or not record.get("suburb"):
        return False
    return bool(record.get("day") or record.get("start_time") or record.get("end_time"))


def filter_complete(items: Iterable[ShiftLike]) -> list[ShiftLike]:
    return [item for item in items if is_complete(item)]


def _check_string(value: Any) -> str | None:
    return None if isinstance(value, str) else "must be a string"


def _check_number(value: Any) -> str | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return "must be a number"
    if not math.isfinite(value):
        return "must be finite"
    return None


def _check_state(value: Any) -> str | None:
    if value in VALID_STATES:
        return None
    return f"must be one of {', '.join(sorted(VALID_STATES))}"


FIELD_CHECKS: dict[str, Callable[[Any], str | None]] = {
    "service_name": _check_string,
    "suburb": _check_string,
    "state": _check_state,
    "address": _check_string,
    "lat": _check_number,
    "lng": _check_number,
    "day": _check_string,
    "start_time": _check_string,
    "end_time": _check_string,
    "shift_status": _check_string,
    "van_asset": _check_string,
}


def shape_violation(record: Mapping[str, Any]) -> tuple[str, str] | None:
    """Return (field, reason) for the first shape violation, or None."""
    for field in SHIFT_FIELDS:
        if field not in record:
            if field in OPTIONAL_SHIFT_FIELDS:
                continue
            return field, "missing required field"
        reason = FIELD_CHECKS[field](record[field])
        if reason is not None:
            return field, reason
    return None


def validate_shifts(items: Iterable[ShiftLike]) -> list[dict[str, Any]]:
    validated: list[dict[str, Any]] = []
    for idx, item in enumerate(items):
        record = _as_record(item)
        violation = shape_violation(record)
        if violation is not None:
            field, reason = violation
            raise SchemaValidationError(idx, field, reason, record)
        validated.append(record)
    return validated
