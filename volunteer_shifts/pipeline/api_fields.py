"""Resolve canonical shift fields from shift-API payloads.

A payload spreads the same logical field across up to three sub-maps
(``attributes``, ``nice`` and ``object``), sometimes as a plain string and
sometimes as a nested structure. Each canonical field has an ordered chain of
named strategies; the first one producing non-empty text wins.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Union

from volunteer_shifts.common.clock import normalise_clock, timestamp_day_and_time
from volunteer_shifts.common.errors import FieldResolutionError
from volunteer_shifts.common.logging import get_logger, log_event
from volunteer_shifts.common.models import Location, Shift
from volunteer_shifts.common.states import state_from_postcode

logger = get_logger("pipeline")

STRUCTURED_PROBE_KEYS = ("value", "label", "name")


@dataclass(frozen=True)
class Scalar:
    text: str


@dataclass(frozen=True)
class Structured:
    data: Any


@dataclass(frozen=True)
class Missing:
    pass


FieldValue = Union[Scalar, Structured, Missing]
MISSING = Missing()


def classify(raw: Any) -> FieldValue:
    # Unset custom fields arrive as false or 0; they fall through like null.
    if raw is None or raw is False:
        return MISSING
    if raw is True:
        return Scalar("true")
    if isinstance(raw, str):
        return Scalar(raw)
    if isinstance(raw, (int, float)):
        if raw == 0 or raw != raw:
            return MISSING
        return Scalar(str(raw))
    return Structured(raw)


def as_text(value: FieldValue) -> str:
    if isinstance(value, Scalar):
        return value.text
    if isinstance(value, Structured):
        data = value.data
        if isinstance(data, Mapping):
            for key in STRUCTURED_PROBE_KEYS:
                text = as_text(classify(data.get(key)))
                if text:
                    return text
        return json.dumps(data, separators=(",", ":"), ensure_ascii=False, default=str)
    return ""


@dataclass(frozen=True)
class ShiftPayload:
    attributes: Mapping[str, Any]
    nice: Mapping[str, Any]
    object: Mapping[str, Any]

    @classmethod
    def from_raw(cls, raw: Any) -> "ShiftPayload":
        if not isinstance(raw, Mapping):
            raise FieldResolutionError(f"Shift payload is {type(raw).__name__}, expected a mapping")
        return cls(
            attributes=_section(raw, "attributes"),
            nice=_section(raw, "nice"),
            object=_section(raw, "object"),
        )


def _section(raw: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    # An empty section is serialised as [] upstream; anything but a mapping reads as empty.
    value = raw.get(key)
    if not isinstance(value, Mapping):
        return {}
    return value


Strategy = Callable[[ShiftPayload], str]


def _from(section: str, key: str) -> Strategy:
    def strategy(payload: ShiftPayload) -> str:
        return as_text(classify(getattr(payload, section).get(key)))

    strategy.__name__ = f"{section}.{key}"
    return strategy


def _from_timestamp(key: str, part: int) -> Strategy:
    def strategy(payload: ShiftPayload) -> str:
        obj = payload.object
        if obj.get("no_shift_time"):
            return ""
        epoch = obj.get(key)
        if isinstance(epoch, bool) or not isinstance(epoch, (int, float, str)):
            return ""
        try:
            return timestamp_day_and_time(float(epoch), obj.get("timezone"))[part]
        except (ValueError, OverflowError, OSError):
            return ""

    strategy.__name__ = f"object.{key}[{'day' if part == 0 else 'time'}]"
    return strategy


FIELD_STRATEGIES: dict[str, tuple[Strategy, ...]] = {
    "day": (
        _from("nice", "start_timestamp__dayofweek"),
        _from("attributes", "custom_what_days_it_occurs"),
        _from("attributes", "day"),
        _from("object", "custom_what_days_it_occurs"),
        _from_timestamp("start_timestamp", 0),
    ),
    "start_time": (
        _from("nice", "start_timestamp__time"),
        _from("attributes", "custom_start_time"),
        _from("attributes", "start_time"),
        _from_timestamp("start_timestamp", 1),
    ),
    "end_time": (
        _from("nice", "end_timestamp__time"),
        _from("attributes", "custom_end_time"),
        _from("attributes", "end_time"),
        _from_timestamp("end_timestamp", 1),
    ),
    "shift_status": (
        _from("attributes", "custom_shift_status"),
        _from("object", "custom_shift_status"),
    ),
    "van_asset": (
        _from("attributes", "custom_van_asset"),
        _from("object", "custom_van_asset"),
    ),
}


def resolve_field(payload: ShiftPayload, field: str) -> str:
    for strategy in FIELD_STRATEGIES[field]:
        text = strategy(payload)
        if text:
            return text
    return ""


def build_api_shift(location: Location, raw_payload: Any) -> Shift:
    payload = ShiftPayload.from_raw(raw_payload)
    return Shift(
        service_name=location.name,
        suburb=location.city,
        state=state_from_postcode(location.postcode),
        address=location.street or location.city,
        lat=location.lat,
        lng=location.lng,
        day=resolve_field(payload, "day"),
        start_time=normalise_clock(resolve_field(payload, "start_time")),
        end_time=normalise_clock(resolve_field(payload, "end_time")),
        shift_status=resolve_field(payload, "shift_status"),
        van_asset=resolve_field(payload, "van_asset"),
    )


def resolve_api_shift(location: Location, raw_payload: Any) -> Shift | None:
    """Build one Shift, or None when the payload cannot be resolved."""
    try:
        return build_api_shift(location, raw_payload)
    except Exception as exc:
        error_code = getattr(exc, "error_code", "UNEXPECTED_ERROR")
        log_event(
            logger,
            f"dropping unresolvable shift for {location.name}: {exc}",
            level=logging.DEBUG,
            stage="resolve",
            location=location.name,
            event="FIELD_RESOLUTION_FAIL",
            status="skipped",
            error_code=error_code,
        )
        return None


def resolve_api_shifts(pairs: list[tuple[Location, Any]]) -> list[Shift]:
    shifts: list[Shift] = []
    for location, raw_payload in pairs:
        shift = resolve_api_shift(location, raw_payload)
        if shift is not None:
            shifts.append(shift)
    return shifts
