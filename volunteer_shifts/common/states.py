"""Australian state inference from postcodes and address text."""

from __future__ import annotations

import re

from volunteer_shifts.common.constants import CITY_STATE_PRIORITY, POSTCODE_STATE_RANGES, UNKNOWN_STATE

_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")


def _parse_postcode(value: object) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if value != value or value in (float("inf"), float("-inf")):
            return None
        return int(value)
    match = _LEADING_INT_RE.match(str(value))
    if not match:
        return None
    return int(match.group(1))


def state_from_postcode(postcode: object) -> str:
    number = _parse_postcode(postcode)
    if number is None:
        return UNKNOWN_STATE
    for low, high, state in POSTCODE_STATE_RANGES:
        if low <= number <= high:
            return state
    return UNKNOWN_STATE


def suburb_from_address(address: str | None) -> str | None:
    if not address:
        return None
    parts = address.split(",")
    if len(parts) < 2:
        return None
    return parts[1].strip()


def state_from_address(address: str | None) -> str:
    suburb = suburb_from_address(address)
    if not suburb:
        return UNKNOWN_STATE
    for city, state in CITY_STATE_PRIORITY:
        if city in suburb:
            return state
    return UNKNOWN_STATE
