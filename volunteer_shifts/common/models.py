"""Data models used across the pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from volunteer_shifts.common.constants import OPTIONAL_SHIFT_FIELDS, SHIFT_FIELDS


@dataclass(frozen=True)
class Location:
    id: str | None
    name: str
    city: str
    street: str | None
    lat: float
    lng: float
    postcode: str | None
    source_ids: tuple[str, ...]


@dataclass(frozen=True)
class Shift:
    service_name: str
    suburb: str
    state: str
    address: str
    lat: float
    lng: float
    day: str
    start_time: str
    end_time: str
    shift_status: str | None = None
    van_asset: str | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        for field in SHIFT_FIELDS:
            value = getattr(self, field)
            if value is None and field in OPTIONAL_SHIFT_FIELDS:
                continue
            out[field] = value
        return out
