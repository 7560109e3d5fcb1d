"""Clock-time parsing and 12h to 24h conversion."""

from __future__ import annotations

import re
from datetime import datetime, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

TWELVE_HOUR_RE = re.compile(r"^\s*(\d{1,2}):(\d{2})\s*(am|pm)\s*$", re.IGNORECASE)
TWENTY_FOUR_HOUR_RE = re.compile(r"^\s*(\d{1,2}):(\d{2})\s*$")


def convert_12h_to_24h(value: str) -> str:
    match = TWELVE_HOUR_RE.match(value)
    if not match:
        raise ValueError(f"Not a 12-hour clock time: {value!r}")
    hours = int(match.group(1))
    minutes = match.group(2)
    if hours == 12:
        hours = 0
    if match.group(3).lower() == "pm":
        hours += 12
    return f"{hours:02d}:{minutes}"


def normalise_clock(value: str) -> str:
    """Coerce recognisable clock strings to HH:MM, leave anything else untouched."""
    if TWELVE_HOUR_RE.match(value):
        return convert_12h_to_24h(value)
    match = TWENTY_FOUR_HOUR_RE.match(value)
    if match and int(match.group(1)) < 24:
        return f"{int(match.group(1)):02d}:{match.group(2)}"
    return value


def _zone(tz_name: str | None):
    if not tz_name:
        return timezone.utc
    try:
        return ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError):
        return timezone.utc


def timestamp_day_and_time(epoch_seconds: float, tz_name: str | None = None) -> tuple[str, str]:
    moment = datetime.fromtimestamp(float(epoch_seconds), tz=_zone(tz_name))
    return moment.strftime("%a"), moment.strftime("%H:%M")
