"""Location directory resolution from the inline map-page block."""

from __future__ import annotations

import math
import re
from pathlib import Path
from typing import Any

from volunteer_shifts.common.config_loader import build_url
from volunteer_shifts.common.constants import RAW_CAPTURE_FILENAME
from volunteer_shifts.common.errors import DirectoryDecodeError, DirectoryParseError
from volunteer_shifts.common.fs import write_text
from volunteer_shifts.common.http import HttpClient, HttpRequestError
from volunteer_shifts.common.logging import get_logger, log_event
from volunteer_shifts.common.models import Location
from volunteer_shifts.discovery.record_literal import RecordLiteralError, parse_record_literal

DEFAULT_BLOCK_PATTERN = r"var locations = \[(.*?)\];"

logger = get_logger("discovery")


def extract_directory_block(html: str, pattern: str = DEFAULT_BLOCK_PATTERN) -> str:
    match = re.search(pattern, html, re.DOTALL)
    if not match:
        raise DirectoryParseError("Could not find locations data in directory page")
    return f"[{match.group(1)}]"


def _optional_text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _coordinate(record: dict, key: str, idx: int) -> float:
    value = record.get(key)
    if isinstance(value, bool) or value is None:
        raise DirectoryDecodeError(f"Location #{idx} has no numeric '{key}'")
    if isinstance(value, int):
        return value
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise DirectoryDecodeError(f"Location #{idx} has non-numeric '{key}': {value!r}") from exc
    if not math.isfinite(number):
        raise DirectoryDecodeError(f"Location #{idx} has non-finite '{key}'")
    return number


def split_source_ids(value: Any) -> tuple[str, ...]:
    if value is None:
        return ()
    return tuple(part.strip() for part in str(value).split(",") if part.strip())


def parse_locations(records: list[dict[str, Any]]) -> list[Location]:
    locations: list[Location] = []
    for idx, record in enumerate(records):
        name = _optional_text(record.get("name"))
        if name is None:
            raise DirectoryDecodeError(f"Location #{idx} has no name")
        locations.append(
            Location(
                id=_optional_text(record.get("id")),
                name=name,
                city=_optional_text(record.get("city")) or "",
                street=_optional_text(record.get("street")),
                lat=_coordinate(record, "lat", idx),
                lng=_coordinate(record, "lng", idx),
                postcode=_optional_text(record.get("postcode")),
                source_ids=split_source_ids(record.get("post_id")),
            )
        )
    return locations


def resolve_directory(
    html: str,
    *,
    data_dir: Path,
    pattern: str = DEFAULT_BLOCK_PATTERN,
) -> list[Location]:
    captured = extract_directory_block(html, pattern)
    try:
        records = parse_record_literal(captured)
        return parse_locations(records)
    except (RecordLiteralError, DirectoryDecodeError) as exc:
        raw_path = data_dir / "debug" / RAW_CAPTURE_FILENAME
        write_text(raw_path, captured)
        log_event(
            logger,
            f"directory block could not be decoded, raw capture saved to {raw_path}",
            stage="discover",
            event="DIRECTORY_DECODE_FAIL",
            status="error",
            error_code=DirectoryDecodeError.error_code,
        )
        raise DirectoryDecodeError(f"Failed to parse locations block: {exc}", raw_capture_path=raw_path) from exc


def fetch_directory(client: HttpClient, source_config: dict, data_dir: Path) -> list[Location]:
    directory_cfg = source_config["directory"]
    url = build_url(source_config, directory_cfg["page_path"])
    try:
        html = client.get_text(url)
    except HttpRequestError as exc:
        raise DirectoryParseError(f"Directory page unavailable: {exc}") from exc

    locations = resolve_directory(html, data_dir=data_dir, pattern=directory_cfg.get("block_pattern", DEFAULT_BLOCK_PATTERN))
    log_event(
        logger,
        f"found {len(locations)} locations",
        stage="discover",
        source=url,
        event="DIRECTORY_RESOLVED",
        status="ok",
        rows_out=len(locations),
    )
    return locations
