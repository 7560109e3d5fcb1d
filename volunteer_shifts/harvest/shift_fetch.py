"""Paced, fail-soft retrieval of per-location shift payloads."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator

from volunteer_shifts.common.config_loader import build_url
from volunteer_shifts.common.http import HttpClient, HttpRequestError
from volunteer_shifts.common.logging import get_logger, log_event
from volunteer_shifts.common.models import Location

logger = get_logger("harvest")


@dataclass
class FetchResult:
    pairs: list[tuple[Location, Any]] = field(default_factory=list)
    locations_processed: int = 0
    failed_source_ids: list[str] = field(default_factory=list)


def _chunked(values: list[Location], size: int) -> Iterator[list[Location]]:
    for i in range(0, len(values), size):
        yield values[i : i + size]


def _payload_items(payload: Any) -> list[Any]:
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        return [payload]
    return []


def fetch_source_payloads(client: HttpClient, source_config: dict, source_id: str) -> list[Any] | None:
    """Return the shift payloads for one source id, or None when the fetch failed."""
    url = build_url(source_config, source_config["shifts"]["endpoint_template"].format(source_id=source_id))
    started = time.monotonic()
    try:
        payload = client.get_json(url)
    except HttpRequestError as exc:
        log_event(
            logger,
            f"no shift data for source id {source_id}: {exc}",
            level=logging.WARNING,
            stage="harvest",
            source=url,
            source_id=source_id,
            event="FETCH_FAIL",
            status="skipped",
            error_code=exc.error_code,
        )
        return None

    items = _payload_items(payload)
    log_event(
        logger,
        f"fetched {len(items)} shift payloads",
        level=logging.DEBUG,
        stage="harvest",
        source=url,
        source_id=source_id,
        event="FETCH_OK",
        status="ok",
        duration_ms=int((time.monotonic() - started) * 1000),
        rows_out=len(items),
    )
    return items


def fetch_shift_payloads(
    client: HttpClient,
    locations: list[Location],
    source_config: dict,
    *,
    sleep: Callable[[float], None] = time.sleep,
) -> FetchResult:
    shifts_cfg = source_config["shifts"]
    batch_size = int(shifts_cfg["batch_size"])
    delay = float(shifts_cfg["request_delay_seconds"])
    result = FetchResult()
    seen = 0

    for batch in _chunked(locations, batch_size):
        for location in batch:
            if not location.source_ids:
                log_event(
                    logger,
                    f"no source ids for location {location.name}",
                    level=logging.WARNING,
                    stage="harvest",
                    location=location.name,
                    event="LOCATION_SKIPPED",
                    status="skipped",
                )
                continue

            for source_id in location.source_ids:
                items = fetch_source_payloads(client, source_config, source_id)
                if items is None:
                    result.failed_source_ids.append(source_id)
                    items = []
                for item in items:
                    result.pairs.append((location, item))
                sleep(delay)

            result.locations_processed += 1

        seen += len(batch)
        log_event(
            logger,
            f"processed {seen}/{len(locations)} locations",
            stage="harvest",
            event="BATCH_PROGRESS",
            status="ok",
            rows_out=len(result.pairs),
        )

    return result
