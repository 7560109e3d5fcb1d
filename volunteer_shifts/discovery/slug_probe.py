"""Brute-force discovery of location list pages by slug."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Callable, Iterator

from volunteer_shifts.common.http import HttpClient
from volunteer_shifts.common.logging import get_logger, log_event
from volunteer_shifts.common.models import Shift
from volunteer_shifts.harvest.list_pages import fetch_list_page
from volunteer_shifts.pipeline.html_fields import parse_list_page

logger = get_logger("discovery")


@dataclass
class ProbeResult:
    discovered_slugs: list[str] = field(default_factory=list)
    shifts: list[Shift] = field(default_factory=list)
    attempts: int = 0


def generated_slugs(probe_config: dict) -> Iterator[str]:
    seen = set(probe_config["known_slugs"])
    for city in probe_config["cities"]:
        for descriptor in probe_config["descriptors"]:
            slug = f"{city}_{descriptor}"
            if slug in seen:
                continue
            seen.add(slug)
            yield slug


def _probe_one(client: HttpClient, source_config: dict, slug: str, result: ProbeResult) -> None:
    html = fetch_list_page(client, source_config, slug)
    if html is None:
        return
    shifts = parse_list_page(html, slug)
    if not shifts:
        return
    result.discovered_slugs.append(slug)
    result.shifts.extend(shifts)
    log_event(
        logger,
        f"found {len(shifts)} shifts at {slug}",
        stage="probe",
        source_id=slug,
        event="SLUG_FOUND",
        status="ok",
        rows_out=len(shifts),
    )


def probe_locations(
    client: HttpClient,
    source_config: dict,
    probe_config: dict,
    *,
    sleep: Callable[[float], None] = time.sleep,
) -> ProbeResult:
    result = ProbeResult()
    max_probes = int(probe_config["max_probes"])
    delay = float(probe_config["probe_delay_seconds"])

    for slug in dict.fromkeys(probe_config["known_slugs"]):
        _probe_one(client, source_config, slug, result)

    for slug in generated_slugs(probe_config):
        if result.attempts >= max_probes:
            break
        result.attempts += 1
        _probe_one(client, source_config, slug, result)
        sleep(delay)

    log_event(
        logger,
        f"discovered {len(result.discovered_slugs)} locations in {result.attempts} probes",
        stage="probe",
        event="PROBE_SUMMARY",
        status="ok",
        rows_out=len(result.shifts),
    )
    return result
