"""Harvest orchestration for the API and list-page pipelines."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from volunteer_shifts.common.http import HttpClient
from volunteer_shifts.common.models import Shift
from volunteer_shifts.discovery.directory import fetch_directory
from volunteer_shifts.discovery.slug_probe import probe_locations
from volunteer_shifts.harvest.shift_fetch import fetch_shift_payloads
from volunteer_shifts.pipeline.api_fields import resolve_api_shifts


@dataclass
class HarvestResult:
    pipeline: str
    shifts: list[Shift]
    locations_processed: int
    failed_source_ids: list[str] = field(default_factory=list)
    discovered_slugs: list[str] = field(default_factory=list)


def run_api_harvest(
    client: HttpClient,
    source_config: dict,
    data_dir: Path,
    *,
    sleep: Callable[[float], None] = time.sleep,
) -> HarvestResult:
    locations = fetch_directory(client, source_config, data_dir)
    fetched = fetch_shift_payloads(client, locations, source_config, sleep=sleep)
    return HarvestResult(
        pipeline="api",
        shifts=resolve_api_shifts(fetched.pairs),
        locations_processed=fetched.locations_processed,
        failed_source_ids=fetched.failed_source_ids,
    )


def run_fallback_harvest(
    client: HttpClient,
    source_config: dict,
    probe_config: dict,
    *,
    sleep: Callable[[float], None] = time.sleep,
) -> HarvestResult:
    probed = probe_locations(client, source_config, probe_config, sleep=sleep)
    return HarvestResult(
        pipeline="fallback",
        shifts=probed.shifts,
        locations_processed=len(probed.discovered_slugs),
        discovered_slugs=probed.discovered_slugs,
    )
