"""CLI entrypoint for the volunteer shift extraction pipeline."""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Callable

from volunteer_shifts.common.config_loader import ConfigBundle, load_all_configs
from volunteer_shifts.common.constants import COMMANDS, EXIT_HARD_FAIL, EXIT_SUCCESS
from volunteer_shifts.common.errors import PipelineError
from volunteer_shifts.common.http import HttpClient
from volunteer_shifts.common.ids import generate_run_id
from volunteer_shifts.common.logging import build_logger, log_event
from volunteer_shifts.harvest.runner import HarvestResult, run_api_harvest, run_fallback_harvest
from volunteer_shifts.pipeline.export import write_shift_artifacts
from volunteer_shifts.pipeline.reports import write_run_summary
from volunteer_shifts.pipeline.validate import filter_complete, validate_shifts

SAMPLE_SIZE = 3


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("command", choices=COMMANDS)
    parser.add_argument("--run-id", default=None)
    parser.add_argument("--config-dir", default="./config")
    parser.add_argument("--overlay-config-dir", default=None)
    parser.add_argument("--data-dir", default="./data")
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser.parse_args(argv)


def execute_harvest(
    command: str,
    client: HttpClient,
    bundle: ConfigBundle,
    data_dir: Path,
    sleep: Callable[[float], None],
) -> HarvestResult:
    if command == "api":
        return run_api_harvest(client, bundle.source, data_dir, sleep=sleep)
    if command == "fallback":
        return run_fallback_harvest(client, bundle.source, bundle.probe, sleep=sleep)
    raise ValueError(f"Unknown command: {command}")


def run_pipeline(
    args: argparse.Namespace,
    logger: logging.Logger,
    run_id: str,
    *,
    http_client: HttpClient | None,
    sleep: Callable[[float], None],
) -> int:
    data_dir = Path(args.data_dir)
    overlay_config_dir = Path(args.overlay_config_dir) if args.overlay_config_dir else None
    bundle = load_all_configs(Path(args.config_dir), overlay_config_dir=overlay_config_dir)

    log_event(logger, "harvest start", run_id=run_id, stage=args.command, event="STAGE_START", status="ok")
    owns_client = http_client is None
    client = http_client or HttpClient.from_config(bundle.source["http"])
    try:
        harvest = execute_harvest(args.command, client, bundle, data_dir, sleep)
    finally:
        if owns_client:
            client.close()
    log_event(logger, "harvest end", run_id=run_id, stage=args.command, event="STAGE_END", status="ok")

    complete = filter_complete(harvest.shifts)
    log_event(
        logger,
        f"processed {harvest.locations_processed} locations, found {len(harvest.shifts)} shifts, "
        f"{len(complete)} complete",
        run_id=run_id,
        stage="validate",
        event="RUN_SUMMARY",
        status="ok",
        rows_in=len(harvest.shifts),
        rows_out=len(complete),
    )

    validated = validate_shifts(complete)
    for record in validated[:SAMPLE_SIZE]:
        log_event(
            logger,
            f"sample shift {record['service_name']} ({record['suburb']}, {record['state']}) "
            f"{record['day']} {record['start_time']}-{record['end_time']}",
            level=logging.DEBUG,
            run_id=run_id,
            stage="validate",
            event="SAMPLE",
        )
    if not validated:
        log_event(
            logger,
            "no shifts found; the upstream structure may have changed",
            level=logging.WARNING,
            run_id=run_id,
            stage="validate",
            event="NO_SHIFTS_FOUND",
            status="partial",
        )

    artifacts = write_shift_artifacts(validated, bundle.source["output"][args.command], data_dir)
    for path in artifacts:
        log_event(
            logger,
            f"saved {len(validated)} shifts to {path}",
            run_id=run_id,
            stage="export",
            event="ARTIFACT_WRITTEN",
            status="ok",
            rows_out=len(validated),
        )

    write_run_summary(
        data_dir,
        run_id=run_id,
        pipeline=harvest.pipeline,
        counts={
            "locations_processed": harvest.locations_processed,
            "raw_shifts": len(harvest.shifts),
            "complete_shifts": len(complete),
            "validated_shifts": len(validated),
        },
        artifacts=list(artifacts),
        failed_source_ids=harvest.failed_source_ids,
        discovered_slugs=harvest.discovered_slugs,
    )
    return EXIT_SUCCESS


def run_command(
    args: argparse.Namespace,
    *,
    http_client: HttpClient | None = None,
    sleep: Callable[[float], None] = time.sleep,
) -> int:
    run_id = args.run_id or generate_run_id()
    logger = build_logger(run_id, data_dir=Path(args.data_dir), level=args.log_level)
    try:
        return run_pipeline(args, logger, run_id, http_client=http_client, sleep=sleep)
    except PipelineError as exc:
        log_event(
            logger,
            f"run failed: {exc}",
            level=logging.ERROR,
            run_id=run_id,
            stage=args.command,
            event="RUN_FAIL",
            status="error",
            error_code=exc.error_code,
        )
        return EXIT_HARD_FAIL
    except Exception as exc:
        log_event(
            logger,
            f"unexpected failure: {exc}",
            level=logging.ERROR,
            run_id=run_id,
            stage=args.command,
            event="RUN_FAIL",
            status="error",
            error_code="UNEXPECTED_ERROR",
        )
        return EXIT_HARD_FAIL


def main(argv: list[str] | None = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    return run_command(args)


if __name__ == "__main__":
    raise SystemExit(main())
