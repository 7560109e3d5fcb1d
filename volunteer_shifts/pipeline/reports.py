"""Run report aggregation."""

from __future__ import annotations

from pathlib import Path

from volunteer_shifts.common.fs import write_json


def run_status(validated_count: int, failures: int) -> str:
    if validated_count == 0:
        return "partial"
    if failures > 0:
        return "partial"
    return "success"


def write_run_summary(
    data_dir: Path,
    *,
    run_id: str,
    pipeline: str,
    counts: dict[str, int],
    artifacts: list[Path],
    failed_source_ids: list[str] | None = None,
    discovered_slugs: list[str] | None = None,
) -> Path:
    failed = list(failed_source_ids or [])
    payload = {
        "run_id": run_id,
        "pipeline": pipeline,
        "status": run_status(int(counts.get("validated_shifts", 0)), len(failed)),
        "counts": counts,
        "failed_source_ids": failed,
        "discovered_slugs": list(discovered_slugs or []),
        "artifacts": [path.name for path in artifacts],
    }
    summary_path = data_dir / "out" / "reports" / "run_summary.json"
    write_json(summary_path, payload)
    return summary_path
