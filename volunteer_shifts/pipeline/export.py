"""Shift artifact serialisation: pretty JSON and CSV."""

from __future__ import annotations

import csv
import io
from pathlib import Path
from typing import Any, Mapping, Sequence

from volunteer_shifts.common.fs import write_json, write_text


def _serialize_value(value: Any) -> Any:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return value


def encode_csv(records: Sequence[Mapping[str, Any]]) -> str:
    if not records:
        return ""
    headers = list(records[0].keys())
    buffer = io.StringIO()
    writer = csv.DictWriter(
        buffer,
        fieldnames=headers,
        extrasaction="ignore",
        restval="",
        lineterminator="\n",
        quoting=csv.QUOTE_MINIMAL,
    )
    writer.writeheader()
    for record in records:
        writer.writerow({key: _serialize_value(record.get(key)) for key in headers})
    return buffer.getvalue().removesuffix("\n")


def write_shift_artifacts(
    records: Sequence[Mapping[str, Any]],
    output_config: dict,
    data_dir: Path,
) -> tuple[Path, Path]:
    out_dir = data_dir / "out"
    json_path = out_dir / output_config["json_filename"]
    csv_path = out_dir / output_config["csv_filename"]
    write_json(json_path, [dict(record) for record in records], sort_keys=False)
    write_text(csv_path, encode_csv(records))
    return json_path, csv_path
