import csv
import io
import json
from pathlib import Path

from volunteer_shifts.pipeline.export import encode_csv, write_shift_artifacts


def _decode(text: str) -> list[dict]:
    return list(csv.DictReader(io.StringIO(text)))


def test_encode_csv_empty_input_is_empty_text():
    assert encode_csv([]) == ""


def test_encode_csv_header_follows_first_record_key_order():
    records = [
        {"service_name": "Hall", "suburb": "Hobart", "lat": -42.88, "lng": 147.33},
        {"service_name": "Park", "suburb": "Perth", "lat": -31.95, "lng": 115.86},
    ]

    assert encode_csv(records) == (
        "service_name,suburb,lat,lng\n"
        "Hall,Hobart,-42.88,147.33\n"
        "Park,Perth,-31.95,115.86"
    )


def test_encode_csv_quotes_commas_and_doubles_quotes():
    text = encode_csv([{"address": 'a,b"c', "note": 'say "hi"', "plain": "x"}])

    assert text.splitlines()[1] == '"a,b""c","say ""hi""",x'


def test_encode_csv_round_trips_plain_values():
    rows = [
        {"service_name": "Hall", "day": "Wed", "start_time": "09:30"},
        {"service_name": "Park", "day": "", "start_time": "18:00"},
    ]

    assert _decode(encode_csv(rows)) == rows


def test_encode_csv_renders_missing_and_boolean_values():
    text = encode_csv([{"a": "x", "b": True}, {"a": None}])
    assert text.split("\n")[1:] == ["x,true", ","]


def test_write_shift_artifacts_writes_json_and_csv(tmp_path: Path):
    records = [{"service_name": "Hall", "suburb": "North Hobart", "state": "TAS", "lat": -42.88}]

    json_path, csv_path = write_shift_artifacts(
        records,
        {"json_filename": "shifts.json", "csv_filename": "shifts.csv"},
        tmp_path,
    )

    assert json_path == tmp_path / "out" / "shifts.json"
    payload_text = json_path.read_text(encoding="utf-8")
    assert json.loads(payload_text) == records
    assert payload_text.index('"service_name"') < payload_text.index('"state"')
    assert csv_path.read_text(encoding="utf-8") == "service_name,suburb,state,lat\nHall,North Hobart,TAS,-42.88"


def test_write_shift_artifacts_keeps_integer_coordinates(tmp_path: Path):
    records = [{"service_name": "Hall", "lat": -42, "lng": 147.5}]

    json_path, csv_path = write_shift_artifacts(
        records,
        {"json_filename": "shifts.json", "csv_filename": "shifts.csv"},
        tmp_path,
    )

    assert '"lat": -42,' in json_path.read_text(encoding="utf-8")
    assert csv_path.read_text(encoding="utf-8").splitlines()[1] == "Hall,-42,147.5"


def test_encode_csv_quotes_values_with_line_breaks():
    text = encode_csv([{"note": "line one\nline two", "plain": "x"}])

    assert text == 'note,plain\n"line one\nline two",x'
