from __future__ import annotations

from pathlib import Path

import pytest

from volunteer_shifts.common.config_loader import load_all_configs
from volunteer_shifts.discovery.slug_probe import generated_slugs, probe_locations

LIST_URL = "https://orangesky.org.au/list/{}"

PAGE = """<div class="location-name">{name}</div>
<a href="https://www.google.com/maps/search/?api=1&query={lat},{lng}" class="address">{address}</a>
<div class="shift-time">{shift}</div>"""


def _page(name: str, address: str, shift: str, lat: float = -42.88, lng: float = 147.33) -> str:
    return PAGE.format(name=name, address=address, shift=shift, lat=lat, lng=lng)


def _probe_config(**overrides) -> dict:
    cfg = {
        "max_probes": 500,
        "probe_delay_seconds": 0.05,
        "known_slugs": ["north_hobart_uniting_church"],
        "cities": ["hobart", "perth", "north_hobart"],
        "descriptors": ["hall", "uniting_church"],
    }
    cfg.update(overrides)
    return cfg


def test_generated_slugs_skip_known_and_duplicates():
    cfg = _probe_config(cities=["hobart", "north_hobart", "hobart"])
    assert list(generated_slugs(cfg)) == ["hobart_hall", "hobart_uniting_church", "north_hobart_hall"]


@pytest.mark.integration
def test_probe_discovers_known_and_generated_locations(fake_client, recorded_sleep):
    source_config = load_all_configs(Path("config")).source
    sleep, delays = recorded_sleep
    client = fake_client(
        text_routes={
            LIST_URL.format("north_hobart_uniting_church"): _page(
                "North Hobart Uniting Church", "2 Swan Street,North Hobart,7000", "Wed 25 June, 9:30 am - 11:30 am"
            ),
            LIST_URL.format("hobart_hall"): "hobart_hall",
            LIST_URL.format("perth_hall"): _page(
                "Perth Hall", "1 Hay St,Perth,6000", "Sat 28 June, 5:00 pm - 7:00 pm", lat=-31.95, lng=115.86
            ),
            LIST_URL.format("perth_uniting_church"): "<html><p>No shifts</p></html>",
        }
    )

    result = probe_locations(client, source_config, _probe_config(), sleep=sleep)

    assert result.discovered_slugs == ["north_hobart_uniting_church", "perth_hall"]
    assert result.attempts == 5
    assert delays == [0.05] * 5
    assert [(s.service_name, s.state, s.day, s.start_time) for s in result.shifts] == [
        ("North Hobart Uniting Church", "TAS", "Wed", "09:30"),
        ("Perth Hall", "WA", "Sat", "17:00"),
    ]
    assert client.calls[0] == LIST_URL.format("north_hobart_uniting_church")


@pytest.mark.integration
def test_probe_stops_at_max_probes(fake_client, recorded_sleep):
    source_config = load_all_configs(Path("config")).source
    sleep, _delays = recorded_sleep
    client = fake_client()

    result = probe_locations(client, source_config, _probe_config(max_probes=2), sleep=sleep)

    assert result.attempts == 2
    assert result.discovered_slugs == []
    assert client.calls == [
        LIST_URL.format("north_hobart_uniting_church"),
        LIST_URL.format("hobart_hall"),
        LIST_URL.format("hobart_uniting_church"),
    ]
