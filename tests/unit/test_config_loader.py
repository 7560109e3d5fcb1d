from pathlib import Path

import pytest

from volunteer_shifts.common.config_loader import build_url, load_all_configs
from volunteer_shifts.common.errors import ConfigError


def test_load_all_configs_from_repo_config_dir():
    bundle = load_all_configs(Path("config"))
    assert bundle.source["shifts"]["batch_size"] == 3
    assert bundle.source["shifts"]["request_delay_seconds"] == 0.1
    assert bundle.probe["max_probes"] == 500
    assert "north_hobart_uniting_church" in bundle.probe["known_slugs"]


def test_load_all_configs_applies_overlay_values(tmp_path: Path):
    overlay = tmp_path / "overlay"
    overlay.mkdir()
    (overlay / "source.yml").write_text(
        """source:
  base_url: "https://staging.example.test"
shifts:
  request_delay_seconds: 0
""",
        encoding="utf-8",
    )

    bundle = load_all_configs(Path("config"), overlay_config_dir=overlay)

    assert bundle.source["source"]["base_url"] == "https://staging.example.test"
    assert bundle.source["source"]["name"] == "orange_sky"
    assert bundle.source["shifts"]["request_delay_seconds"] == 0
    assert bundle.source["shifts"]["batch_size"] == 3


def test_load_all_configs_ignores_empty_overlay_file(tmp_path: Path):
    overlay = tmp_path / "overlay"
    overlay.mkdir()
    (overlay / "probe.yml").write_text("", encoding="utf-8")

    bundle = load_all_configs(Path("config"), overlay_config_dir=overlay)

    assert bundle.probe["max_probes"] == 500


def test_load_all_configs_missing_file_raises(tmp_path: Path):
    with pytest.raises(ConfigError):
        load_all_configs(tmp_path)


def test_build_url_joins_base_and_path():
    cfg = {"source": {"base_url": "https://example.test/"}}
    assert build_url(cfg, "/list/a") == "https://example.test/list/a"
    assert build_url(cfg, "map/") == "https://example.test/map/"
