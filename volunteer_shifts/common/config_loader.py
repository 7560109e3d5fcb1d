"""Configuration loading and validation."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from volunteer_shifts.common.errors import ConfigError
from volunteer_shifts.common.fs import read_yaml
from volunteer_shifts.common.schema import validate_probe_config, validate_source_config


@dataclass(frozen=True)
class ConfigBundle:
    source: dict
    probe: dict


def _deep_merge(base: Any, overlay: Any) -> Any:
    if isinstance(base, dict) and isinstance(overlay, dict):
        merged = dict(base)
        for key, value in overlay.items():
            if key in merged:
                merged[key] = _deep_merge(merged[key], value)
            else:
                merged[key] = value
        return merged
    return overlay


def _load_yaml_with_overlay(path: Path, overlay_path: Path | None) -> dict:
    if not path.exists():
        raise ConfigError(f"Missing config file: {path}")
    base = read_yaml(path) or {}
    if overlay_path is None or not overlay_path.exists():
        return base
    overlay = read_yaml(overlay_path)
    if not overlay:
        return base
    return _deep_merge(base, overlay)


def load_all_configs(
    config_dir: Path,
    *,
    allow_unknown: bool = False,
    overlay_config_dir: Path | None = None,
) -> ConfigBundle:
    def _overlay(name: str) -> Path | None:
        if overlay_config_dir is None:
            return None
        return overlay_config_dir / name

    source = validate_source_config(
        _load_yaml_with_overlay(config_dir / "source.yml", _overlay("source.yml")),
        allow_unknown=allow_unknown,
    )
    probe = validate_probe_config(
        _load_yaml_with_overlay(config_dir / "probe.yml", _overlay("probe.yml")),
        allow_unknown=allow_unknown,
    )
    return ConfigBundle(source=source, probe=probe)


def build_url(source_config: dict, path: str) -> str:
    return f"{source_config['source']['base_url'].rstrip('/')}/{path.lstrip('/')}"
