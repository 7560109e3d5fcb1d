"""Minimal strict schemas for YAML config validation."""

from __future__ import annotations

from volunteer_shifts.common.errors import ConfigError


def _assert_required_keys(obj: dict, required: set[str], ctx: str) -> None:
    if not isinstance(obj, dict):
        raise ConfigError(f"{ctx} must be a mapping")
    missing = required - set(obj)
    if missing:
        missing_str = ", ".join(sorted(missing))
        raise ConfigError(f"Missing keys in {ctx}: {missing_str}")


def _assert_no_unknown_keys(obj: dict, known: set[str], ctx: str, allow_unknown: bool) -> None:
    if allow_unknown:
        return
    unknown = set(obj) - known
    if unknown:
        unknown_str = ", ".join(sorted(unknown))
        raise ConfigError(f"Unknown keys in {ctx}: {unknown_str}")


def _assert_positive_number(value: object, ctx: str, *, allow_zero: bool = False) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(f"{ctx} must be a number")
    if value < 0 or (value == 0 and not allow_zero):
        raise ConfigError(f"{ctx} must be {'non-negative' if allow_zero else 'positive'}")


def validate_source_config(cfg: dict, *, allow_unknown: bool = False) -> dict:
    top_required = {"source", "directory", "shifts", "list_pages", "http", "output"}
    _assert_required_keys(cfg, top_required, "source config")
    _assert_no_unknown_keys(cfg, top_required, "source config", allow_unknown)

    _assert_required_keys(cfg["source"], {"name", "base_url"}, "source")
    _assert_required_keys(cfg["directory"], {"page_path", "block_pattern"}, "directory")
    _assert_required_keys(
        cfg["shifts"],
        {"endpoint_template", "batch_size", "request_delay_seconds"},
        "shifts",
    )
    _assert_required_keys(cfg["list_pages"], {"endpoint_template"}, "list_pages")
    _assert_required_keys(cfg["http"], set(), "http")
    _assert_required_keys(cfg["output"], {"api", "fallback"}, "output")
    for pipeline in ("api", "fallback"):
        _assert_required_keys(cfg["output"][pipeline], {"json_filename", "csv_filename"}, f"output.{pipeline}")

    if "{source_id}" not in cfg["shifts"]["endpoint_template"]:
        raise ConfigError("shifts.endpoint_template must contain {source_id}")
    if "{slug}" not in cfg["list_pages"]["endpoint_template"]:
        raise ConfigError("list_pages.endpoint_template must contain {slug}")
    if isinstance(cfg["shifts"]["batch_size"], bool) or not isinstance(cfg["shifts"]["batch_size"], int):
        raise ConfigError("shifts.batch_size must be an integer")
    _assert_positive_number(cfg["shifts"]["batch_size"], "shifts.batch_size")
    _assert_positive_number(cfg["shifts"]["request_delay_seconds"], "shifts.request_delay_seconds", allow_zero=True)

    return cfg


def validate_probe_config(cfg: dict, *, allow_unknown: bool = False) -> dict:
    required = {"max_probes", "probe_delay_seconds", "known_slugs", "cities", "descriptors"}
    _assert_required_keys(cfg, required, "probe config")
    _assert_no_unknown_keys(cfg, required, "probe config", allow_unknown)

    _assert_positive_number(cfg["max_probes"], "max_probes")
    _assert_positive_number(cfg["probe_delay_seconds"], "probe_delay_seconds", allow_zero=True)
    for key in ("known_slugs", "cities", "descriptors"):
        if not isinstance(cfg[key], list):
            raise ConfigError(f"probe config {key} must be a list")
    if not cfg["cities"] or not cfg["descriptors"]:
        raise ConfigError("probe config cities and descriptors must be non-empty lists")

    return cfg
