"""Geometry helpers."""

from __future__ import annotations

from urllib.parse import parse_qs, urlparse


def _safe_float(value: object) -> float | None:
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def extract_point_from_maps_href(href: str | None) -> tuple[float | None, float | None]:
    """Read a ``query=<lat>,<lng>`` pair from a map search link."""
    if not href:
        return None, None
    query = parse_qs(urlparse(href).query).get("query")
    if not query:
        return None, None
    parts = query[0].split(",")
    if len(parts) != 2:
        return None, None
    return _safe_float(parts[0].strip()), _safe_float(parts[1].strip())
