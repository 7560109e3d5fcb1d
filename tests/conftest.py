"""Shared fakes for tests that exercise the transport boundary."""

from __future__ import annotations

import pytest

from volunteer_shifts.common.http import HttpRequestError


class FakeHttpClient:
    """Serves canned JSON and text bodies keyed by URL; unknown URLs 404."""

    def __init__(self, json_routes: dict | None = None, text_routes: dict | None = None):
        self.json_routes = json_routes or {}
        self.text_routes = text_routes or {}
        self.calls: list[str] = []
        self.closed = False

    def _lookup(self, routes: dict, url: str):
        self.calls.append(url)
        if url not in routes:
            raise HttpRequestError(f"HTTP status 404 from {url}", status_code=404)
        value = routes[url]
        if isinstance(value, Exception):
            raise value
        return value

    def get_json(self, url: str, **_kwargs):
        return self._lookup(self.json_routes, url)

    def get_text(self, url: str, **_kwargs):
        return self._lookup(self.text_routes, url)

    def close(self):
        self.closed = True


@pytest.fixture
def fake_client():
    return FakeHttpClient


@pytest.fixture
def recorded_sleep():
    delays: list[float] = []
    return delays.append, delays
