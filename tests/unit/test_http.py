from __future__ import annotations

import pytest
import requests

from volunteer_shifts.common.http import HttpClient, HttpRequestError, RetryConfig, RetryableHttpError


class FakeResponse:
    def __init__(self, status_code: int, payload=None, raises_json: bool = False, text: str = ""):
        self.status_code = status_code
        self._payload = payload
        self._raises_json = raises_json
        self.text = text

    def json(self):
        if self._raises_json:
            raise ValueError("bad json")
        return self._payload


def test_http_get_json_success(monkeypatch):
    client = HttpClient(retry=RetryConfig(max_attempts=1))

    monkeypatch.setattr(client.session, "request", lambda **_kwargs: FakeResponse(200, [{"ok": True}]))
    payload = client.get_json("https://example.com/shifts/1")

    assert payload == [{"ok": True}]


def test_http_get_text_success(monkeypatch):
    client = HttpClient(retry=RetryConfig(max_attempts=1))
    monkeypatch.setattr(client.session, "request", lambda **_kwargs: FakeResponse(200, text="<html></html>"))

    assert client.get_text("https://example.com/list/x") == "<html></html>"


def test_http_not_found_raises_request_error(monkeypatch):
    client = HttpClient(retry=RetryConfig(max_attempts=3, multiplier=0, max_wait=0))
    calls = []

    def _request(**kwargs):
        calls.append(kwargs)
        return FakeResponse(404)

    monkeypatch.setattr(client.session, "request", _request)

    with pytest.raises(HttpRequestError) as excinfo:
        client.get_json("https://example.com/shifts/404")

    assert excinfo.value.status_code == 404
    assert not isinstance(excinfo.value, RetryableHttpError)
    assert len(calls) == 1


def test_http_retryable_status_raises_retryable_error(monkeypatch):
    client = HttpClient(retry=RetryConfig(max_attempts=1))
    monkeypatch.setattr(client.session, "request", lambda **_kwargs: FakeResponse(503, {"x": 1}))

    with pytest.raises(RetryableHttpError):
        client.get_json("https://example.com")


def test_http_retries_transport_errors_then_succeeds(monkeypatch):
    client = HttpClient(retry=RetryConfig(max_attempts=3, multiplier=0, max_wait=0))
    outcomes = [requests.exceptions.ConnectionError("reset"), FakeResponse(200, {"ok": 1})]

    def _request(**_kwargs):
        outcome = outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    monkeypatch.setattr(client.session, "request", _request)

    assert client.get_json("https://example.com") == {"ok": 1}


def test_http_invalid_json_raises(monkeypatch):
    client = HttpClient(retry=RetryConfig(max_attempts=1))
    monkeypatch.setattr(client.session, "request", lambda **_kwargs: FakeResponse(200, raises_json=True))

    with pytest.raises(HttpRequestError):
        client.get_json("https://example.com")


def test_http_client_from_config():
    client = HttpClient.from_config({"timeout_seconds": {"connect": 3}, "retry": {"max_attempts": 5}})
    assert client.timeout.connect == 3.0
    assert client.timeout.read == 30.0
    assert client.retry.max_attempts == 5
