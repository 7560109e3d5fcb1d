"""HTTP client with retries and timeouts."""

from __future__ import annotations

from dataclasses import dataclass
from types import TracebackType
from typing import Any

import requests
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential_jitter

from volunteer_shifts.common.constants import USER_AGENT
from volunteer_shifts.common.errors import StageError

RETRYABLE_STATUS_CODES = {408, 425, 429, 500, 502, 503, 504}


@dataclass(frozen=True)
class TimeoutConfig:
    connect: float = 10.0
    read: float = 30.0


@dataclass(frozen=True)
class RetryConfig:
    max_attempts: int = 3
    multiplier: float = 0.5
    max_wait: float = 10.0


class HttpRequestError(StageError):
    error_code = "HTTP_ERROR"

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class RetryableHttpError(HttpRequestError):
    pass


class HttpClient:
    def __init__(
        self,
        *,
        timeout: TimeoutConfig | None = None,
        retry: RetryConfig | None = None,
    ) -> None:
        self.timeout = timeout or TimeoutConfig()
        self.retry = retry or RetryConfig()
        self.session = requests.Session()

    @classmethod
    def from_config(cls, http_config: dict) -> "HttpClient":
        timeouts = http_config.get("timeout_seconds", {})
        retries = http_config.get("retry", {})
        return cls(
            timeout=TimeoutConfig(
                connect=float(timeouts.get("connect", TimeoutConfig.connect)),
                read=float(timeouts.get("read", TimeoutConfig.read)),
            ),
            retry=RetryConfig(
                max_attempts=int(retries.get("max_attempts", RetryConfig.max_attempts)),
                multiplier=float(retries.get("multiplier", RetryConfig.multiplier)),
                max_wait=float(retries.get("max_wait", RetryConfig.max_wait)),
            ),
        )

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "HttpClient":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def _headers(self, accept: str, headers: dict[str, str] | None) -> dict[str, str]:
        out = {"User-Agent": USER_AGENT, "Accept": accept}
        if headers:
            out.update(headers)
        return out

    def _raise_for_status_or_retry(self, response: requests.Response, url: str) -> None:
        status = response.status_code
        if status in RETRYABLE_STATUS_CODES:
            raise RetryableHttpError(f"Retryable HTTP status {status} from {url}", status_code=status)
        if status >= 400:
            raise HttpRequestError(f"HTTP status {status} from {url}", status_code=status)

    def _request(
        self,
        url: str,
        *,
        accept: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        timeout: TimeoutConfig | None = None,
    ) -> requests.Response:
        req_timeout = timeout or self.timeout
        try:
            response = self.session.request(
                method="GET",
                url=url,
                params=params,
                headers=self._headers(accept, headers),
                timeout=(req_timeout.connect, req_timeout.read),
            )
        except (requests.exceptions.Timeout, requests.exceptions.ConnectionError) as exc:
            raise RetryableHttpError(f"Transport failure for {url}: {exc}") from exc
        except requests.exceptions.RequestException as exc:
            raise HttpRequestError(f"Request error for {url}: {exc}") from exc
        self._raise_for_status_or_retry(response, url)
        return response

    def _with_retry(self, func):
        @retry(
            stop=stop_after_attempt(self.retry.max_attempts),
            wait=wait_exponential_jitter(
                initial=self.retry.multiplier,
                max=self.retry.max_wait,
                jitter=0.5,
            ),
            retry=retry_if_exception_type(RetryableHttpError),
            reraise=True,
        )
        def _wrapped():
            return func()

        return _wrapped()

    def get_json(
        self,
        url: str,
        *,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        timeout: TimeoutConfig | None = None,
    ) -> Any:
        def _call() -> Any:
            response = self._request(url, accept="application/json", params=params, headers=headers, timeout=timeout)
            try:
                return response.json()
            except ValueError as exc:
                raise HttpRequestError(f"Invalid JSON payload from {url}") from exc

        return self._with_retry(_call)

    def get_text(
        self,
        url: str,
        *,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        timeout: TimeoutConfig | None = None,
    ) -> str:
        def _call() -> str:
            response = self._request(url, accept="text/html", params=params, headers=headers, timeout=timeout)
            return response.text

        return self._with_retry(_call)
