"""Where: src/vaultify/platform/catalog/http_client.py
What: ``requests`` adapter with bounded timeouts and retry on 429/5xx.
Why: Keep network concerns out of the provider payload parsing.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Any, Protocol

import requests

from vaultify.platform.logging import logger

from .rate_limit import RateLimiter


@dataclass(slots=True)
class HTTPResult:
    """HTTP response payload relevant to catalog adapters.

    ``status`` is 0 when no response was received. ``data`` is ``None`` for
    non-2xx responses and for bodies that are not JSON.
    """

    status: int
    headers: dict[str, str] = field(default_factory=dict)
    data: Any = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300 and self.data is not None


class HTTPClient(Protocol):
    """Protocol for HTTP clients able to fetch JSON payloads."""

    def get_json(
        self,
        url: str,
        params: dict[str, Any],
        headers: dict[str, str] | None = None,
    ) -> HTTPResult: ...


class CatalogHTTPClient:
    """Perform JSON requests with retries, throttling and bounded timeouts."""

    MAX_RETRY_DELAY: float = 10.0

    def __init__(
        self,
        *,
        service: str,
        timeout: tuple[float, float] = (5.0, 10.0),
        max_attempts: int = 2,
        rate_limiter: RateLimiter | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self._service = service
        self._timeout = timeout
        self._max_attempts = max(1, max_attempts)
        self._rate_limiter = rate_limiter or RateLimiter(0.0)
        self._session = session or requests.Session()

    def get_json(
        self,
        url: str,
        params: dict[str, Any],
        headers: dict[str, str] | None = None,
    ) -> HTTPResult:
        return self._request("GET", url, params=params, headers=headers)

    def _request(
        self,
        method: str,
        url: str,
        *,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> HTTPResult:
        request_headers = {"Accept": "application/json", **(headers or {})}

        for attempt in range(self._max_attempts):
            self._rate_limiter.respect()
            result = self._attempt(method, url, params, request_headers)

            if self._should_retry(result.status):
                if attempt < self._max_attempts - 1:
                    delay = self._retry_delay(result.headers)
                    logger.warning(
                        "%s rate-limited/server error (status=%s). Retrying in %.1fs.",
                        self._service,
                        result.status,
                        delay,
                    )
                    time.sleep(delay)
                    continue

                logger.warning(
                    "%s rate-limited/server error (status=%s). Giving up.",
                    self._service,
                    result.status,
                )
                return HTTPResult(status=result.status, headers=result.headers, data=None)

            if result.status and not 200 <= result.status < 300:
                logger.warning("%s HTTP error: status=%s", self._service, result.status)
                return HTTPResult(status=result.status, headers=result.headers, data=None)

            return result

        return HTTPResult(status=0)

    def _attempt(
        self,
        method: str,
        url: str,
        params: dict[str, Any] | None,
        headers: dict[str, str],
    ) -> HTTPResult:
        try:
            response = self._session.request(
                method,
                url,
                params=params,
                headers=headers,
                timeout=self._timeout,
            )
        except requests.RequestException as exc:
            logger.warning("%s request error: %s", self._service, exc)
            return HTTPResult(status=0)

        status = int(response.status_code)
        response_headers = {str(key): str(value) for key, value in response.headers.items()}

        if not 200 <= status < 300:
            return HTTPResult(status=status, headers=response_headers, data=None)

        try:
            payload = response.json()
        except ValueError as exc:
            logger.warning("%s JSON parse error: %s", self._service, exc)
            return HTTPResult(status=status, headers=response_headers, data=None)

        return HTTPResult(status=status, headers=response_headers, data=payload)

    @staticmethod
    def _should_retry(status: int) -> bool:
        return status == 429 or status >= 500

    @classmethod
    def _retry_delay(cls, headers: dict[str, str]) -> float:
        raw = next((value for key, value in headers.items() if key.lower() == "retry-after"), None)
        retry_after = _parse_retry_after(raw)
        return max(1.0, min(cls.MAX_RETRY_DELAY, retry_after or 1.0))


def _parse_retry_after(value: str | None) -> float | None:
    if not value:
        return None
    stripped = value.strip()
    if stripped.isdigit():
        return float(int(stripped))
    try:
        dt = parsedate_to_datetime(stripped)
    except (TypeError, ValueError):
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    delta = (dt - datetime.now(timezone.utc)).total_seconds()
    return max(0.0, delta)


__all__ = [
    "CatalogHTTPClient",
    "HTTPClient",
    "HTTPResult",
]
