"""Thin JSON transport shared by all API clients."""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from cot_game.config import settings
from cot_game.errors import REQUEST_FAILED, UNKNOWN_ERROR, RequestFailed

log = logging.getLogger(__name__)


class ApiClient:
    """Send JSON requests to the game API.

    Every failure surfaces as `RequestFailed`. Nothing is retried here;
    callers decide whether to try again.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.base = (base_url or settings.API_BASE_URL).strip().rstrip("/")
        self.headers = {"content-type": "application/json"}
        self.client = httpx.Client(
            timeout=timeout if timeout is not None else settings.REQUEST_TIMEOUT,
            transport=transport,
        )

    def __enter__(self) -> "ApiClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        self.client.close()

    def request(
        self,
        path: str,
        method: str = "GET",
        json: Any = None,
        headers: Optional[dict[str, str]] = None,
    ) -> Any:
        """Return the decoded JSON body of `method path`."""
        url = f"{self.base}{path}"
        merged = {**self.headers, **(headers or {})}
        try:
            r = self.client.request(method, url, json=json, headers=merged)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            log.error(f"API Error: {method} {path}: {e}")
            raise RequestFailed(UNKNOWN_ERROR) from e

        if r.is_success:
            try:
                return r.json()
            except ValueError as e:
                log.error(f"API Error: {method} {path}: undecodable body")
                raise RequestFailed(UNKNOWN_ERROR, r.status_code) from e

        message = _error_message(r)
        log.error(f"API Error: {method} {path} -> {r.status_code}: {message}")
        raise RequestFailed(message, r.status_code)


def _error_message(response: httpx.Response) -> str:
    """Pull `message` out of an error body."""
    try:
        data = response.json()
    except ValueError:
        return UNKNOWN_ERROR
    if isinstance(data, dict):
        message = data.get("message")
        if isinstance(message, str) and message:
            return message
    return REQUEST_FAILED
