from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Mapping

import httpx

from ghactivity.core.time import to_epoch_millis


@dataclass(frozen=True)
class RateLimitStatus:
    remaining: int | None
    reset_at: datetime | None


class HttpxHost:
    """Default host capabilities backed by an ``httpx.AsyncClient``.

    Every non-2xx response and every transport error is raised to the caller
    unchanged; the only local handling is logging.
    """

    def __init__(
        self,
        timeout: float = 30.0,
        user_agent: str = "ghactivity/0.1",
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._logger = logging.getLogger(self.__class__.__name__)
        self._client = httpx.AsyncClient(
            headers={"Accept": "application/json", "User-Agent": user_agent},
            timeout=timeout,
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "HttpxHost":
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()

    async def http_get(
        self,
        url: str,
        params: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        return await self._request("GET", url, params=params, headers=headers)

    async def http_post(
        self,
        url: str,
        headers: Mapping[str, str] | None = None,
        body: Mapping[str, Any] | None = None,
    ) -> Any:
        return await self._request("POST", url, headers=headers, json=body)

    def parse_timestamp(self, value: str) -> int:
        return to_epoch_millis(value)

    async def _request(self, method: str, url: str, **kwargs: Any) -> Any:
        try:
            response = await self._client.request(method, url, **kwargs)
        except httpx.HTTPError as exc:
            self._logger.warning("Upstream request failed", extra={"url": url, "error": str(exc)})
            raise

        rate_limit = _parse_rate_limit(response.headers)
        if rate_limit.remaining is not None and rate_limit.remaining <= 1:
            self._logger.warning(
                "GitHub rate limit nearly exhausted",
                extra={
                    "url": url,
                    "remaining": rate_limit.remaining,
                    "reset_at": rate_limit.reset_at.isoformat()
                    if rate_limit.reset_at
                    else None,
                },
            )

        if response.is_error:
            self._logger.warning(
                "Upstream request rejected",
                extra={
                    "url": url,
                    "status_code": response.status_code,
                    "response_message": response.text[:200],
                },
            )
        response.raise_for_status()
        return response.json()


def _parse_rate_limit(headers: Mapping[str, str]) -> RateLimitStatus:
    remaining = headers.get("X-RateLimit-Remaining")
    reset = headers.get("X-RateLimit-Reset")
    remaining_val = int(remaining) if remaining and remaining.isdigit() else None
    reset_at = (
        datetime.fromtimestamp(int(reset), tz=timezone.utc) if reset and reset.isdigit() else None
    )
    return RateLimitStatus(remaining=remaining_val, reset_at=reset_at)
