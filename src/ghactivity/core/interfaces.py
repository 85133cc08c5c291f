from __future__ import annotations

from typing import Any, Mapping, Protocol


class HostCapabilities(Protocol):
    async def http_get(
        self,
        url: str,
        params: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        """GET a URL and return the decoded JSON body."""

    async def http_post(
        self,
        url: str,
        headers: Mapping[str, str] | None = None,
        body: Mapping[str, Any] | None = None,
    ) -> Any:
        """POST a JSON body and return the decoded JSON body."""

    def parse_timestamp(self, value: str) -> int:
        """Convert an upstream timestamp string to epoch milliseconds."""


class TimestampParser(Protocol):
    def __call__(self, value: str) -> int:
        """Convert an upstream timestamp string to epoch milliseconds."""
