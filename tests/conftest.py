from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Mapping

import pytest

# Ensure tests run against this repo's source tree (src-layout), not an unrelated
# globally installed `ghactivity` package.
_REPO_ROOT = Path(__file__).resolve().parent.parent
_SRC = _REPO_ROOT / "src"
if str(_SRC) not in sys.path:
    sys.path.insert(0, str(_SRC))

from ghactivity.core.time import to_epoch_millis  # noqa: E402


class FakeHost:
    """In-memory host: canned JSON per URL, every call recorded."""

    def __init__(self, routes: dict[str, Any] | None = None, **kwargs: Any) -> None:
        self.routes = dict(routes or {})
        self.calls: list[tuple[str, str, dict[str, Any]]] = []
        self.closed = False

    async def http_get(
        self,
        url: str,
        params: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        self.calls.append(("GET", url, {"params": params, "headers": dict(headers or {})}))
        return self._respond(url)

    async def http_post(
        self,
        url: str,
        headers: Mapping[str, str] | None = None,
        body: Mapping[str, Any] | None = None,
    ) -> Any:
        self.calls.append(("POST", url, {"headers": dict(headers or {}), "body": dict(body or {})}))
        return self._respond(url)

    def parse_timestamp(self, value: str) -> int:
        return to_epoch_millis(value)

    async def aclose(self) -> None:
        self.closed = True

    def _respond(self, url: str) -> Any:
        response = self.routes[url]
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def fake_host() -> type[FakeHost]:
    return FakeHost
