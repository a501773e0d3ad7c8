import json
from http import HTTPStatus
from typing import Any

import httpx


class MockResponse:
    def __init__(self, status_code: int, payload: Any = None, text: str = "") -> None:
        self.status_code = status_code
        self.text = json.dumps(payload) if payload is not None else text


class MockAsyncClient:
    """Minimal async context-manager mock for httpx.AsyncClient.

    Records the URL and query params of every GET so tests can check request construction.
    """

    def __init__(self, response: MockResponse) -> None:
        self._response = response
        self.requests: list[tuple[str, dict[str, Any] | None]] = []

    async def __aenter__(self) -> "MockAsyncClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        return None

    async def get(self, url: str, params: dict[str, Any] | None = None) -> MockResponse:
        self.requests.append((url, params))
        return self._response


class FailingAsyncClient:
    """Async client that raises a RequestError on enter to simulate network failure."""

    def __init__(self, url: str, *args: Any, **kwargs: Any) -> None:
        self._url = url

    async def __aenter__(self) -> "FailingAsyncClient":
        request = httpx.Request("GET", self._url)
        raise httpx.ConnectError("Network failure", request=request)

    async def __aexit__(self, exc_type, exc, tb) -> None:
        return None

    async def get(self, url: str, params: dict[str, Any] | None = None) -> MockResponse:
        return MockResponse(status_code=HTTPStatus.OK, payload={})
