"""
Shared fixtures for the unit test suite.

Requests are served by ``httpx.MockTransport`` so every test runs the real
httpx client without network access.
"""

from collections.abc import Callable
from typing import Any

import httpx
import pytest

from http_base_client import BaseClient, ClientConfig

BASE_URL = "https://api.example.com/v1"


class RecordingHandler:
    """MockTransport handler recording every request it receives."""

    def __init__(self, responder: Callable[[httpx.Request], Any] | None = None):
        self.requests: list[httpx.Request] = []
        self._responder = responder or (lambda request: httpx.Response(200, json={"ok": True}))

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self._responder(request)
        if not isinstance(response, httpx.Response):
            response = await response
        return response

    @property
    def call_count(self) -> int:
        return len(self.requests)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def handler():
    """Handler answering 200 {"ok": true} to every request."""
    return RecordingHandler()


@pytest.fixture
def make_client():
    """Factory building a BaseClient backed by a MockTransport handler."""

    def _make(handler: Callable[[httpx.Request], Any], **config: Any) -> BaseClient:
        config.setdefault("base_url", BASE_URL)
        return BaseClient(ClientConfig(transport=httpx.MockTransport(handler), **config))

    return _make


@pytest.fixture
def recorder():
    """The RecordingHandler class, for tests that need a custom responder."""
    return RecordingHandler
