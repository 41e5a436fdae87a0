"""Shared fixtures: test settings and a recording fake HTTP transport."""
from __future__ import annotations

import json
from typing import Callable

import httpx
import pytest

from livebot.config import Settings, ShopeeSettings
from livebot.services.api_client import BackendClient
from livebot.services.shopee_client import ShopeeClient


class RecordingHandler:
    """httpx.MockTransport handler that remembers every request."""

    def __init__(self, responder: Callable[[httpx.Request], httpx.Response]):
        self.responder = responder
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responder(request)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self):
        return json.loads(self.last.content)


@pytest.fixture
def settings():
    """Settings pointing at fake hosts"""
    return Settings(
        backend_url="https://backend.test/api",
        shopee=ShopeeSettings(origin="https://shopee.test"),
    )


@pytest.fixture
def mock_http():
    """Factory: responder -> (transport, handler)"""

    def _make(responder):
        handler = RecordingHandler(responder)
        return httpx.MockTransport(handler), handler

    return _make


@pytest.fixture
def backend(settings, mock_http):
    """Factory: responder -> (BackendClient, handler)"""

    def _make(responder):
        transport, handler = mock_http(responder)
        return BackendClient(settings, transport=transport), handler

    return _make


@pytest.fixture
def shopee(settings, mock_http):
    """Factory: responder -> (ShopeeClient, handler)"""

    def _make(responder):
        transport, handler = mock_http(responder)
        return ShopeeClient(settings, transport=transport), handler

    return _make


@pytest.fixture
def reply():
    """Factory: canned response -> responder returning it every time"""

    def _make(status: int = 200, **kwargs) -> Callable[[httpx.Request], httpx.Response]:
        def _responder(request: httpx.Request) -> httpx.Response:
            return httpx.Response(status, **kwargs)

        return _responder

    return _make
