"""Shared fixtures: a fixed Settings object and helpers for faking the generation service."""

from __future__ import annotations

import json
from typing import Callable

import httpx
import pytest

from content_gateway.config import Settings

SERVICE_URL = "http://content.test"


def make_settings(**overrides) -> Settings:
    values = {"service_url": SERVICE_URL, "timeout": 2.0}
    values.update(overrides)
    return Settings(**values)


def mock_client(handler: Callable) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def unreachable(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectError("connection refused", request=request)


def request_payload(request: httpx.Request) -> dict:
    if request.method == "GET":
        return dict(request.url.params)
    return json.loads(request.content)


@pytest.fixture
def settings() -> Settings:
    return make_settings()
