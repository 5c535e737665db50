"""Shared fixtures for telegram-log-handler tests."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Iterator
from datetime import datetime, timezone, tzinfo
from typing import Any
from unittest.mock import MagicMock
from urllib.parse import parse_qs

import httpx
import pytest

# 2024-01-01 09:05:00 UTC
FIXED_NOW = datetime(2024, 1, 1, 9, 5, 0, tzinfo=timezone.utc)

TOKEN = "123456:TEST-token_abc"
CHANNEL = "@test_channel"


def fixed_clock(tz: tzinfo) -> datetime:
    """Clock that always returns FIXED_NOW in the requested timezone."""
    return FIXED_NOW.astimezone(tz)


def form_of(request: httpx.Request) -> dict[str, str]:
    """Decode a form-encoded request body into a flat dict."""
    parsed = parse_qs(request.content.decode("utf-8"), keep_blank_values=True)
    return {key: values[0] for key, values in parsed.items()}


class RecordingResponder:
    """httpx.MockTransport handler that records requests.

    Returns the configured JSON body, or raises the configured exception.
    """

    def __init__(
        self,
        body: Any = None,
        status_code: int = 200,
        raw: bytes | None = None,
        exc: Exception | None = None,
    ) -> None:
        self.body = {"ok": True, "result": {"message_id": 1}} if body is None else body
        self.status_code = status_code
        self.raw = raw
        self.exc = exc
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.exc is not None:
            raise self.exc
        if self.raw is not None:
            return httpx.Response(self.status_code, content=self.raw)
        return httpx.Response(self.status_code, content=json.dumps(self.body).encode("utf-8"))

    @property
    def last_form(self) -> dict[str, str]:
        return form_of(self.requests[-1])


@pytest.fixture
def clock() -> Callable[[tzinfo], datetime]:
    """Deterministic clock."""
    return fixed_clock


@pytest.fixture
def reporter() -> MagicMock:
    """Mock logger standing in for the system logger."""
    return MagicMock(spec=logging.Logger)


@pytest.fixture
def responder() -> RecordingResponder:
    """Responder acknowledging every request with ok=true."""
    return RecordingResponder()


@pytest.fixture
def make_http_client() -> Iterator[Callable[[RecordingResponder], httpx.Client]]:
    """Factory for httpx clients backed by a RecordingResponder."""
    clients: list[httpx.Client] = []

    def _make(handler: RecordingResponder) -> httpx.Client:
        client = httpx.Client(transport=httpx.MockTransport(handler))
        clients.append(client)
        return client

    yield _make

    for client in clients:
        client.close()


@pytest.fixture
def make_responder() -> type[RecordingResponder]:
    """The RecordingResponder class, for tests that need custom responses."""
    return RecordingResponder
