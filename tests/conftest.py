"""Pytest bootstrap configuration.

Provides a recording transport so gateway clients never touch the network.
"""
from typing import Optional

import pytest

from psigate.domain.exceptions import TransportError


class FakeTransport:
    """Returns canned bodies in order and records every request."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.requests: list[tuple[str, bytes, Optional[float]]] = []
        self.closed = False

    def send(self, url: str, body: bytes, *, timeout: Optional[float] = None) -> bytes:
        self.requests.append((url, body, timeout))
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        if isinstance(response, str):
            response = response.encode("utf-8")
        return response

    def close(self) -> None:
        self.closed = True

    @property
    def last_body(self) -> bytes:
        return self.requests[-1][1]


@pytest.fixture
def fake_transport():
    def _make(*responses):
        return FakeTransport(*responses)

    return _make


@pytest.fixture
def transport_failure():
    return TransportError("Network error: connection refused", url="https://gw.test/Messenger/AMMessenger")
