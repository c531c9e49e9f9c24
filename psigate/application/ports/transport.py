"""
Transport port (application/ports) exposing a replaceable protocol.

Gateway clients depend on this Protocol; infrastructure implements adapters.
"""
from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class Transport(Protocol):
    """One HTTPS POST per call.

    Implementations return the raw response body or raise ``TransportError``.
    They must not retry.
    """

    def send(self, url: str, body: bytes, *, timeout: Optional[float] = None) -> bytes: ...

    def close(self) -> None: ...
