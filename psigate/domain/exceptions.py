"""Gateway exception taxonomy shared by the domain and infrastructure layers.

Every failed call surfaces exactly one of ``TransportError``,
``MalformedResponseError``, ``GatewayError`` or ``ConfigurationError``.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from psigate.shared.codes import ClientCode


@dataclass(frozen=True)
class ErrorRecord:
    """A (code, message) pair taken from gateway text."""

    code: str
    message: str

    def __str__(self) -> str:
        return f"{self.code}: {self.message}" if self.message else self.code


class GatewayException(Exception):
    """Base class for everything the client raises."""

    def __init__(
        self,
        code: str,
        message: str,
        error_type: str = "GatewayException",
        details: Optional[dict] = None,
    ) -> None:
        self.code = str(code)
        self.message = message
        self.error_type = error_type
        self.details = details
        super().__init__(self.message)

    def __str__(self) -> str:
        parts = [self.message]
        if self.code:
            parts.append(f"Code: {self.code}")
        return " | ".join(parts)


class TransportError(GatewayException):
    def __init__(
        self,
        message: str,
        *,
        code: str = ClientCode.TRANSPORT_NETWORK,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        details = {"url": url}
        if status_code is not None:
            details["status_code"] = status_code
        super().__init__(
            code=code,
            message=message,
            error_type="TransportError",
            details=details,
        )
        self.status_code = status_code


class MalformedResponseError(GatewayException):
    def __init__(self, message: str = "Unexpected response from gateway", *, code: str, details: Optional[dict] = None):
        super().__init__(
            code=code,
            message=message,
            error_type="MalformedResponseError",
            details=details,
        )


class GatewayError(GatewayException):
    """The gateway answered and rejected the request."""

    def __init__(self, code: str, message: str, *, details: Optional[dict] = None):
        super().__init__(
            code=code,
            message=message,
            error_type="GatewayError",
            details=details,
        )

    @classmethod
    def from_record(cls, record: ErrorRecord, *, details: Optional[dict] = None) -> "GatewayError":
        return cls(record.code, record.message, details=details)

    @property
    def record(self) -> ErrorRecord:
        return ErrorRecord(self.code, self.message)


class ConfigurationError(GatewayException):
    def __init__(self, message: str, *, code: str = ClientCode.CONFIGURATION, details: Optional[dict] = None):
        super().__init__(
            code=code,
            message=message,
            error_type="ConfigurationError",
            details=details,
        )
