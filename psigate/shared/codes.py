"""
Client-side codes used across layers (Domain/Infrastructure).

Gateway codes (``RPA-0000``, ``RRC-0060`` ...) are passed through verbatim and
never listed here; this module only holds the codes the client itself assigns.
"""
from enum import Enum


class ClientCode(str, Enum):
    """Codes raised by the client, never by the gateway."""

    # Response shape errors
    ACTION_MALFORMED = "AMME-0001"
    ORDER_MALFORMED = "XMLM-0001"

    # Transaction rejected without a parsable ErrMsg
    TRANSACTION_DECLINED = "XMLM-0002"

    # Transport errors
    TRANSPORT_TIMEOUT = "HTTP-0001"
    TRANSPORT_NETWORK = "HTTP-0002"
    TRANSPORT_STATUS = "HTTP-0003"

    # Configuration errors
    CONFIGURATION = "CONF-0001"
    TLS_UNAVAILABLE = "CONF-0002"

    def __str__(self) -> str:
        return self.value


# First character of an approved order ReturnCode
PASS_MARKER = "Y"


__all__ = ["ClientCode", "PASS_MARKER"]
