"""
PSiGate gateway client.

Account Manager (action-code) and XML Messenger (order) APIs over XML/HTTPS.
"""
from psigate.application.dtos.actions import ActionDescriptor
from psigate.domain.exceptions import (
    ConfigurationError,
    ErrorRecord,
    GatewayError,
    GatewayException,
    MalformedResponseError,
    TransportError,
)
from psigate.domain.tree import Group, Node, as_list, from_python, to_python
from psigate.domain.validation import check_transaction_result
from psigate.infrastructure.gateway import (
    AccountManagerClient,
    XMLMessengerClient,
    get_account_manager,
    get_xml_messenger,
)
from psigate.infrastructure.transport import HttpxTransport
from psigate.infrastructure.xml import decode, encode, serialize

__all__ = [
    "AccountManagerClient",
    "ActionDescriptor",
    "ConfigurationError",
    "ErrorRecord",
    "GatewayError",
    "GatewayException",
    "Group",
    "HttpxTransport",
    "MalformedResponseError",
    "Node",
    "TransportError",
    "XMLMessengerClient",
    "as_list",
    "check_transaction_result",
    "decode",
    "encode",
    "from_python",
    "get_account_manager",
    "get_xml_messenger",
    "serialize",
    "to_python",
]
