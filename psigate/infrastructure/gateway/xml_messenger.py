"""
XML Messenger API client (order protocol).

An ``<Order>`` carries credentials and transaction fields; the ``<Result>`` is
approved when its ``ReturnCode`` starts with ``Y``. Fraud-screened orders come
back approved with ``ErrMsg`` filled in and are processed by the gateway, so
``ErrMsg`` alone never fails a call.
"""
from __future__ import annotations

from typing import Any, Optional

from psigate.application.ports.transport import Transport
from psigate.domain.tree import Node, Value
from psigate.domain.validation import check_transaction_result, validate_order_response
from psigate.infrastructure.gateway.base import BaseMessenger
from psigate.shared.codes import ClientCode


class XMLMessengerClient(BaseMessenger):
    endpoint = "/Messenger/XMLMessenger"
    malformed_code = ClientCode.ORDER_MALFORMED

    def __init__(
        self,
        host: str,
        store_id: str,
        passphrase: str,
        *,
        transport: Optional[Transport] = None,
        timeout: float = 30.0,
        owns_transport: Optional[bool] = None,
    ) -> None:
        super().__init__(
            host,
            [("StoreID", store_id), ("Passphrase", passphrase)],
            transport=transport,
            timeout=timeout,
            owns_transport=owns_transport,
        )

    def submit(
        self,
        fields: Any,
        result_field: Optional[str] = None,
        *,
        timeout: Optional[float] = None,
    ) -> Value:
        """Submit an order and return ``Result`` or its ``result_field`` child."""
        request = self._build_request(fields)
        response = self._exchange("Order", request, timeout)
        return validate_order_response(response, result_field)

    @staticmethod
    def check_result(result: Any) -> Node:
        return check_transaction_result(result)
