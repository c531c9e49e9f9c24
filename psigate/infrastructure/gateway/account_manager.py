"""
Account Manager API client (action-code protocol).

Requests are ``<Request>`` documents carrying credentials, an ``Action`` code
and the action fields; the answer is a ``<Response>`` whose ``ReturnCode`` is
checked against the codes the action documents as success.
"""
from __future__ import annotations

from typing import Any, Callable, Optional

from psigate.application.dtos.actions import ActionDescriptor
from psigate.application.ports.transport import Transport
from psigate.domain.tree import Value
from psigate.domain.validation import AcceptableCodes, validate_action_response
from psigate.infrastructure.gateway.base import BaseMessenger
from psigate.infrastructure.gateway.catalog import ACTIONS, ActionDefinition
from psigate.shared.codes import ClientCode


class AccountManagerClient(BaseMessenger):
    endpoint = "/Messenger/AMMessenger"
    malformed_code = ClientCode.ACTION_MALFORMED

    def __init__(
        self,
        host: str,
        cid: str,
        user_id: str,
        password: str,
        *,
        transport: Optional[Transport] = None,
        timeout: float = 30.0,
        owns_transport: Optional[bool] = None,
    ) -> None:
        super().__init__(
            host,
            [("CID", cid), ("UserID", user_id), ("Password", password)],
            transport=transport,
            timeout=timeout,
            owns_transport=owns_transport,
        )

    def dispatch(
        self,
        action_code: str,
        fields: Any = None,
        acceptable_codes: AcceptableCodes = None,
        result_field: Optional[str] = None,
        *,
        timeout: Optional[float] = None,
    ) -> Value:
        """
        Send one action and validate the response.

        Args:
            action_code: gateway action code, e.g. ``"AMA05"``
            fields: request fields (``Node`` or plain dict) after ``Action``
            acceptable_codes: success code(s); ``None`` accepts any code
            result_field: ``Response`` child to return; ``None`` returns ``Response``
            timeout: per-call override of the transport timeout

        Raises:
            TransportError, MalformedResponseError, GatewayError
        """
        request = self._build_request({"Action": action_code}, fields)
        response = self._exchange("Request", request, timeout)
        return validate_action_response(response, acceptable_codes, result_field)

    def execute(self, descriptor: ActionDescriptor, *, timeout: Optional[float] = None) -> Value:
        return self.dispatch(
            descriptor.action_code,
            descriptor.payload,
            descriptor.success_codes,
            descriptor.result_field,
            timeout=timeout,
        )


def _make_action(definition: ActionDefinition) -> Callable[..., Value]:
    def action(self: AccountManagerClient, *args: Any, timeout: Optional[float] = None, **kwargs: Any) -> Value:
        return self.execute(definition.describe(*args, **kwargs), timeout=timeout)

    params = ", ".join(p.name if p.required else f"{p.name}={p.default!r}" for p in definition.params)
    action.__name__ = definition.name
    action.__qualname__ = f"AccountManagerClient.{definition.name}"
    action.__doc__ = f"{definition.doc}\n\n{definition.code}({params}) -> {definition.result_field or 'Response'}"
    return action


for _definition in ACTIONS.values():
    setattr(AccountManagerClient, _definition.name, _make_action(_definition))
del _definition
