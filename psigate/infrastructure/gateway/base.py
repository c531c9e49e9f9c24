"""
Base messenger implementing the shared request skeleton: merge credentials,
encode, send, decode.

Concrete messengers subclass it and apply their own response validation.
"""
from __future__ import annotations

from typing import Any, Optional

import httpx

from psigate.application.ports.transport import Transport
from psigate.domain.exceptions import ConfigurationError, MalformedResponseError
from psigate.domain.tree import Node, Tree, from_python
from psigate.infrastructure.transport.http import HttpxTransport
from psigate.infrastructure.xml.codec import TreeDecodeError, decode, serialize
from psigate.shared.codes import ClientCode


class BaseMessenger:
    endpoint: str = ""
    malformed_code: ClientCode = ClientCode.ACTION_MALFORMED

    def __init__(
        self,
        host: str,
        credentials: list[tuple[str, str]],
        *,
        transport: Optional[Transport] = None,
        timeout: float = 30.0,
        owns_transport: Optional[bool] = None,
    ) -> None:
        self._url = f"https://{host}{self.endpoint}"
        try:
            httpx.URL(self._url)
        except httpx.InvalidURL as exc:
            raise ConfigurationError(
                f"Invalid gateway host {host!r}: {exc}",
                details={"host": host},
            ) from exc
        self._credentials = tuple(credentials)
        self._owns_transport = transport is None if owns_transport is None else owns_transport
        self._transport = transport if transport is not None else HttpxTransport(timeout=timeout)

    @property
    def url(self) -> str:
        return self._url

    def close(self) -> None:
        if self._owns_transport:
            self._transport.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def _build_request(self, *parts: Any) -> Node:
        """Merge credentials with the given field sets, later keys win in place.

        Only element fields are merged. The request root carries no attributes
        or text, so a part that has either is rejected with ``TypeError``.
        """
        request = Node(self._credentials)
        for part in parts:
            if part is None:
                continue
            node = from_python(part)
            if not isinstance(node, Node):
                raise TypeError("request fields must be a mapping")
            if node.attributes or node.text is not None:
                raise TypeError("request fields cannot carry root attributes or text")
            request = request.replace(**dict(node.fields))
        return request

    def _exchange(self, root_tag: str, request: Node, timeout: Optional[float] = None) -> Tree:
        raw = self._transport.send(self._url, serialize(request, root_tag), timeout=timeout)
        try:
            return decode(raw)
        except TreeDecodeError as exc:
            raise MalformedResponseError(
                f"Unparsable response from gateway: {exc}",
                code=self.malformed_code,
            ) from exc

    def __repr__(self) -> str:
        return f"{type(self).__name__}(url={self._url!r})"
