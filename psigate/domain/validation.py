"""
Response validation for both gateway dialects.

The action-code protocol whitelists ``ReturnCode`` values; the order protocol
only looks at the first character of ``ReturnCode``. The two checks stay
separate: an approved order may still carry an error-like ``ErrMsg``.
"""
from __future__ import annotations

from typing import Iterable, Optional, Union

from psigate.domain.exceptions import ErrorRecord, GatewayError, MalformedResponseError
from psigate.domain.tree import Node, Tree, Value, from_python, text_of
from psigate.shared.codes import PASS_MARKER, ClientCode

AcceptableCodes = Union[str, Iterable[str], None]


def normalize_codes(codes: AcceptableCodes) -> Optional[frozenset]:
    if codes is None:
        return None
    if isinstance(codes, str):
        return frozenset((codes,))
    return frozenset(codes)


def split_error(text: str, *, fallback_code: str = ClientCode.TRANSACTION_DECLINED) -> ErrorRecord:
    """Split ``"CODE:message"`` on the first colon.

    Text without a colon keeps the whole text as message under ``fallback_code``.
    """
    code, sep, message = text.partition(":")
    if not sep:
        return ErrorRecord(str(fallback_code), text)
    return ErrorRecord(code, message)


def project(container: Node, result_field: Optional[str]) -> Value:
    if result_field is None:
        return container
    return container.get(result_field)


def _require(tree: Tree, root: str, keys: tuple, code: ClientCode) -> Node:
    body = tree.get(root) if isinstance(tree, Node) else None
    if not isinstance(body, Node) or any(key not in body for key in keys):
        raise MalformedResponseError(code=code, details={"expected": [root, *keys]})
    if not isinstance(body["ReturnCode"], str):
        raise MalformedResponseError(code=code, details={"invalid": f"{root}.ReturnCode"})
    return body


def validate_action_response(
    tree: Tree,
    acceptable_codes: AcceptableCodes = None,
    result_field: Optional[str] = None,
) -> Value:
    """Validate a decoded ``Response`` and project ``result_field`` from it."""
    response = _require(tree, "Response", ("ReturnCode", "ReturnMessage"), ClientCode.ACTION_MALFORMED)

    codes = normalize_codes(acceptable_codes)
    return_code = response["ReturnCode"]
    if codes is not None and return_code not in codes:
        raise GatewayError(
            return_code,
            text_of(response["ReturnMessage"]),
            details={"expected": sorted(codes)},
        )
    return project(response, result_field)


def is_approved(result: Node) -> bool:
    return_code = result.get("ReturnCode")
    return isinstance(return_code, str) and return_code[:1] == PASS_MARKER


def transaction_error(result: Node) -> ErrorRecord:
    """Error record for a rejected transaction result.

    Uses ``ErrMsg`` when present and non-empty, otherwise the fallback code and
    the part of ``ReturnCode`` after its first colon.
    """
    err_msg = text_of(result.get("ErrMsg"))
    if err_msg:
        return split_error(err_msg)
    return_code = text_of(result.get("ReturnCode"))
    _, sep, message = return_code.partition(":")
    return ErrorRecord(str(ClientCode.TRANSACTION_DECLINED), message if sep else return_code)


def validate_order_response(tree: Tree, result_field: Optional[str] = None) -> Value:
    """Validate a decoded ``Result`` and project ``result_field`` from it."""
    result = _require(tree, "Result", ("ReturnCode", "Approved"), ClientCode.ORDER_MALFORMED)

    if not is_approved(result):
        raise GatewayError.from_record(
            transaction_error(result),
            details={"return_code": result["ReturnCode"]},
        )
    return project(result, result_field)


def check_transaction_result(result: Union[Node, dict]) -> Node:
    """Check an already decoded transaction result, raising on rejection."""
    if not isinstance(result, Node):
        result = from_python(result)
    if not is_approved(result):
        raise GatewayError.from_record(transaction_error(result))
    return result


__all__ = [
    "AcceptableCodes",
    "check_transaction_result",
    "is_approved",
    "normalize_codes",
    "project",
    "split_error",
    "transaction_error",
    "validate_action_response",
    "validate_order_response",
]
