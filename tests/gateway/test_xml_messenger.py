from decimal import Decimal

import pytest
from lxml import etree

from psigate.domain.exceptions import GatewayError, MalformedResponseError
from psigate.domain.tree import Node
from psigate.infrastructure.gateway.xml_messenger import XMLMessengerClient
from psigate.shared.codes import ClientCode

APPROVED = b"""<?xml version="1.0" encoding="UTF-8"?>
<Result>
  <TransTime>Tue Nov 26 10:58:29 EST 2013</TransTime>
  <OrderID>order-1</OrderID>
  <TransactionType>SALE</TransactionType>
  <Approved>APPROVED</Approved>
  <ReturnCode>Y:123456:0abcdef:M:X:YYY</ReturnCode>
  <ErrMsg>FRAUD:Fraud screening flagged this order</ErrMsg>
  <TaxTotal>0.00</TaxTotal>
  <SubTotal>10.00</SubTotal>
  <FullTotal>10.00</FullTotal>
  <CardRefNumber>1000001</CardRefNumber>
</Result>
"""

DECLINED = b"""<Result>
  <Approved>DECLINED</Approved>
  <ReturnCode>N:DECLINED</ReturnCode>
  <ErrMsg>RC05:Insufficient funds</ErrMsg>
</Result>
"""


def _client(transport):
    return XMLMessengerClient("dev.psigate.com:7989", "teststore", "psigate1234", transport=transport)


def _order():
    return {
        "Subtotal": Decimal("10.00"),
        "PaymentType": "CC",
        "CardAction": 0,
        "CardNumber": "4111111111111111",
        "Item": [
            {"ItemID": "A", "ItemQty": 1},
            {"ItemID": "B", "ItemQty": 2},
        ],
    }


def test_submit_builds_order_document(fake_transport):
    transport = fake_transport(APPROVED)
    _client(transport).submit(_order())

    url, body, _ = transport.requests[0]
    assert url == "https://dev.psigate.com:7989/Messenger/XMLMessenger"
    root = etree.fromstring(body)
    assert root.tag == "Order"
    assert [child.tag for child in root][:4] == ["StoreID", "Passphrase", "Subtotal", "PaymentType"]
    assert root.findtext("Subtotal") == "10.00"
    assert root.findtext("CardAction") == "0"
    assert [item.findtext("ItemID") for item in root.findall("Item")] == ["A", "B"]


def test_submit_approved_with_error_message(fake_transport):
    result = _client(fake_transport(APPROVED)).submit(_order())
    assert isinstance(result, Node)
    assert result["Approved"] == "APPROVED"
    assert result["ErrMsg"].startswith("FRAUD")


def test_submit_projects_result_field(fake_transport):
    assert _client(fake_transport(APPROVED)).submit(_order(), "CardRefNumber") == "1000001"


def test_submit_absent_result_field(fake_transport):
    assert _client(fake_transport(APPROVED)).submit(_order(), "IPResult") is None


def test_submit_declined(fake_transport):
    with pytest.raises(GatewayError) as exc_info:
        _client(fake_transport(DECLINED)).submit(_order())
    assert exc_info.value.code == "RC05"
    assert exc_info.value.message == "Insufficient funds"


def test_submit_declined_without_err_msg_uses_fallback(fake_transport):
    body = b"<Result><Approved>ERROR</Approved><ReturnCode>N:Invalid card</ReturnCode></Result>"
    with pytest.raises(GatewayError) as exc_info:
        _client(fake_transport(body)).submit(_order())
    assert exc_info.value.code == ClientCode.TRANSACTION_DECLINED.value
    assert exc_info.value.message == "Invalid card"


def test_submit_missing_approved_is_malformed(fake_transport):
    body = b"<Result><ReturnCode>Y:OK</ReturnCode></Result>"
    with pytest.raises(MalformedResponseError) as exc_info:
        _client(fake_transport(body)).submit(_order())
    assert exc_info.value.code == ClientCode.ORDER_MALFORMED.value


def test_submit_response_root_is_not_result(fake_transport):
    body = b"<Response><ReturnCode>Y</ReturnCode><Approved>APPROVED</Approved></Response>"
    with pytest.raises(MalformedResponseError):
        _client(fake_transport(body)).submit(_order())


def test_submit_unparsable_body_uses_order_code(fake_transport):
    with pytest.raises(MalformedResponseError) as exc_info:
        _client(fake_transport(b"")).submit(_order())
    assert exc_info.value.code == ClientCode.ORDER_MALFORMED.value


def test_check_result_on_decoded_result():
    with pytest.raises(GatewayError) as exc_info:
        XMLMessengerClient.check_result({"ReturnCode": "N:DECLINED"})
    assert exc_info.value.message == "DECLINED"
