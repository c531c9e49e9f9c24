import pytest
from lxml import etree

from psigate.domain.tree import Group, Node, from_python
from psigate.infrastructure.xml.codec import TreeDecodeError, decode, encode, encode_into, serialize


def test_leaf_element_decodes_to_scalar():
    assert decode(b"<Response><Code>42</Code></Response>") == Node(
        {"Response": Node({"Code": "42"})}
    )


def test_repeated_tags_form_group_in_document_order():
    tree = decode(
        b"<Response><Item>a</Item><Other>x</Other><Item>b</Item><Item>c</Item></Response>"
    )
    response = tree["Response"]
    assert list(response) == ["Item", "Other"]
    assert response["Item"] == Group(["a", "b", "c"])
    assert response["Other"] == "x"


def test_single_occurrence_collapses():
    response = decode(b"<R><Item><ID>1</ID></Item></R>")["R"]
    assert response["Item"] == Node({"ID": "1"})
    assert not isinstance(response["Item"], Group)


def test_text_is_trimmed_and_joined_with_newlines():
    element = etree.fromstring(b"<A>  first <B>1</B>\n second  <!-- note --> third </A>")
    value = decode(element)
    assert value.text == "first\nsecond\nthird"
    assert value["B"] == "1"


def test_cdata_decodes_like_text():
    assert decode(etree.fromstring(b"<A><![CDATA[ <raw> ]]></A>")) == "<raw>"


def test_attributes_keep_document_order():
    value = decode(etree.fromstring(b'<A z="1" a="2" m="3">text</A>'))
    assert isinstance(value, Node)
    assert list(value.attributes) == ["z", "a", "m"]
    assert value.attributes == {"z": "1", "a": "2", "m": "3"}
    assert value.text == "text"


def test_empty_element_decodes_to_empty_node():
    value = decode(b"<R><AccountID/></R>")["R"]["AccountID"]
    assert value == Node()
    assert value.is_empty()


def test_whitespace_only_text_is_dropped():
    value = decode(etree.fromstring(b"<A>\n   <B>x</B>\n</A>"))
    assert value.text is None
    assert value == Node({"B": "x"})


def test_invalid_xml_raises_decode_error():
    with pytest.raises(TreeDecodeError):
        decode(b"<Response><ReturnCode>")
    with pytest.raises(ValueError):
        decode(b"not xml at all")


def test_entities_are_not_expanded():
    doc = b'<!DOCTYPE r [<!ENTITY e "expanded">]><r><v>&e;</v></r>'
    value = decode(doc)
    assert value["r"] != Node({"v": "expanded"})


def test_encode_mapping_fields_in_order():
    tree = from_python({"CID": "1000001", "UserID": "teststore", "Action": "AMA05"})
    root = encode(tree, "Request").getroot()
    assert root.tag == "Request"
    assert [child.tag for child in root] == ["CID", "UserID", "Action"]
    assert root.findtext("Action") == "AMA05"


def test_encode_group_emits_sibling_elements():
    tree = from_python({"Account": [{"Name": "a"}, {"Name": "b"}]})
    root = encode(tree, "Request").getroot()
    assert [el.findtext("Name") for el in root.findall("Account")] == ["a", "b"]


def test_encode_attributes_text_then_children():
    tree = Node({"Child": "c"}, attributes={"b": "2", "a": "1"}, text=["line1", "line2"])
    root = encode(tree, "A").getroot()
    assert list(root.attrib.items()) == [("b", "2"), ("a", "1")]
    assert root.text == "line1\nline2"
    assert root[0].tag == "Child"


def test_encode_none_field_emits_empty_element():
    root = encode(from_python({"Condition": {"AccountID": None, "OrderID": "9"}}), "Request").getroot()
    account = root.find("Condition/AccountID")
    assert account is not None
    assert account.text is None and len(account) == 0


def test_encode_scalar_root():
    assert encode("hello", "Greeting").getroot().text == "hello"


def test_encode_into_existing_element():
    parent = etree.Element("Envelope")
    body = etree.SubElement(parent, "Body")
    encode_into(from_python({"X": "1"}), body)
    assert parent.findtext("Body/X") == "1"


def test_group_cannot_be_root():
    with pytest.raises(TypeError):
        encode(Group(["a", "b"]), "Root")


def test_serialize_declares_utf8():
    body = serialize(from_python({"Name": "Müller"}), "Order")
    assert body.startswith(b"<?xml version='1.0' encoding='UTF-8'?>")
    assert "Müller".encode("utf-8") in body


def test_round_trip_without_singular_groups():
    tree = Node(
        {
            "Request": Node(
                {
                    "CID": "1000001",
                    "Item": Group(
                        [
                            Node({"ID": "1", "Qty": "2"}),
                            Node({"ID": "2", "Qty": "5"}),
                        ]
                    ),
                    "Tag": Group(["x", "y", "z"]),
                    "Note": Node({"Line": "hi"}, attributes={"lang": "en"}, text="body"),
                    "Empty": Group([]),
                }
            )
        }
    )
    request = tree["Request"]
    assert decode(serialize(request, "Request")) == Node({"Request": request})


def test_round_trip_collapses_singular_group():
    request = Node({"Item": Group([Node({"ID": "1"})]), "Code": "7"})
    decoded = decode(serialize(request, "Request"))["Request"]
    assert decoded != request
    assert decoded["Item"] == Node({"ID": "1"})
    assert decoded == Node({"Item": Node({"ID": "1"}), "Code": "7"})


def test_order_preserved_end_to_end_with_mixed_content():
    request = Node(
        {
            "Zeta": "1",
            "Item": Group(["a", "b"]),
            "Alpha": Node({"Inner": "v"}, attributes={"y": "1", "x": "2"}, text="t"),
        },
        attributes={"version": "2", "id": "9"},
        text="intro",
    )
    decoded = decode(serialize(request, "Doc"))["Doc"]
    assert decoded == request
    assert list(decoded) == ["Zeta", "Item", "Alpha"]
    assert list(decoded.attributes) == ["version", "id"]
    assert list(decoded["Alpha"].attributes) == ["y", "x"]
    assert list(decoded["Item"]) == ["a", "b"]
