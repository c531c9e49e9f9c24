from decimal import Decimal

import pytest

from psigate.domain.tree import Group, Node, as_list, from_python, text_of, to_python


def test_node_keeps_insertion_order_and_rejects_duplicates():
    node = Node([("b", "1"), ("a", "2")])
    assert list(node) == ["b", "a"]
    with pytest.raises(ValueError):
        Node([("a", "1"), ("a", "2")])


def test_reserved_keys_are_not_fields():
    with pytest.raises(ValueError):
        Node({"@text": "x"})


def test_empty_group_is_absent():
    assert Node({"a": Group([]), "b": "1"}) == Node({"b": "1"})


def test_node_equality_is_order_sensitive():
    assert Node([("a", "1"), ("b", "2")]) != Node([("b", "2"), ("a", "1")])
    assert hash(Node({"a": Group(["1", "2"])})) == hash(Node({"a": Group(["1", "2"])}))


def test_group_rejects_nested_groups():
    with pytest.raises(TypeError):
        Group([Group(["a"])])


def test_from_python_builds_side_channels_and_stringifies():
    node = from_python(
        {
            "@attributes": {"currency": "CAD"},
            "@text": ["a", "b"],
            "Amount": Decimal("10.50"),
            "Qty": 3,
            "Taxable": True,
            "Items": [{"ID": 1}, {"ID": 2}],
            "Missing": None,
        }
    )
    assert node.attributes == {"currency": "CAD"}
    assert node.text == "a\nb"
    assert node["Amount"] == "10.50"
    assert node["Qty"] == "3"
    assert node["Taxable"] == "1"
    assert node["Items"] == Group([Node({"ID": "1"}), Node({"ID": "2"})])
    assert node["Missing"] is None


def test_to_python_round_trips_plain_data():
    data = {"@attributes": {"id": "1"}, "@text": "t", "A": ["x", "y"], "B": {"C": "z"}}
    assert to_python(from_python(data)) == data


def test_as_list_undoes_collapse():
    assert as_list(None) == []
    assert as_list("x") == ["x"]
    assert as_list(Group(["x", "y"])) == ["x", "y"]


def test_text_of():
    assert text_of(None) == ""
    assert text_of(Node()) == ""
    assert text_of(Node({"a": "b"}, text="msg")) == "msg"
    assert text_of("plain") == "plain"


def test_replace_overrides_in_place():
    node = Node([("CID", "1"), ("UserID", "u")]).replace(CID="2", Extra="e")
    assert list(node.fields) == [("CID", "2"), ("UserID", "u"), ("Extra", "e")]
