"""
Bidirectional conversion between trees and XML (lxml).

Decoding is deliberately lossy: a tag that occurs once is stored as a bare
value, never as a one-item ``Group``, because the wire schema does not say
which fields repeat. ``encode`` accepts either form.
"""
from __future__ import annotations

from typing import Union

from lxml import etree

from psigate.domain.tree import Group, Node, Tree, Value

XMLSource = Union[bytes, str, "etree._Element", "etree._ElementTree"]

_PARSER = etree.XMLParser(
    resolve_entities=False,
    no_network=True,
    huge_tree=False,
)


class TreeDecodeError(ValueError):
    """Input is not a well-formed XML document."""


def parse(source: Union[bytes, str]) -> "etree._ElementTree":
    if isinstance(source, str):
        source = source.encode("utf-8")
    if not source.strip():
        raise TreeDecodeError("Error parsing XML: empty document")
    try:
        root = etree.fromstring(source, _PARSER)
    except etree.XMLSyntaxError as exc:
        raise TreeDecodeError(f"Error parsing XML: {exc}") from exc
    return root.getroottree()


def decode(source: XMLSource) -> Tree:
    """Decode a document or an element.

    A document (bytes, str or ``_ElementTree``) decodes to a ``Node`` holding its
    root element under the root tag; an element decodes to its own value.
    """
    if isinstance(source, (bytes, str)):
        source = parse(source)
    if isinstance(source, etree._ElementTree):
        root = source.getroot()
        return Node([(root.tag, _decode_element(root))])
    if isinstance(source, etree._Element):
        return _decode_element(source)
    raise TypeError(f"cannot decode {type(source).__name__}")


def _collect_text(text, chunks: list) -> None:
    if text is None:
        return
    text = text.strip()
    if text:
        chunks.append(text)


def _decode_element(element) -> Tree:
    groups: dict[str, list] = {}
    chunks: list[str] = []

    _collect_text(element.text, chunks)
    for child in element:
        # comments and processing instructions have a non-string tag
        if isinstance(child.tag, str):
            groups.setdefault(child.tag, []).append(_decode_element(child))
        _collect_text(child.tail, chunks)

    fields = [(tag, values[0] if len(values) == 1 else Group(values)) for tag, values in groups.items()]
    text = "\n".join(chunks) if chunks else None
    attributes = list(element.attrib.items())

    if not fields and not attributes and text is not None:
        return text
    return Node(fields, attributes=attributes, text=text)


def encode(tree: Value, root_tag: str = "root") -> "etree._ElementTree":
    """Build a new document whose root element is ``root_tag``."""
    root = etree.Element(root_tag)
    encode_into(tree, root)
    return root.getroottree()


def encode_into(tree: Value, element) -> "etree._Element":
    """Append the tree's structure into an existing element."""
    if isinstance(tree, Group):
        raise TypeError("a Group has no tag of its own; wrap it in a Node field")
    if isinstance(tree, Node):
        for name, value in tree.attributes.items():
            element.set(name, value)
        if tree.text is not None:
            _append_text(element, tree.text)
        for tag, value in tree.fields:
            if isinstance(value, Group):
                for item in value:
                    encode_into(item, etree.SubElement(element, tag))
            else:
                encode_into(value, etree.SubElement(element, tag))
    elif tree is not None:
        _append_text(element, str(tree))
    return element


def _append_text(element, text: str) -> None:
    if len(element):
        last = element[-1]
        last.tail = (last.tail or "") + text
    else:
        element.text = (element.text or "") + text


def serialize(tree: Value, root_tag: str = "root", *, pretty_print: bool = True) -> bytes:
    """Encode and serialize to UTF-8 bytes with an XML declaration."""
    return etree.tostring(
        encode(tree, root_tag),
        xml_declaration=True,
        encoding="UTF-8",
        pretty_print=pretty_print,
    )
