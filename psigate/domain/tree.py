"""
Generic ordered tree exchanged with the gateway XML.

A tree value is one of:

- ``str``: a scalar leaf
- ``Node``: ordered tag → value pairs plus the attribute and text side channels
- ``Group``: several values sharing one tag name, only valid as a ``Node`` field

Consumers should branch on the variant (``isinstance``) instead of probing
shape. Decoding collapses single-item groups, so callers that need list
semantics wrap with ``as_list``.
"""
from __future__ import annotations

from collections.abc import Mapping as AbcMapping
from decimal import Decimal
from typing import Any, Iterable, Iterator, Optional, Union

# Reserved keys of the plain-Python form; not valid XML names, so they never
# collide with element tags.
ATTRIBUTES_KEY = "@attributes"
TEXT_KEY = "@text"


class Group:
    """Ordered sibling values sharing one tag name."""

    __slots__ = ("_items",)

    def __init__(self, items: Iterable["Tree"] = ()) -> None:
        items = tuple(items)
        for item in items:
            if isinstance(item, Group):
                raise TypeError("a Group cannot directly contain another Group")
            if item is not None and not isinstance(item, (str, Node)):
                raise TypeError(f"unsupported group item: {type(item).__name__}")
        self._items = items

    @property
    def items(self) -> tuple:
        return self._items

    def __iter__(self) -> Iterator["Tree"]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, index: int) -> "Tree":
        return self._items[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Group):
            return NotImplemented
        return self._items == other._items

    def __hash__(self) -> int:
        return hash((Group, self._items))

    def __repr__(self) -> str:
        return f"Group({list(self._items)!r})"


class Node(AbcMapping):
    """Ordered element fields with attribute and text side channels.

    Field order, attribute order and tag uniqueness are fixed at construction.
    An empty ``Group`` is the same as an absent field and is dropped.
    """

    __slots__ = ("_fields", "_index", "_attributes", "_text")

    def __init__(
        self,
        fields: Union[AbcMapping, Iterable[tuple[str, Any]], None] = None,
        *,
        attributes: Union[AbcMapping, Iterable[tuple[str, str]], None] = None,
        text: Union[str, Iterable[str], None] = None,
    ) -> None:
        if fields is None:
            pairs: Iterable = ()
        elif isinstance(fields, AbcMapping):
            pairs = fields.items()
        else:
            pairs = fields

        stored = []
        index: dict[str, int] = {}
        for tag, value in pairs:
            if tag in (ATTRIBUTES_KEY, TEXT_KEY):
                raise ValueError(f"{tag!r} is reserved, use the attributes/text arguments")
            if tag in index:
                raise ValueError(f"duplicate tag {tag!r}")
            if isinstance(value, Group) and len(value) == 0:
                continue
            if value is not None and not isinstance(value, (str, Node, Group)):
                raise TypeError(f"unsupported value for {tag!r}: {type(value).__name__}")
            index[tag] = len(stored)
            stored.append((tag, value))
        self._fields = tuple(stored)
        self._index = index

        if attributes is None:
            attrs: tuple = ()
        elif isinstance(attributes, AbcMapping):
            attrs = tuple((str(k), str(v)) for k, v in attributes.items())
        else:
            attrs = tuple((str(k), str(v)) for k, v in attributes)
        self._attributes = attrs

        if text is not None and not isinstance(text, str):
            text = "\n".join(text)
        self._text = text

    # Mapping protocol over element fields only
    def __getitem__(self, tag: str) -> Union["Tree", Group]:
        return self._fields[self._index[tag]][1]

    def __iter__(self) -> Iterator[str]:
        return (tag for tag, _ in self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __contains__(self, tag: object) -> bool:
        return tag in self._index

    @property
    def fields(self) -> tuple:
        return self._fields

    @property
    def attributes(self) -> dict[str, str]:
        return dict(self._attributes)

    @property
    def text(self) -> Optional[str]:
        return self._text

    def is_empty(self) -> bool:
        return not self._fields and not self._attributes and self._text is None

    def replace(self, **updates: Any) -> "Node":
        """Return a copy with fields overridden in place or appended."""
        merged = dict(self._fields)
        merged.update(updates)
        return Node(merged, attributes=self._attributes, text=self._text)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Node):
            return NotImplemented
        return (
            self._fields == other._fields
            and self._attributes == other._attributes
            and self._text == other._text
        )

    def __hash__(self) -> int:
        return hash((Node, self._fields, self._attributes, self._text))

    def __repr__(self) -> str:
        parts = [repr(dict(self._fields))]
        if self._attributes:
            parts.append(f"attributes={dict(self._attributes)!r}")
        if self._text is not None:
            parts.append(f"text={self._text!r}")
        return f"Node({', '.join(parts)})"


Tree = Union[str, Node]
Value = Union[str, Node, Group, None]


def _scalar(value: Any) -> str:
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, Decimal):
        return format(value, "f")
    return str(value)


def from_python(value: Any) -> Value:
    """Build a tree from dicts, lists and scalars.

    ``"@attributes"`` and ``"@text"`` dict keys feed the side channels, lists and
    tuples become groups and ``None`` stays ``None``.
    """
    if value is None or isinstance(value, (Node, Group)):
        return value
    if isinstance(value, AbcMapping):
        fields = []
        attributes = None
        text = None
        for key, item in value.items():
            if key == ATTRIBUTES_KEY:
                attributes = {k: _scalar(v) for k, v in item.items()}
            elif key == TEXT_KEY:
                text = [_scalar(t) for t in item] if isinstance(item, (list, tuple)) else _scalar(item)
            else:
                fields.append((key, from_python(item)))
        return Node(fields, attributes=attributes, text=text)
    if isinstance(value, (list, tuple)):
        return Group(from_python(item) for item in value)
    return _scalar(value)


def to_python(value: Value) -> Any:
    """Inverse of ``from_python`` producing dicts, lists and strings."""
    if isinstance(value, Group):
        return [to_python(item) for item in value]
    if isinstance(value, Node):
        out: dict[str, Any] = {}
        if value.attributes:
            out[ATTRIBUTES_KEY] = value.attributes
        if value.text is not None:
            out[TEXT_KEY] = value.text
        for tag, item in value.fields:
            out[tag] = to_python(item)
        return out
    return value


def as_list(value: Value) -> list:
    """Undo the single-item collapse: absent → [], bare value → [value]."""
    if value is None:
        return []
    if isinstance(value, Group):
        return list(value)
    return [value]


def text_of(value: Value) -> str:
    """Best-effort text of a decoded value; an empty element reads as ``""``."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, Node):
        return value.text or ""
    return "\n".join(text_of(item) for item in value)


__all__ = [
    "ATTRIBUTES_KEY",
    "TEXT_KEY",
    "Group",
    "Node",
    "Tree",
    "Value",
    "as_list",
    "from_python",
    "text_of",
    "to_python",
]
