"""
Action DTOs (Pydantic v2) used at the client boundary.
"""
from __future__ import annotations

from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from psigate.domain.tree import Node, from_python


class ActionDescriptor(BaseModel):
    """One Account Manager call: code, payload, success codes, result field."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    action_code: str = Field(min_length=1)
    payload: Node = Field(default_factory=Node)
    success_codes: Optional[frozenset[str]] = None
    result_field: Optional[str] = None

    @field_validator("payload", mode="before")
    @classmethod
    def _to_node(cls, v: Any) -> Node:
        if v is None:
            return Node()
        node = from_python(v)
        if not isinstance(node, Node):
            raise ValueError("payload must be a mapping of fields")
        return node

    @field_validator("success_codes", mode="before")
    @classmethod
    def _to_codes(cls, v: Union[str, list, tuple, set, frozenset, None]):
        if v is None:
            return None
        if isinstance(v, str):
            return frozenset((v,))
        return frozenset(v)
