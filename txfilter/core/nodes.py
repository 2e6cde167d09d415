"""
Wire-format models for transaction filters

The filtering API expects PascalCase JSON with byte values as standard
base64 strings:

    {"Root": {"Operand": null, "Operator": 1, "Nodes": [
        {"Operand": {"Key": "to", "Value": "eiUNVjC0..."}, "Operator": null, "Nodes": null}
    ]}}
"""

import base64
from enum import Enum, IntEnum
from typing import List, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_pascal


class Operator(IntEnum):
    """Logical operator codes understood by the filtering API"""

    AND = 1
    OR = 2

    @classmethod
    def parse(cls, kind: Union["Operator", int, str]) -> "Operator":
        """
        Resolve an operator from its enum member, wire code or name

        Raises:
            ValueError: Unknown operator
        """
        if isinstance(kind, str):
            try:
                return cls[kind.upper()]
            except KeyError:
                raise ValueError(f"Unknown operator: {kind!r}") from None
        return cls(kind)


class ConditionKey(str, Enum):
    """Transaction attributes a condition can test"""

    TO = "to"
    FROM = "from"
    METHOD = "method"
    VALUE = "value"


class WireModel(BaseModel):
    """Base for models serialized with PascalCase field names"""

    model_config = ConfigDict(alias_generator=to_pascal, populate_by_name=True)


class FilterKV(WireModel):
    """A single key/value condition"""

    key: ConditionKey
    value: bytes

    @field_validator("value", mode="before")
    @classmethod
    def decode_base64(cls, value):
        # JSON input carries base64 text, Python callers pass raw bytes
        if isinstance(value, str):
            return base64.b64decode(value, validate=True)
        return value

    @field_serializer("value", when_used="json")
    def encode_base64(self, value: bytes) -> str:
        return base64.b64encode(value).decode("ascii")


class Node(WireModel):
    """
    Filter tree node

    Exactly one of `operand` (a leaf condition) or `operator` (an AND/OR
    group) is set. `nodes` holds a group's children in attachment order and
    stays None until the first child is attached.
    """

    operand: Optional[FilterKV] = None
    operator: Optional[Operator] = None
    nodes: Optional[List["Node"]] = None

    @model_validator(mode="after")
    def check_variant(self) -> "Node":
        if (self.operand is None) == (self.operator is None):
            raise ValueError("node must set exactly one of Operand or Operator")
        if self.operand is not None and self.nodes is not None:
            raise ValueError("condition nodes cannot have children")
        if self.nodes == []:
            self.nodes = None
        return self

    @property
    def is_condition(self) -> bool:
        return self.operand is not None

    @property
    def children(self) -> List["Node"]:
        return self.nodes or []

    def __str__(self) -> str:
        if self.operand is not None:
            return f"{self.operand.key.value}=0x{self.operand.value.hex()}"
        inner = ", ".join(str(child) for child in self.children)
        return f"{self.operator.name}({inner})"


Node.model_rebuild()


class FilterDocument(WireModel):
    """Top-level wire object; only the root is ever serialized"""

    root_node: Optional[Node] = Field(default=None, alias="Root")
