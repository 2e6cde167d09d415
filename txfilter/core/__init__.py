from .builder import FilterBuilder, LeafRootPolicy, NestingMode
from .exceptions import (
    AddressParseError,
    DefinitionError,
    DeserializationError,
    FilterError,
    HexParseError,
    InvalidAttachment,
    InvalidConditionError,
    SerializationError,
)
from .nodes import ConditionKey, FilterDocument, FilterKV, Node, Operator
from .tree import FilterTree
