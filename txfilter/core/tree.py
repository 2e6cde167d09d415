from typing import List, Optional, Set, Union

from pydantic import ValidationError
from pydantic_core import PydanticSerializationError

from .exceptions import (
    DeserializationError,
    FilterError,
    InvalidAttachment,
    InvalidConditionError,
    SerializationError,
)
from .nodes import ConditionKey, FilterDocument, FilterKV, Node, Operator


class FilterTree:
    """
    N-ary tree of filter nodes

    Nodes are kept in an arena and referred to by integer handles, so a
    builder can hold its cursor as plain indices. The tree owns every node;
    children are appended in order and never reordered.
    """

    def __init__(self):
        self._nodes: List[Node] = []
        self._attached: Set[int] = set()
        self._root: Optional[int] = None

    def __len__(self) -> int:
        return len(self._nodes)

    def __eq__(self, other) -> bool:
        if not isinstance(other, FilterTree):
            return NotImplemented
        return self.root == other.root

    def __repr__(self) -> str:
        return f"FilterTree({self.root})"

    @property
    def root(self) -> Optional[Node]:
        """Top-level node, None while the tree is empty"""
        return None if self._root is None else self._nodes[self._root]

    @property
    def root_handle(self) -> Optional[int]:
        return self._root

    def node(self, handle: int) -> Node:
        """
        Look up a node by handle

        Raises:
            InvalidAttachment: Handle does not belong to this tree
        """
        if isinstance(handle, bool) or not isinstance(handle, int):
            raise InvalidAttachment(f"Invalid node handle: {handle!r}")
        if not 0 <= handle < len(self._nodes):
            raise InvalidAttachment(f"Unknown node handle: {handle}")
        return self._nodes[handle]

    def _add(self, node: Node) -> int:
        self._nodes.append(node)
        return len(self._nodes) - 1

    def create_condition(self, key: Union[ConditionKey, str], value: bytes) -> int:
        """
        Create a detached leaf condition

        Args:
            key: One of "to", "from", "method", "value"
            value: Raw attribute bytes, may be empty

        Returns:
            int: Handle of the new node

        Raises:
            InvalidConditionError: Unknown key or missing value
        """
        try:
            key = ConditionKey(key)
        except ValueError:
            raise InvalidConditionError(f"Unknown condition key: {key!r}") from None
        if not isinstance(value, (bytes, bytearray, memoryview)):
            raise InvalidConditionError(
                f"Condition value must be bytes, got {type(value).__name__}"
            )
        return self._add(Node(operand=FilterKV(key=key, value=bytes(value))))

    def create_operator(self, kind: Union[Operator, int, str]) -> int:
        """Create a detached, empty AND/OR node and return its handle"""
        try:
            kind = Operator.parse(kind)
        except ValueError as e:
            raise FilterError(str(e)) from e
        return self._add(Node(operator=kind))

    def attach(self, parent: Optional[int], child: int) -> None:
        """
        Attach a detached node

        With a parent handle the child is appended to the parent's children;
        without one the child becomes the root of an empty tree.

        Raises:
            InvalidAttachment: Parent is a condition, the tree already has a
                root, the child is already attached, or a handle is unknown
        """
        child_node = self.node(child)
        if child in self._attached:
            raise InvalidAttachment(f"Node {child} is already attached")

        if parent is None:
            if self._root is not None:
                raise InvalidAttachment("Tree already has a root")
            self._root = child
        else:
            parent_node = self.node(parent)
            if parent_node.is_condition:
                raise InvalidAttachment(
                    f"Cannot attach under condition node {parent} ({parent_node})"
                )
            if parent_node.nodes is None:
                parent_node.nodes = [child_node]
            else:
                parent_node.nodes.append(child_node)

        self._attached.add(child)

    def wrap_root(self, kind: Union[Operator, int, str] = Operator.AND) -> int:
        """
        Replace the root with a new operator node holding the old root

        Returns:
            int: Handle of the new root

        Raises:
            InvalidAttachment: Tree is empty
        """
        if self._root is None:
            raise InvalidAttachment("Tree has no root to wrap")

        wrapper = self.create_operator(kind)
        self._nodes[wrapper].nodes = [self._nodes[self._root]]
        self._root = wrapper
        self._attached.add(wrapper)
        return wrapper

    def to_document(self) -> FilterDocument:
        return FilterDocument(Root=self.root)

    def serialize(self, pretty: bool = False) -> Union[bytes, str]:
        """
        Encode the tree to the wire format

        Args:
            pretty: Return an indented string instead of compact bytes

        Raises:
            SerializationError: Encoding failed
        """
        document = self.to_document()
        try:
            if pretty:
                return document.model_dump_json(by_alias=True, indent=2)
            return document.model_dump_json(by_alias=True).encode()
        except (PydanticSerializationError, ValueError) as e:
            raise SerializationError(f"Failed to encode filter: {e}") from e

    @classmethod
    def deserialize(cls, data: Union[bytes, str]) -> "FilterTree":
        """
        Decode a wire-format document into a new tree

        Raises:
            DeserializationError: Malformed JSON or node structure
        """
        try:
            document = FilterDocument.model_validate_json(data)
        except ValidationError as e:
            raise DeserializationError(f"Invalid filter document: {e}") from e
        return cls.from_node(document.root_node)

    @classmethod
    def from_node(cls, root: Optional[Node]) -> "FilterTree":
        """Build a tree owning a deep copy of `root` and its descendants"""
        tree = cls()
        if root is not None:
            tree._root = tree._adopt(root.model_copy(deep=True))
        return tree

    def _adopt(self, node: Node) -> int:
        handle = self._add(node)
        self._attached.add(handle)
        for child in node.children:
            self._adopt(child)
        return handle

    def copy(self) -> "FilterTree":
        """Independent deep copy of the tree"""
        return type(self).from_node(self.root)
