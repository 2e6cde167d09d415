from enum import Enum
from typing import Callable, List, Optional, TypeVar, Union

from ..config import Config
from ..logger import logger
from .exceptions import DefinitionError, FilterError, InvalidAttachment
from .nodes import ConditionKey, Operator
from .parsing import encode_uint256, parse_address, parse_hex
from .tree import FilterTree

T = TypeVar("T")


class NestingMode(str, Enum):
    """How many enclosing positions exit() can return to"""

    STACK = "stack"  # one saved position per open group
    SINGLE = "single"  # one slot, overwritten by every group open


class LeafRootPolicy(str, Enum):
    """What happens when something is added next to a condition root"""

    WRAP = "wrap"  # wrap the root in an implicit AND group
    REJECT = "reject"  # raise InvalidAttachment


class FilterBuilder:
    """
    Fluent builder for transaction filters

    Conditions and groups attach under a cursor. Opening a group moves the
    cursor into it and exit() moves it back out:

        data = (FilterBuilder()
                .or_group()
                .with_recipient("0x7a250d5630B4cF539739dF2C5dAcb4c659F2488D")
                .and_group()
                .with_sender("0x1111111254fb6c44bac0bed2854e76f90643097d")
                .with_method("0x38ed1739")
                .exit()
                .with_value(10**18)
                .encode())

    Input is parsed before the tree is touched, so a call that raises leaves
    the builder exactly as it was.
    """

    def __init__(
        self,
        nesting: Union[NestingMode, str] = NestingMode.STACK,
        leaf_root: Union[LeafRootPolicy, str] = LeafRootPolicy.WRAP,
    ):
        self.nesting = NestingMode(nesting)
        self.leaf_root = LeafRootPolicy(leaf_root)
        self.reset()

    @classmethod
    def from_config(cls, config: Config) -> "FilterBuilder":
        """
        Create a builder from the [builder] section

        Raises:
            DefinitionError: Section is not a table or holds an unknown option value
        """
        options = config.builder
        if not isinstance(options, dict):
            raise DefinitionError("[builder] must be a table")
        try:
            return cls(
                nesting=options.get("nesting", NestingMode.STACK.value),
                leaf_root=options.get("leaf_root", LeafRootPolicy.WRAP.value),
            )
        except ValueError as e:
            raise DefinitionError(f"Invalid [builder] option: {e}") from e

    def reset(self) -> "FilterBuilder":
        """Discard the tree and cursor"""
        self.tree = FilterTree()
        self._current: Optional[int] = None
        self._saved: List[int] = []
        return self

    @property
    def current(self) -> Optional[int]:
        """Handle of the node new nodes attach under"""
        return self._current

    @property
    def depth(self) -> int:
        """Number of saved enclosing positions"""
        return len(self._saved)

    def _parse(self, parser: Callable[..., T], raw) -> T:
        try:
            return parser(raw)
        except FilterError as e:
            logger.debug(f"Rejected filter input: {e}")
            raise

    def _insertion_point(self) -> Optional[int]:
        if self._current is None:
            return None
        if not self.tree.node(self._current).is_condition:
            return self._current

        # Only a condition root can be the cursor; it has no children list
        if self.leaf_root is LeafRootPolicy.REJECT:
            raise InvalidAttachment(
                "Root is a condition; open a group before adding more nodes"
            )
        self._current = self.tree.wrap_root(Operator.AND)
        logger.debug(f"Wrapped condition root in implicit AND node {self._current}")
        return self._current

    def _add_condition(self, key: ConditionKey, value: bytes) -> "FilterBuilder":
        parent = self._insertion_point()
        handle = self.tree.create_condition(key, value)
        self.tree.attach(parent, handle)
        if parent is None:
            self._current = handle
        logger.debug(f"Attached condition {self.tree.node(handle)} under {parent}")
        return self

    def _open_group(self, kind: Operator) -> "FilterBuilder":
        parent = self._insertion_point()
        handle = self.tree.create_operator(kind)
        self.tree.attach(parent, handle)

        if self.nesting is NestingMode.SINGLE:
            self._saved = [] if parent is None else [parent]
        elif parent is not None:
            self._saved.append(parent)
        self._current = handle
        logger.debug(f"Entered {kind.name} group {handle} (depth {self.depth})")
        return self

    def with_recipient(self, address: str) -> "FilterBuilder":
        """Match transactions sent to `address`"""
        return self._add_condition(ConditionKey.TO, self._parse(parse_address, address))

    def with_sender(self, address: str) -> "FilterBuilder":
        """Match transactions sent from `address`"""
        return self._add_condition(ConditionKey.FROM, self._parse(parse_address, address))

    def with_method(self, selector: str) -> "FilterBuilder":
        """Match transactions whose input starts with the hex `selector`"""
        return self._add_condition(ConditionKey.METHOD, self._parse(parse_hex, selector))

    def with_value(self, value: int) -> "FilterBuilder":
        """Match transactions transferring exactly `value` wei"""
        return self._add_condition(ConditionKey.VALUE, self._parse(encode_uint256, value))

    def and_group(self) -> "FilterBuilder":
        """Open an AND group; following nodes attach inside it until exit()"""
        return self._open_group(Operator.AND)

    def or_group(self) -> "FilterBuilder":
        """Open an OR group; following nodes attach inside it until exit()"""
        return self._open_group(Operator.OR)

    def exit(self) -> "FilterBuilder":
        """
        Move the cursor back to the enclosing group

        Does nothing when no enclosing position is saved. In SINGLE mode only
        the most recently opened group's parent is remembered, so a second
        exit() in a row is a no-op.
        """
        if self._saved:
            self._current = self._saved.pop()
            logger.debug(f"Exited to node {self._current} (depth {self.depth})")
        else:
            logger.debug("exit() with no saved position, cursor unchanged")
        return self

    def build(self) -> FilterTree:
        """Independent copy of the tree built so far"""
        return self.tree.copy()

    def encode(self) -> bytes:
        """Compact wire encoding of the current tree"""
        return self.tree.serialize()

    def encode_pretty(self) -> str:
        """Indented wire encoding of the current tree"""
        return self.tree.serialize(pretty=True)
