"""
Exceptions raised while building and encoding transaction filters.

All of them derive from FilterError, which is a ValueError so that callers
treating bad input generically keep working.
"""


class FilterError(ValueError):
    """Base class for all txfilter errors"""


class AddressParseError(FilterError):
    """
    Raised when a string is not a valid 20-byte address.

    Attributes:
        address: The rejected input.
    """

    def __init__(self, address, reason: str = "") -> None:
        self.address = address
        message = f"Invalid address: {address!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class HexParseError(FilterError):
    """
    Raised when a string is not a valid hex-encoded byte string.

    Attributes:
        value: The rejected input.
    """

    def __init__(self, value, reason: str = "") -> None:
        self.value = value
        message = f"Invalid hex string: {value!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class InvalidConditionError(FilterError):
    """Raised for unknown condition keys or values that cannot be encoded"""


class InvalidAttachment(FilterError):
    """
    Raised when a node cannot be attached where it was asked to go.

    Condition leaves never hold children, a tree has exactly one root, and
    handles must refer to nodes of the same tree.
    """


class SerializationError(FilterError):
    """Raised when a tree cannot be encoded to the wire format"""


class DeserializationError(FilterError):
    """Raised when wire-format input cannot be decoded into a tree"""


class DefinitionError(FilterError):
    """Raised when a declarative filter definition is malformed"""
