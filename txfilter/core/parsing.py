"""
Parsers turning user input into condition bytes.
"""

from hexbytes import HexBytes
from web3 import Web3

from .exceptions import AddressParseError, HexParseError, InvalidConditionError

ADDRESS_LENGTH = 20
UINT256_MAX = 2**256 - 1


def parse_address(address: str) -> bytes:
    """
    Parse a hex address into its 20 raw bytes.

    The `0x` prefix is optional and letter case is ignored, so mixed-case
    input is accepted even when it is not a valid EIP-55 checksum.

    Raises:
        AddressParseError: Input is not a 40-digit hex string
    """
    if not isinstance(address, str):
        raise AddressParseError(address, "expected a string")
    try:
        checksummed = Web3.to_checksum_address(address)
    except (ValueError, TypeError) as e:
        raise AddressParseError(address, str(e)) from e

    raw = bytes(HexBytes(checksummed))
    if len(raw) != ADDRESS_LENGTH:
        raise AddressParseError(address, f"expected {ADDRESS_LENGTH} bytes, got {len(raw)}")
    return raw


def parse_hex(value: str) -> bytes:
    """
    Parse a hex byte string, with or without `0x` prefix.

    Any length is accepted, including empty. Unlike HexBytes, an odd number of
    digits is an error rather than silently left-padded.

    Raises:
        HexParseError: Odd length or non-hex characters
    """
    if not isinstance(value, str):
        raise HexParseError(value, "expected a string")

    digits = value[2:] if value[:2].lower() == "0x" else value
    if len(digits) % 2:
        raise HexParseError(value, "odd number of hex digits")
    try:
        return bytes(HexBytes("0x" + digits))
    except ValueError as e:
        raise HexParseError(value, "non-hex characters") from e


def encode_uint256(value: int) -> bytes:
    """
    Minimal big-endian encoding of an unsigned 256-bit integer.

    >>> encode_uint256(0), encode_uint256(255), encode_uint256(256)
    (b'', b'\\xff', b'\\x01\\x00')

    Raises:
        InvalidConditionError: Not an int, negative, or wider than 256 bits
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidConditionError(
            f"value must be an integer, got {type(value).__name__}"
        )
    if value < 0 or value > UINT256_MAX:
        raise InvalidConditionError(f"value out of uint256 range: {value}")
    return value.to_bytes((value.bit_length() + 7) // 8, "big")
