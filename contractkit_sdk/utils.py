"""
Address and hex helpers shared across the SDK.
"""
from typing import Any, Union

from eth_utils import (
    is_checksum_address, is_hex_address, to_bytes, to_checksum_address, to_hex, to_normalized_address
)

from .exceptions import InvalidAddressFormat

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"


def normalize_address(address: Any) -> str:
    """
    Convert an address to its canonical lowercase ``0x`` form.

    Args:
        address: Address string, checksummed or not

    Returns:
        Lowercase 0x-prefixed address

    Raises:
        InvalidAddressFormat: If the value is not a 20-byte hex address or
            carries an invalid EIP-55 checksum
    """
    if not isinstance(address, str):
        raise InvalidAddressFormat(f"Address must be a string, got {type(address).__name__}")
    body = address[2:] if address[:2].lower() == "0x" else address
    candidate = "0x" + body
    if not is_hex_address(candidate):
        raise InvalidAddressFormat(f"Invalid address: {address!r}")
    # Mixed case means EIP-55; all-lower and all-upper carry no checksum
    if body != body.lower() and body != body.upper() and not is_checksum_address(candidate):
        raise InvalidAddressFormat(f"Invalid EIP-55 checksum: {address!r}")
    return to_normalized_address(candidate)


def checksum_address(address: str) -> str:
    """Return the EIP-55 form of an address, as required by web3 and eth-account."""
    return to_checksum_address(normalize_address(address))


def to_hex_data(data: Union[bytes, bytearray]) -> str:
    """Render bytes as 0x-prefixed hex (``0x`` for empty data)."""
    return to_hex(bytes(data))


def hex_to_bytes(value: str) -> bytes:
    """
    Parse a hex string, with or without 0x prefix, into bytes.

    Raises:
        ValueError: If the string is not valid hex
    """
    return to_bytes(hexstr=value)
