# src/artchain_validator/utils/encoding.py
"""Parsing and formatting helpers for addresses, 32-byte hashes and uint256 values."""

from __future__ import annotations

import re

from eth_utils import decode_hex, is_hex, is_hex_address, remove_0x_prefix, to_canonical_address

from artchain_validator.core.errors import InvalidIdentity, MalformedInput

ADDRESS_LENGTH = 20
BYTES32_LENGTH = 32
UINT256_MAX = 2**256 - 1

_DECIMAL_RE = re.compile(r"[0-9]+")


def parse_address(value: str, field: str = "address") -> bytes:
    """Decode a hex account identity into its 20 raw bytes.

    The `0x` prefix is optional and checksum casing is not enforced. Surrounding
    whitespace is rejected.

    Raises:
        InvalidIdentity: If the value is not exactly 20 bytes of hex
    """
    if not isinstance(value, str) or not is_hex_address(value):
        raise InvalidIdentity(f"invalid {field}: expected 20-byte hex address")
    return bytes(to_canonical_address(value))


def parse_bytes32(value: str, field: str = "hash") -> bytes:
    """Decode a hex string that must hold exactly 32 bytes.

    Raises:
        MalformedInput: If the value is not hex or has the wrong length
    """
    if not isinstance(value, str):
        raise MalformedInput(f"bad hex in {field}")
    if not is_hex(value) or len(remove_0x_prefix(value)) != BYTES32_LENGTH * 2:
        raise MalformedInput(f"bad hex in {field}: expected 32 bytes")
    return bytes(decode_hex(value))


def parse_uint256(value: str, field: str = "value") -> int:
    """Parse a decimal string into an integer that fits in uint256.

    Only ASCII digits are accepted: no sign, no whitespace, no separators.

    Raises:
        MalformedInput: If the string is not a decimal uint256
    """
    if not isinstance(value, str) or not _DECIMAL_RE.fullmatch(value):
        raise MalformedInput(f"invalid {field}: expected decimal string")
    # uint256 max has 78 digits; longer strings would also trip int()'s digit limit
    if len(value.lstrip("0")) > len(str(UINT256_MAX)):
        raise MalformedInput(f"invalid {field}: exceeds uint256")
    parsed = int(value)
    if parsed > UINT256_MAX:
        raise MalformedInput(f"invalid {field}: exceeds uint256")
    return parsed


def to_0x_hex(data: bytes) -> str:
    """Return lowercase 0x-prefixed hex for raw bytes."""
    return "0x" + bytes(data).hex()
