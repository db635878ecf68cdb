"""
ledger.types.address — fixed-width account identifiers.

Addresses are raw `bytes` of a fixed width (20 bytes unless configured
otherwise). Hex strings, with or without a 0x prefix, are accepted at the
public boundary and normalized here; the ledger itself only ever stores bytes.

The all-zero address of the configured width is the reserved "no account"
identifier: the conceptual source of mints and destination of burns.
"""

from __future__ import annotations

from typing import Union

from ..errors import InvalidAddress

DEFAULT_ADDRESS_BYTES: int = 20

AddressLike = Union[str, bytes, bytearray, memoryview]

ZERO_ADDRESS: bytes = b"\x00" * DEFAULT_ADDRESS_BYTES


def zero_address(width: int = DEFAULT_ADDRESS_BYTES) -> bytes:
    """Return the reserved zero address for `width`-byte addresses."""
    if width == DEFAULT_ADDRESS_BYTES:
        return ZERO_ADDRESS
    return b"\x00" * width


def _hex_to_bytes(s: str) -> bytes:
    h = s.strip()
    if h.startswith(("0x", "0X")):
        h = h[2:]
    if len(h) % 2:
        raise InvalidAddress("odd-length hex address", address=s)
    try:
        return bytes.fromhex(h)
    except ValueError as e:
        raise InvalidAddress("address is not valid hex", address=s) from e


def to_address(value: AddressLike, *, width: int = DEFAULT_ADDRESS_BYTES) -> bytes:
    """
    Normalize `value` to a `width`-byte address.

    Raises:
        InvalidAddress if the value is not bytes-like / hex, or has the wrong width.
    """
    if isinstance(value, (bytes, bytearray, memoryview)):
        b = bytes(value)
    elif isinstance(value, str):
        b = _hex_to_bytes(value)
    else:
        raise InvalidAddress("address must be bytes or a hex string", address=value)
    if len(b) != width:
        raise InvalidAddress(f"address must be {width} bytes, got {len(b)}", address=b)
    return b


def is_zero(addr: bytes) -> bool:
    return not any(addr)


def to_hex(addr: bytes) -> str:
    return "0x" + addr.hex()


__all__ = [
    "AddressLike",
    "DEFAULT_ADDRESS_BYTES",
    "ZERO_ADDRESS",
    "zero_address",
    "to_address",
    "is_zero",
    "to_hex",
]
