"""Splitting bytes into nybbles and joining them back."""

from __future__ import annotations

from enum import Enum

from ..errors import MalformedEncoding
from .buffers import as_bytes


class NybbleOrder(Enum):
    HIGH_FIRST = "high_first"
    LOW_FIRST = "low_first"


def nybblify(data: bytes, order: NybbleOrder = NybbleOrder.HIGH_FIRST) -> bytes:
    """Return ``data`` with every byte split into two nybble bytes."""
    result = bytearray()
    for b in as_bytes(data):
        high, low = b >> 4, b & 0x0F
        if order is NybbleOrder.HIGH_FIRST:
            result += bytes([high, low])
        else:
            result += bytes([low, high])
    return bytes(result)


def denybblify(data: bytes, order: NybbleOrder = NybbleOrder.HIGH_FIRST) -> bytes:
    """Join adjacent nybble bytes back into whole bytes.

    Raises:
        MalformedEncoding: If the length is odd or a value exceeds 0x0F.
    """
    data = as_bytes(data)
    if len(data) % 2:
        raise MalformedEncoding(f"Nybble data must have even length, got {len(data)}")

    result = bytearray()
    for offset in range(0, len(data), 2):
        first, second = data[offset], data[offset + 1]
        if first > 0x0F or second > 0x0F:
            raise MalformedEncoding(
                f"Value above 0x0F in nybble pair at offset {offset}: "
                f"{first:02X} {second:02X}"
            )
        if order is NybbleOrder.HIGH_FIRST:
            result.append(first << 4 | second)
        else:
            result.append(second << 4 | first)
    return bytes(result)
