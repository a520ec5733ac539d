"""Packed-data codec carrying 8-bit bytes through a 7-bit channel.

Every group of up to seven data bytes is preceded by an index byte that
holds their high bits, bit 0 for the first byte of the group::

    in:   d0 d1 d2 d3 d4 d5 d6
    out:  ix d0&7F d1&7F d2&7F d3&7F d4&7F d5&7F d6&7F
          ix = (d0>>7)<<0 | (d1>>7)<<1 | ... | (d6>>7)<<6

Used by KORG and others for bulk dumps.
"""

from __future__ import annotations

import logging

from ..errors import MalformedEncoding
from .buffers import as_bytes

logger = logging.getLogger(__name__)

UNPACKED_CHUNK = 7
PACKED_CHUNK = 8


def packed_size(length: int) -> int:
    """Size of the packed form of ``length`` bytes."""
    return length + -(-length // UNPACKED_CHUNK)


def pack(data: bytes) -> bytes:
    """Pack 8-bit data into 7-bit-clean bytes."""
    data = as_bytes(data)
    result = bytearray()
    for start in range(0, len(data), UNPACKED_CHUNK):
        chunk = data[start : start + UNPACKED_CHUNK]
        index_byte = 0
        for i, b in enumerate(chunk):
            if b & 0x80:
                index_byte |= 1 << i
        result.append(index_byte)
        result.extend(b & 0x7F for b in chunk)

    logger.debug("Packed %d bytes into %d", len(data), len(result))
    return bytes(result)


def unpack(data: bytes) -> bytes:
    """Restore data produced by :func:`pack`.

    A short final group is accepted as long as it holds at least one data
    byte after its index byte.

    Raises:
        MalformedEncoding: If the final group is a lone index byte.
    """
    data = as_bytes(data)
    result = bytearray()
    for start in range(0, len(data), PACKED_CHUNK):
        chunk = data[start : start + PACKED_CHUNK]
        if len(chunk) < 2:
            raise MalformedEncoding(
                f"Packed data ends with an index byte and no data at offset {start}"
            )
        index_byte = chunk[0]
        logger.debug("index byte = 0b%08b", index_byte)
        for i, b in enumerate(chunk[1:]):
            high = 0x80 if index_byte & (1 << i) else 0x00
            result.append((b & 0x7F) | high)

    logger.debug("Unpacked %d bytes into %d", len(data), len(result))
    return bytes(result)
