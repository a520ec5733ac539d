"""SysEx wire constants and frame boundary detection.

Frame layout::

    +-----------+------------------------------------+------------+
    | Initiator |  Header (id bytes) + payload       | Terminator |
    |   0xF0    |  7-bit data bytes                  |    0xF7    |
    +-----------+------------------------------------+------------+

A buffer read from a ``.syx`` file may hold any number of frames back to
back. Boundaries are found by terminator bytes only.
"""

from __future__ import annotations

import logging

from ..errors import InvalidMessage
from ..utils.buffers import as_bytes

logger = logging.getLogger(__name__)

INITIATOR = 0xF0
TERMINATOR = 0xF7
DEVELOPMENT = 0x7D
NON_REAL_TIME = 0x7E
REAL_TIME = 0x7F


def frame_count(buffer: bytes) -> int:
    """Return the number of frames in ``buffer``.

    This counts terminator bytes; it does not check that each one has a
    matching initiator.
    """
    return as_bytes(buffer).count(TERMINATOR)


def split_frames(buffer: bytes, strict: bool = True) -> list[bytes]:
    """Split ``buffer`` into frames, each ending in a terminator.

    Args:
        buffer: Raw bytes, possibly several concatenated frames.
        strict: If true, bytes after the last terminator raise
            :class:`InvalidMessage`. Otherwise they are dropped and a
            warning is logged.

    Returns:
        The frames in stream order.
    """
    data = as_bytes(buffer)
    frames: list[bytes] = []
    start = 0
    end = data.find(TERMINATOR)
    while end != -1:
        frames.append(data[start : end + 1])
        start = end + 1
        end = data.find(TERMINATOR, start)

    tail = len(data) - start
    if tail:
        if strict:
            raise InvalidMessage(
                f"{tail} byte(s) after the last terminator at offset {start}"
            )
        logger.warning("Discarding %d unterminated byte(s) at offset %d", tail, start)

    return frames
