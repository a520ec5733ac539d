"""Decoding of SysEx captures printed by the ReceiveMIDI command-line tool.

ReceiveMIDI prints one event per line. SysEx events look like::

    system-exclusive hex 41 10 42 12 40 00 7F 00 41

The data bytes are given without the F0/F7 delimiters, in the base named
by the second token. Tokens that do not parse as a byte are skipped.
"""

from __future__ import annotations

import logging
import re

from .framing import INITIATOR, TERMINATOR

logger = logging.getLogger(__name__)

SYSEX_EVENT = "system-exclusive"

HEX_TOKEN = re.compile(r"[0-9A-Fa-f]+")
DEC_TOKEN = re.compile(r"[0-9]+")


def parse_receivemidi_line(line: str) -> bytes | None:
    """Return the framed SysEx bytes for one ReceiveMIDI line.

    Returns ``None`` for any line that is not a SysEx event with at
    least one token after the base.
    """
    parts = line.split()
    # event name, base, at least one byte
    if len(parts) < 3 or parts[0] != SYSEX_EVENT:
        return None

    if parts[1] == "hex":
        base, token = 16, HEX_TOKEN
    else:
        base, token = 10, DEC_TOKEN
    data = bytearray([INITIATOR])
    for part in parts[2:]:
        # plain digits only, no sign, prefix or underscores
        if not token.fullmatch(part):
            continue
        value = int(part, base)
        if not 0 <= value <= 0xFF:
            continue
        data.append(value)
    data.append(TERMINATOR)

    logger.debug("Received %d bytes of System Exclusive data", len(data))
    return bytes(data)


def parse_receivemidi(text: str) -> list[bytes]:
    """Return every SysEx frame in a ReceiveMIDI capture, in order."""
    frames = []
    for line in text.splitlines():
        frame = parse_receivemidi_line(line)
        if frame is not None:
            frames.append(frame)
    return frames
