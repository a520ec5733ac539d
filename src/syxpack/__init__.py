"""Helpers for decoding and encoding MIDI System Exclusive messages."""

from .errors import InvalidManufacturer, InvalidMessage, MalformedEncoding, SysExError
from .protocol.framing import (
    DEVELOPMENT,
    INITIATOR,
    NON_REAL_TIME,
    REAL_TIME,
    TERMINATOR,
    frame_count,
    split_frames,
)
from .protocol.message import (
    ManufacturerMessage,
    Message,
    UniversalKind,
    UniversalMessage,
    message_sections,
    parse_message,
)
from .models.manufacturer import (
    Development,
    Extended,
    ManufacturerGroup,
    ManufacturerId,
    Standard,
    find_manufacturer,
)
from .utils.nybbles import NybbleOrder, denybblify, nybblify
from .utils.packing import pack, unpack
