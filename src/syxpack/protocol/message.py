"""SysEx message model, parser and serializer.

The byte after the initiator decides the message class::

    F0 7D <payload> F7                         development
    F0 7E <target> <sub1> <sub2> <payload> F7  universal non-real-time
    F0 7F <target> <sub1> <sub2> <payload> F7  universal real-time
    F0 00 <id1> <id2> <payload> F7             manufacturer, extended ID
    F0 <id> <payload> F7                       manufacturer, standard ID
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Union

from ..errors import InvalidMessage
from ..utils.buffers import as_bytes
from ..models.manufacturer import Development, Extended, ManufacturerId, Standard
from .framing import (
    DEVELOPMENT,
    INITIATOR,
    NON_REAL_TIME,
    REAL_TIME,
    TERMINATOR,
)

# Shortest frames: initiator + header + terminator
MIN_UNIVERSAL_LENGTH = 6
MIN_EXTENDED_LENGTH = 5
MIN_STANDARD_LENGTH = 3


class UniversalKind(IntEnum):
    """Universal message class; the value is the marker byte on the wire."""

    NON_REAL_TIME = NON_REAL_TIME
    REAL_TIME = REAL_TIME

    @property
    def label(self) -> str:
        return "Non-Real-time" if self is UniversalKind.NON_REAL_TIME else "Real-time"


def _as_payload(payload) -> bytes:
    payload = as_bytes(payload)
    if TERMINATOR in payload:
        raise InvalidMessage(
            f"Payload contains a terminator byte at offset {payload.index(TERMINATOR)}"
        )
    return payload


def _check_header_byte(name: str, value: int) -> None:
    if not 0 <= value <= 0xFF or value == TERMINATOR:
        raise InvalidMessage(f"Invalid {name} byte: {value}")


class Message:
    """Base of the two message variants."""

    __slots__ = ()

    payload: bytes

    @staticmethod
    def parse(data: bytes) -> Message:
        return parse_message(data)

    def header(self) -> bytes:
        """Bytes between the initiator and the payload."""
        raise NotImplementedError

    def to_bytes(self) -> bytes:
        """Serialize to a complete frame, delimiters included."""
        return bytes([INITIATOR]) + self.header() + self.payload + bytes([TERMINATOR])

    def digest(self) -> str:
        """MD5 hex digest of the serialized frame."""
        return hashlib.md5(self.to_bytes()).hexdigest()


@dataclass(frozen=True)
class UniversalMessage(Message):
    """A Universal (non-vendor) SysEx message."""

    kind: UniversalKind
    target: int
    sub_id1: int
    sub_id2: int
    payload: bytes = b""

    def __post_init__(self) -> None:
        try:
            object.__setattr__(self, "kind", UniversalKind(self.kind))
        except ValueError as e:
            raise InvalidMessage(f"Not a universal message kind: {self.kind!r}") from e
        _check_header_byte("target", self.target)
        _check_header_byte("sub-ID #1", self.sub_id1)
        _check_header_byte("sub-ID #2", self.sub_id2)
        object.__setattr__(self, "payload", _as_payload(self.payload))

    def header(self) -> bytes:
        return bytes([self.kind, self.target, self.sub_id1, self.sub_id2])

    def to_dict(self) -> dict:
        return {
            "type": "universal",
            "kind": self.kind.label,
            "target": self.target,
            "sub_id1": self.sub_id1,
            "sub_id2": self.sub_id2,
            "payload_length": len(self.payload),
        }

    def __repr__(self) -> str:
        return (
            f"UniversalMessage(kind={self.kind.name}, target=0x{self.target:02X}, "
            f"sub_id1=0x{self.sub_id1:02X}, sub_id2=0x{self.sub_id2:02X}, "
            f"payload={self.payload.hex(' ') if self.payload else '(empty)'})"
        )


@dataclass(frozen=True)
class ManufacturerMessage(Message):
    """A manufacturer-specific SysEx message."""

    manufacturer: ManufacturerId
    payload: bytes = b""

    def __post_init__(self) -> None:
        if not isinstance(self.manufacturer, ManufacturerId):
            raise InvalidMessage(f"Not a manufacturer ID: {self.manufacturer!r}")
        object.__setattr__(self, "payload", _as_payload(self.payload))

    def header(self) -> bytes:
        return self.manufacturer.to_bytes()

    def to_dict(self) -> dict:
        return {
            "type": "manufacturer",
            "manufacturer_id": str(self.manufacturer),
            "manufacturer": self.manufacturer.name(),
            "display_name": self.manufacturer.display_name(),
            "group": self.manufacturer.group().value,
            "payload_length": len(self.payload),
        }

    def __repr__(self) -> str:
        return (
            f"ManufacturerMessage(manufacturer={self.manufacturer!r}, "
            f"payload={self.payload.hex(' ') if self.payload else '(empty)'})"
        )


AnyMessage = Union[UniversalMessage, ManufacturerMessage]


def _require_length(data: bytes, minimum: int, what: str) -> None:
    if len(data) < minimum:
        raise InvalidMessage(
            f"{what} message needs at least {minimum} bytes, got {len(data)}"
        )


def parse_message(data: bytes) -> AnyMessage:
    """Parse a single complete frame.

    Args:
        data: One frame, from initiator to terminator inclusive.

    Raises:
        InvalidMessage: If a delimiter is missing, the frame is shorter
            than its class requires, or a terminator appears before the
            last byte.
    """
    data = as_bytes(data)
    if not data:
        raise InvalidMessage("Empty buffer")
    if data[0] != INITIATOR:
        raise InvalidMessage(
            f"Expected initiator 0x{INITIATOR:02X}, got 0x{data[0]:02X}"
        )
    if data[-1] != TERMINATOR:
        raise InvalidMessage(
            f"Expected terminator 0x{TERMINATOR:02X}, got 0x{data[-1]:02X}"
        )
    inner = data.find(TERMINATOR, 0, len(data) - 1)
    if inner != -1:
        raise InvalidMessage(
            f"Terminator at offset {inner} before end of buffer; "
            "split the buffer into frames first"
        )
    _require_length(data, MIN_STANDARD_LENGTH, "Manufacturer")

    marker = data[1]
    if marker == DEVELOPMENT:
        return ManufacturerMessage(Development(), data[2:-1])
    if marker in (NON_REAL_TIME, REAL_TIME):
        _require_length(data, MIN_UNIVERSAL_LENGTH, "Universal")
        return UniversalMessage(
            kind=UniversalKind(marker),
            target=data[2],
            sub_id1=data[3],
            sub_id2=data[4],
            payload=data[5:-1],
        )
    if marker == 0x00:
        _require_length(data, MIN_EXTENDED_LENGTH, "Extended manufacturer")
        return ManufacturerMessage(Extended(data[1:4]), data[4:-1])
    return ManufacturerMessage(Standard(marker), data[2:-1])


# ─── SECTIONS ────────────────────────────────────────────────────────


class SectionKind(Enum):
    INITIATOR = "Message initiator"
    MANUFACTURER = "Manufacturer identifier"
    UNIVERSAL = "Universal message identifier"
    PAYLOAD = "Message payload"
    TERMINATOR = "Message terminator"


@dataclass
class Section:
    """A contiguous region of a frame."""

    kind: SectionKind
    name: str
    offset: int  # from frame start
    length: int

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "name": self.name,
            "offset": self.offset,
            "length": self.length,
        }


def message_sections(data: bytes) -> list[Section]:
    """Break a single frame into its initiator, header, payload and terminator."""
    message = parse_message(data)
    header = message.header()

    if isinstance(message, UniversalMessage):
        header_section = Section(
            SectionKind.UNIVERSAL, f"Universal {message.kind.label}", 1, len(header)
        )
    else:
        header_section = Section(
            SectionKind.MANUFACTURER, message.manufacturer.name(), 1, len(header)
        )

    payload_offset = 1 + len(header)
    return [
        Section(SectionKind.INITIATOR, "System Exclusive Initiator", 0, 1),
        header_section,
        Section(SectionKind.PAYLOAD, "Message Payload", payload_offset, len(message.payload)),
        Section(
            SectionKind.TERMINATOR,
            "System Exclusive Terminator",
            payload_offset + len(message.payload),
            1,
        ),
    ]
