"""MIDI manufacturer identifiers.

An identifier is one of three variants:

- ``Standard``: a single byte (0x01-0x7C).
- ``Extended``: three bytes, always starting with 0x00.
- ``Development``: the reserved non-commercial byte 0x7D.

Region is encoded in the numbering: single bytes 0x01-0x3F and extended
IDs 00 00 xx-00 1F xx are North American, 0x40-0x5F and 00 40 xx-00 7F xx
are Japanese, everything else is European or other.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ..errors import InvalidManufacturer
from ..utils.buffers import as_bytes
from ..protocol.framing import DEVELOPMENT, NON_REAL_TIME, REAL_TIME, TERMINATOR
from . import registry

# Single-byte values that can never name a vendor inside a frame
RESERVED_STANDARD = frozenset({0x00, DEVELOPMENT, NON_REAL_TIME, REAL_TIME, TERMINATOR})


class ManufacturerGroup(Enum):
    """Geographic group derived from the identifier."""

    DEVELOPMENT = "Development"
    NORTH_AMERICAN = "North American"
    EUROPEAN_AND_OTHER = "European & Other"
    JAPANESE = "Japanese"


class ManufacturerId:
    """Base of the three identifier variants. Do not instantiate directly."""

    __slots__ = ()

    @staticmethod
    def from_bytes(data: bytes) -> ManufacturerId:
        """Build an identifier from its 1- or 3-byte wire form.

        Raises:
            InvalidManufacturer: If the length is not 1 or 3, or the bytes
                violate the variant's invariants.
        """
        data = as_bytes(data)
        if len(data) == 1:
            if data[0] == DEVELOPMENT:
                return Development()
            return Standard(data[0])
        if len(data) == 3:
            return Extended(data)
        raise InvalidManufacturer(
            f"Manufacturer ID must be 1 or 3 bytes, got {len(data)}"
        )

    @staticmethod
    def from_hex(hex_id: str) -> ManufacturerId:
        """Build an identifier from its registry key, e.g. ``"41"`` or ``"002029"``."""
        try:
            data = bytes.fromhex(hex_id.replace(" ", ""))
        except ValueError as e:
            raise InvalidManufacturer(f"Invalid manufacturer hex ID {hex_id!r}") from e
        return ManufacturerId.from_bytes(data)

    def to_bytes(self) -> bytes:
        raise NotImplementedError

    def group(self) -> ManufacturerGroup:
        raise NotImplementedError

    @property
    def hex_id(self) -> str:
        """Uppercase hex digits with no separators, the registry key."""
        return self.to_bytes().hex().upper()

    def name(self) -> str:
        """Registered name, or the unknown-manufacturer sentinel."""
        return registry.lookup_by_hex_id(self.hex_id) or registry.UNKNOWN_MANUFACTURER

    def display_name(self) -> str:
        """Short name for listings, or the unknown-manufacturer sentinel."""
        return registry.display_name_by_hex_id(self.hex_id) or registry.UNKNOWN_MANUFACTURER

    def __str__(self) -> str:
        return self.to_bytes().hex(" ").upper()


@dataclass(frozen=True)
class Standard(ManufacturerId):
    """Single-byte manufacturer ID."""

    value: int

    def __post_init__(self) -> None:
        if not 0 <= self.value <= 0xFF:
            raise InvalidManufacturer(f"Manufacturer byte out of range: {self.value}")
        if self.value in RESERVED_STANDARD:
            raise InvalidManufacturer(
                f"0x{self.value:02X} is reserved and is not a standard manufacturer ID"
            )

    def to_bytes(self) -> bytes:
        return bytes([self.value])

    def group(self) -> ManufacturerGroup:
        if 0x01 <= self.value < 0x40:
            return ManufacturerGroup.NORTH_AMERICAN
        if 0x40 <= self.value < 0x60:
            return ManufacturerGroup.JAPANESE
        return ManufacturerGroup.EUROPEAN_AND_OTHER

    def __repr__(self) -> str:
        return f"Standard(0x{self.value:02X})"


@dataclass(frozen=True)
class Extended(ManufacturerId):
    """Three-byte manufacturer ID, ``00 xx yy``."""

    value: bytes

    def __post_init__(self) -> None:
        value = as_bytes(self.value)
        object.__setattr__(self, "value", value)
        if len(value) != 3:
            raise InvalidManufacturer(
                f"Extended manufacturer ID must be 3 bytes, got {len(value)}"
            )
        if value[0] != 0x00:
            raise InvalidManufacturer(
                f"Extended manufacturer ID must start with 0x00, got 0x{value[0]:02X}"
            )
        if TERMINATOR in value:
            raise InvalidManufacturer("Extended manufacturer ID contains a terminator byte")

    def to_bytes(self) -> bytes:
        return self.value

    def group(self) -> ManufacturerGroup:
        region = self.value[1]
        if region & 0x40:
            return ManufacturerGroup.JAPANESE
        if region & 0x20:
            return ManufacturerGroup.EUROPEAN_AND_OTHER
        return ManufacturerGroup.NORTH_AMERICAN

    def __repr__(self) -> str:
        return f"Extended({self.value.hex(' ').upper()})"


@dataclass(frozen=True)
class Development(ManufacturerId):
    """The reserved development / non-commercial ID (0x7D)."""

    def to_bytes(self) -> bytes:
        return bytes([DEVELOPMENT])

    def group(self) -> ManufacturerGroup:
        return ManufacturerGroup.DEVELOPMENT


def find_manufacturer(prefix: str) -> ManufacturerId:
    """Return the first registered manufacturer whose name starts with ``prefix``.

    Matching is case-insensitive. Entries are searched in table order, so
    when several names share the prefix the earliest one wins.

    Raises:
        InvalidManufacturer: If the prefix is blank or no name matches.
    """
    if not prefix.strip():
        raise InvalidManufacturer("Manufacturer name prefix is empty")
    entry = registry.find_by_prefix(prefix)
    if entry is None:
        raise InvalidManufacturer(f"No manufacturer name starts with {prefix!r}")
    return ManufacturerId.from_hex(entry[0])
