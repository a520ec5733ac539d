"""Exceptions raised for malformed SysEx input."""

from __future__ import annotations


class SysExError(ValueError):
    """Base class for all decoding and encoding failures."""


class InvalidMessage(SysExError):
    """Buffer is missing its delimiters or is too short for its class."""


class InvalidManufacturer(SysExError):
    """Manufacturer identifier has the wrong length or cannot be resolved."""


class MalformedEncoding(SysExError):
    """Packed or nybblified data cannot be decoded."""
