"""Manufacturer name registry.

Keys are the identifier's wire bytes as uppercase hex with no separators
("41" for Roland, "002029" for Focusrite/Novation). The table is built on
first access and never modified afterwards.

Only a subset of the MIDI Association's manufacturer ID list is included;
new entries are appended to ``_ENTRIES``.
"""

from __future__ import annotations

from functools import lru_cache
from types import MappingProxyType
from typing import Mapping

UNKNOWN_MANUFACTURER = "Unknown manufacturer"

_ENTRIES: tuple[tuple[str, str], ...] = (
    # North American group, single byte
    ("01", "Sequential Circuits"),
    ("02", "IDP"),
    ("03", "Voyetra Turtle Beach, Inc."),
    ("04", "Moog Music"),
    ("05", "Passport Designs"),
    ("06", "Lexicon Inc."),
    ("07", "Kurzweil / Young Chang"),
    ("08", "Fender"),
    ("09", "MIDI9"),
    ("0A", "AKG Acoustics"),
    ("0B", "Voyce Music"),
    ("0C", "WaveFrame"),
    ("0D", "ADA Signal Processors, Inc."),
    ("0E", "Garfield Electronics"),
    ("0F", "Ensoniq"),
    ("10", "Oberheim / Gibson Labs"),
    ("11", "Apple"),
    ("12", "Grey Matter Response"),
    ("13", "Digidesign Inc."),
    ("14", "Palmtree Instruments"),
    ("15", "JLCooper Electronics"),
    ("16", "Lowrey Organ Company"),
    ("17", "Adams-Smith"),
    ("18", "E-mu"),
    ("19", "Harmony Systems"),
    ("1A", "ART"),
    ("1B", "Baldwin"),
    ("1C", "Eventide"),
    ("1D", "Inventronics"),
    ("1E", "Key Concepts"),
    ("1F", "Clarity"),
    # European & Other group, single byte
    ("20", "Passac"),
    ("21", "Proel Labs (SIEL)"),
    ("22", "Synthaxe (UK)"),
    ("24", "Hohner"),
    ("25", "Twister"),
    ("27", "Jellinghaus MS"),
    ("29", "PPG (Germany)"),
    ("2F", "Elka"),
    ("33", "Clavia Digital Instruments"),
    ("3E", "Waldorf Electronics GmbH"),
    # Japanese group, single byte
    ("40", "Kawai Musical Instruments MFG. CO. Ltd"),
    ("41", "Roland Corporation"),
    ("42", "Korg Inc."),
    ("43", "Yamaha Corporation"),
    ("44", "Casio Computer Co. Ltd"),
    ("47", "Akai Electric Co. Ltd"),
    ("48", "Victor Company of Japan, Ltd."),
    ("4C", "Sony Corporation"),
    ("4E", "Teac Corporation"),
    ("51", "Fostex Corporation"),
    ("52", "Zoom Corporation"),
    # Extended IDs
    ("000001", "Time/Warner Interactive"),
    ("00000E", "Alesis Studio Electronics"),
    ("00003B", "Mark of the Unicorn"),
    ("000105", "M-Audio"),
    ("00201F", "TC Electronic"),
    ("002029", "Focusrite/Novation"),
    ("002032", "Behringer GmbH"),
    ("002033", "Access Music Electronics"),
    ("00203C", "Elektron ESI AB"),
    ("00206B", "Arturia"),
    # Reserved
    ("7D", "Development/Non-commercial"),
)

# Short names for identification output; other entries display in full
_DISPLAY_NAMES: dict[str, str] = {
    "0D": "ADA",
    "18": "E-mu",
    "21": "Proel Labs",
    "33": "Clavia",
    "3E": "Waldorf",
    "40": "Kawai",
    "41": "Roland",
    "42": "KORG",
    "43": "Yamaha",
    "44": "Casio",
    "47": "Akai",
    "48": "JVC",
    "4C": "Sony",
    "4E": "Teac",
    "51": "Fostex",
    "52": "Zoom",
    "00000E": "Alesis",
    "00003B": "MOTU",
    "002029": "Novation",
    "002032": "Behringer",
    "002033": "Access",
    "00203C": "Elektron",
}


@lru_cache(maxsize=None)
def _table() -> Mapping[str, str]:
    return MappingProxyType(dict(_ENTRIES))


def _key(hex_id: str) -> str:
    return hex_id.replace(" ", "").upper()


def lookup_by_hex_id(hex_id: str) -> str | None:
    """Return the registered name for ``hex_id``, or ``None``."""
    return _table().get(_key(hex_id))


def display_name_by_hex_id(hex_id: str) -> str | None:
    """Return the short display name for ``hex_id``, or ``None`` if unregistered."""
    key = _key(hex_id)
    name = _table().get(key)
    if name is None:
        return None
    return _DISPLAY_NAMES.get(key, name)


def all_entries() -> list[tuple[str, str]]:
    """Return every ``(hex_id, name)`` pair in table order."""
    return list(_table().items())


def find_by_prefix(prefix: str) -> tuple[str, str] | None:
    """Return the first entry whose name starts with ``prefix`` (case-insensitive).

    A blank prefix matches nothing.
    """
    prefix = prefix.strip().lower()
    if not prefix:
        return None
    for hex_id, name in _table().items():
        if name.lower().startswith(prefix):
            return hex_id, name
    return None
