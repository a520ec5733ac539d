"""Tests for message parsing, serialization and sections."""

import hashlib

import pytest

from syxpack.errors import InvalidManufacturer, InvalidMessage
from syxpack.models.manufacturer import Development, Extended, Standard
from syxpack.protocol.message import (
    ManufacturerMessage,
    Message,
    SectionKind,
    UniversalKind,
    UniversalMessage,
    message_sections,
    parse_message,
)

KAWAI_K4 = bytes([0xF0, 0x40, 0x00, 0x20, 0x00, 0x04, 0x00, 0x3F, 0xF7])
ALESIS = bytes([0xF0, 0x00, 0x00, 0x0E, 0x00, 0x41, 0x63, 0x00, 0x5D, 0xF7])
IDENTITY_REQUEST = bytes([0xF0, 0x7E, 0x00, 0x06, 0x01, 0xF7])


# ─── PARSING ─────────────────────────────────────────────────────────

def test_parse_standard_manufacturer():
    message = parse_message(KAWAI_K4)
    assert message == ManufacturerMessage(
        Standard(0x40), bytes([0x00, 0x20, 0x00, 0x04, 0x00, 0x3F])
    )


def test_parse_extended_manufacturer():
    message = parse_message(ALESIS)
    assert message == ManufacturerMessage(
        Extended(bytes([0x00, 0x00, 0x0E])), bytes([0x00, 0x41, 0x63, 0x00, 0x5D])
    )


def test_parse_universal_non_real_time():
    message = parse_message(IDENTITY_REQUEST)
    assert message == UniversalMessage(
        kind=UniversalKind.NON_REAL_TIME, target=0x00, sub_id1=0x06, sub_id2=0x01
    )
    assert message.payload == b""


def test_parse_universal_real_time():
    """Master volume, all devices."""
    data = bytes([0xF0, 0x7F, 0x7F, 0x04, 0x01, 0x00, 0x40, 0xF7])
    message = parse_message(data)
    assert isinstance(message, UniversalMessage)
    assert message.kind is UniversalKind.REAL_TIME
    assert message.target == 0x7F
    assert (message.sub_id1, message.sub_id2) == (0x04, 0x01)
    assert message.payload == bytes([0x00, 0x40])


def test_parse_development():
    message = parse_message(bytes([0xF0, 0x7D, 0x01, 0x02, 0xF7]))
    assert message == ManufacturerMessage(Development(), bytes([0x01, 0x02]))


def test_parse_empty_standard_payload():
    message = parse_message(bytes([0xF0, 0x43, 0xF7]))
    assert message == ManufacturerMessage(Standard(0x43), b"")


def test_message_parse_static_method():
    assert Message.parse(KAWAI_K4) == parse_message(KAWAI_K4)


def test_parse_accepts_list():
    assert parse_message(list(KAWAI_K4)) == parse_message(KAWAI_K4)


@pytest.mark.parametrize(
    "data",
    [
        b"",
        bytes([0xF0]),
        bytes([0xF7]),
        bytes([0xF0, 0xF7]),
        bytes([0x43, 0x00, 0xF7]),
        bytes([0xF0, 0x43, 0x00]),
        bytes([0xF0, 0x7E, 0x00, 0x06, 0xF7]),
        bytes([0xF0, 0x7F, 0xF7]),
        bytes([0xF0, 0x00, 0x00, 0xF7]),
        bytes([0xF0, 0x43, 0xF7, 0xF0, 0x41, 0xF7]),
    ],
)
def test_parse_rejects_malformed(data):
    with pytest.raises(InvalidMessage):
        parse_message(data)


def test_invalid_message_is_value_error():
    with pytest.raises(ValueError):
        parse_message(b"")


# ─── SERIALIZATION ───────────────────────────────────────────────────

def test_manufacturer_message_to_bytes():
    message = ManufacturerMessage(
        Standard(0x40),
        bytes([
            0x00,  # MIDI channel 1
            0x20,  # one block data dump
            0x00,  # synthesizer group
            0x04,  # K4/K4r ID
            0x00,  # internal patch
            0x3F,  # patch slot D-16
        ]),
    )
    assert message.to_bytes() == KAWAI_K4


def test_standard_empty_to_bytes():
    assert ManufacturerMessage(Standard(0x43)).to_bytes() == bytes([0xF0, 0x43, 0xF7])


def test_extended_empty_to_bytes():
    message = ManufacturerMessage(Extended(bytes([0x00, 0x00, 0x01])))
    assert message.to_bytes() == bytes([0xF0, 0x00, 0x00, 0x01, 0xF7])


def test_development_empty_to_bytes():
    assert ManufacturerMessage(Development()).to_bytes() == bytes([0xF0, 0x7D, 0xF7])


def test_universal_to_bytes():
    message = UniversalMessage(UniversalKind.NON_REAL_TIME, 0x7F, 0x06, 0x01)
    assert message.to_bytes() == bytes([0xF0, 0x7E, 0x7F, 0x06, 0x01, 0xF7])


@pytest.mark.parametrize(
    "frame",
    [
        KAWAI_K4,
        ALESIS,
        IDENTITY_REQUEST,
        bytes([0xF0, 0x7D, 0xF7]),
        bytes([0xF0, 0x7F, 0x10, 0x04, 0x01, 0x7F, 0x7F, 0xF7]),
        bytes([0xF0, 0x42, 0x30, 0x28, 0x54, 0x02, 0x5C, 0xF7]),
    ],
)
def test_parsed_frames_serialize_identically(frame):
    assert parse_message(frame).to_bytes() == frame


@pytest.mark.parametrize(
    "message",
    [
        ManufacturerMessage(Standard(0x41), bytes(range(0x40))),
        ManufacturerMessage(Extended(bytes([0x00, 0x20, 0x29])), bytes([0x02, 0x0C])),
        ManufacturerMessage(Development(), bytes([0x7F])),
        UniversalMessage(UniversalKind.REAL_TIME, 0x00, 0x01, 0x01, bytes([0x20, 0x00])),
    ],
)
def test_constructed_messages_parse_back(message):
    assert parse_message(message.to_bytes()) == message


def test_payload_with_terminator_rejected():
    with pytest.raises(InvalidMessage):
        ManufacturerMessage(Standard(0x43), bytes([0x01, 0xF7]))


@pytest.mark.parametrize(
    "target, sub_id1, sub_id2",
    [(0xF7, 0x01, 0x01), (0x00, 0xF7, 0x01), (0x00, 0x01, 0xF7)],
)
def test_universal_header_with_terminator_rejected(target, sub_id1, sub_id2):
    with pytest.raises(InvalidMessage):
        UniversalMessage(UniversalKind.REAL_TIME, target, sub_id1, sub_id2)


def test_int_payload_rejected():
    """A count passed as the payload is not turned into zero bytes."""
    with pytest.raises(TypeError):
        ManufacturerMessage(Standard(0x41), 3)


def test_parse_int_rejected():
    with pytest.raises(TypeError):
        parse_message(3)


def test_universal_kind_from_marker_byte():
    message = UniversalMessage(0x7E, 0x00, 0x06, 0x01)
    assert message.kind is UniversalKind.NON_REAL_TIME


def test_universal_kind_invalid():
    with pytest.raises(InvalidMessage):
        UniversalMessage(0x41, 0x00, 0x06, 0x01)


def test_reserved_standard_byte_rejected():
    with pytest.raises(InvalidManufacturer):
        ManufacturerMessage(Standard(0x7E))


def test_payload_is_bytes():
    message = ManufacturerMessage(Standard(0x43), bytearray([1, 2, 3]))
    assert isinstance(message.payload, bytes)


def test_digest():
    message = parse_message(KAWAI_K4)
    assert message.digest() == hashlib.md5(KAWAI_K4).hexdigest()


def test_to_dict_manufacturer():
    info = parse_message(KAWAI_K4).to_dict()
    assert info["type"] == "manufacturer"
    assert info["manufacturer_id"] == "40"
    assert info["display_name"] == "Kawai"
    assert info["group"] == "Japanese"
    assert info["payload_length"] == 6


def test_to_dict_universal():
    info = parse_message(IDENTITY_REQUEST).to_dict()
    assert info["kind"] == "Non-Real-time"
    assert info["sub_id1"] == 0x06


def test_repr():
    r = repr(parse_message(KAWAI_K4))
    assert "Standard(0x40)" in r


# ─── SECTIONS ────────────────────────────────────────────────────────

def test_sections_standard():
    sections = message_sections(KAWAI_K4)
    assert [s.kind for s in sections] == [
        SectionKind.INITIATOR,
        SectionKind.MANUFACTURER,
        SectionKind.PAYLOAD,
        SectionKind.TERMINATOR,
    ]
    assert [(s.offset, s.length) for s in sections] == [(0, 1), (1, 1), (2, 6), (8, 1)]


def test_sections_extended():
    sections = message_sections(ALESIS)
    assert [(s.offset, s.length) for s in sections] == [(0, 1), (1, 3), (4, 5), (9, 1)]
    assert sections[1].name == "Alesis Studio Electronics"


def test_sections_universal():
    sections = message_sections(IDENTITY_REQUEST)
    assert sections[1].kind is SectionKind.UNIVERSAL
    assert (sections[1].offset, sections[1].length) == (1, 4)
    assert (sections[2].offset, sections[2].length) == (5, 0)
    assert sections[3].offset == len(IDENTITY_REQUEST) - 1


def test_sections_to_dict():
    d = message_sections(KAWAI_K4)[0].to_dict()
    assert d == {
        "kind": "Message initiator",
        "name": "System Exclusive Initiator",
        "offset": 0,
        "length": 1,
    }
