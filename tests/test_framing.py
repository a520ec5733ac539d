"""Tests for frame counting and splitting."""

import pytest

from syxpack.errors import InvalidMessage
from syxpack.protocol.framing import (
    INITIATOR,
    TERMINATOR,
    frame_count,
    split_frames,
)

TWO_FRAMES = bytes([0xF0, 0x43, 0xF7, 0xF0, 0x41, 0x01, 0xF7])


def test_delimiter_values():
    """Initiator and terminator are the MIDI SysEx status bytes."""
    assert INITIATOR == 0xF0
    assert TERMINATOR == 0xF7


def test_frame_count_two_frames():
    assert frame_count(TWO_FRAMES) == 2


def test_split_two_frames():
    """Frames come back in stream order, each ending in a terminator."""
    frames = split_frames(TWO_FRAMES)
    assert frames == [
        bytes([0xF0, 0x43, 0xF7]),
        bytes([0xF0, 0x41, 0x01, 0xF7]),
    ]


def test_split_count_matches_frame_count():
    buffer = TWO_FRAMES * 3 + bytes([0xF0, 0x7D, 0xF7])
    assert len(split_frames(buffer)) == frame_count(buffer) == 7


def test_empty_buffer():
    assert frame_count(b"") == 0
    assert split_frames(b"") == []


def test_single_frame_is_returned_whole():
    frame = bytes([0xF0, 0x7E, 0x00, 0x06, 0x01, 0xF7])
    assert split_frames(frame) == [frame]


def test_frame_count_does_not_check_initiators():
    """Only terminators are counted."""
    assert frame_count(bytes([0x01, 0xF7, 0x02, 0xF7])) == 2


def test_trailing_bytes_raise_by_default():
    with pytest.raises(InvalidMessage):
        split_frames(TWO_FRAMES + bytes([0xF0, 0x43]))


def test_no_terminator_raises_by_default():
    with pytest.raises(InvalidMessage):
        split_frames(bytes([0xF0, 0x43, 0x00]))


def test_trailing_bytes_dropped_when_not_strict(caplog):
    """Non-strict splitting drops the tail and logs a warning."""
    with caplog.at_level("WARNING"):
        frames = split_frames(TWO_FRAMES + bytes([0xF0, 0x43]), strict=False)
    assert frames == split_frames(TWO_FRAMES)
    assert "unterminated" in caplog.text


def test_accepts_bytearray():
    assert split_frames(bytearray(TWO_FRAMES)) == split_frames(TWO_FRAMES)


def test_int_buffer_rejected():
    with pytest.raises(TypeError):
        frame_count(4)
    with pytest.raises(TypeError):
        split_frames(4)
