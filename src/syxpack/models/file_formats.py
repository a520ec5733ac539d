"""Reading and writing ``.syx`` files.

A ``.syx`` file is raw SysEx bytes, one or more frames back to back.
Split output is written next to the input (or into ``output_dir``) as
``<stem>-001.syx``, ``<stem>-002.syx`` and so on.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ..errors import InvalidMessage
from ..protocol.framing import frame_count, split_frames
from ..protocol.message import AnyMessage, parse_message

logger = logging.getLogger(__name__)

SYX_SUFFIX = ".syx"


def read_syx(path: str | Path) -> bytes:
    """Read a whole file into memory."""
    return Path(path).read_bytes()


def read_messages(path: str | Path) -> list[AnyMessage]:
    """Parse every frame in a file.

    Raises:
        InvalidMessage: If any frame is malformed or the file has
            unterminated trailing bytes.
    """
    return [parse_message(frame) for frame in split_frames(read_syx(path))]


def split_output_name(path: str | Path, index: int) -> str:
    """Name of the ``index``-th (1-based) split file for ``path``."""
    path = Path(path)
    suffix = path.suffix or SYX_SUFFIX
    return f"{path.stem}-{index:03d}{suffix}"


def split_file(
    path: str | Path,
    output_dir: str | Path | None = None,
) -> list[Path]:
    """Write each frame of a multi-frame file to its own file.

    Args:
        path: Input ``.syx`` file.
        output_dir: Directory for the output files; defaults to the
            input's directory.

    Returns:
        The paths written, in frame order.
    """
    return write_frames(split_frames(read_syx(path)), path, output_dir)


def write_frames(
    frames: list[bytes],
    path: str | Path,
    output_dir: str | Path | None = None,
) -> list[Path]:
    """Write already-split frames of ``path`` to numbered files.

    Returns:
        The paths written, in frame order.
    """
    path = Path(path)
    out_dir = Path(output_dir) if output_dir is not None else path.parent
    out_dir.mkdir(parents=True, exist_ok=True)

    written: list[Path] = []
    for i, frame in enumerate(frames, start=1):
        out = out_dir / split_output_name(path, i)
        out.write_bytes(frame)
        logger.info("Wrote %s (%d bytes)", out, len(frame))
        written.append(out)
    return written


def extract_payload(path: str | Path, output: str | Path) -> Path:
    """Write the payload of a single-frame file to ``output``.

    The payload excludes the delimiters and the manufacturer or universal
    header bytes.

    Raises:
        InvalidMessage: If the file holds more than one frame.
    """
    data = read_syx(path)
    count = frame_count(data)
    if count > 1:
        raise InvalidMessage(
            f"Found {count} System Exclusive messages; split the file first"
        )
    message = parse_message(data)
    output = Path(output)
    output.write_bytes(message.payload)
    logger.info("Wrote %d payload bytes to %s", len(message.payload), output)
    return output
