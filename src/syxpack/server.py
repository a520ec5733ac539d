"""MCP server entry point for syxpack.

Exposes SysEx file inspection, splitting and payload codecs as tools via
the Model Context Protocol, using the official Python MCP SDK with stdio
transport.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from mcp.server.fastmcp import FastMCP

from .errors import SysExError
from .models import registry
from .models.file_formats import extract_payload, read_syx, write_frames
from .models.manufacturer import ManufacturerId, find_manufacturer
from .protocol.framing import frame_count, split_frames
from .protocol.message import message_sections, parse_message
from .protocol.receive import parse_receivemidi
from .utils.nybbles import NybbleOrder, denybblify, nybblify
from .utils.packing import pack, unpack

logger = logging.getLogger(__name__)

mcp = FastMCP(
    "syxpack",
    instructions="Inspect, split and decode MIDI System Exclusive (.syx) data",
)


def _from_hex(data: str) -> bytes:
    """Parse a hex string such as ``"F0 43 F7"`` or ``"f043f7"``."""
    try:
        return bytes.fromhex(data.replace(" ", ""))
    except ValueError as e:
        raise SysExError(f"Invalid hex data: {e}") from e


def _to_hex(data: bytes) -> str:
    return data.hex(" ").upper()


def _nybble_order(order: str) -> NybbleOrder:
    try:
        return NybbleOrder(order)
    except ValueError as e:
        raise SysExError(
            f"Unknown nybble order '{order}'. Valid: {[o.value for o in NybbleOrder]}"
        ) from e


# ─── FILE TOOLS ──────────────────────────────────────────────────────

@mcp.tool()
def identify_file(path: str) -> dict[str, Any]:
    """Identify every System Exclusive message in a .syx file.

    Reports the message class, manufacturer and group (or universal
    sub-IDs), payload size and MD5 digest of each message.

    Args:
        path: Path to the .syx file.
    """
    try:
        buffer = read_syx(path)
        count = frame_count(buffer)
        messages = []
        for number, frame in enumerate(split_frames(buffer), start=1):
            message = parse_message(frame)
            info = message.to_dict()
            info["number"] = number
            info["digest"] = message.digest()
            messages.append(info)
    except (SysExError, OSError) as e:
        return {"error": str(e)}

    return {"count": count, "messages": messages}


@mcp.tool()
def split_syx_file(path: str, output_dir: str | None = None) -> dict[str, Any]:
    """Split a file holding several messages into one file per message.

    Output files are named ``<stem>-001.syx``, ``<stem>-002.syx``, ...

    Args:
        path: Path to the .syx file.
        output_dir: Directory for the output files (default: next to the input).
    """
    try:
        buffer = read_syx(path)
        count = frame_count(buffer)
        if count < 2:
            return {"error": f"Found {count} message(s); nothing to split"}
        written = write_frames(split_frames(buffer), path, output_dir)
    except (SysExError, OSError) as e:
        return {"error": str(e)}

    return {"count": count, "files": [str(p) for p in written]}


@mcp.tool()
def extract_syx_payload(path: str, output: str) -> dict[str, Any]:
    """Write the payload of a single-message file to another file.

    The payload excludes the F0/F7 delimiters and the manufacturer or
    universal header bytes.

    Args:
        path: Path to a .syx file containing exactly one message.
        output: Path of the payload file to write.
    """
    try:
        written = extract_payload(path, output)
    except (SysExError, OSError) as e:
        return {"error": str(e)}
    return {"output": str(written), "size": Path(written).stat().st_size}


@mcp.tool()
def describe_sections(path: str) -> dict[str, Any]:
    """List the sections (initiator, header, payload, terminator) of a message.

    Args:
        path: Path to a .syx file containing exactly one message.
    """
    try:
        buffer = read_syx(path)
        count = frame_count(buffer)
        if count > 1:
            return {
                "error": f"Found {count} messages; use split_syx_file to separate them"
            }
        sections = message_sections(buffer)
    except (SysExError, OSError) as e:
        return {"error": str(e)}
    return {"sections": [s.to_dict() for s in sections]}


# ─── MANUFACTURER TOOLS ──────────────────────────────────────────────

@mcp.tool()
def lookup_manufacturer(query: str) -> dict[str, Any]:
    """Look up a manufacturer by hex ID (e.g. "41", "00 20 29") or name prefix.

    Args:
        query: Hex ID bytes, or the start of a manufacturer name.
    """
    try:
        manufacturer = ManufacturerId.from_hex(query)
    except SysExError:
        manufacturer = None

    # An unregistered hex ID may be a name prefix instead
    if manufacturer is None or registry.lookup_by_hex_id(manufacturer.hex_id) is None:
        try:
            manufacturer = find_manufacturer(query)
        except SysExError as e:
            if manufacturer is None:
                return {"error": str(e)}

    return {
        "id": str(manufacturer),
        "name": manufacturer.name(),
        "display_name": manufacturer.display_name(),
        "group": manufacturer.group().value,
    }


# ─── CODEC TOOLS ─────────────────────────────────────────────────────

@mcp.tool()
def pack_data(data: str) -> dict[str, Any]:
    """Pack 8-bit data into the 7-bit-clean packed format.

    Args:
        data: Hex bytes to pack.
    """
    try:
        return {"data": _to_hex(pack(_from_hex(data)))}
    except SysExError as e:
        return {"error": str(e)}


@mcp.tool()
def unpack_data(data: str) -> dict[str, Any]:
    """Unpack data in the 7-bit-clean packed format.

    Args:
        data: Hex bytes to unpack.
    """
    try:
        return {"data": _to_hex(unpack(_from_hex(data)))}
    except SysExError as e:
        return {"error": str(e)}


@mcp.tool()
def nybblify_data(data: str, order: str = "high_first") -> dict[str, Any]:
    """Split each byte into two nybble bytes.

    Args:
        data: Hex bytes to split.
        order: "high_first" or "low_first".
    """
    try:
        return {"data": _to_hex(nybblify(_from_hex(data), _nybble_order(order)))}
    except SysExError as e:
        return {"error": str(e)}


@mcp.tool()
def denybblify_data(data: str, order: str = "high_first") -> dict[str, Any]:
    """Join pairs of nybble bytes back into bytes.

    Args:
        data: Hex nybble bytes (even count, each 0-F).
        order: "high_first" or "low_first".
    """
    try:
        return {"data": _to_hex(denybblify(_from_hex(data), _nybble_order(order)))}
    except SysExError as e:
        return {"error": str(e)}


@mcp.tool()
def decode_receivemidi(text: str, output_dir: str | None = None) -> dict[str, Any]:
    """Extract SysEx messages from ReceiveMIDI console output.

    Non-SysEx lines are ignored. If ``output_dir`` is given, each message
    is written to ``capture-001.syx``, ``capture-002.syx``, ...

    Args:
        text: Lines printed by ReceiveMIDI.
        output_dir: Optional directory to write the messages to.
    """
    frames = parse_receivemidi(text)
    result: dict[str, Any] = {"count": len(frames)}
    messages = []
    for frame in frames:
        try:
            messages.append(parse_message(frame).to_dict())
        except SysExError as e:
            messages.append({"error": str(e), "data": _to_hex(frame)})
    result["messages"] = messages

    if output_dir is not None:
        out_dir = Path(output_dir)
        files = []
        try:
            out_dir.mkdir(parents=True, exist_ok=True)
            for i, frame in enumerate(frames, start=1):
                out = out_dir / f"capture-{i:03d}.syx"
                out.write_bytes(frame)
                logger.info("Wrote %s (%d bytes)", out, len(frame))
                files.append(str(out))
        except OSError as e:
            return {"error": str(e)}
        result["files"] = files

    return result


# ─── MCP RESOURCES ───────────────────────────────────────────────────

@mcp.resource("syxpack://manufacturers")
def resource_manufacturers() -> str:
    """Registered manufacturer IDs and names."""
    return json.dumps({
        "manufacturers": [
            {"id": hex_id, "name": name} for hex_id, name in registry.all_entries()
        ]
    })


# ─── ENTRY POINT ─────────────────────────────────────────────────────

def main():
    """Run the MCP server with stdio transport."""
    logging.basicConfig(level=logging.INFO)
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
