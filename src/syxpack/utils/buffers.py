"""Coercion of caller-supplied byte sequences."""

from __future__ import annotations


def as_bytes(data) -> bytes:
    """Return ``data`` as ``bytes``.

    Accepts ``bytes``, ``bytearray``, ``memoryview`` and iterables of ints.

    Raises:
        TypeError: If ``data`` is an int, which ``bytes()`` would turn
            into that many zero bytes.
    """
    if isinstance(data, int):
        raise TypeError(f"Expected a byte sequence, got int {data}")
    return bytes(data)
