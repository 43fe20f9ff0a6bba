"""Bounds-checked little-endian readers over an in-memory file buffer.

Readers return ``None`` instead of raising when a field would run past the
end of the buffer, so callers decide between stopping, skipping, or failing.
"""

from __future__ import annotations


def read_u16le(buf: bytes, off: int) -> int | None:
    """Read a little-endian u16 at byte offset ``off``."""

    if off < 0 or off + 2 > len(buf):
        return None
    return int.from_bytes(buf[off : off + 2], "little")


def read_u32le(buf: bytes, off: int) -> int | None:
    """Read a little-endian u32 at byte offset ``off``."""

    if off < 0 or off + 4 > len(buf):
        return None
    return int.from_bytes(buf[off : off + 4], "little")


def decode_utf16le(data: bytes) -> str:
    """Decode UTF-16LE text permissively.

    Invalid sequences (lone surrogates, a dangling odd byte) become U+FFFD.
    """

    return data.decode("utf-16-le", errors="replace")


def decode_utf16le_string(data: bytes) -> str:
    """Decode a zero-terminated UTF-16LE string from a fixed-size field.

    Decoding stops at the first zero code unit or at the end of ``data``; a
    trailing odd byte is ignored. The function never raises on malformed
    text.

    Args:
        data: Raw field bytes.

    Returns:
        Best-effort decoded string without the terminator.
    """

    end = len(data) - len(data) % 2
    for pos in range(0, end, 2):
        if data[pos] == 0 and data[pos + 1] == 0:
            end = pos
            break
    return decode_utf16le(data[:end])
