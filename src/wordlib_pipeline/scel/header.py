"""Header gate run before any fixed-offset arithmetic is trusted."""

from __future__ import annotations

from wordlib_pipeline.errors import FormatMismatchError
from wordlib_pipeline.scel.layout import SCEL_HEADER_SIZE, SCEL_MAGIC


def validate_header(buffer: bytes) -> None:
    """Confirm the buffer holds a complete SCEL header.

    Args:
        buffer: Complete file contents.

    Raises:
        FormatMismatchError: If the buffer is shorter than the header region or
            the 12-byte magic signature does not match.
    """

    if len(buffer) < SCEL_HEADER_SIZE:
        raise FormatMismatchError(
            f"File too small to be a SCEL dictionary: {len(buffer)} bytes, "
            f"expected at least {SCEL_HEADER_SIZE}"
        )
    signature = bytes(buffer[: len(SCEL_MAGIC)])
    if signature != SCEL_MAGIC:
        raise FormatMismatchError(
            f"Invalid SCEL magic number: expected {SCEL_MAGIC.hex(' ')}, got {signature.hex(' ')}"
        )
