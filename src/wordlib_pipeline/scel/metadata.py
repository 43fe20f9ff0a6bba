"""Reader for the descriptive strings stored in the SCEL header."""

from __future__ import annotations

from wordlib_pipeline.models import ScelInfo
from wordlib_pipeline.scel.binary import decode_utf16le_string, read_u32le
from wordlib_pipeline.scel.layout import (
    CATEGORY_RANGE,
    DESCRIPTION_RANGE,
    EXAMPLE_RANGE,
    NAME_RANGE,
    WORD_COUNT_OFFSET,
)


def _field(buffer: bytes, bounds: tuple[int, int]) -> str:
    start, end = bounds
    return decode_utf16le_string(buffer[start:end])


def read_info(buffer: bytes) -> ScelInfo:
    """Extract the metadata snapshot from a validated buffer.

    The reader only touches the header region, so it works even when the
    pinyin table or dictionary section is missing or corrupt.

    Args:
        buffer: File contents that already passed ``validate_header``.

    Returns:
        ``ScelInfo`` with best-effort decoded strings and the declared count.
    """

    return ScelInfo(
        name=_field(buffer, NAME_RANGE),
        category=_field(buffer, CATEGORY_RANGE),
        description=_field(buffer, DESCRIPTION_RANGE),
        example=_field(buffer, EXAMPLE_RANGE),
        word_count=read_u32le(buffer, WORD_COUNT_OFFSET) or 0,
    )
