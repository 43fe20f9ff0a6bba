"""Parser for the pinyin index table that follows the SCEL header.

The table is a run of ``(index: u16, length: u16, length * 2 bytes UTF-16LE)``
records. It has no declared size; parsing ends on an index-0 sentinel record
or when the buffer cannot hold another complete record.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Mapping

from wordlib_pipeline.scel.binary import decode_utf16le
from wordlib_pipeline.scel.layout import PINYIN_RECORD_HEADER_SIZE, PINYIN_TABLE_OFFSET

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PinyinTable:
    """Index -> pinyin mapping scoped to a single decode call.

    Attributes:
        entries: Parsed table; a repeated index keeps the last value read.
        end_offset: Absolute offset right after the last record consumed,
            including the sentinel record when one was found.
        terminated: Whether parsing stopped on the index-0 sentinel rather than
            on truncation.
    """

    entries: Mapping[int, str]
    end_offset: int
    terminated: bool

    def __len__(self) -> int:
        return len(self.entries)

    def get(self, index: int) -> str | None:
        """Return the pinyin string for ``index`` or ``None`` when unknown."""

        return self.entries.get(index)


def parse_pinyin_table(buffer: bytes, start: int = PINYIN_TABLE_OFFSET) -> PinyinTable:
    """Decode the pinyin index table starting at ``start``.

    Truncation is treated as a recoverable end of table: entries decoded before
    the incomplete record are kept and no error is raised.

    Args:
        buffer: Validated file contents.
        start: Absolute offset of the first table record.

    Returns:
        Parsed ``PinyinTable``.
    """

    entries: dict[int, str] = {}
    offset = start
    terminated = False

    while offset + PINYIN_RECORD_HEADER_SIZE <= len(buffer):
        index = int.from_bytes(buffer[offset : offset + 2], "little")
        length = int.from_bytes(buffer[offset + 2 : offset + 4], "little")
        record_end = offset + PINYIN_RECORD_HEADER_SIZE + length * 2

        if index == 0:
            terminated = True
            offset = record_end
            break
        if record_end > len(buffer):
            logger.debug(
                "Pinyin table record at 0x%x needs %d bytes past end of buffer",
                offset,
                record_end - len(buffer),
            )
            break

        entries[index] = decode_utf16le(buffer[offset + PINYIN_RECORD_HEADER_SIZE : record_end])
        offset = record_end

    logger.debug(
        "Parsed %d pinyin table entries ending at 0x%x (sentinel=%s)",
        len(entries),
        offset,
        terminated,
    )
    return PinyinTable(entries=entries, end_offset=offset, terminated=terminated)
