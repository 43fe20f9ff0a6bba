"""Strategies for finding where the SCEL dictionary section begins.

The container never stores this offset, so it has to be inferred. Each
strategy is a standalone object with a ``locate`` method; the entry decoder
only receives the resulting offset and never depends on which strategy ran.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
import re
from typing import Protocol

from wordlib_pipeline.errors import BinaryParseError
from wordlib_pipeline.scel.layout import PINYIN_TABLE_OFFSET
from wordlib_pipeline.scel.pinyin_table import PinyinTable

logger = logging.getLogger(__name__)

# A plausible first group header: two zero bytes, then a small nonzero u16.
GROUP_START_RE = re.compile(rb"\x00\x00[\x01-\xff]\x00")


class SectionLocator(Protocol):
    """Callable strategy returning the absolute dictionary section offset."""

    name: str

    def locate(self, buffer: bytes, table: PinyinTable) -> int:
        """Return the section offset or raise ``BinaryParseError``."""
        ...


@dataclass(frozen=True)
class HeuristicSectionLocator:
    """Byte scan for the first ``00 00 nz 00`` window after the table start.

    The scan deliberately ignores the table parser's cursor. It can misfire
    when pinyin-table text happens to contain the pattern; the entry decoder's
    resync policy absorbs small misalignments.
    """

    start: int = PINYIN_TABLE_OFFSET
    name: str = field(default="heuristic", init=False)

    def locate(self, buffer: bytes, table: PinyinTable) -> int:
        match = GROUP_START_RE.search(buffer, self.start)
        if match is None:
            raise BinaryParseError(
                f"Could not find dictionary start after offset 0x{self.start:x}"
            )
        return match.start()


@dataclass(frozen=True)
class TableEndSectionLocator:
    """Use the offset right after the pinyin table's sentinel record."""

    name: str = field(default="table-end", init=False)

    def locate(self, buffer: bytes, table: PinyinTable) -> int:
        if not table.terminated:
            raise BinaryParseError("Pinyin table has no end sentinel; section start unknown")
        if table.end_offset >= len(buffer):
            raise BinaryParseError(
                f"Pinyin table ends at 0x{table.end_offset:x}, past end of buffer"
            )
        return table.end_offset


@dataclass(frozen=True)
class CrossCheckingSectionLocator:
    """Heuristic scan with the table-end cursor as fallback and cross-check.

    When both strategies produce an offset and they disagree, the heuristic
    result is kept and the mismatch is logged.
    """

    primary: HeuristicSectionLocator = field(default_factory=HeuristicSectionLocator)
    fallback: TableEndSectionLocator = field(default_factory=TableEndSectionLocator)
    name: str = field(default="cross-check", init=False)

    def locate(self, buffer: bytes, table: PinyinTable) -> int:
        try:
            candidate = self.fallback.locate(buffer, table)
        except BinaryParseError:
            candidate = None

        try:
            offset = self.primary.locate(buffer, table)
        except BinaryParseError:
            if candidate is None:
                raise
            logger.warning(
                "Heuristic scan found no dictionary start; using table end 0x%x", candidate
            )
            return candidate

        if candidate is not None and candidate != offset:
            logger.warning(
                "Dictionary start mismatch: heuristic 0x%x, table end 0x%x", offset, candidate
            )
        return offset


LOCATORS: dict[str, type] = {
    "heuristic": HeuristicSectionLocator,
    "table-end": TableEndSectionLocator,
    "cross-check": CrossCheckingSectionLocator,
}


def build_locator(name: str) -> SectionLocator:
    """Instantiate a locator by its CLI name.

    Raises:
        ValueError: If ``name`` is not a known strategy.
    """

    try:
        locator_cls = LOCATORS[name]
    except KeyError:
        raise ValueError(
            f"Unknown section locator '{name}'; expected one of {', '.join(sorted(LOCATORS))}"
        ) from None
    return locator_cls()
