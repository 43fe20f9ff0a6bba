"""Entry points for reading SCEL cell dictionaries.

Stages run in a fixed order over one in-memory buffer: header validation,
metadata extraction, pinyin table parsing, dictionary section location, and
group decoding. Each call owns its buffer and table; nothing is cached or
shared between calls.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from pathlib import Path

from wordlib_pipeline.models import Record, ScelInfo
from wordlib_pipeline.scel.entries import decode_groups
from wordlib_pipeline.scel.header import validate_header
from wordlib_pipeline.scel.layout import DEFAULT_MAX_ENTRIES
from wordlib_pipeline.scel.locator import HeuristicSectionLocator, SectionLocator
from wordlib_pipeline.scel.metadata import read_info
from wordlib_pipeline.scel.pinyin_table import parse_pinyin_table

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DecodeOptions:
    """Tunable decoder behavior.

    Attributes:
        max_entries: Safety cap on emitted records per file.
        emit_all_variants: Emit one record per homophone variant instead of
            only the first word of each group.
        locator: Strategy used to find the dictionary section.
    """

    max_entries: int = DEFAULT_MAX_ENTRIES
    emit_all_variants: bool = False
    locator: SectionLocator = field(default_factory=HeuristicSectionLocator)


@dataclass(frozen=True)
class ScelDecodeResult:
    """Decoded records of one file with diagnostics for reporting.

    Attributes:
        source: File the buffer was read from, when known.
        info: Header metadata.
        records: Decoded records in file order.
        pinyin_table_size: Number of distinct pinyin table indices.
        dictionary_offset: Absolute offset where group decoding started.
        groups: Number of groups decoded.
        skipped_bytes: Number of one-byte resync steps.
        capped: Whether the safety cap ended decoding.
    """

    source: Path | None
    info: ScelInfo
    records: tuple[Record, ...]
    pinyin_table_size: int
    dictionary_offset: int
    groups: int
    skipped_bytes: int
    capped: bool


def decode_scel(
    buffer: bytes,
    options: DecodeOptions | None = None,
    source: Path | None = None,
) -> ScelDecodeResult:
    """Run the full decode over an in-memory SCEL buffer.

    Args:
        buffer: Complete file contents.
        options: Decoder options; defaults when ``None``.
        source: Optional originating path recorded on the result.

    Returns:
        ``ScelDecodeResult`` with records and diagnostics.

    Raises:
        FormatMismatchError: If the header is missing or foreign.
        BinaryParseError: If the dictionary section cannot be located.
    """

    options = options or DecodeOptions()
    validate_header(buffer)
    info = read_info(buffer)

    table = parse_pinyin_table(buffer)
    dictionary_offset = options.locator.locate(buffer, table)
    logger.debug(
        "Dictionary section at 0x%x (%s locator)", dictionary_offset, options.locator.name
    )

    decoded = decode_groups(
        buffer,
        dictionary_offset,
        table.entries,
        max_entries=options.max_entries,
        emit_all_variants=options.emit_all_variants,
    )
    return ScelDecodeResult(
        source=source,
        info=info,
        records=decoded.records,
        pinyin_table_size=len(table),
        dictionary_offset=dictionary_offset,
        groups=decoded.groups,
        skipped_bytes=decoded.skipped_bytes,
        capped=decoded.capped,
    )


def read_scel_info(path: Path) -> ScelInfo:
    """Read only the header metadata of a SCEL file.

    The pinyin table and dictionary section are never parsed, so this works on
    files whose body is truncated or corrupt.

    Raises:
        OSError: If the file cannot be read.
        FormatMismatchError: If the header is missing or foreign.
    """

    buffer = Path(path).read_bytes()
    validate_header(buffer)
    return read_info(buffer)


def decode_scel_file(path: Path, options: DecodeOptions | None = None) -> ScelDecodeResult:
    """Read a SCEL file from disk and decode it with diagnostics.

    Raises:
        OSError: If the file cannot be read.
        FormatMismatchError: If the header is missing or foreign.
        BinaryParseError: If the dictionary section cannot be located.
    """

    path = Path(path)
    return decode_scel(path.read_bytes(), options=options, source=path)


def import_scel(path: Path, options: DecodeOptions | None = None) -> tuple[Record, ...]:
    """Read a SCEL file and return its records in file order."""

    return decode_scel_file(path, options=options).records
