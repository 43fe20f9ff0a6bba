"""Decoder for the homophone-group records of the SCEL dictionary section.

Each group is laid out as::

    same_pinyin_count: u16
    pinyin_len:        u16
    pinyin_len x index: u16
    same_pinyin_count x (word_len: u16, word_len * 2 bytes UTF-16LE,
                         ext_len: u16, ext_len * 2 bytes extension data)

Decoding is a small state machine. ``decode_group`` inspects one position and
reports ``CONTINUE`` (a group was decoded) or ``SKIP_AND_RETRY`` (the bytes are
malformed; try again one byte later). ``decode_groups`` drives the loop and
reports ``ABORT`` once the safety cap is reached. No exceptions are used for
control flow, so every policy can be tested on raw byte strings.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import logging
from typing import Mapping

from wordlib_pipeline.models import Code, CodeKind, Record
from wordlib_pipeline.scel.binary import decode_utf16le, read_u16le
from wordlib_pipeline.scel.layout import DEFAULT_MAX_ENTRIES, GROUP_HEADER_SIZE

logger = logging.getLogger(__name__)


class StepOutcome(Enum):
    """Result of one decoder step."""

    CONTINUE = "continue"
    SKIP_AND_RETRY = "skip_and_retry"
    ABORT = "abort"


@dataclass(frozen=True)
class HomophoneGroup:
    """Words sharing one pronunciation, as stored in the file.

    Attributes:
        pinyin: Syllables whose indices resolved in the pinyin table; indices
            without a table entry are dropped.
        words: Every word variant in file order.
    """

    pinyin: tuple[str, ...]
    words: tuple[str, ...]


@dataclass(frozen=True)
class GroupStep:
    """Outcome of decoding at one offset."""

    outcome: StepOutcome
    next_offset: int
    group: HomophoneGroup | None = None
    reason: str = ""


@dataclass(frozen=True)
class GroupDecodeResult:
    """Records recovered from a dictionary section plus recovery counters.

    Attributes:
        records: Emitted records in file order.
        groups: Number of groups decoded successfully.
        skipped_bytes: Number of one-byte resync steps taken.
        capped: Whether decoding stopped on the safety cap.
    """

    records: tuple[Record, ...]
    groups: int
    skipped_bytes: int
    capped: bool


def _skip(offset: int, reason: str) -> GroupStep:
    return GroupStep(StepOutcome.SKIP_AND_RETRY, offset + 1, reason=reason)


def decode_group(buffer: bytes, offset: int, table: Mapping[int, str]) -> GroupStep:
    """Decode one homophone group starting at ``offset``.

    A group is malformed when any field would read past the buffer, when it
    declares no word variants, or when a word has zero length.

    Args:
        buffer: Buffer holding the dictionary section.
        offset: Absolute offset of the candidate group header.
        table: Pinyin index table of the same file.

    Returns:
        ``CONTINUE`` with the group and the offset after it, or
        ``SKIP_AND_RETRY`` with ``offset + 1``.
    """

    same_pinyin_count = read_u16le(buffer, offset)
    pinyin_len = read_u16le(buffer, offset + 2)
    if same_pinyin_count is None or pinyin_len is None:
        return _skip(offset, "truncated group header")
    if same_pinyin_count == 0:
        return _skip(offset, "group declares no words")

    cursor = offset + GROUP_HEADER_SIZE
    indices_end = cursor + pinyin_len * 2
    if indices_end > len(buffer):
        return _skip(offset, "pinyin indices past end of buffer")

    pinyin: list[str] = []
    for pos in range(cursor, indices_end, 2):
        syllable = table.get(int.from_bytes(buffer[pos : pos + 2], "little"))
        if syllable is not None:
            pinyin.append(syllable)
    cursor = indices_end

    words: list[str] = []
    for _ in range(same_pinyin_count):
        word_len = read_u16le(buffer, cursor)
        if word_len is None:
            return _skip(offset, "truncated word length")
        if word_len == 0:
            return _skip(offset, "zero-length word")
        word_end = cursor + 2 + word_len * 2
        ext_len = read_u16le(buffer, word_end)
        if ext_len is None:
            return _skip(offset, "word text past end of buffer")
        ext_end = word_end + 2 + ext_len * 2
        if ext_end > len(buffer):
            return _skip(offset, "extension data past end of buffer")
        words.append(decode_utf16le(buffer[cursor + 2 : word_end]))
        cursor = ext_end

    return GroupStep(
        StepOutcome.CONTINUE,
        cursor,
        group=HomophoneGroup(pinyin=tuple(pinyin), words=tuple(words)),
    )


def group_to_records(group: HomophoneGroup, emit_all_variants: bool = False) -> list[Record]:
    """Convert a decoded group into pinyin records.

    By default only the first word variant is kept, matching the established
    converter output; ``emit_all_variants`` yields one record per variant.
    """

    code = Code.from_char_list(group.pinyin)
    words = group.words if emit_all_variants else group.words[:1]
    return [Record(word=word, code=code, code_kind=CodeKind.PINYIN) for word in words]


def decode_groups(
    buffer: bytes,
    start: int,
    table: Mapping[int, str],
    max_entries: int = DEFAULT_MAX_ENTRIES,
    emit_all_variants: bool = False,
) -> GroupDecodeResult:
    """Decode every recoverable group from ``start`` to the end of ``buffer``.

    Every step advances the cursor by at least one byte, so the loop always
    terminates; the number of emitted records never exceeds ``max_entries``.

    Args:
        buffer: Buffer holding the dictionary section.
        start: Absolute offset of the first group.
        table: Pinyin index table of the same file.
        max_entries: Safety cap on emitted records.
        emit_all_variants: Emit every homophone variant instead of the first.

    Returns:
        ``GroupDecodeResult`` with records and recovery counters.
    """

    records: list[Record] = []
    groups = 0
    skipped = 0
    offset = start
    outcome = StepOutcome.CONTINUE

    while offset + GROUP_HEADER_SIZE <= len(buffer) and outcome is not StepOutcome.ABORT:
        if len(records) >= max_entries:
            outcome = StepOutcome.ABORT
            continue

        step = decode_group(buffer, offset, table)
        offset = step.next_offset
        if step.group is None:
            skipped += 1
            continue

        groups += 1
        emitted = group_to_records(step.group, emit_all_variants=emit_all_variants)
        budget = max_entries - len(records)
        records.extend(emitted[:budget])
        if len(emitted) > budget:
            outcome = StepOutcome.ABORT

    capped = outcome is StepOutcome.ABORT
    if capped:
        logger.warning("Stopped after %d entries (safety cap) at offset 0x%x", len(records), offset)
    logger.debug("Decoded %d groups, resynced over %d bytes", groups, skipped)

    return GroupDecodeResult(
        records=tuple(records),
        groups=groups,
        skipped_bytes=skipped,
        capped=capped,
    )
