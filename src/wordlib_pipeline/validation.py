"""Validation helpers and summary counters for converted records."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Iterable, Sequence

from wordlib_pipeline.models import Record

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1


@dataclass(frozen=True)
class RejectedRecord:
    """A record dropped before export, with the reason it was dropped."""

    record: Record
    reason: str


def word_problem(word: str) -> str | None:
    """Return why ``word`` cannot be exported, or ``None`` when it can."""

    if not word.strip():
        return "empty word"
    if any(ch in word for ch in "\t\r\n"):
        return "word contains control separator"
    return None


def partition_records(records: Iterable[Record]) -> tuple[list[Record], list[RejectedRecord]]:
    """Split records into exportable ones and ones with unusable words.

    Blank words and words containing tab or line-break characters cannot be
    written to line-based word lists. Such records are dropped and returned
    separately instead of failing the run.

    Args:
        records: Records in input order.

    Returns:
        Tuple of kept records and rejected records, both in input order.
    """

    kept: list[Record] = []
    rejected: list[RejectedRecord] = []
    for record in records:
        problem = word_problem(record.word)
        if problem is None:
            kept.append(record)
        else:
            rejected.append(RejectedRecord(record, problem))
    return kept, rejected


def validate_records(records: Sequence[Record]) -> None:
    """Validate records before export.

    Args:
        records: Records to validate.

    Raises:
        ValueError: If any record has a rank outside signed 32-bit bounds.
    """

    errors: list[str] = []
    for idx, record in enumerate(records, start=1):
        if not INT32_MIN <= record.rank <= INT32_MAX:
            errors.append(f"Record {idx}: rank {record.rank} outside 32-bit range")

    if errors:
        preview = "\n".join(f"- {item}" for item in errors[:25])
        rest = len(errors) - min(25, len(errors))
        more = f"\n- ... and {rest} more" if rest > 0 else ""
        raise ValueError(f"Record validation failed with {len(errors)} errors:\n{preview}{more}")


def collect_length_counts(records: Sequence[Record]) -> dict[int, int]:
    """Count records by word length in characters.

    Args:
        records: Records to summarize.

    Returns:
        Dictionary of character count to record count.
    """

    counter: Counter[int] = Counter()
    for record in records:
        counter[record.char_count] += 1
    return dict(counter)


def collect_code_kind_counts(records: Sequence[Record]) -> dict[str, int]:
    """Count records by code kind value (``pinyin``, ``wubi86``, ...)."""

    counter: Counter[str] = Counter()
    for record in records:
        counter[record.code_kind.value] += 1
    return dict(counter)


def count_records_without_code(records: Sequence[Record]) -> int:
    """Return how many records have an empty code."""

    return sum(1 for record in records if not record.has_code)
