"""Record filters applied between import and export."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Protocol, Sequence

from wordlib_pipeline.models import Record

INT32_MAX = 2**31 - 1


class RecordFilter(Protocol):
    def is_keep(self, record: Record) -> bool: ...


@dataclass(frozen=True)
class LengthFilter:
    """Keep records whose word length lies within an inclusive range."""

    min_length: int = 1
    max_length: int = 9999

    def is_keep(self, record: Record) -> bool:
        return self.min_length <= record.char_count <= self.max_length


@dataclass(frozen=True)
class RankFilter:
    """Keep records whose rank lies within an inclusive range."""

    min_rank: int = 0
    max_rank: int = INT32_MAX

    def is_keep(self, record: Record) -> bool:
        return self.min_rank <= record.rank <= self.max_rank


def apply_filters(records: Iterable[Record], filters: Sequence[RecordFilter]) -> list[Record]:
    """Return records accepted by every filter, preserving order.

    Args:
        records: Candidate records.
        filters: Filters that must all accept a record.

    Returns:
        Kept records.
    """

    return [record for record in records if all(f.is_keep(record) for f in filters)]
