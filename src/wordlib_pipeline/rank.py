"""Rank (word frequency) generation for records without a frequency."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable

from wordlib_pipeline.models import Record


@dataclass(frozen=True)
class DefaultRankGenerator:
    """Assign a constant rank to records.

    Only records with rank ``0`` are updated unless ``force`` is set.
    """

    default_rank: int = 100
    force: bool = False

    def generate(self, record: Record) -> Record:
        if record.rank != 0 and not self.force:
            return record
        return replace(record, rank=self.default_rank)

    def apply(self, records: Iterable[Record]) -> list[Record]:
        return [self.generate(record) for record in records]
