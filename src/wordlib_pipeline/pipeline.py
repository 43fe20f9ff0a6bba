"""Top-level orchestration for SCEL to text word-list conversion."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from pathlib import Path
from typing import Sequence

from wordlib_pipeline.filters import LengthFilter, RankFilter, apply_filters
from wordlib_pipeline.generate.pinyin import PinyinCodeGenerator
from wordlib_pipeline.models import Record
from wordlib_pipeline.rank import DefaultRankGenerator
from wordlib_pipeline.scel.decoder import DecodeOptions, ScelDecodeResult, decode_scel_file
from wordlib_pipeline.validation import RejectedRecord, partition_records, validate_records

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PipelineResult:
    """Result bundle returned by :func:`run_pipeline`.

    Attributes:
        records: Final records in input-file order.
        sources: Per-file decode results, including diagnostics.
        filtered_out: Number of records removed by length/rank filters.
        rejected: Records dropped because their word cannot be exported.
    """

    records: tuple[Record, ...]
    sources: tuple[ScelDecodeResult, ...]
    filtered_out: int
    rejected: tuple[RejectedRecord, ...] = ()


def run_pipeline(
    scel_paths: Sequence[Path],
    options: DecodeOptions | None = None,
    length_filter: LengthFilter | None = None,
    rank_filter: RankFilter | None = None,
    code_generator: PinyinCodeGenerator | None = None,
    rank_generator: DefaultRankGenerator | None = None,
) -> PipelineResult:
    """Decode SCEL files, post-process records, and validate the result.

    Records whose word is blank or contains tab or line-break characters are
    dropped and reported on ``PipelineResult.rejected``.

    Args:
        scel_paths: Source SCEL files, decoded in order.
        options: Decoder options shared by every file.
        length_filter: Word length filter; defaults to ``LengthFilter()``.
        rank_filter: Rank filter; defaults to ``RankFilter()``.
        code_generator: Optional generator filling records without pinyin.
        rank_generator: Optional generator assigning ranks before filtering.

    Returns:
        ``PipelineResult`` containing records and per-file diagnostics.

    Raises:
        OSError: If a source file cannot be read.
        ScelError: If a source file is not a decodable SCEL dictionary.
        ValueError: If final records carry out-of-range ranks.
    """

    sources = tuple(decode_scel_file(path, options=options) for path in scel_paths)
    decoded = [record for result in sources for record in result.records]
    records, rejected = partition_records(decoded)
    if rejected:
        logger.warning("Dropped %d records with unusable words", len(rejected))

    if code_generator is not None:
        records = code_generator.fill_missing(records)
    if rank_generator is not None:
        records = rank_generator.apply(records)

    filters = [length_filter or LengthFilter(), rank_filter or RankFilter()]
    kept = apply_filters(records, filters)
    validate_records(kept)

    return PipelineResult(
        records=tuple(kept),
        sources=sources,
        filtered_out=len(records) - len(kept),
        rejected=tuple(rejected),
    )
