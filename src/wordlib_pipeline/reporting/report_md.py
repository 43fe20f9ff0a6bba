"""Markdown report generation for conversion run summaries."""

from __future__ import annotations

from typing import Iterable, Sequence

from wordlib_pipeline.models import Record
from wordlib_pipeline.scel.decoder import ScelDecodeResult
from wordlib_pipeline.validation import (
    RejectedRecord,
    collect_code_kind_counts,
    collect_length_counts,
    count_records_without_code,
)


def _cell(value: str) -> str:
    """Escape a value for use inside a markdown table cell."""

    return value.replace("|", "\\|").replace("\r", " ").replace("\n", " ")


def _markdown_table(headers: Sequence[str], rows: Iterable[Sequence[str]]) -> str:
    """Render a deterministic GitHub-flavored markdown table.

    Args:
        headers: Table header labels.
        rows: Table body rows as string sequences.

    Returns:
        Markdown table text.
    """

    line_header = "| " + " | ".join(headers) + " |"
    line_sep = "| " + " | ".join("---" for _ in headers) + " |"
    body = ["| " + " | ".join(_cell(value) for value in row) + " |" for row in rows]
    return "\n".join([line_header, line_sep, *body])


def build_report_md(
    records: Sequence[Record],
    sources: Sequence[ScelDecodeResult],
    rejected: Sequence[RejectedRecord] = (),
) -> str:
    """Build the conversion markdown report for one pipeline run.

    Args:
        records: Final records after generation and filtering.
        sources: Per-file decode results in input order.
        rejected: Records dropped because their word cannot be exported.

    Returns:
        Full markdown content with summary tables.
    """

    source_rows = [
        (
            str(result.source) if result.source is not None else "-",
            result.info.name,
            result.info.category,
            str(result.info.word_count),
            str(len(result.records)),
        )
        for result in sources
    ]

    diagnostic_rows = [
        (
            str(result.source) if result.source is not None else "-",
            str(result.pinyin_table_size),
            f"0x{result.dictionary_offset:x}",
            str(result.groups),
            str(result.skipped_bytes),
            "yes" if result.capped else "no",
        )
        for result in sources
    ]

    length_counts = collect_length_counts(records)
    length_rows = [(str(length), str(length_counts[length])) for length in sorted(length_counts)]

    rejected_rows = [(repr(item.record.word), item.reason) for item in rejected]

    kind_counts = collect_code_kind_counts(records)
    kind_rows = [
        (kind, str(kind_counts[kind]))
        for kind in sorted(kind_counts, key=lambda item: (-kind_counts[item], item))
    ]

    sections = [
        "# Conversion Report",
        "",
        f"Records written: {len(records)}",
        f"Records without code: {count_records_without_code(records)}",
        f"Records rejected: {len(rejected)}",
        "",
        "## Source dictionaries",
        _markdown_table(
            ["file", "name", "category", "declared_words", "decoded_records"], source_rows
        ),
        "",
        "## Decode diagnostics",
        _markdown_table(
            [
                "file",
                "pinyin_table_size",
                "dictionary_offset",
                "groups",
                "skipped_bytes",
                "capped",
            ],
            diagnostic_rows,
        ),
        "",
        "## Words per length",
        _markdown_table(["length", "word_count"], length_rows),
        "",
        "## Code kinds",
        _markdown_table(["code_kind", "count"], kind_rows),
        "",
        "## Rejected words",
        _markdown_table(["word", "reason"], rejected_rows),
    ]

    return "\n".join(sections) + "\n"
