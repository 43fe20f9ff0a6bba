"""CLI entrypoint for converting SCEL cell dictionaries to text word lists."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Sequence

from wordlib_pipeline.filters import INT32_MAX, LengthFilter, RankFilter
from wordlib_pipeline.generate.pinyin import PinyinCodeGenerator
from wordlib_pipeline.io.text_io import EXPORTERS, build_exporter, write_text
from wordlib_pipeline.pipeline import run_pipeline
from wordlib_pipeline.rank import DefaultRankGenerator
from wordlib_pipeline.reporting.report_md import build_report_md
from wordlib_pipeline.scel.decoder import DecodeOptions, read_scel_info
from wordlib_pipeline.scel.layout import DEFAULT_MAX_ENTRIES
from wordlib_pipeline.scel.locator import LOCATORS, build_locator
from wordlib_pipeline.validation import collect_length_counts


def _format_table(headers: Sequence[str], data_rows: Sequence[Sequence[str]]) -> str:
    """Format rows as an ASCII table for terminal output.

    Args:
        headers: Table headers.
        data_rows: Row values.

    Returns:
        Monospace table string.
    """

    widths = [len(header) for header in headers]
    for row in data_rows:
        for idx, value in enumerate(row):
            widths[idx] = max(widths[idx], len(value))

    header_line = " | ".join(header.ljust(widths[idx]) for idx, header in enumerate(headers))
    separator_line = "-+-".join("-" * width for width in widths)
    body_lines = [
        " | ".join(value.ljust(widths[idx]) for idx, value in enumerate(row)) for row in data_rows
    ]
    return "\n".join([header_line, separator_line, *body_lines])


def build_arg_parser() -> argparse.ArgumentParser:
    """Construct CLI argument parser.

    Returns:
        Configured parser for the conversion command.
    """

    parser = argparse.ArgumentParser(
        description="Convert Sogou SCEL cell dictionaries into IME text word lists."
    )
    parser.add_argument(
        "--scel", required=True, nargs="+", type=Path, help="One or more source .scel files."
    )
    parser.add_argument("--output", type=Path, default=None, help="Destination word-list path.")
    parser.add_argument(
        "--format",
        choices=sorted(EXPORTERS),
        default="rime",
        help="Output word-list format (default: rime).",
    )
    parser.add_argument(
        "--report",
        type=Path,
        default=None,
        help="Markdown report output path (default: report.md next to output).",
    )
    parser.add_argument(
        "--info",
        action="store_true",
        help="Print dictionary metadata only; do not decode entries.",
    )
    parser.add_argument("--min-length", type=int, default=1, help="Minimum word length.")
    # Matches the converter CLI default; LengthFilter itself defaults to 9999.
    parser.add_argument("--max-length", type=int, default=100, help="Maximum word length.")
    parser.add_argument("--min-rank", type=int, default=0, help="Minimum rank.")
    parser.add_argument("--max-rank", type=int, default=INT32_MAX, help="Maximum rank.")
    parser.add_argument(
        "--all-variants",
        action="store_true",
        help="Emit every homophone variant instead of only the first word of each group.",
    )
    parser.add_argument(
        "--max-entries",
        type=int,
        default=DEFAULT_MAX_ENTRIES,
        help=f"Safety cap on decoded entries per file (default: {DEFAULT_MAX_ENTRIES}).",
    )
    parser.add_argument(
        "--locator",
        choices=sorted(LOCATORS),
        default="heuristic",
        help="Strategy for finding the dictionary section (default: heuristic).",
    )
    parser.add_argument(
        "--generate-codes",
        action="store_true",
        help="Generate pinyin for records whose code could not be decoded.",
    )
    parser.add_argument(
        "--default-rank",
        type=int,
        default=None,
        help="Assign this rank to records without one.",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    return parser


def _print_info(paths: Sequence[Path]) -> None:
    """Print header metadata of each SCEL file as a table."""

    infos = [(path, read_scel_info(path)) for path in paths]
    rows = [[str(path), info.name, info.category, str(info.word_count)] for path, info in infos]
    print(_format_table(["file", "name", "category", "word_count"], rows))
    for path, info in infos:
        if info.description:
            print(f"\n{path} description:\n{info.description}")
        if info.example:
            print(f"\n{path} example:\n{info.example}")


def main(argv: Sequence[str] | None = None) -> int:
    """Run CLI workflow from arguments through artifact generation.

    Returns:
        Zero exit status on success.
    """

    parser = build_arg_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    for path in args.scel:
        if not path.exists():
            raise SystemExit(f"SCEL file not found: {path}")

    if args.info:
        _print_info(args.scel)
        return 0

    if args.output is None:
        parser.error("--output is required unless --info is given")

    report_path = args.report if args.report is not None else args.output.parent / "report.md"

    result = run_pipeline(
        scel_paths=args.scel,
        options=DecodeOptions(
            max_entries=args.max_entries,
            emit_all_variants=args.all_variants,
            locator=build_locator(args.locator),
        ),
        length_filter=LengthFilter(args.min_length, args.max_length),
        rank_filter=RankFilter(args.min_rank, args.max_rank),
        code_generator=PinyinCodeGenerator() if args.generate_codes else None,
        rank_generator=(
            DefaultRankGenerator(args.default_rank) if args.default_rank is not None else None
        ),
    )

    exporter = build_exporter(args.format)
    write_text(exporter.export(result.records), args.output, encoding=exporter.encoding)
    report = build_report_md(result.records, result.sources, result.rejected)
    report_path.write_text(report, encoding="utf-8")

    print(f"Wrote {len(result.records)} records to {args.output}")
    print(f"Wrote report to {report_path}")
    if result.filtered_out:
        print(f"Filtered out {result.filtered_out} records by length/rank.")
    if result.rejected:
        print(f"Rejected {len(result.rejected)} records with unusable words.")
    for source in result.sources:
        if source.capped:
            print(f"WARNING: {source.source} stopped at the {args.max_entries}-entry safety cap.")

    length_counts = collect_length_counts(result.records)
    length_rows = [[str(length), str(length_counts[length])] for length in sorted(length_counts)]
    if length_rows:
        print("\nRecords by word length:")
        print(_format_table(["length", "word_count"], length_rows))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
