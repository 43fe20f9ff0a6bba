"""Text exporters for converted word lists.

The exporter set is closed: ``EXPORTERS`` maps each CLI format name to its
exporter class.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, Sequence

from wordlib_pipeline.models import CodeKind, Record


class Exporter(Protocol):
    format_name: str
    line_ending: str
    encoding: str

    def export_line(self, record: Record) -> str | None: ...

    def export(self, records: Sequence[Record]) -> str: ...


class _LineExporter:
    """Shared ``export`` for formats with one record per line."""

    line_ending = "\n"
    encoding = "utf-8"

    def export_line(self, record: Record) -> str | None:
        raise NotImplementedError

    def export(self, records: Sequence[Record]) -> str:
        """Serialize records, skipping those the format cannot represent."""

        lines = [line for line in map(self.export_line, records) if line]
        if not lines:
            return ""
        return self.line_ending.join(lines) + self.line_ending


class RimeExporter(_LineExporter):
    """Rime dictionary body: ``word<TAB>code<TAB>rank``.

    Pinyin codes are space-separated syllables; other code kinds use the
    first candidate of the first position.
    """

    format_name = "rime"

    def export_line(self, record: Record) -> str | None:
        if record.code_kind is CodeKind.PINYIN:
            code = record.pinyin_string(" ")
        else:
            defaults = record.code.default_codes()
            code = defaults[0] if defaults else ""
        if not record.word or not code:
            return None
        return f"{record.word}\t{code}\t{record.rank}"


class QQPinyinExporter(_LineExporter):
    """QQ Pinyin text list: ``ni'hao 你好 1000`` with CRLF line endings.

    Only pinyin records with a code are exported. Files are written as UTF-16LE
    without a byte order mark.
    """

    format_name = "qq-pinyin"
    line_ending = "\r\n"
    encoding = "utf-16-le"

    def export_line(self, record: Record) -> str | None:
        if record.code_kind is not CodeKind.PINYIN or not record.word:
            return None
        code = record.pinyin_string("'")
        if not code:
            return None
        return f"{code} {record.word} {record.rank}"


EXPORTERS: dict[str, type[_LineExporter]] = {
    RimeExporter.format_name: RimeExporter,
    QQPinyinExporter.format_name: QQPinyinExporter,
}


def build_exporter(format_name: str) -> Exporter:
    """Instantiate the exporter registered under ``format_name``.

    Raises:
        ValueError: If the format is not supported.
    """

    if format_name not in EXPORTERS:
        raise ValueError(
            f"Unsupported output format '{format_name}'; expected one of "
            f"{', '.join(sorted(EXPORTERS))}"
        )
    return EXPORTERS[format_name]()


def write_text(content: str, output_path: Path, encoding: str = "utf-8") -> None:
    """Write exported content without newline translation.

    Args:
        content: Serialized word list.
        output_path: Destination file path.
        encoding: Target text encoding.
    """

    with output_path.open("w", encoding=encoding, newline="") as handle:
        handle.write(content)
