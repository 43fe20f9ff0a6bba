"""Unit tests for text word-list exporters."""

from __future__ import annotations

from pathlib import Path

import pytest

from wordlib_pipeline.io.text_io import (
    EXPORTERS,
    QQPinyinExporter,
    RimeExporter,
    build_exporter,
    write_text,
)
from wordlib_pipeline.models import Code, CodeKind, Record


def _pinyin(word: str, syllables: list[str], rank: int = 0) -> Record:
    return Record(word, Code.from_char_list(syllables), rank=rank, code_kind=CodeKind.PINYIN)


def test_rime_exporter_writes_tab_separated_lines() -> None:
    records = [_pinyin("你好", ["ni", "hao"], 1000), _pinyin("世界", ["shi", "jie"])]

    assert RimeExporter().export(records) == "你好\tni hao\t1000\n世界\tshi jie\t0\n"


def test_rime_exporter_uses_first_code_for_non_pinyin_and_skips_codeless() -> None:
    records = [
        Record("工", Code.from_alternatives(["aaaa", "a"]), rank=1, code_kind=CodeKind.WUBI86),
        Record("空", code_kind=CodeKind.PINYIN),
    ]

    assert RimeExporter().export(records) == "工\taaaa\t1\n"


def test_qq_pinyin_exporter_uses_apostrophes_and_crlf() -> None:
    records = [
        _pinyin("你好", ["ni", "hao"], 1000),
        Record("工", Code.from_single("aaaa"), code_kind=CodeKind.WUBI86),
        _pinyin("世界", ["shi", "jie"], 2),
    ]

    assert QQPinyinExporter().export(records) == "ni'hao 你好 1000\r\nshi'jie 世界 2\r\n"


def test_exporter_encodings() -> None:
    assert RimeExporter().encoding == "utf-8"
    assert QQPinyinExporter().encoding == "utf-16-le"


def test_write_text_encodes_utf16le_without_bom(tmp_path: Path) -> None:
    output = tmp_path / "qq.txt"

    write_text("ni'hao 你好 1\r\n", output, encoding=QQPinyinExporter.encoding)

    data = output.read_bytes()
    assert data == "ni'hao 你好 1\r\n".encode("utf-16-le")
    assert not data.startswith(b"\xff\xfe")


def test_export_of_nothing_is_empty() -> None:
    assert RimeExporter().export([]) == ""


def test_build_exporter_covers_registry_and_rejects_unknown() -> None:
    assert sorted(EXPORTERS) == ["qq-pinyin", "rime"]
    assert isinstance(build_exporter("rime"), RimeExporter)
    with pytest.raises(ValueError, match="Unsupported output format"):
        build_exporter("baidu")


def test_write_text_preserves_crlf(tmp_path: Path) -> None:
    output = tmp_path / "out.txt"

    write_text("ni'hao 你好 1\r\n", output)

    assert output.read_bytes() == "ni'hao 你好 1\r\n".encode("utf-8")
