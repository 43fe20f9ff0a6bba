"""Unit tests for pinyin index table parsing."""

from __future__ import annotations

from wordlib_pipeline.scel.layout import PINYIN_TABLE_OFFSET
from wordlib_pipeline.scel.pinyin_table import parse_pinyin_table


def test_parse_pinyin_table_stops_at_index_zero_sentinel(scel_builder) -> None:
    buffer = (
        scel_builder.header()
        + scel_builder.pinyin_record(1, "ni")
        + scel_builder.pinyin_record(2, "hao")
        + scel_builder.table_end()
        + scel_builder.pinyin_record(3, "shi")
    )

    table = parse_pinyin_table(buffer)

    assert dict(table.entries) == {1: "ni", 2: "hao"}
    assert table.terminated is True
    # 8 bytes for "ni", 10 for "hao", 4 for the sentinel.
    assert table.end_offset == PINYIN_TABLE_OFFSET + 8 + 10 + 4


def test_parse_pinyin_table_keeps_entries_before_truncated_record(scel_builder) -> None:
    truncated = scel_builder.pinyin_record(3, "zhuang")[:-3]
    buffer = (
        scel_builder.header()
        + scel_builder.pinyin_record(1, "a")
        + scel_builder.pinyin_record(2, "ai")
        + truncated
    )

    table = parse_pinyin_table(buffer)

    assert dict(table.entries) == {1: "a", 2: "ai"}
    assert table.terminated is False
    assert table.end_offset == PINYIN_TABLE_OFFSET + 6 + 8


def test_parse_pinyin_table_stops_when_fewer_than_four_bytes_remain(scel_builder) -> None:
    buffer = scel_builder.header() + scel_builder.pinyin_record(5, "e") + b"\x07\x00"

    table = parse_pinyin_table(buffer)

    assert dict(table.entries) == {5: "e"}
    assert table.terminated is False


def test_parse_pinyin_table_inserts_zero_length_entry(scel_builder) -> None:
    buffer = (
        scel_builder.header()
        + scel_builder.pinyin_record(9, "")
        + scel_builder.pinyin_record(10, "ba")
        + scel_builder.table_end()
    )

    table = parse_pinyin_table(buffer)

    assert table.get(9) == ""
    assert table.get(10) == "ba"


def test_parse_pinyin_table_last_write_wins_for_repeated_index(scel_builder) -> None:
    buffer = (
        scel_builder.header()
        + scel_builder.pinyin_record(4, "bo")
        + scel_builder.pinyin_record(4, "po")
        + scel_builder.table_end()
    )

    table = parse_pinyin_table(buffer)

    assert len(table) == 1
    assert table.get(4) == "po"


def test_parse_pinyin_table_on_header_only_buffer(scel_builder) -> None:
    table = parse_pinyin_table(scel_builder.header())

    assert len(table) == 0
    assert table.terminated is False
    assert table.end_offset == PINYIN_TABLE_OFFSET
