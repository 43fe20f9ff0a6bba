"""Unit tests for homophone-group decoding and the resync/cap policies."""

from __future__ import annotations

from wordlib_pipeline.models import CodeKind
from wordlib_pipeline.scel.entries import (
    HomophoneGroup,
    StepOutcome,
    decode_group,
    decode_groups,
    group_to_records,
)
from wordlib_pipeline.scel.layout import DEFAULT_MAX_ENTRIES

TABLE = {1: "ni", 2: "hao", 3: "shi", 4: "jie"}


def test_decode_group_reads_all_variants_and_skips_extension(scel_builder) -> None:
    data = scel_builder.group([3, 4], ["世界", "视界"], ext=b"\x0a\x00" + b"\x00" * 8)

    step = decode_group(data, 0, TABLE)

    assert step.outcome is StepOutcome.CONTINUE
    assert step.next_offset == len(data)
    assert step.group == HomophoneGroup(pinyin=("shi", "jie"), words=("世界", "视界"))


def test_decode_group_drops_unknown_pinyin_indices(scel_builder) -> None:
    data = scel_builder.group([1, 99, 2], ["你好"])

    step = decode_group(data, 0, TABLE)

    assert step.outcome is StepOutcome.CONTINUE
    assert step.group is not None
    assert step.group.pinyin == ("ni", "hao")


def test_decode_group_skips_when_word_runs_past_buffer(scel_builder) -> None:
    data = scel_builder.group([1, 2], ["你好"])[:-3]

    step = decode_group(data, 0, TABLE)

    assert step.outcome is StepOutcome.SKIP_AND_RETRY
    assert step.next_offset == 1
    assert step.group is None


def test_decode_group_skips_group_without_words() -> None:
    data = b"\x00\x00\x01\x00\x01\x00"

    step = decode_group(data, 0, TABLE)

    assert step.outcome is StepOutcome.SKIP_AND_RETRY
    assert step.reason == "group declares no words"


def test_decode_group_skips_huge_declared_counts() -> None:
    data = b"\xff\xff\xff\xff" + b"\x01\x00" * 8

    assert decode_group(data, 0, TABLE).outcome is StepOutcome.SKIP_AND_RETRY


def test_decode_groups_resyncs_past_leading_garbage(scel_builder) -> None:
    data = b"\xee" + scel_builder.group([1], ["你"]) + scel_builder.group([2], ["好"])

    result = decode_groups(data, 0, TABLE)

    assert [record.word for record in result.records] == ["你", "好"]
    assert result.skipped_bytes == 1
    assert result.groups == 2
    assert result.capped is False


def test_decode_groups_terminates_on_fully_malformed_buffer() -> None:
    data = b"\xff" * 257

    result = decode_groups(data, 0, TABLE)

    assert result.records == ()
    assert result.groups == 0
    # One resync per start position that still holds a 4-byte group header.
    assert result.skipped_bytes == len(data) - 3


def test_decode_groups_never_exceeds_cap(scel_builder) -> None:
    data = b"".join(scel_builder.group([1], [f"词{idx}"]) for idx in range(10))

    result = decode_groups(data, 0, TABLE, max_entries=4)

    assert len(result.records) == 4
    assert result.capped is True


def test_decode_groups_cap_applies_to_emitted_variants(scel_builder) -> None:
    data = scel_builder.group([1], ["甲", "乙", "丙"]) + scel_builder.group([2], ["丁"])

    result = decode_groups(data, 0, TABLE, max_entries=2, emit_all_variants=True)

    assert [record.word for record in result.records] == ["甲", "乙"]
    assert result.capped is True


def test_decode_groups_marks_capped_when_last_group_is_cut(scel_builder) -> None:
    data = scel_builder.group([1], ["甲", "乙", "丙"])

    result = decode_groups(data, 0, TABLE, max_entries=2, emit_all_variants=True)

    assert [record.word for record in result.records] == ["甲", "乙"]
    assert result.capped is True


def test_decode_groups_exact_fit_is_not_capped(scel_builder) -> None:
    data = scel_builder.group([1], ["甲", "乙", "丙"])

    result = decode_groups(data, 0, TABLE, max_entries=3, emit_all_variants=True)

    assert len(result.records) == 3
    assert result.capped is False


def test_default_cap_is_one_hundred_thousand() -> None:
    assert DEFAULT_MAX_ENTRIES == 100_000


def test_group_to_records_keeps_first_variant_by_default() -> None:
    group = HomophoneGroup(pinyin=("shi", "jie"), words=("世界", "视界"))

    default = group_to_records(group)
    every = group_to_records(group, emit_all_variants=True)

    assert [record.word for record in default] == ["世界"]
    assert [record.word for record in every] == ["世界", "视界"]
    assert all(record.code_kind is CodeKind.PINYIN for record in every)
    assert every[1].code.join("'") == "shi'jie"
