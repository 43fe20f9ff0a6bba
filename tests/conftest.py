"""Shared fixtures for building synthetic SCEL buffers."""

from __future__ import annotations

from typing import Sequence

import pytest

from wordlib_pipeline.scel.layout import (
    CATEGORY_RANGE,
    DESCRIPTION_RANGE,
    EXAMPLE_RANGE,
    NAME_RANGE,
    SCEL_HEADER_SIZE,
    SCEL_MAGIC,
    WORD_COUNT_OFFSET,
)


def _u16(value: int) -> bytes:
    return value.to_bytes(2, "little")


class ScelBuilder:
    """Byte-level helpers mirroring the on-disk SCEL layout."""

    @staticmethod
    def header(
        name: str = "",
        category: str = "",
        description: str = "",
        example: str = "",
        word_count: int = 0,
    ) -> bytes:
        buf = bytearray(SCEL_HEADER_SIZE)
        buf[: len(SCEL_MAGIC)] = SCEL_MAGIC
        buf[WORD_COUNT_OFFSET : WORD_COUNT_OFFSET + 4] = word_count.to_bytes(4, "little")
        for text, (start, end) in (
            (name, NAME_RANGE),
            (category, CATEGORY_RANGE),
            (description, DESCRIPTION_RANGE),
            (example, EXAMPLE_RANGE),
        ):
            encoded = text.encode("utf-16-le")[: end - start]
            buf[start : start + len(encoded)] = encoded
        return bytes(buf)

    @staticmethod
    def pinyin_record(index: int, text: str) -> bytes:
        encoded = text.encode("utf-16-le")
        return _u16(index) + _u16(len(encoded) // 2) + encoded

    @staticmethod
    def table_end() -> bytes:
        return _u16(0) + _u16(0)

    @staticmethod
    def group(indices: Sequence[int], words: Sequence[str], ext: bytes = b"") -> bytes:
        out = bytearray(_u16(len(words)) + _u16(len(indices)))
        for index in indices:
            out += _u16(index)
        for word in words:
            encoded = word.encode("utf-16-le")
            out += _u16(len(encoded) // 2) + encoded
            out += _u16(len(ext) // 2) + ext
        return bytes(out)

    @classmethod
    def scel(
        cls,
        table: Sequence[tuple[int, str]],
        groups: Sequence[tuple[Sequence[int], Sequence[str]]],
        **header_fields,
    ) -> bytes:
        body = b"".join(cls.pinyin_record(index, text) for index, text in table)
        body += cls.table_end()
        body += b"".join(cls.group(indices, words) for indices, words in groups)
        return cls.header(**header_fields) + body


@pytest.fixture
def scel_builder() -> type[ScelBuilder]:
    """Return the synthetic SCEL byte builder."""

    return ScelBuilder
