"""Pinyin code generation for records that arrive without a usable code."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable

from pypinyin import Style, pinyin

from wordlib_pipeline.models import Code, CodeKind, Record


@dataclass(frozen=True)
class PinyinCodeGenerator:
    """Fill missing pinyin codes using ``pypinyin`` readings.

    Output uses toneless IME spelling (``lv`` for ``lü``). With
    ``heteronym=True`` polyphonic characters keep every reading as alternative
    candidates in their position.
    """

    heteronym: bool = False

    def code_for(self, text: str) -> Code:
        """Return a per-character pinyin code for ``text``.

        Runs of non-Hanzi characters are kept as a single position holding the
        original text, which is how ``pypinyin`` reports them.
        """

        readings = pinyin(text, style=Style.NORMAL, heteronym=self.heteronym)
        return Code(tuple(tuple(dict.fromkeys(items)) for items in readings))

    def generate(self, record: Record) -> Record:
        """Return ``record`` with a generated pinyin code when it lacks one.

        Records that already carry a non-empty pinyin code are returned as-is.
        """

        if record.code_kind is CodeKind.PINYIN and record.has_code:
            return record
        return replace(record, code=self.code_for(record.word), code_kind=CodeKind.PINYIN)

    def fill_missing(self, records: Iterable[Record]) -> list[Record]:
        """Apply :meth:`generate` to every record, preserving order."""

        return [self.generate(record) for record in records]
