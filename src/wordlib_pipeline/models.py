"""Data models shared by importers, generators, filters, and exporters.

This module defines the format-agnostic ``Record`` contract that every stage
produces or consumes, so each stage has a narrow, testable interface and
downstream code can rely on stable fields.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
import itertools
from typing import Iterable


class CodeKind(str, Enum):
    """Encoding scheme represented by a record's code."""

    PINYIN = "pinyin"
    WUBI86 = "wubi86"
    WUBI98 = "wubi98"
    WUBI_NEW_AGE = "wubi_new_age"
    ZHENGMA = "zhengma"
    CANGJIE = "cangjie"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class Code:
    """Per-position alternative lists describing how a word is typed.

    ``positions[n]`` holds the candidate codes for the nth character when the
    code is per-character, or ``positions[0]`` holds every candidate when the
    whole word shares one code set.
    """

    positions: tuple[tuple[str, ...], ...] = ()

    @classmethod
    def from_char_list(cls, codes: Iterable[str]) -> Code:
        """Build a one-candidate-per-position code such as ``ni hao``."""

        return cls(tuple((code,) for code in codes))

    @classmethod
    def from_single(cls, code: str) -> Code:
        """Build a whole-word code with exactly one candidate."""

        return cls(((code,),))

    @classmethod
    def from_alternatives(cls, codes: Iterable[str]) -> Code:
        """Build a whole-word code with several candidates in one position."""

        return cls((tuple(codes),))

    def __len__(self) -> int:
        return len(self.positions)

    @property
    def is_empty(self) -> bool:
        """Whether the code has no positions or any position lacks candidates."""

        return not self.positions or any(not candidates for candidates in self.positions)

    def default_codes(self) -> list[str]:
        """Return the first candidate of every non-empty position."""

        return [candidates[0] for candidates in self.positions if candidates]

    def join(self, separator: str) -> str:
        """Join default codes with ``separator`` (e.g. ``ni'hao``)."""

        return separator.join(self.default_codes())

    def expand(self, separator: str = "") -> list[str]:
        """Expand polyphonic positions into every full code combination.

        Empty positions are skipped so a single unknown syllable does not wipe
        out the whole expansion.

        Args:
            separator: Text placed between positions in each combination.

        Returns:
            Combinations in position order; empty when there are no positions.
        """

        candidates = [items for items in self.positions if items]
        if not candidates:
            return []
        return [separator.join(combo) for combo in itertools.product(*candidates)]


@dataclass(frozen=True)
class Record:
    """One dictionary entry in the intermediate representation.

    Records are immutable; code and rank generators return updated copies via
    ``dataclasses.replace`` instead of mutating in place.
    """

    word: str
    code: Code = field(default_factory=Code)
    rank: int = 0
    code_kind: CodeKind = CodeKind.UNKNOWN

    @property
    def char_count(self) -> int:
        """Number of characters in ``word``."""

        return len(self.word)

    @property
    def has_code(self) -> bool:
        """Whether the record carries a usable (non-empty) code."""

        return not self.code.is_empty

    def pinyin_string(self, separator: str) -> str:
        """Return joined pinyin, or an empty string for non-pinyin records."""

        if self.code_kind is not CodeKind.PINYIN:
            return ""
        return self.code.join(separator)


@dataclass(frozen=True)
class ScelInfo:
    """Descriptive header metadata of a SCEL cell dictionary.

    The snapshot is display-only; ``word_count`` is the count declared in the
    header and may disagree with the number of records actually decoded.
    """

    name: str
    category: str
    description: str
    example: str
    word_count: int
