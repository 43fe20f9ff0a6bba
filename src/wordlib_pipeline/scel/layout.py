"""Fixed byte layout of the SCEL cell-dictionary container."""

from __future__ import annotations

SCEL_MAGIC = b"\x40\x15\x00\x00\x44\x43\x53\x01\x01\x00\x00\x00"

# Every fixed-offset field lives below this bound.
SCEL_HEADER_SIZE = 0x1540

WORD_COUNT_OFFSET = 0x124

NAME_RANGE = (0x130, 0x338)
CATEGORY_RANGE = (0x338, 0x540)
DESCRIPTION_RANGE = (0x540, 0xD40)
EXAMPLE_RANGE = (0xD40, 0x1540)

PINYIN_TABLE_OFFSET = SCEL_HEADER_SIZE

# index (u16) + length (u16)
PINYIN_RECORD_HEADER_SIZE = 4
# same_pinyin_count (u16) + pinyin_len (u16)
GROUP_HEADER_SIZE = 4

DEFAULT_MAX_ENTRIES = 100_000
