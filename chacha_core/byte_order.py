# MIT License © 2025 Motohiro Suzuki
"""
chacha_core/byte_order.py

Little-endian word helpers:
- byte 0 is the least significant byte of a word
- decoders refuse any input that is not exactly 4 bytes per word
"""

from __future__ import annotations

from typing import Iterable, List

from chacha_core.errors import InvalidWordLengthError

WORD_MASK = 0xFFFFFFFF


def u8_array_to_u32_le(data: bytes) -> int:
    """Decode exactly 4 bytes into one 32-bit word (little-endian)."""
    if len(data) != 4:
        raise InvalidWordLengthError(len(data))
    return data[0] | (data[1] << 8) | (data[2] << 16) | (data[3] << 24)


def string_to_u32_le(text: str) -> int:
    return u8_array_to_u32_le(text.encode("utf-8"))


def bytes_to_words(data: bytes) -> List[int]:
    if len(data) % 4 != 0:
        raise InvalidWordLengthError(len(data) % 4)
    return [u8_array_to_u32_le(data[i:i + 4]) for i in range(0, len(data), 4)]


def words_to_bytes(words: Iterable[int]) -> bytes:
    out = bytearray()
    for w in words:
        if not 0 <= w <= WORD_MASK:
            raise ValueError(f"word out of u32 range: {w!r}")
        out += w.to_bytes(4, "little")
    return bytes(out)
