# MIT License © 2025 Motohiro Suzuki
"""
chacha_core/chacha20.py

ChaCha20 keystream generator (RFC 7539 block function)

State layout (16 x u32):
    0..3   constants "expand 32-byte k"
    4..11  key words (little-endian)
    12     block counter (wraps mod 2**32)
    13..15 nonce words (little-endian)

Each call to next_block() returns the block for the current counter and
then advances the counter by one.
"""

from __future__ import annotations

import logging
from typing import Iterator, List, Sequence, Tuple

from chacha_core.byte_order import WORD_MASK, bytes_to_words, words_to_bytes
from chacha_core.errors import (
    InvalidCounterError,
    InvalidKeyLengthError,
    InvalidNonceLengthError,
)

log = logging.getLogger(__name__)

KEY_LEN = 32
NONCE_LEN = 12
BLOCK_WORDS = 16
BLOCK_BYTES = 64
COUNTER_INDEX = 12

CHACHA20_CONSTANTS = (0x61707865, 0x3320646E, 0x79622D32, 0x6B206574)

COLUMN_ROUNDS = ((0, 4, 8, 12), (1, 5, 9, 13), (2, 6, 10, 14), (3, 7, 11, 15))
DIAGONAL_ROUNDS = ((0, 5, 10, 15), (1, 6, 11, 12), (2, 7, 8, 13), (3, 4, 9, 14))
DOUBLE_ROUNDS = 10


def rotl32(value: int, shift: int) -> int:
    """Rotate the 32-bit value left by shift bits."""
    shift %= 32
    if shift == 0:
        return value & WORD_MASK
    return ((value << shift) & WORD_MASK) | ((value & WORD_MASK) >> (32 - shift))


def quarter_round(x: List[int], a: int, b: int, c: int, d: int) -> None:
    """
    In-place quarter round on words a, b, c, d of x:

        a += b; d ^= a; d <<<= 16
        c += d; b ^= c; b <<<= 12
        a += b; d ^= a; d <<<= 8
        c += d; b ^= c; b <<<= 7
    """
    x[a] = (x[a] + x[b]) & WORD_MASK
    x[d] = rotl32(x[d] ^ x[a], 16)

    x[c] = (x[c] + x[d]) & WORD_MASK
    x[b] = rotl32(x[b] ^ x[c], 12)

    x[a] = (x[a] + x[b]) & WORD_MASK
    x[d] = rotl32(x[d] ^ x[a], 8)

    x[c] = (x[c] + x[d]) & WORD_MASK
    x[b] = rotl32(x[b] ^ x[c], 7)


def double_round(x: List[int]) -> None:
    for a, b, c, d in COLUMN_ROUNDS:
        quarter_round(x, a, b, c, d)
    for a, b, c, d in DIAGONAL_ROUNDS:
        quarter_round(x, a, b, c, d)


def permute(state: Sequence[int]) -> List[int]:
    """Return a copy of state after 20 rounds. state itself is left untouched."""
    working = list(state)
    for _ in range(DOUBLE_ROUNDS):
        double_round(working)
    return working


def chacha20_block(state: Sequence[int]) -> List[int]:
    """Compute one output block: permute(state) + state, word by word mod 2**32."""
    working = permute(state)
    return [(w + s) & WORD_MASK for w, s in zip(working, state)]


def _check_bytes(name: str, value: object) -> bytes:
    if not isinstance(value, (bytes, bytearray, memoryview)):
        raise TypeError(f"{name} must be bytes")
    return bytes(value)


class KeystreamGenerator:
    """
    Stateful ChaCha20 block generator.

    Not safe for concurrent use: give each thread its own instance and its
    own counter range.
    """

    def __init__(self, key: bytes, nonce: bytes, counter: int = 0) -> None:
        key = _check_bytes("key", key)
        nonce = _check_bytes("nonce", nonce)
        if len(key) != KEY_LEN:
            raise InvalidKeyLengthError(len(key), KEY_LEN)
        if len(nonce) != NONCE_LEN:
            raise InvalidNonceLengthError(len(nonce), NONCE_LEN)
        if isinstance(counter, bool) or not isinstance(counter, int) or not 0 <= counter <= WORD_MASK:
            raise InvalidCounterError(counter)

        self._state: List[int] = (
            list(CHACHA20_CONSTANTS)
            + bytes_to_words(key)
            + [counter]
            + bytes_to_words(nonce)
        )
        log.debug("keystream generator ready counter=%d", counter)

    @property
    def counter(self) -> int:
        return self._state[COUNTER_INDEX]

    @property
    def state(self) -> Tuple[int, ...]:
        return tuple(self._state)

    def next_block(self) -> List[int]:
        block = chacha20_block(self._state)
        self._state[COUNTER_INDEX] = (self._state[COUNTER_INDEX] + 1) & WORD_MASK
        if self._state[COUNTER_INDEX] == 0:
            log.debug("block counter wrapped to 0")
        return block

    def next_bytes(self) -> bytes:
        """Next block serialized little-endian (64 bytes of keystream)."""
        return words_to_bytes(self.next_block())

    def keystream(self, nbytes: int) -> bytes:
        """
        Return nbytes of keystream. Whole blocks are consumed, so any tail of
        the last block is discarded.
        """
        if nbytes < 0:
            raise ValueError("nbytes must be >= 0")
        out = bytearray()
        while len(out) < nbytes:
            out += self.next_bytes()
        return bytes(out[:nbytes])

    def __iter__(self) -> Iterator[List[int]]:
        return self

    def __next__(self) -> List[int]:
        return self.next_block()

    def __repr__(self) -> str:
        return f"KeystreamGenerator(counter={self.counter})"
