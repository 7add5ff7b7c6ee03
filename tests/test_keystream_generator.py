# MIT License © 2025 Motohiro Suzuki
from __future__ import annotations

import itertools

import pytest

from chacha_core.chacha20 import (
    CHACHA20_CONSTANTS,
    KeystreamGenerator,
    chacha20_block,
    permute,
    rotl32,
)
from chacha_core.errors import (
    ChaChaError,
    InvalidCounterError,
    InvalidKeyLengthError,
    InvalidNonceLengthError,
)

KEY = bytes(range(32))
NONCE = bytes(range(100, 112))


def test_deterministic() -> None:
    a = KeystreamGenerator(KEY, NONCE, 5)
    b = KeystreamGenerator(KEY, NONCE, 5)
    assert [a.next_block() for _ in range(3)] == [b.next_block() for _ in range(3)]


def test_counter_advances_by_one() -> None:
    gen = KeystreamGenerator(KEY, NONCE, 41)
    assert gen.counter == 41
    gen.next_block()
    assert gen.counter == 42


def test_blocks_follow_counter_sequence() -> None:
    seq = KeystreamGenerator(KEY, NONCE, 7)
    blocks = [seq.next_block() for _ in range(4)]
    for i, block in enumerate(blocks):
        assert KeystreamGenerator(KEY, NONCE, 7 + i).next_block() == block


def test_counter_wraps_to_zero() -> None:
    gen = KeystreamGenerator(KEY, NONCE, 2**32 - 1)
    gen.next_block()
    assert gen.counter == 0
    assert gen.next_block() == KeystreamGenerator(KEY, NONCE, 0).next_block()
    assert gen.counter == 1


def test_only_counter_changes() -> None:
    gen = KeystreamGenerator(KEY, NONCE, 0)
    before = gen.state
    gen.next_block()
    after = gen.state
    assert before[:12] == after[:12]
    assert before[13:] == after[13:]
    assert after[:4] == CHACHA20_CONSTANTS


def test_state_snapshot_is_detached() -> None:
    gen = KeystreamGenerator(KEY, NONCE, 0)
    snap = list(gen.state)
    snap[12] = 99
    assert gen.counter == 0


def test_feed_forward() -> None:
    state = list(KeystreamGenerator(KEY, NONCE, 3).state)
    original = list(state)
    worked = permute(state)
    block = chacha20_block(state)
    assert state == original
    for i in range(16):
        assert block[i] == (worked[i] + original[i]) % 2**32


def test_iterator_protocol() -> None:
    gen = KeystreamGenerator(KEY, NONCE, 0)
    first_two = list(itertools.islice(gen, 2))
    ref = KeystreamGenerator(KEY, NONCE, 0)
    assert first_two == [ref.next_block(), ref.next_block()]
    assert next(gen) == ref.next_block()


def test_keystream_lengths() -> None:
    gen = KeystreamGenerator(KEY, NONCE, 0)
    assert gen.keystream(0) == b""
    assert gen.counter == 0
    assert len(gen.keystream(65)) == 65
    assert gen.counter == 2
    with pytest.raises(ValueError):
        gen.keystream(-1)


def test_repr_hides_key() -> None:
    gen = KeystreamGenerator(b"\xab" * 32, NONCE, 9)
    assert repr(gen) == "KeystreamGenerator(counter=9)"


@pytest.mark.parametrize("n", [0, 31, 33, 64])
def test_rejects_key_length(n: int) -> None:
    with pytest.raises(InvalidKeyLengthError):
        KeystreamGenerator(b"\x00" * n, NONCE, 0)


@pytest.mark.parametrize("n", [0, 11, 13, 16])
def test_rejects_nonce_length(n: int) -> None:
    with pytest.raises(InvalidNonceLengthError):
        KeystreamGenerator(KEY, b"\x00" * n, 0)


@pytest.mark.parametrize("counter", [-1, 2**32, True, 1.0])
def test_rejects_counter(counter: object) -> None:
    with pytest.raises(InvalidCounterError):
        KeystreamGenerator(KEY, NONCE, counter)  # type: ignore[arg-type]


def test_errors_are_value_errors() -> None:
    with pytest.raises(ValueError):
        KeystreamGenerator(KEY[:31], NONCE, 0)
    with pytest.raises(ChaChaError):
        KeystreamGenerator(KEY, NONCE[:11], 0)


def test_rejects_str_key() -> None:
    with pytest.raises(TypeError):
        KeystreamGenerator("k" * 32, NONCE, 0)  # type: ignore[arg-type]


def test_accepts_bytearray_and_memoryview() -> None:
    a = KeystreamGenerator(bytearray(KEY), memoryview(NONCE), 0).next_block()
    b = KeystreamGenerator(KEY, NONCE, 0).next_block()
    assert a == b


def test_rotl32_edges() -> None:
    assert rotl32(0x80000000, 1) == 1
    assert rotl32(0x12345678, 0) == 0x12345678
    assert rotl32(0x12345678, 32) == 0x12345678
    assert rotl32(0x01020304, 8) == 0x02030401
