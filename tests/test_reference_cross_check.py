# MIT License © 2025 Motohiro Suzuki
from __future__ import annotations

import os

import pytest

from chacha_core.chacha20 import KeystreamGenerator
from crypto.reference import reference_block, reference_block_bytes


def test_reference_matches_rfc_vector() -> None:
    nonce = bytes.fromhex("000000090000004a00000000")
    assert reference_block_bytes(bytes(range(32)), nonce, 1)[:4] == bytes([0x10, 0xF1, 0xE7, 0xE4])


@pytest.mark.parametrize("counter", [0, 1, 12345, 2**31, 2**32 - 2])
def test_generator_matches_cryptography(counter: int) -> None:
    key = os.urandom(32)
    nonce = os.urandom(12)
    gen = KeystreamGenerator(key, nonce, counter)
    for i in range(2):
        assert gen.next_block() == reference_block(key, nonce, counter + i)


def test_wrapped_block_matches_single_block_reference() -> None:
    key = os.urandom(32)
    nonce = os.urandom(12)
    gen = KeystreamGenerator(key, nonce, 2**32 - 1)
    gen.next_block()
    assert gen.next_block() == reference_block(key, nonce, 0)


def test_reference_rejects_bad_lengths() -> None:
    with pytest.raises(ValueError):
        reference_block(b"\x00" * 31, b"\x00" * 12, 0)
    with pytest.raises(ValueError):
        reference_block(b"\x00" * 32, b"\x00" * 13, 0)
