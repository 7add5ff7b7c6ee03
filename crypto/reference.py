# MIT License © 2025 Motohiro Suzuki
"""
crypto/reference.py

Independent ChaCha20 oracle backed by the cryptography library.

cryptography takes a 16-byte IV = counter (4 bytes, little-endian) || nonce.
Encrypting 64 zero bytes yields exactly one keystream block. Only single
blocks are computed here, so how the backend carries past a wrapped counter
never matters.
"""

from __future__ import annotations

from typing import List

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms

from chacha_core.byte_order import bytes_to_words

_ZERO_BLOCK = b"\x00" * 64


def reference_block_bytes(key: bytes, nonce: bytes, counter: int) -> bytes:
    if len(key) != 32:
        raise ValueError("key must be 32 bytes")
    if len(nonce) != 12:
        raise ValueError("nonce must be 12 bytes")
    iv = counter.to_bytes(4, "little") + bytes(nonce)
    enc = Cipher(algorithms.ChaCha20(bytes(key), iv), mode=None).encryptor()
    return enc.update(_ZERO_BLOCK) + enc.finalize()


def reference_block(key: bytes, nonce: bytes, counter: int) -> List[int]:
    return bytes_to_words(reference_block_bytes(key, nonce, counter))
