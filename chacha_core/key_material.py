# MIT License © 2025 Motohiro Suzuki
"""
chacha_core/key_material.py

Demo / test helpers only. NOT a key derivation function.

Text is UTF-8 encoded and copied into a fixed-size buffer:
- shorter input is padded with zero bytes
- longer input is truncated
Use a real KDF (or os.urandom) for anything that must be secret.
"""

from __future__ import annotations

from chacha_core.chacha20 import KEY_LEN, NONCE_LEN


def _fit(text: str, size: int) -> bytes:
    raw = text.encode("utf-8")[:size]
    return raw + b"\x00" * (size - len(raw))


def create_key(text: str) -> bytes:
    return _fit(text, KEY_LEN)


def create_nonce(text: str) -> bytes:
    return _fit(text, NONCE_LEN)
