# MIT License © 2025 Motohiro Suzuki
"""
chacha_core/policy.py

Run settings for the demo runner:
- key_text / nonce_text: fed through the demo-only key_material helpers
- counter: initial block counter (u32)
- blocks: how many blocks to print
- output: "words" (16 hex words per block) or "hex" (64 keystream bytes)
"""

from __future__ import annotations

from dataclasses import dataclass

from chacha_core.byte_order import WORD_MASK
from chacha_core.errors import InvalidCounterError

OUTPUT_FORMATS = ("words", "hex")


@dataclass(frozen=True)
class GeneratorPolicy:
    key_text: str = "01234567890123456789012345678901"
    nonce_text: str = "12 length k]"
    counter: int = 0
    blocks: int = 10
    output: str = "words"

    def __post_init__(self) -> None:
        if not 0 <= self.counter <= WORD_MASK:
            raise InvalidCounterError(self.counter)
        if self.blocks < 0:
            raise ValueError("blocks must be >= 0")
        if self.output not in OUTPUT_FORMATS:
            raise ValueError(f"output must be one of {OUTPUT_FORMATS}, got {self.output!r}")
