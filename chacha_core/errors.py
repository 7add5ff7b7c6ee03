# MIT License © 2025 Motohiro Suzuki
from __future__ import annotations


class ChaChaError(Exception):
    pass


class InvalidKeyLengthError(ChaChaError, ValueError):
    def __init__(self, actual: int, expected: int = 32) -> None:
        super().__init__(f"key must be {expected} bytes, got {actual}")
        self.actual = actual
        self.expected = expected


class InvalidNonceLengthError(ChaChaError, ValueError):
    def __init__(self, actual: int, expected: int = 12) -> None:
        super().__init__(f"nonce must be {expected} bytes, got {actual}")
        self.actual = actual
        self.expected = expected


class InvalidCounterError(ChaChaError, ValueError):
    def __init__(self, value: object) -> None:
        super().__init__(f"counter must be an int in [0, 2**32), got {value!r}")
        self.value = value


class InvalidWordLengthError(ChaChaError, ValueError):
    def __init__(self, actual: int, expected: int = 4) -> None:
        super().__init__(f"word decoding needs exactly {expected} bytes, got {actual}")
        self.actual = actual
        self.expected = expected
