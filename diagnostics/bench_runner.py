# MIT License © 2025 Motohiro Suzuki
"""
diagnostics/bench_runner.py

Keystream benchmark runner (ALWAYS prints results)

What it measures:
- KeystreamGenerator.next_block throughput (blocks/sec)
- KeystreamGenerator.next_bytes throughput (blocks/sec, MB/s)
- cryptography ChaCha20 single-block reference, for scale

Run:
  python3 -m diagnostics.bench_runner
  python3 -m diagnostics.bench_runner --blocks 20000 2>&1 | tee bench_chacha20.txt
"""

from __future__ import annotations

import argparse
import logging
import os
import time
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from chacha_core.chacha20 import BLOCK_BYTES, KeystreamGenerator
from crypto.reference import reference_block_bytes
from diagnostics.logging_config import setup_logging

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class BenchResult:
    name: str
    ops: int
    seconds: float
    bytes_total: int

    @property
    def ops_per_sec(self) -> float:
        return self.ops / self.seconds if self.seconds > 0 else 0.0

    @property
    def mb_per_sec(self) -> float:
        return (self.bytes_total / (1024 * 1024)) / self.seconds if self.seconds > 0 else 0.0


def _now() -> float:
    return time.perf_counter()


def _bench_loop(name: str, ops: int, bytes_per_op: int, fn: Callable[[], None]) -> BenchResult:
    t0 = _now()
    for _ in range(ops):
        fn()
    t1 = _now()
    return BenchResult(name=name, ops=ops, seconds=(t1 - t0), bytes_total=ops * bytes_per_op)


def bench_generator(blocks: int = 5_000) -> List[BenchResult]:
    gen = KeystreamGenerator(os.urandom(32), os.urandom(12), 0)

    def _words() -> None:
        gen.next_block()

    def _bytes() -> None:
        gen.next_bytes()

    return [
        _bench_loop("KeystreamGenerator.next_block", ops=blocks, bytes_per_op=BLOCK_BYTES, fn=_words),
        _bench_loop("KeystreamGenerator.next_bytes", ops=blocks, bytes_per_op=BLOCK_BYTES, fn=_bytes),
    ]


def bench_reference(blocks: int = 5_000) -> BenchResult:
    key = os.urandom(32)
    nonce = os.urandom(12)
    counter = 0

    def _ref() -> None:
        nonlocal counter
        reference_block_bytes(key, nonce, counter)
        counter += 1

    return _bench_loop("cryptography ChaCha20 (1 block/call)", ops=blocks, bytes_per_op=BLOCK_BYTES, fn=_ref)


def _print_result(r: BenchResult) -> None:
    print(f"  {r.name}: ops={r.ops} time={r.seconds:.4f}s blocks/s={r.ops_per_sec:,.0f} MB/s={r.mb_per_sec:,.2f}")


def main(argv: Optional[Sequence[str]] = None) -> None:
    ap = argparse.ArgumentParser()
    ap.add_argument("--blocks", type=int, default=5_000, help="blocks per measurement")
    args = ap.parse_args(argv)

    if args.blocks <= 0:
        raise SystemExit("--blocks must be > 0")

    setup_logging()
    log.info("benchmark start blocks=%d", args.blocks)

    print("=== ChaCha20 Bench Runner ===")
    print("")

    print("[GENERATOR]")
    for r in bench_generator(args.blocks):
        _print_result(r)

    print("")

    print("[REFERENCE]")
    _print_result(bench_reference(args.blocks))

    print("")
    print("=== DONE ===")


if __name__ == "__main__":
    main()
