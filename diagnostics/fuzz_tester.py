# MIT License © 2025 Motohiro Suzuki
"""
diagnostics/fuzz_tester.py

Differential fuzz of the keystream generator (ALWAYS prints results)

Goals:
- random key / nonce / counter, compared block by block against the
  cryptography backend
- a share of the counters sit right below 2**32 so the wrap path is hit
- constructor must reject every wrong key / nonce length

Run:
  python3 -m diagnostics.fuzz_tester
  python3 -m diagnostics.fuzz_tester --iters 5000 --seed 7 2>&1 | tee fuzz_chacha20.txt
"""

from __future__ import annotations

import argparse
import logging
import random
from dataclasses import dataclass
from typing import Optional, Sequence

from chacha_core.chacha20 import KEY_LEN, NONCE_LEN, KeystreamGenerator
from chacha_core.errors import InvalidKeyLengthError, InvalidNonceLengthError
from crypto.reference import reference_block
from diagnostics.logging_config import setup_logging

log = logging.getLogger(__name__)

_WRAP_ZONE = 4


@dataclass
class FuzzStats:
    iters: int = 0
    blocks_matched: int = 0
    blocks_mismatched: int = 0
    wraps_seen: int = 0

    length_rejected: int = 0
    length_accepted: int = 0

    @property
    def ok(self) -> bool:
        return self.blocks_mismatched == 0 and self.length_accepted == 0


def _rand_bytes(rng: random.Random, n: int) -> bytes:
    return bytes(rng.getrandbits(8) for _ in range(n))


def _rand_counter(rng: random.Random) -> int:
    if rng.random() < 0.25:
        return 2**32 - 1 - rng.randrange(_WRAP_ZONE)
    return rng.getrandbits(32)


def fuzz_blocks(stats: FuzzStats, rng: random.Random, iters: int = 200, blocks_per_iter: int = 3) -> None:
    for _ in range(iters):
        stats.iters += 1
        key = _rand_bytes(rng, KEY_LEN)
        nonce = _rand_bytes(rng, NONCE_LEN)
        counter = _rand_counter(rng)
        gen = KeystreamGenerator(key, nonce, counter)

        for _k in range(blocks_per_iter):
            expected = reference_block(key, nonce, gen.counter)
            if gen.counter == 0xFFFFFFFF:
                stats.wraps_seen += 1
            got = gen.next_block()
            if got == expected:
                stats.blocks_matched += 1
            else:
                stats.blocks_mismatched += 1
                log.error("block mismatch counter=%d", (gen.counter - 1) & 0xFFFFFFFF)


def fuzz_lengths(stats: FuzzStats, rng: random.Random, iters: int = 200) -> None:
    for _ in range(iters):
        stats.iters += 1
        key_len = rng.randrange(0, 2 * KEY_LEN)
        nonce_len = rng.randrange(0, 2 * NONCE_LEN)
        if key_len == KEY_LEN and nonce_len == NONCE_LEN:
            continue
        try:
            KeystreamGenerator(_rand_bytes(rng, key_len), _rand_bytes(rng, nonce_len), 0)
            stats.length_accepted += 1
        except (InvalidKeyLengthError, InvalidNonceLengthError):
            stats.length_rejected += 1


def main(argv: Optional[Sequence[str]] = None) -> int:
    ap = argparse.ArgumentParser()
    ap.add_argument("--iters", type=int, default=500, help="iterations per fuzz phase")
    ap.add_argument("--seed", type=int, default=7539, help="PRNG seed")
    args = ap.parse_args(argv)

    if args.iters <= 0:
        raise SystemExit("--iters must be > 0")

    setup_logging()
    rng = random.Random(args.seed)
    log.info("fuzz start iters=%d seed=%d", args.iters, args.seed)

    print("=== ChaCha20 Fuzz Tester ===")
    print("")

    stats = FuzzStats()
    fuzz_blocks(stats, rng, iters=args.iters)
    print("[BLOCKS] differential vs cryptography")
    print(f"  matched={stats.blocks_matched}")
    print(f"  mismatched={stats.blocks_mismatched}")
    print(f"  wraps_seen={stats.wraps_seen}")

    print("")

    fuzz_lengths(stats, rng, iters=args.iters)
    print("[LENGTHS] constructor validation")
    print(f"  rejected(as expected)={stats.length_rejected}")
    print(f"  accepted(unexpected)={stats.length_accepted}")

    print("")
    print("=== DONE ===" if stats.ok else "=== FAILED ===")
    return 0 if stats.ok else 1


if __name__ == "__main__":
    raise SystemExit(main())
