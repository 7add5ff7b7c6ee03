# MIT License © 2025 Motohiro Suzuki
"""
ChaCha20 keystream demo: build a generator from text key / nonce and print
the initial state followed by successive blocks.

The text -> key / nonce conversion is zero-pad / truncate only. It is for
demonstration and is not a key derivation function.

How to run:
  python3 run_demo.py
  python3 run_demo.py --blocks 3 --counter 1 --output hex
"""

from __future__ import annotations

import argparse
import logging
from typing import Optional, Sequence

from chacha_core.byte_order import words_to_bytes
from chacha_core.chacha20 import KeystreamGenerator
from chacha_core.key_material import create_key, create_nonce
from chacha_core.policy import OUTPUT_FORMATS, GeneratorPolicy
from diagnostics.logging_config import setup_logging

log = logging.getLogger(__name__)


def make_policy(args: argparse.Namespace) -> GeneratorPolicy:
    return GeneratorPolicy(
        key_text=args.key,
        nonce_text=args.nonce,
        counter=args.counter,
        blocks=args.blocks,
        output=args.output,
    )


def format_block(block: Sequence[int], output: str) -> str:
    if output == "hex":
        return words_to_bytes(block).hex()
    return " ".join(f"{w:08x}" for w in block)


def run(policy: GeneratorPolicy) -> None:
    gen = KeystreamGenerator(create_key(policy.key_text), create_nonce(policy.nonce_text), policy.counter)

    print("=== ChaCha20 keystream demo ===")
    print(f"state   : {format_block(gen.state, 'words')}")
    for _ in range(policy.blocks):
        counter = gen.counter
        block = gen.next_block()
        print(f"[{counter:>10}] {format_block(block, policy.output)}")

    log.info("printed %d blocks, next counter=%d", policy.blocks, gen.counter)


def main(argv: Optional[Sequence[str]] = None) -> None:
    defaults = GeneratorPolicy()
    ap = argparse.ArgumentParser()
    ap.add_argument("--key", default=defaults.key_text, help="key text (demo only, padded/truncated to 32 bytes)")
    ap.add_argument("--nonce", default=defaults.nonce_text, help="nonce text (demo only, padded/truncated to 12 bytes)")
    ap.add_argument("--counter", type=int, default=defaults.counter, help="initial block counter")
    ap.add_argument("--blocks", type=int, default=defaults.blocks, help="number of blocks to print")
    ap.add_argument("--output", choices=OUTPUT_FORMATS, default=defaults.output)
    ap.add_argument("--verbose", action="store_true", help="debug logging")
    args = ap.parse_args(argv)

    setup_logging("DEBUG" if args.verbose else "INFO")
    try:
        policy = make_policy(args)
    except ValueError as e:
        raise SystemExit(str(e))
    run(policy)


if __name__ == "__main__":
    main()
