from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from lfsr_keygen.cipher import stage as cipher_stage
from lfsr_keygen.config import GeneratorConfig
from lfsr_keygen.errors import LFSRError
from lfsr_keygen.keystream.generate import chunk_key_stream, render_trace
from lfsr_keygen.search.taps import search_primitive_taps
from lfsr_keygen.session import KeyGenSession

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lfsr-keygen",
        description="LFSR key stream generator with primitive tap search and XOR cipher",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("taps", help="find primitive taps for a register width")
    p.add_argument("width", type=int)
    p.add_argument("--strict", action="store_true", help="fail instead of using fallback taps")
    p.add_argument("--workers", type=int, default=1)

    p = sub.add_parser("keystream", help="generate a key stream from a seed")
    p.add_argument("seed")
    p.add_argument("--taps", type=int, nargs="+", default=None)
    p.add_argument("--trace", action="store_true", help="print the per-cycle table")

    p = sub.add_parser("encrypt", help="encrypt and decrypt a message")
    p.add_argument("seed")
    p.add_argument("message")
    p.add_argument("--taps", type=int, nargs="+", default=None)
    p.add_argument("--mode", choices=cipher_stage.available_modules(), default="text")

    return parser


def _session(args) -> KeyGenSession:
    taps = tuple(args.taps) if args.taps is not None else None
    return KeyGenSession(GeneratorConfig(seed=args.seed, taps=taps))


def _cmd_taps(args) -> int:
    res = search_primitive_taps(args.width, strict=args.strict, workers=args.workers)
    label = "Recommended taps" if res.verified else "Fallback taps (not verified maximum-length)"
    print(f"{label}: {list(res.taps)}")
    return 0


def _cmd_keystream(args) -> int:
    session = _session(args)
    taps = session.resolve_taps()
    print(f"Using taps: {list(taps)}")
    result = session.generate()

    if args.trace:
        print(render_trace(result.trace))
    if result.degenerate:
        print("Error: key stream consists entirely of zeros. Please verify tap positions and seed values.",
              file=sys.stderr)
        return 1
    if session.short:
        print(f"Warning: key stream is less than {session.cfg.min_key_bits} bits.", file=sys.stderr)

    print("Generated Key Stream:")
    for line in chunk_key_stream(result.to_str()):
        print(line)
    return 0


def _cmd_encrypt(args) -> int:
    session = _session(args)
    result = session.generate()
    if result.degenerate:
        print("Error: key stream consists entirely of zeros.", file=sys.stderr)
        return 1

    enc = session.encrypt(args.message, mode=args.mode)
    dec = session.decrypt(enc, mode=args.mode)
    if isinstance(enc, bytes):
        print(f"Encrypted: {enc.hex()}")
        print(f"Decrypted: {dec.decode('utf-8', errors='replace')}")
    else:
        print(f"Encrypted: {enc}")
        print(f"Decrypted: {dec}")
    return 0


_COMMANDS = {
    "taps": _cmd_taps,
    "keystream": _cmd_keystream,
    "encrypt": _cmd_encrypt,
}


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="[%(asctime)s] %(levelname)s: %(message)s",
    )
    try:
        return _COMMANDS[args.command](args)
    except (LFSRError, ValueError) as e:
        logger.debug("command %s failed", args.command, exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
