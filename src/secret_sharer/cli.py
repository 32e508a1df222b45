"""Command line front end: split a file into share files or rebuild it.

Usage::

    secret-sharer encode FILE N K
    secret-sharer decode OUTPUT SHARE [SHARE ...]

The short forms ``-e FILE N K`` and ``-d OUTPUT SHARE ...`` are accepted too.
"""

from __future__ import annotations

import argparse
import sys
from enum import IntEnum
from typing import Iterable, List

from .common.randomness import default_source
from .config import SharingConfig, load_config
from .errors import SecretSharingError
from .logger import get_module_logger, setup_logger
from .sharing.sharer import SecretSharer
from .storage import read_secret, read_shares, write_secret, write_shares

logger = get_module_logger("cli")

_LEGACY_MODES = {"-e": "encode", "-d": "decode"}


class ExitCode(IntEnum):
    OK = 0
    BAD_MODE = 1
    BAD_ENCODE_ARGS = 2
    ENCODE_FAILED = 3
    BAD_DECODE_ARGS = 4
    DECODE_FAILED = 5


_USAGE_ERRORS = {
    "encode": ExitCode.BAD_ENCODE_ARGS,
    "decode": ExitCode.BAD_DECODE_ARGS,
}


def _add_common(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--config", type=str, help="JSON file with SharingConfig fields.")
    parser.add_argument("--log-level", type=str, help="DEBUG, INFO, WARNING, ERROR.")
    parser.add_argument("--log-file", type=str, help="Also write logs to this file.")
    parser.add_argument("--suffix", type=str, help="Share file suffix (default: -ss).")


def run_encode(args: argparse.Namespace, config: SharingConfig) -> int:
    try:
        secret = read_secret(args.file)
        sharer = SecretSharer(source=default_source(config.seed))
        shares = sharer.encode(secret, args.n, args.k)
        paths = write_shares(args.file, shares, config.share_suffix)
    except SecretSharingError as exc:
        logger.error("Encoding %s failed: %s", args.file, exc)
        print("Failed to encode.")
        return ExitCode.ENCODE_FAILED
    logger.info("Split %s (%d bytes) into %d shares, k=%d", args.file, len(secret), args.n, args.k)
    for path in paths:
        print(f"Saved share to {path}")
    return ExitCode.OK


def run_decode(args: argparse.Namespace, config: SharingConfig) -> int:
    try:
        shares = read_shares(args.shares)
        secret = SecretSharer(threshold=config.threshold).decode(shares)
        write_secret(args.output, secret)
    except SecretSharingError as exc:
        logger.error("Decoding into %s failed: %s", args.output, exc)
        print("Failed to decode.")
        return ExitCode.DECODE_FAILED
    print(f"Recovered {len(secret)} bytes to {args.output}")
    return ExitCode.OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="(k, n) threshold secret sharing over GF(65809).")
    sub = parser.add_subparsers(dest="mode", required=True)

    encode = sub.add_parser("encode", help="Split FILE into N shares, any K of which recover it.")
    encode.add_argument("file", type=str, help="Secret file to share.")
    encode.add_argument("n", type=int, help="Number of shares to produce.")
    encode.add_argument("k", type=int, help="Shares required to reconstruct.")
    encode.add_argument("--seed", type=int, help="Seed the coefficient generator (testing only).")
    _add_common(encode)
    encode.set_defaults(func=run_encode)

    decode = sub.add_parser("decode", help="Rebuild OUTPUT from share files.")
    decode.add_argument("output", type=str, help="Where to write the recovered secret.")
    decode.add_argument("shares", type=str, nargs="+", help="Share files.")
    decode.add_argument("--threshold", type=int, help="Require and use exactly this many shares.")
    _add_common(decode)
    decode.set_defaults(func=run_decode)

    return parser


def _translate_legacy(argv: List[str]) -> List[str]:
    if argv and argv[0] in _LEGACY_MODES:
        return [_LEGACY_MODES[argv[0]], *argv[1:]]
    return argv


def _usage_error(argv: List[str]) -> int:
    mode = argv[0] if argv else None
    return int(_USAGE_ERRORS.get(mode, ExitCode.BAD_MODE))


def main(argv: Iterable[str] | None = None) -> int:
    raw = _translate_legacy(list(argv) if argv is not None else sys.argv[1:])
    parser = build_parser()
    try:
        args = parser.parse_args(raw)
    except SystemExit as exc:
        # argparse exits 0 after --help, anything else is a usage error
        if exc.code in (0, None):
            return int(ExitCode.OK)
        return _usage_error(raw)

    try:
        config = load_config(args.config).override(
            share_suffix=args.suffix,
            seed=getattr(args, "seed", None),
            threshold=getattr(args, "threshold", None),
            log_level=args.log_level,
            log_file=args.log_file,
        )
    except SecretSharingError as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return _usage_error(raw)

    setup_logger(log_file=config.log_file, log_level=config.log_level)
    return int(args.func(args, config))


if __name__ == "__main__":
    raise SystemExit(main())
