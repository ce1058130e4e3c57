"""Command line front end: encrypt, decrypt, or run a round-trip demo.

Usage:
    aesgcmio [-v] [--key HEX] encrypt IN OUT [--chunk-size N]
    aesgcmio [-v] [--key HEX] decrypt IN OUT
    aesgcmio [-v] [--key HEX] demo [--size N] [--chunk-size N]

The key is read from ``--key`` or the ``AESGCMIO_KEY`` environment variable as
hex. ``-`` stands for stdin/stdout.
"""

from __future__ import annotations

import argparse
import io
import logging
import os
import sys
from typing import BinaryIO, List, Optional

from aesgcmio.core.exceptions import AESGCMIOError
from aesgcmio.core.sizing import ciphertext_size
from aesgcmio.security.crypto import decrypt_file, decrypt_stream, encrypt_file, encrypt_stream

from .logging_config import configure_logging


KEY_ENV = "AESGCMIO_KEY"
# Key used by the demo when none is given ("change this password to a secret").
DEMO_KEY_HEX = "6368616e676520746869732070617373776f726420746f206120736563726574"

logger = logging.getLogger(__name__)


def _parse_key(value: Optional[str]) -> bytes:
    if not value:
        raise AESGCMIOError(f"no key given; pass --key or set {KEY_ENV}")
    try:
        return bytes.fromhex(value)
    except ValueError as e:
        raise AESGCMIOError(f"key is not valid hex: {e}") from e


def _open_in(path: str) -> BinaryIO:
    return sys.stdin.buffer if path == "-" else open(path, "rb")


def _open_out(path: str) -> BinaryIO:
    return sys.stdout.buffer if path == "-" else open(path, "wb")


def _close(f: BinaryIO) -> None:
    if f not in (sys.stdin.buffer, sys.stdout.buffer):
        f.close()
    else:
        f.flush()


def _uses_std(args: argparse.Namespace) -> bool:
    return "-" in (args.input, args.output)


def cmd_encrypt(args: argparse.Namespace) -> int:
    key = _parse_key(args.key)
    if not _uses_std(args):
        n = encrypt_file(args.input, args.output, key, args.chunk_size)
        logger.info("encrypted %d bytes", n)
        return 0

    src, dst = _open_in(args.input), None
    try:
        dst = _open_out(args.output)
        n = encrypt_stream(src, dst, key, args.chunk_size)
    finally:
        _close(src)
        if dst is not None:
            _close(dst)
    logger.info("encrypted %d bytes", n)
    return 0


def cmd_decrypt(args: argparse.Namespace) -> int:
    key = _parse_key(args.key)
    if not _uses_std(args):
        # decrypt_file removes the partial output if a chunk fails to authenticate
        n = decrypt_file(args.input, args.output, key)
        logger.info("decrypted %d bytes", n)
        return 0

    src, dst = _open_in(args.input), None
    try:
        dst = _open_out(args.output)
        n = decrypt_stream(src, dst, key)
    finally:
        _close(src)
        if dst is not None:
            _close(dst)
    logger.info("decrypted %d bytes", n)
    return 0


def cmd_demo(args: argparse.Namespace) -> int:
    """Encrypt random bytes in memory, decrypt them again and compare."""
    key = _parse_key(args.key or DEMO_KEY_HEX)
    plaintext = os.urandom(args.size)

    ciphertext = io.BytesIO()
    encrypt_stream(io.BytesIO(plaintext), ciphertext, key, args.chunk_size)

    decrypted = io.BytesIO()
    decrypt_stream(io.BytesIO(ciphertext.getvalue()), decrypted, key)

    equal = decrypted.getvalue() == plaintext
    print(f"Plaintext Size: {len(plaintext)} bytes")
    print(f"Ciphertext Size: {len(ciphertext.getvalue())} bytes")
    print(f"Expected Ciphertext Size: {ciphertext_size(len(plaintext), args.chunk_size)} bytes")
    print(f"Decrypted Size: {len(decrypted.getvalue())} bytes")
    print(f"Equal: {equal}")
    return 0 if equal else 1


def _size(value: str) -> int:
    size = int(value)
    if size < 0:
        raise argparse.ArgumentTypeError(f"size must be zero or positive, got {size}")
    return size


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="aesgcmio", description="Streaming AES-GCM encryption")
    parser.add_argument("--key", default=os.environ.get(KEY_ENV), help="hex encoded 16/24/32 byte key")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    enc = sub.add_parser("encrypt", help="encrypt IN to OUT")
    enc.add_argument("input")
    enc.add_argument("output")
    enc.add_argument("--chunk-size", type=int, default=0, help="wire chunk size (0 = default 512)")
    enc.set_defaults(func=cmd_encrypt)

    dec = sub.add_parser("decrypt", help="decrypt IN to OUT")
    dec.add_argument("input")
    dec.add_argument("output")
    dec.set_defaults(func=cmd_decrypt)

    demo = sub.add_parser("demo", help="round-trip random bytes in memory")
    demo.add_argument("--size", type=_size, default=1096)
    demo.add_argument("--chunk-size", type=int, default=0)
    demo.set_defaults(func=cmd_demo)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(logging.DEBUG if args.verbose else logging.INFO)
    try:
        return args.func(args)
    except (AESGCMIOError, OSError) as e:
        print(f"aesgcmio: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
