"""Whole-stream and whole-file helpers on top of the chunking writer/reader.

Stream layout (see :mod:`aesgcmio.core.sizing`):
- 4 bytes: little-endian wire chunk size
- chunks: nonce (12) || ciphertext || tag (16), all full-size except the last

Files are processed incrementally; neither side holds the whole payload in memory.
"""
import os
from pathlib import Path
from typing import BinaryIO, Union

from ..stream.reader import GCMReader
from ..stream.writer import GCMWriter


COPY_BUFSIZE = 64 * 1024

PathLike = Union[str, Path]


def encrypt_stream(src: BinaryIO, dst: BinaryIO, key: bytes, chunk_size: int = 0) -> int:
    """Encrypt everything readable from ``src`` into ``dst``; returns plaintext bytes read."""
    total = 0
    with GCMWriter(dst, key, chunk_size) as writer:
        while True:
            data = src.read(COPY_BUFSIZE)
            if not data:
                break
            total += writer.write(data)
    return total


def decrypt_stream(src: BinaryIO, dst: BinaryIO, key: bytes) -> int:
    """Decrypt a stream from ``src`` into ``dst``; returns plaintext bytes written."""
    reader = GCMReader(src, key)
    total = 0
    while True:
        data = reader.read(COPY_BUFSIZE)
        if not data:
            break
        dst.write(data)
        total += len(data)
    return total


def encrypt_file(in_path: PathLike, out_path: PathLike, key: bytes, chunk_size: int = 0) -> int:
    """
    Encrypt ``in_path`` into ``out_path``.

    A failure part way through removes the output: a stream that was never
    finalized would otherwise decode cleanly to a truncated prefix.
    """
    out_path = Path(out_path)
    with open(in_path, "rb") as inf:
        try:
            with open(out_path, "wb") as outf:
                return encrypt_stream(inf, outf, key, chunk_size)
        except BaseException:
            if out_path.exists():
                os.remove(out_path)
            raise


def decrypt_file(in_path: PathLike, out_path: PathLike, key: bytes) -> int:
    """
    Decrypt ``in_path`` into ``out_path``.

    If any chunk fails to authenticate the partially written output is
    removed before the error propagates, so no unverified tail is left behind.
    """
    out_path = Path(out_path)
    with open(in_path, "rb") as inf:
        try:
            with open(out_path, "wb") as outf:
                return decrypt_stream(inf, outf, key)
        except BaseException:
            if out_path.exists():
                os.remove(out_path)
            raise

