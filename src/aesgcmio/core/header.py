"""Stream header: a single little-endian u32 holding the wire chunk size."""

import struct
from typing import BinaryIO

from .exceptions import ConfigurationError, HeaderError
from .sizing import HEADER_SIZE, payload_size


_HEADER = struct.Struct("<I")


def read_exact(source: BinaryIO, n: int) -> bytes:
    """Read up to ``n`` bytes, looping over short reads until EOF."""
    buf = bytearray()
    while len(buf) < n:
        data = source.read(n - len(buf))
        if not data:
            break
        buf += data
    return bytes(buf)


def encode_header(chunk_size: int) -> bytes:
    try:
        return _HEADER.pack(chunk_size)
    except struct.error as exc:
        raise ConfigurationError(f"chunk size {chunk_size} does not fit in the header") from exc


def write_header(sink: BinaryIO, chunk_size: int) -> None:
    sink.write(encode_header(chunk_size))


def read_header(source: BinaryIO) -> int:
    """
    Consume the header from ``source`` and return the wire chunk size.

    Raises ``HeaderError`` if fewer than 4 bytes are available or the value
    is too small to carry any payload.
    """
    raw = read_exact(source, HEADER_SIZE)
    if len(raw) != HEADER_SIZE:
        raise HeaderError(f"truncated header: expected {HEADER_SIZE} bytes, got {len(raw)}")
    (chunk_size,) = _HEADER.unpack(raw)
    try:
        payload_size(chunk_size)
    except ConfigurationError as exc:
        raise HeaderError(f"malformed header: {exc}") from exc
    return chunk_size
