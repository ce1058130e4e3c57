"""Chunking writer: buffers plaintext and emits sealed AES-GCM chunks to a sink."""

from __future__ import annotations

import logging
from typing import BinaryIO

from ..core.exceptions import AESGCMIOError
from ..core.header import write_header
from ..core.sizing import effective_chunk_size, payload_size
from ..security.aead import ChunkCipher


logger = logging.getLogger(__name__)


class GCMWriter:
    """
    Encrypt a byte stream incrementally into fixed-size wire chunks.

    The header is written to ``sink`` on construction. Every full payload
    unit is sealed as soon as it is buffered; the remainder is sealed as
    the terminal chunk by :meth:`close`, which must be called once all data
    has been written or the buffered tail is lost. The sink itself is not
    closed.
    """

    def __init__(self, sink: BinaryIO, key: bytes, chunk_size: int = 0):
        self._cipher = ChunkCipher(key)
        self._chunk_size = effective_chunk_size(chunk_size)
        self._payload_size = payload_size(self._chunk_size)
        self._sink = sink
        self._buf = bytearray()
        self._chunks = 0
        self._closed = False
        self._failed = False

        # Chunk size goes first so the reader knows how to split the stream.
        write_header(sink, self._chunk_size)
        logger.debug(
            "opened writer: chunk_size=%d payload_size=%d", self._chunk_size, self._payload_size
        )

    @property
    def chunk_size(self) -> int:
        return self._chunk_size

    @property
    def payload_size(self) -> int:
        return self._payload_size

    @property
    def buffered(self) -> int:
        """Plaintext bytes waiting for a full chunk (or for close)."""
        return len(self._buf)

    @property
    def closed(self) -> bool:
        return self._closed

    def write(self, data) -> int:
        """Buffer ``data`` and flush every full payload unit; returns ``len(data)``."""
        if self._closed:
            raise ValueError("write to closed GCMWriter")
        self._check_failed()
        data = memoryview(data).cast("B")
        self._buf += data

        while len(self._buf) >= self._payload_size:
            self._emit(bytes(self._buf[: self._payload_size]))
            del self._buf[: self._payload_size]

        return len(data)

    def close(self) -> None:
        """Seal whatever is left in the buffer as the last chunk."""
        if self._closed:
            return
        self._check_failed()
        # Only a short tail is left here; never seal more than one payload unit.
        while self._buf:
            self._emit(bytes(self._buf[: self._payload_size]))
            del self._buf[: self._payload_size]
        self._closed = True
        logger.debug("closed writer after %d chunks", self._chunks)

    def _check_failed(self) -> None:
        if self._failed:
            raise AESGCMIOError("GCMWriter stopped after a sink error; the stream is incomplete")

    def _emit(self, plaintext: bytes) -> None:
        try:
            self._sink.write(self._cipher.seal(plaintext))
        except BaseException:
            # No retry: a failed chunk leaves the stream unusable.
            self._failed = True
            raise
        self._chunks += 1

    def __enter__(self) -> "GCMWriter":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        # An exception means the plaintext is incomplete; finalizing would hide that.
        if exc_type is None:
            self.close()
