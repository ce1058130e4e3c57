"""Chunking reader: pulls sealed AES-GCM chunks from a source and serves plaintext."""

from __future__ import annotations

import logging
from typing import BinaryIO, Iterator, Optional

from ..core.exceptions import DecryptionError
from ..core.header import read_exact, read_header
from ..core.sizing import OVERHEAD, chunks_to_cover, payload_size
from ..security.aead import ChunkCipher


logger = logging.getLogger(__name__)


class GCMReader:
    """
    Decrypt a stream produced by :class:`~aesgcmio.stream.writer.GCMWriter`.

    The header is consumed on construction. Reads pull whole chunks from the
    source until enough plaintext is buffered, so a read never returns bytes
    from a chunk that has not been authenticated. Once a chunk fails
    authentication the reader is poisoned and every later read raises
    ``DecryptionError``.

    State is two flags: ``source exhausted`` (no more chunks to pull) and
    ``buffer empty`` (nothing left to serve). End of stream is both.
    """

    def __init__(self, source: BinaryIO, key: bytes):
        self._cipher = ChunkCipher(key)
        self._src = source
        self._chunk_size = read_header(source)
        self._payload_size = payload_size(self._chunk_size)
        # Full chunks are payload + overhead, whatever unaligned value the header carries.
        self._wire_size = self._payload_size + OVERHEAD
        self._buf = bytearray()
        self._source_exhausted = False
        self._failed = False
        logger.debug(
            "opened reader: chunk_size=%d payload_size=%d", self._chunk_size, self._payload_size
        )

    @property
    def chunk_size(self) -> int:
        return self._chunk_size

    @property
    def payload_size(self) -> int:
        return self._payload_size

    @property
    def at_eof(self) -> bool:
        return self._source_exhausted and not self._buf

    def read(self, size: Optional[int] = -1) -> bytes:
        """
        Return up to ``size`` plaintext bytes, or everything left if ``size``
        is negative or None. Returns ``b""`` at end of stream.
        """
        if self._failed:
            raise DecryptionError("stream failed authentication earlier; refusing to continue")

        if size is None or size < 0:
            while self._pull_chunk():
                pass
            size = len(self._buf)
        else:
            missing = size - len(self._buf)
            if missing > 0:
                for _ in range(chunks_to_cover(missing, self._payload_size)):
                    if not self._pull_chunk():
                        break

        out = bytes(self._buf[:size])
        del self._buf[:size]
        return out

    def readinto(self, b) -> int:
        view = memoryview(b).cast("B")
        data = self.read(len(view))
        view[: len(data)] = data
        return len(data)

    def __iter__(self) -> Iterator[bytes]:
        while True:
            block = self.read(self._payload_size)
            if not block:
                return
            yield block

    def _pull_chunk(self) -> bool:
        """Pull, authenticate and buffer one chunk. False once the source is exhausted."""
        if self._source_exhausted:
            return False

        chunk = read_exact(self._src, self._wire_size)
        if len(chunk) < self._wire_size:
            # Short read means this is the terminal chunk (or nothing at all).
            self._source_exhausted = True
            if not chunk:
                return False

        try:
            plaintext = self._cipher.open(chunk)
        except DecryptionError:
            self._failed = True
            raise

        self._buf += plaintext
        return True
