"""Security helpers: the AES-GCM chunk cipher used by the stream writer and reader.

Whole-file helpers live in :mod:`aesgcmio.security.crypto` and are imported
from there directly.
"""

from .aead import ChunkCipher

__all__ = ["ChunkCipher"]
