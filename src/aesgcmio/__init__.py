"""Streaming AES-GCM encryption over file-like objects.

A :class:`GCMWriter` turns plaintext writes into a sequence of independently
sealed chunks; a :class:`GCMReader` authenticates and decrypts them again on
read. Both are single-pass and not safe for concurrent use.
"""

from .core.exceptions import AESGCMIOError, ConfigurationError, DecryptionError, HeaderError
from .core.sizing import (
    DEFAULT_CHUNK_SIZE,
    NONCE_SIZE,
    TAG_SIZE,
    ciphertext_size,
    effective_chunk_size,
    payload_size,
    wire_chunk_size,
)
from .stream import GCMReader, GCMWriter
from .security.crypto import decrypt_file, decrypt_stream, encrypt_file, encrypt_stream

__version__ = "0.1.0"

__all__ = [
    "AESGCMIOError",
    "ConfigurationError",
    "DecryptionError",
    "HeaderError",
    "DEFAULT_CHUNK_SIZE",
    "NONCE_SIZE",
    "TAG_SIZE",
    "ciphertext_size",
    "effective_chunk_size",
    "payload_size",
    "wire_chunk_size",
    "GCMReader",
    "GCMWriter",
    "encrypt_stream",
    "decrypt_stream",
    "encrypt_file",
    "decrypt_file",
]
