"""Sizing helpers and constants shared by both the writer and the reader.

Wire chunk layout: nonce (12) || ciphertext (<= payload) || GCM tag (16).
The stream starts with a 4-byte little-endian header holding the wire chunk size.
"""

import os

from cryptography.hazmat.primitives.ciphers import algorithms

from .exceptions import ConfigurationError


DEFAULT_CHUNK_SIZE = 512  # default size of each chunk written to the sink
NONCE_SIZE = 12  # random nonce drawn for every chunk
TAG_SIZE = 16  # GCM tag appended by seal
OVERHEAD = NONCE_SIZE + TAG_SIZE
HEADER_SIZE = 4
BLOCK_SIZE = algorithms.AES.block_size // 8
KEY_SIZES = (16, 24, 32)


def new_nonce() -> bytes:
    """Return a fresh random nonce for one chunk."""
    return os.urandom(NONCE_SIZE)


def payload_size(chunk_size: int) -> int:
    """
    Return the plaintext bytes carried by one wire chunk of ``chunk_size``.

    Nonce and tag are subtracted first, then the result is rounded down to a
    multiple of the AES block size. Raises ``ConfigurationError`` when nothing
    is left for the payload.
    """
    size = ((chunk_size - OVERHEAD) // BLOCK_SIZE) * BLOCK_SIZE
    if size <= 0:
        raise ConfigurationError(
            f"chunk size {chunk_size} leaves no room for payload "
            f"(need at least {OVERHEAD + BLOCK_SIZE} bytes)"
        )
    return size


def wire_chunk_size(payload: int) -> int:
    """Return the wire chunk size for a payload of ``payload`` bytes."""
    if payload <= 0 or payload % BLOCK_SIZE:
        raise ConfigurationError(
            f"payload size must be a positive multiple of {BLOCK_SIZE}, got {payload}"
        )
    return payload + OVERHEAD


def effective_chunk_size(chunk_size: int = 0) -> int:
    """Resolve the default and return the wire chunk size actually written."""
    if chunk_size <= 0:
        chunk_size = DEFAULT_CHUNK_SIZE
    return wire_chunk_size(payload_size(chunk_size))


def ciphertext_size(plaintext_len: int, chunk_size: int = 0) -> int:
    """Return the exact stream length produced for ``plaintext_len`` bytes."""
    payload = payload_size(effective_chunk_size(chunk_size))
    chunks = -(-plaintext_len // payload)
    return HEADER_SIZE + chunks * OVERHEAD + plaintext_len


def chunks_to_cover(n: int, payload: int) -> int:
    # Whole chunks needed for n plaintext bytes; always at least one.
    return max(1, -(-n // payload))
