"""Unit tests for chunk sizing and nonce helpers."""

import pytest

from aesgcmio.core.exceptions import ConfigurationError
from aesgcmio.core.sizing import (
    BLOCK_SIZE,
    DEFAULT_CHUNK_SIZE,
    HEADER_SIZE,
    NONCE_SIZE,
    OVERHEAD,
    TAG_SIZE,
    chunks_to_cover,
    ciphertext_size,
    effective_chunk_size,
    new_nonce,
    payload_size,
    wire_chunk_size,
)


def test_constants():
    assert NONCE_SIZE == 12
    assert TAG_SIZE == 16
    assert OVERHEAD == 28
    assert HEADER_SIZE == 4
    assert BLOCK_SIZE == 16
    assert DEFAULT_CHUNK_SIZE == 512


def test_new_nonce_length_and_freshness():
    nonces = {new_nonce() for _ in range(1000)}
    assert len(nonces) == 1000
    assert all(len(n) == NONCE_SIZE for n in nonces)


@pytest.mark.parametrize(
    "chunk_size, expected",
    [
        (512, 480),  # 484 rounded down to a block multiple
        (508, 480),
        (250, 208),
        (600, 560),
        (44, 16),  # smallest chunk carrying one block
        (512000, 511968),
    ],
)
def test_payload_size(chunk_size, expected):
    assert payload_size(chunk_size) == expected
    assert payload_size(chunk_size) % BLOCK_SIZE == 0


@pytest.mark.parametrize("chunk_size", [43, 28, 1, 0, -100])
def test_payload_size_rejects_too_small(chunk_size):
    """A chunk size with no room for payload is a configuration error, not a zero-size chunk."""
    with pytest.raises(ConfigurationError, match="leaves no room for payload"):
        payload_size(chunk_size)


def test_wire_chunk_size_inverts_payload_size():
    assert wire_chunk_size(480) == 508
    assert payload_size(wire_chunk_size(480)) == 480


@pytest.mark.parametrize("payload", [0, -16, 15, 481])
def test_wire_chunk_size_rejects_unaligned(payload):
    with pytest.raises(ConfigurationError):
        wire_chunk_size(payload)


def test_effective_chunk_size_default():
    assert effective_chunk_size() == 508
    assert effective_chunk_size(0) == 508
    assert effective_chunk_size(-1) == 508
    assert effective_chunk_size(DEFAULT_CHUNK_SIZE) == 508


def test_effective_chunk_size_custom():
    assert effective_chunk_size(250) == 236
    assert effective_chunk_size(236) == 236


def test_ciphertext_size():
    assert ciphertext_size(0) == 4
    assert ciphertext_size(1) == 4 + 28 + 1
    assert ciphertext_size(480) == 4 + 28 + 480
    assert ciphertext_size(481) == 4 + 2 * 28 + 481
    # 1096 bytes at the default size: three chunks, the last one short
    assert ciphertext_size(1096) == 4 + 3 * 28 + 1096 == 1184
    assert ciphertext_size(1096, chunk_size=250) == 4 + 6 * 28 + 1096


def test_chunks_to_cover():
    assert chunks_to_cover(0, 480) == 1
    assert chunks_to_cover(1, 480) == 1
    assert chunks_to_cover(480, 480) == 1
    assert chunks_to_cover(481, 480) == 2
    assert chunks_to_cover(4800, 480) == 10
