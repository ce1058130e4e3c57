"""AES-GCM adapter sealing and opening single wire chunks.

A sealed chunk is ``nonce || ciphertext || tag``; the nonce is drawn fresh for
every call and travels in clear as the chunk prefix. No associated data is used.
"""

from __future__ import annotations

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from ..core.exceptions import ConfigurationError, DecryptionError
from ..core.sizing import KEY_SIZES, NONCE_SIZE, TAG_SIZE, new_nonce


class ChunkCipher:
    """
    Seal/open wrapper around :class:`AESGCM` for one key.

    Only the constructed AEAD instance is kept; the raw key is not stored.
    """

    def __init__(self, key: bytes):
        if len(key) not in KEY_SIZES:
            raise ConfigurationError(
                f"AES-GCM key must be one of {KEY_SIZES} bytes, got {len(key)}"
            )
        self._aead = AESGCM(bytes(key))

    def seal(self, plaintext: bytes) -> bytes:
        nonce = new_nonce()
        return nonce + self._aead.encrypt(nonce, plaintext, None)

    def open(self, chunk: bytes) -> bytes:
        """
        Authenticate and decrypt one wire chunk.

        Raises ``DecryptionError`` if the chunk is too short to hold a nonce
        and tag, or if authentication fails. No plaintext is returned in
        either case.
        """
        if len(chunk) < NONCE_SIZE + TAG_SIZE:
            raise DecryptionError(
                f"truncated chunk: {len(chunk)} bytes, need at least {NONCE_SIZE + TAG_SIZE}"
            )
        nonce, ct = chunk[:NONCE_SIZE], chunk[NONCE_SIZE:]
        try:
            return self._aead.decrypt(nonce, ct, None)
        except InvalidTag as exc:
            raise DecryptionError("chunk authentication failed") from exc
