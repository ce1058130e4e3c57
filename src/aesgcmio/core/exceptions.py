"""
Exceptions for aesgcmio
Everything derives from AESGCMIOError so callers have one general error catcher
"""


class AESGCMIOError(Exception):
    # general container for errors
    pass


class ConfigurationError(AESGCMIOError, ValueError):
    # raised at construction for a bad key size or an unusable chunk size
    pass


class HeaderError(AESGCMIOError, OSError):
    # raised when the stream header is truncated or malformed
    pass


class DecryptionError(AESGCMIOError):
    # raised when a chunk fails authentication or is truncated
    pass
