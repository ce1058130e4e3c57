"""Chunking writer and reader sharing one wire format."""

from .reader import GCMReader
from .writer import GCMWriter

__all__ = ["GCMReader", "GCMWriter"]
