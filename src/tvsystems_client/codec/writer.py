"""
Binary Writer

Big-endian fixed-width integer and Base58 string encoding used by the
canonical transaction byte layout.
"""

import struct
from typing import List

from .base58 import b58decode


class BinaryWriter:
    """
    Binary writer for canonical transaction bytes.

    All integers are written big-endian at fixed width. ``struct.error`` is
    raised for values outside the declared width; callers translate it.
    """

    def __init__(self):
        """Initialize writer with empty byte buffer."""
        self._bb: List[int] = []

    def int8(self, v: int) -> None:
        """Write signed 8-bit integer."""
        self._bb.extend(struct.pack(">b", v))

    def uint8(self, v: int) -> None:
        """Write unsigned 8-bit integer."""
        self._bb.extend(struct.pack(">B", v))

    def int16(self, v: int) -> None:
        """Write signed 16-bit integer."""
        self._bb.extend(struct.pack(">h", v))

    def uint16(self, v: int) -> None:
        """Write unsigned 16-bit integer."""
        self._bb.extend(struct.pack(">H", v))

    def int32(self, v: int) -> None:
        """Write signed 32-bit integer."""
        self._bb.extend(struct.pack(">i", v))

    def uint32(self, v: int) -> None:
        """Write unsigned 32-bit integer."""
        self._bb.extend(struct.pack(">I", v))

    def int64(self, v: int) -> None:
        """Write signed 64-bit integer."""
        self._bb.extend(struct.pack(">q", v))

    def uint64(self, v: int) -> None:
        """Write unsigned 64-bit integer."""
        self._bb.extend(struct.pack(">Q", v))

    def bytes(self, v: bytes) -> None:
        """
        Write raw bytes without length prefix.

        Args:
            v: Bytes to write directly
        """
        self._bb.extend(v)

    def string_utf8(self, s: str) -> None:
        """Write a string as raw UTF-8, unprefixed."""
        self.bytes(s.encode("utf-8"))

    def base58(self, s: str) -> None:
        """
        Write the decoded bytes of a Base58 string, unprefixed.

        Args:
            s: Base58 text whose decoded length is implied by the field
        """
        self.bytes(b58decode(s))

    def base58_with_size(self, s: str) -> None:
        """
        Write the decoded bytes of a Base58 string behind a 2-byte length.

        Args:
            s: Base58 text
        """
        decoded = b58decode(s)
        self.uint16(len(decoded))
        self.bytes(decoded)

    def to_bytes(self) -> bytes:
        """
        Return accumulated bytes as immutable bytes object.

        Returns:
            Bytes containing all written data
        """
        return bytes(self._bb)
