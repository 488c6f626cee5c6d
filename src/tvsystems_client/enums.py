"""
Enumerations for the TV Systems protocol.

Network tags, transaction type tags and the field kinds used by the
canonical byte schema.
"""

from __future__ import annotations
from enum import Enum, IntEnum
from typing import Optional


class NetworkType(Enum):
    """Ledger network; the value is the byte embedded in every address."""

    TESTNET = "T"
    MAINNET = ";"

    @property
    def byte(self) -> int:
        """Network byte as an integer."""
        return ord(self.value)

    @classmethod
    def from_name(cls, name: str) -> NetworkType:
        """
        Look up a network by case-insensitive name.

        Args:
            name: "testnet" or "mainnet"

        Returns:
            Matching NetworkType

        Raises:
            ValueError: If the name is unknown
        """
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown network: {name}") from None


class TransactionType(IntEnum):
    """Transaction type tags understood by the SDK."""

    PAYMENT = 2
    LEASE = 3
    CANCEL_LEASE = 4
    MINTING = 5

    @classmethod
    def parse(cls, type_id: Optional[int]) -> Optional[TransactionType]:
        """Return the matching type, or None for unknown tags."""
        try:
            return cls(type_id)
        except ValueError:
            return None


class FieldKind(Enum):
    """Semantic value type of a canonical byte schema entry."""

    INT8 = "int8"
    INT16 = "int16"
    INT32 = "int32"
    INT64 = "int64"
    UINT8 = "uint8"
    UINT16 = "uint16"
    UINT32 = "uint32"
    UINT64 = "uint64"
    STRING = "string"


class StringEncoding(Enum):
    """How a string field is rendered into canonical bytes."""

    RAW_UTF8 = "raw_utf8"
    BASE58_FIXED = "base58_fixed"
    BASE58_LENGTH_PREFIXED = "base58_length_prefixed"


__all__ = [
    "NetworkType",
    "TransactionType",
    "FieldKind",
    "StringEncoding",
]
