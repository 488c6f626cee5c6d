"""
TV Systems Binary Codec Module

Canonical byte encoding of transaction records.

Key components:
- schema.py: Declarative per-variant field schema (FieldSpec)
- writer.py: Big-endian binary writer with Base58 string rendering
- encoder.py: Schema-driven transaction encoder
- base58.py: Base58 text helpers
"""

from .base58 import b58decode, b58encode
from .encoder import encode_fields, encode_transaction
from .schema import FieldSpec
from .writer import BinaryWriter

__all__ = [
    "BinaryWriter",
    "FieldSpec",
    "b58decode",
    "b58encode",
    "encode_fields",
    "encode_transaction",
]
