"""
Cryptographic primitives for the TV Systems protocol.

Provides Curve25519 keys and signatures plus the hash functions used for
key derivation, address checksums and transaction ids.
"""

from .curve25519 import Curve25519PrivateKey, Curve25519PublicKey, Curve25519Error, clamp_private_key
from .hashing import sha256, blake2b256, keccak256, secure_hash, fast_hash

__all__ = [
    "Curve25519PrivateKey",
    "Curve25519PublicKey",
    "Curve25519Error",
    "clamp_private_key",
    "sha256",
    "blake2b256",
    "keccak256",
    "secure_hash",
    "fast_hash",
]
