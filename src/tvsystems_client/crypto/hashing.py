"""
Hash functions used for key derivation, addresses and transaction ids.

The network's "secure hash" is Keccak-256 over Blake2b-256. Keccak-256 here is
the original Keccak padding, not FIPS SHA3-256.
"""

import hashlib

from Crypto.Hash import keccak


def sha256(data: bytes) -> bytes:
    """
    Compute SHA-256 hash of input bytes.

    Args:
        data: Input bytes to hash

    Returns:
        32-byte digest
    """
    return hashlib.sha256(data).digest()


def blake2b256(data: bytes) -> bytes:
    """
    Compute Blake2b hash with a 256-bit digest.

    Args:
        data: Input bytes to hash

    Returns:
        32-byte digest
    """
    return hashlib.blake2b(data, digest_size=32).digest()


def keccak256(data: bytes) -> bytes:
    """
    Compute Keccak-256 hash.

    Args:
        data: Input bytes to hash

    Returns:
        32-byte digest
    """
    return keccak.new(digest_bits=256).update(data).digest()


def secure_hash(data: bytes) -> bytes:
    """
    Compute the network's secure hash: Keccak-256(Blake2b-256(data)).

    Args:
        data: Input bytes to hash

    Returns:
        32-byte digest
    """
    return keccak256(blake2b256(data))


def fast_hash(data: bytes) -> bytes:
    """Blake2b-256, used for transaction ids."""
    return blake2b256(data)
