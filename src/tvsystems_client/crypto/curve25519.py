"""
Curve25519 keys and signatures for TV Systems accounts.

Accounts hold Montgomery-form (X25519) keys. Signatures are Ed25519 signatures
made directly with the Montgomery private scalar, as in the curve25519 signing
scheme used by Signal's libaxolotl:

- the Edwards public key is ``a * B`` for the private scalar ``a``; its sign
  bit is stored in the top bit of signature byte 63
- the nonce is ``SHA-512(0xFE || 0xFF * 31 || a || M || Z) mod L`` where ``Z``
  is 64 bytes of randomness
- verification recovers the Edwards key from the Montgomery ``u``
  coordinate as ``y = (u - 1) / (u + 1)`` plus the stored sign bit

Group arithmetic is delegated to libsodium through PyNaCl.
"""

from __future__ import annotations
import hashlib
import os
from typing import Optional

import nacl.bindings
from nacl.exceptions import BadSignatureError, CryptoError

from ..config import KEY_LENGTH, SIGNATURE_LENGTH

# Field prime 2^255 - 19
_P = 2 ** 255 - 19

_NONCE_PREFIX = b"\xfe" + b"\xff" * 31


class Curve25519Error(Exception):
    """Base exception for Curve25519 operations."""
    pass


def clamp_private_key(key_bytes: bytes) -> bytes:
    """
    Clamp 32 bytes into a valid Curve25519 private scalar.

    Clears the lowest 3 bits of byte 0, clears the top bit of byte 31 and
    sets its second-highest bit.

    Args:
        key_bytes: 32 raw bytes

    Returns:
        Clamped 32-byte scalar
    """
    clamped = bytearray(key_bytes[:KEY_LENGTH])
    clamped[0] &= 248
    clamped[31] &= 127
    clamped[31] |= 64
    return bytes(clamped)


def _edwards_public_key(private_key: bytes) -> bytes:
    try:
        return nacl.bindings.crypto_scalarmult_ed25519_base_noclamp(private_key)
    except (CryptoError, RuntimeError) as e:
        raise Curve25519Error(f"Invalid Curve25519 private key: {e}") from e


def _montgomery_to_edwards(public_key: bytes, sign_bit: int) -> bytes:
    u = int.from_bytes(public_key, "little") & ((1 << 255) - 1)
    y = (u - 1) * pow(u + 1, _P - 2, _P) % _P
    edwards = bytearray(y.to_bytes(32, "little"))
    edwards[31] = (edwards[31] & 0x7F) | sign_bit
    return bytes(edwards)


def _reduce(digest: bytes) -> bytes:
    return nacl.bindings.crypto_core_ed25519_scalar_reduce(digest)


class Curve25519PublicKey:
    """
    Curve25519 public key (Montgomery ``u`` coordinate).

    Provides verification operations and serialization.
    """

    def __init__(self, public_key_bytes: bytes):
        """
        Initialize from 32-byte public key.

        Args:
            public_key_bytes: 32-byte Curve25519 public key

        Raises:
            Curve25519Error: If key has the wrong length
        """
        if len(public_key_bytes) != KEY_LENGTH:
            raise Curve25519Error(
                f"Curve25519 public key must be {KEY_LENGTH} bytes, got {len(public_key_bytes)}"
            )
        self._key_bytes = bytes(public_key_bytes)

    @classmethod
    def from_bytes(cls, key_bytes: bytes) -> Curve25519PublicKey:
        """Create public key from bytes."""
        return cls(key_bytes)

    def to_bytes(self) -> bytes:
        """Get the 32-byte public key."""
        return self._key_bytes

    def verify(self, signature: bytes, message: bytes) -> bool:
        """
        Verify a signature against a message.

        Args:
            signature: 64-byte signature
            message: Message that was signed

        Returns:
            True if signature is valid
        """
        if len(signature) != SIGNATURE_LENGTH:
            return False

        edwards_key = _montgomery_to_edwards(self._key_bytes, signature[63] & 0x80)
        cleared = bytearray(signature)
        cleared[63] &= 0x7F

        try:
            nacl.bindings.crypto_sign_open(bytes(cleared) + message, edwards_key)
        except (BadSignatureError, CryptoError, ValueError):
            return False
        return True

    def __eq__(self, other) -> bool:
        if not isinstance(other, Curve25519PublicKey):
            return False
        return self._key_bytes == other._key_bytes

    def __hash__(self) -> int:
        return hash(self._key_bytes)

    def __repr__(self) -> str:
        return f"Curve25519PublicKey('{self._key_bytes.hex()}')"


class Curve25519PrivateKey:
    """
    Curve25519 private key.

    Provides signing and public key derivation.
    """

    def __init__(self, private_key_bytes: bytes):
        """
        Initialize from a 32-byte private scalar.

        The scalar is used as given; keys derived from seeds are already
        clamped by :func:`clamp_private_key`.

        Args:
            private_key_bytes: 32-byte private key

        Raises:
            Curve25519Error: If key is invalid
        """
        if len(private_key_bytes) != KEY_LENGTH:
            raise Curve25519Error(
                f"Curve25519 private key must be {KEY_LENGTH} bytes, got {len(private_key_bytes)}"
            )
        self._key_bytes = bytes(private_key_bytes)
        self._edwards_public = _edwards_public_key(self._key_bytes)
        self._public_key = Curve25519PublicKey(
            nacl.bindings.crypto_sign_ed25519_pk_to_curve25519(self._edwards_public)
        )
        self._scalar = _reduce(self._key_bytes + bytes(32))

    @classmethod
    def generate(cls) -> Curve25519PrivateKey:
        """Generate a new random private key."""
        return cls(clamp_private_key(os.urandom(KEY_LENGTH)))

    @classmethod
    def from_bytes(cls, key_bytes: bytes) -> Curve25519PrivateKey:
        """Create private key from bytes."""
        return cls(key_bytes)

    def to_bytes(self) -> bytes:
        """Get the 32-byte private key."""
        return self._key_bytes

    def public_key(self) -> Curve25519PublicKey:
        """Get the corresponding public key."""
        return self._public_key

    def sign(self, message: bytes, random: Optional[bytes] = None) -> bytes:
        """
        Sign a message.

        Args:
            message: Message to sign
            random: 64 bytes mixed into the nonce; fresh randomness when omitted

        Returns:
            64-byte signature
        """
        if random is None:
            random = os.urandom(64)
        elif len(random) != 64:
            raise Curve25519Error(f"Signature randomness must be 64 bytes, got {len(random)}")

        nonce = _reduce(hashlib.sha512(_NONCE_PREFIX + self._key_bytes + message + random).digest())
        r_point = _edwards_public_key(nonce)
        hram = _reduce(hashlib.sha512(r_point + self._edwards_public + message).digest())
        s = nacl.bindings.crypto_core_ed25519_scalar_add(
            nacl.bindings.crypto_core_ed25519_scalar_mul(hram, self._scalar),
            nonce,
        )

        signature = bytearray(r_point + s)
        signature[63] = (signature[63] & 0x7F) | (self._edwards_public[31] & 0x80)
        return bytes(signature)


__all__ = [
    "Curve25519Error",
    "Curve25519PrivateKey",
    "Curve25519PublicKey",
    "clamp_private_key",
]
