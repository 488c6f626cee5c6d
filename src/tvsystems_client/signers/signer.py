"""
Signer interface and the account-backed transaction signer.

Signatures cover a transaction's canonical bytes and travel as Base58 text.
"""

from __future__ import annotations
import logging
from abc import ABC, abstractmethod
from typing import Union

from ..account import Account
from ..codec.base58 import b58decode, b58encode
from ..codec.encoder import encode_transaction
from ..transactions import Transaction

logger = logging.getLogger(__name__)


class Signer(ABC):
    """
    Base signer interface.

    Implementations produce detached signatures; they never modify the
    transaction being signed.
    """

    @abstractmethod
    def sign_bytes(self, data: bytes) -> bytes:
        """
        Sign raw bytes.

        Args:
            data: Message bytes

        Returns:
            Signature bytes
        """
        pass

    @abstractmethod
    def verify_bytes(self, data: bytes, signature: bytes) -> bool:
        """
        Verify a signature over raw bytes.

        Args:
            data: Message bytes
            signature: Signature bytes

        Returns:
            True if signature is valid
        """
        pass

    @abstractmethod
    def get_public_key(self) -> str:
        """Base58 public key matching the signatures."""
        pass

    def sign(self, transaction: Transaction) -> str:
        """
        Sign a transaction's canonical bytes.

        Args:
            transaction: Transaction record

        Returns:
            Base58 signature

        Raises:
            SerializationError: If the transaction cannot be encoded
        """
        return b58encode(self.sign_bytes(encode_transaction(transaction)))

    def verify(self, transaction: Union[Transaction, bytes], signature: str) -> bool:
        """
        Verify a Base58 signature over a transaction or raw bytes.

        Args:
            transaction: Transaction record or its canonical bytes
            signature: Base58 signature

        Returns:
            True if signature is valid
        """
        data = transaction if isinstance(transaction, (bytes, bytearray)) else encode_transaction(transaction)
        try:
            signature_bytes = b58decode(signature)
        except ValueError:
            return False
        return self.verify_bytes(bytes(data), signature_bytes)


class AccountSigner(Signer):
    """Signer backed by an :class:`Account`'s private key."""

    def __init__(self, account: Account):
        """
        Initialize the signer.

        Args:
            account: Account to sign with; view-only accounts can still verify
        """
        self.account = account

    def sign_bytes(self, data: bytes) -> bytes:
        """
        Sign raw bytes with the account's private key.

        Raises:
            AccountKeyError: If the account holds no private key
        """
        signature = self.account.sign_bytes(data)
        logger.debug("Signed %d bytes for %s", len(data), self.account.address)
        return signature

    def verify_bytes(self, data: bytes, signature: bytes) -> bool:
        return self.account.verify_bytes(data, signature)

    def get_public_key(self) -> str:
        return self.account.public_key


def sign_transaction(account: Account, transaction: Transaction) -> str:
    """
    Sign a transaction with an account.

    Args:
        account: Signing account
        transaction: Transaction record

    Returns:
        Base58 signature over the canonical bytes

    Raises:
        AccountKeyError: If the account holds no private key
        SerializationError: If the transaction cannot be encoded
    """
    return AccountSigner(account).sign(transaction)
