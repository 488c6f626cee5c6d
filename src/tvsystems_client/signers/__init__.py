"""
Signature infrastructure for TV Systems transactions.
"""

from .signer import Signer, AccountSigner, sign_transaction

__all__ = [
    "Signer",
    "AccountSigner",
    "sign_transaction",
]
