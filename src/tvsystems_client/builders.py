"""
Transaction builders.

Fill in default fee, fee scale and a current nanosecond timestamp so callers
only supply what the transaction is about.
"""

from __future__ import annotations
import time
from typing import Optional, Union

from .codec.base58 import b58encode
from .config import DEFAULT_FEE_SCALE, DEFAULT_TX_FEE
from .transactions import LeaseCancelTransaction, LeaseTransaction, PaymentTransaction


def current_timestamp() -> int:
    """Current time in nanoseconds, the unit transaction timestamps use."""
    return time.time_ns()


def encode_attachment(attachment: Union[str, bytes]) -> str:
    """
    Base58 text for a payment attachment.

    Args:
        attachment: Plain text (UTF-8 encoded) or raw bytes

    Returns:
        Base58 string; empty string for an empty attachment
    """
    if isinstance(attachment, str):
        attachment = attachment.encode("utf-8")
    return b58encode(attachment) if attachment else ""


def build_payment_tx(
    recipient: str,
    amount: int,
    attachment: Union[str, bytes] = "",
    fee: int = DEFAULT_TX_FEE,
    fee_scale: int = DEFAULT_FEE_SCALE,
    timestamp: Optional[int] = None
) -> PaymentTransaction:
    """
    Build a payment.

    Args:
        recipient: Base58 recipient address
        amount: Amount in the smallest unit (see V_UNITY)
        attachment: Plain text or raw bytes attached to the payment
        fee: Transaction fee
        fee_scale: Fee scale
        timestamp: Nanosecond timestamp; now when omitted

    Returns:
        Unsigned PaymentTransaction
    """
    return PaymentTransaction(
        recipient=recipient,
        amount=amount,
        attachment=encode_attachment(attachment),
        fee=fee,
        fee_scale=fee_scale,
        timestamp=current_timestamp() if timestamp is None else timestamp,
    )


def build_lease_tx(
    recipient: str,
    amount: int,
    fee: int = DEFAULT_TX_FEE,
    fee_scale: int = DEFAULT_FEE_SCALE,
    timestamp: Optional[int] = None
) -> LeaseTransaction:
    """
    Build a lease to a minting node.

    Args:
        recipient: Base58 address of the lease recipient
        amount: Amount to lease in the smallest unit
        fee: Transaction fee
        fee_scale: Fee scale
        timestamp: Nanosecond timestamp; now when omitted

    Returns:
        Unsigned LeaseTransaction
    """
    return LeaseTransaction(
        recipient=recipient,
        amount=amount,
        fee=fee,
        fee_scale=fee_scale,
        timestamp=current_timestamp() if timestamp is None else timestamp,
    )


def build_cancel_lease_tx(
    lease_id: str,
    fee: int = DEFAULT_TX_FEE,
    fee_scale: int = DEFAULT_FEE_SCALE,
    timestamp: Optional[int] = None
) -> LeaseCancelTransaction:
    """Build a cancellation of the lease created by ``lease_id``."""
    return LeaseCancelTransaction(
        lease_id=lease_id,
        fee=fee,
        fee_scale=fee_scale,
        timestamp=current_timestamp() if timestamp is None else timestamp,
    )


__all__ = [
    "current_timestamp",
    "encode_attachment",
    "build_payment_tx",
    "build_lease_tx",
    "build_cancel_lease_tx",
]
