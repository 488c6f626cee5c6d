"""
Transaction decoding from node JSON.

Records are tagged unions: the shape of everything but the common fields
depends on ``type``. Decoding therefore reads the record once as an
:class:`UnknownTransaction` to learn the tag, then validates it again against
the matching variant, which must then carry every field of its byte layout.
"""

from __future__ import annotations
import json
import logging
from typing import Any, Dict, Iterable, List, Mapping, Type, Union

from pydantic import ValidationError as PydanticValidationError

from .enums import TransactionType
from .runtime.errors import UnmarshalError
from .transactions import (
    LeaseCancelTransaction,
    LeaseTransaction,
    MintingTransaction,
    PaymentTransaction,
    REQUIRE_FIELDS,
    ProvenTransaction,
    Transaction,
    UnknownTransaction,
)

logger = logging.getLogger(__name__)

TRANSACTION_CLASSES: Dict[TransactionType, Type[ProvenTransaction]] = {
    TransactionType.PAYMENT: PaymentTransaction,
    TransactionType.LEASE: LeaseTransaction,
    TransactionType.CANCEL_LEASE: LeaseCancelTransaction,
    TransactionType.MINTING: MintingTransaction,
}


def _load(raw: Union[str, bytes, Mapping[str, Any]]) -> Mapping[str, Any]:
    if isinstance(raw, (str, bytes, bytearray)):
        try:
            raw = json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            text = raw if isinstance(raw, str) else bytes(raw).decode("utf-8", "replace")
            raise UnmarshalError(f"Invalid transaction JSON: {e}", cause=e, raw=text) from e
    if not isinstance(raw, Mapping):
        raise UnmarshalError(f"Transaction must be a JSON object, got {type(raw).__name__}")
    return raw


def parse_transaction(raw: Union[str, bytes, Mapping[str, Any]]) -> Transaction:
    """
    Decode a node record into its typed transaction variant.

    Args:
        raw: JSON text, bytes or an already decoded mapping

    Returns:
        Typed transaction; UnknownTransaction for unrecognised type tags

    Raises:
        UnmarshalError: If the record is malformed or its fields do not match its type
    """
    data = _load(raw)
    try:
        peeked = UnknownTransaction.model_validate(data)
    except PydanticValidationError as e:
        raise UnmarshalError(f"Invalid transaction record: {e}", cause=e) from e

    tx_type = peeked.tx_type
    if tx_type is None:
        logger.debug("Unknown transaction type %s, keeping common fields only", peeked.type)
        return peeked

    try:
        return TRANSACTION_CLASSES[tx_type].model_validate(data, context={REQUIRE_FIELDS: True})
    except PydanticValidationError as e:
        raise UnmarshalError(f"Invalid {tx_type.name} transaction: {e}", cause=e) from e


def parse_transactions(items: Iterable[Union[str, bytes, Mapping[str, Any]]]) -> List[Transaction]:
    """Decode a sequence of node records."""
    return [parse_transaction(item) for item in items]


__all__ = [
    "TRANSACTION_CLASSES",
    "parse_transaction",
    "parse_transactions",
]
