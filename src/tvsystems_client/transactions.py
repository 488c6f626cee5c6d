# Transaction type definitions for the TV Systems protocol
# Each variant declares its canonical byte schema and its API projections

from __future__ import annotations
import json
from typing import Any, ClassVar, Dict, List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, model_validator

from .codec import schema as fs
from .codec.base58 import b58encode
from .codec.encoder import encode_transaction
from .codec.schema import FieldSpec
from .config import COLD_SIGN_AMOUNT_THRESHOLD, COLD_SIGN_OPC, COLD_SIGN_PROTOCOL
from .crypto.hashing import fast_hash
from .enums import TransactionType

# Validation context key that makes every byte-serialized field mandatory
REQUIRE_FIELDS = "require_fields"


def cold_sign_api_version(amount: Optional[int]) -> int:
    """
    Cold-sign payload version for an amount.

    Version 1 carries amounts that a double-precision JSON reader keeps
    exact; larger amounts need version 2.
    """
    if amount is not None and amount > COLD_SIGN_AMOUNT_THRESHOLD:
        return 2
    return 1


# =============================================================================
# Supporting Types
# =============================================================================

class Proof(BaseModel):
    """Signature proof attached to a confirmed transaction."""
    proof_type: Optional[str] = Field(None, alias="proofType")
    public_key: Optional[str] = Field(None, alias="publicKey")
    address: Optional[str] = None
    signature: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True, frozen=True)


# =============================================================================
# Base Transaction Types
# =============================================================================

class Transaction(BaseModel):
    """
    Fields common to every transaction variant.

    ``id``, ``proofs``, ``status``, ``fee_charged`` and ``height`` are only
    present on records returned by a node.
    """
    type: int
    id: Optional[str] = None
    fee: Optional[int] = None
    fee_scale: Optional[int] = Field(None, alias="feeScale")
    timestamp: Optional[int] = None
    proofs: Optional[List[Proof]] = None
    status: Optional[str] = None
    fee_charged: Optional[int] = Field(None, alias="feeCharged")
    height: Optional[int] = None

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    BYTE_SERIALIZED_FIELDS: ClassVar[Tuple[FieldSpec, ...]] = ()

    @property
    def tx_type(self) -> Optional[TransactionType]:
        """Known transaction type, or None for unknown tags."""
        return TransactionType.parse(self.type)

    def to_json_dict(self) -> Dict[str, Any]:
        """Wire representation of the record (aliases, unset fields omitted)."""
        return self.model_dump(by_alias=True, exclude_none=True)

    def to_json(self) -> str:
        """Wire representation of the record as JSON text."""
        return json.dumps(self.to_json_dict())


class UnknownTransaction(Transaction):
    """Transaction whose type tag the SDK does not model; common fields only."""


class ProvenTransaction(Transaction):
    """
    Transaction that can be encoded, signed and broadcast.

    Subclasses set ``TYPE`` and ``BYTE_SERIALIZED_FIELDS``, and extend
    :meth:`_variant_fields` with their own API fields.
    """
    TYPE: ClassVar[TransactionType]

    @model_validator(mode="after")
    def _check_schema_fields(self, info: ValidationInfo) -> ProvenTransaction:
        # Node records must carry every byte-serialized field; builders may fill them later
        if info.context and info.context.get(REQUIRE_FIELDS):
            missing = [spec.name for spec in self.BYTE_SERIALIZED_FIELDS if getattr(self, spec.attr) is None]
            if missing:
                raise ValueError(f"missing fields: {', '.join(missing)}")
        return self

    def to_bytes(self) -> bytes:
        """
        Canonical bytes of the transaction.

        Raises:
            SerializationError: If a declared field is unset or unencodable
        """
        return encode_transaction(self)

    def get_id(self) -> str:
        """Node-assigned id, or the id derived from the canonical bytes."""
        if self.id is not None:
            return self.id
        return b58encode(fast_hash(self.to_bytes()))

    def _variant_fields(self) -> Dict[str, Any]:
        return {}

    def to_api_request_json(self, public_key: str, signature: str) -> Dict[str, Any]:
        """
        Broadcast payload for the node API.

        Args:
            public_key: Base58 public key of the signer
            signature: Base58 signature over the canonical bytes

        Returns:
            JSON-ready dictionary
        """
        payload = {
            "timestamp": self.timestamp,
            "fee": self.fee,
            "feeScale": self.fee_scale,
            "senderPublicKey": public_key,
            "signature": signature,
        }
        payload.update(self._variant_fields())
        return payload

    def cold_sign_api_version(self) -> int:
        return 1

    def to_cold_sign_json(self, public_key: str) -> Dict[str, Any]:
        """
        Payload handed to an offline signer (typically as a QR code).

        Args:
            public_key: Base58 public key of the signer

        Returns:
            JSON-ready dictionary
        """
        payload = {
            "protocol": COLD_SIGN_PROTOCOL,
            "api": self.cold_sign_api_version(),
            "opc": COLD_SIGN_OPC,
            "transactionType": self.type,
            "senderPublicKey": public_key,
            "fee": self.fee,
            "feeScale": self.fee_scale,
            "timestamp": self.timestamp,
        }
        payload.update(self._variant_fields())
        return payload


# =============================================================================
# Transaction Variants
# =============================================================================

class PaymentTransaction(ProvenTransaction):
    """Transfer ``amount`` to ``recipient``; ``attachment`` is Base58 text."""
    type: Literal[2] = 2
    recipient: Optional[str] = None
    amount: Optional[int] = Field(None, ge=0)
    attachment: Optional[str] = ""

    TYPE: ClassVar[TransactionType] = TransactionType.PAYMENT
    BYTE_SERIALIZED_FIELDS: ClassVar[Tuple[FieldSpec, ...]] = (
        fs.TYPE,
        fs.TIMESTAMP,
        fs.int64("amount"),
        fs.FEE,
        fs.FEE_SCALE,
        fs.base58_fixed("recipient"),
        fs.base58_sized("attachment"),
    )

    def _variant_fields(self) -> Dict[str, Any]:
        return {
            "amount": self.amount,
            "recipient": self.recipient,
            "attachment": self.attachment,
        }

    def cold_sign_api_version(self) -> int:
        return cold_sign_api_version(self.amount)


class LeaseTransaction(ProvenTransaction):
    """Lease ``amount`` to ``recipient`` for block generation."""
    type: Literal[3] = 3
    recipient: Optional[str] = None
    amount: Optional[int] = Field(None, ge=0)

    TYPE: ClassVar[TransactionType] = TransactionType.LEASE
    BYTE_SERIALIZED_FIELDS: ClassVar[Tuple[FieldSpec, ...]] = (
        fs.TYPE,
        fs.base58_fixed("recipient"),
        fs.int64("amount"),
        fs.FEE,
        fs.FEE_SCALE,
        fs.TIMESTAMP,
    )

    def _variant_fields(self) -> Dict[str, Any]:
        return {
            "amount": self.amount,
            "recipient": self.recipient,
        }

    def cold_sign_api_version(self) -> int:
        return cold_sign_api_version(self.amount)


class LeaseCancelTransaction(ProvenTransaction):
    """Cancel the lease created by transaction ``lease_id``."""
    type: Literal[4] = 4
    lease_id: Optional[str] = Field(None, alias="leaseId")

    TYPE: ClassVar[TransactionType] = TransactionType.CANCEL_LEASE
    BYTE_SERIALIZED_FIELDS: ClassVar[Tuple[FieldSpec, ...]] = (
        fs.TYPE,
        fs.FEE,
        fs.FEE_SCALE,
        fs.TIMESTAMP,
        fs.base58_fixed("leaseId", "lease_id"),
    )

    def _variant_fields(self) -> Dict[str, Any]:
        # Broadcast and cold-sign payloads name the lease "txId"
        return {"txId": self.lease_id}


class MintingTransaction(ProvenTransaction):
    """Block reward minted by the network; decodable but not broadcastable."""
    type: Literal[5] = 5
    recipient: Optional[str] = None
    amount: Optional[int] = Field(None, ge=0)
    current_block_height: Optional[int] = Field(None, alias="currentBlockHeight")

    TYPE: ClassVar[TransactionType] = TransactionType.MINTING
    BYTE_SERIALIZED_FIELDS: ClassVar[Tuple[FieldSpec, ...]] = (
        fs.TYPE,
        fs.base58_fixed("recipient"),
        fs.int64("amount"),
        fs.TIMESTAMP,
        fs.int32("currentBlockHeight", "current_block_height"),
    )

    def _variant_fields(self) -> Dict[str, Any]:
        return {
            "recipient": self.recipient,
            "amount": self.amount,
            "currentBlockHeight": self.current_block_height,
        }

    def cold_sign_api_version(self) -> int:
        return cold_sign_api_version(self.amount)


__all__ = [
    "Proof",
    "Transaction",
    "UnknownTransaction",
    "ProvenTransaction",
    "PaymentTransaction",
    "LeaseTransaction",
    "LeaseCancelTransaction",
    "MintingTransaction",
    "cold_sign_api_version",
]
