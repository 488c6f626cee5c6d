"""
Transaction model tests: API projections, ids and immutability.
"""

import pytest
from pydantic import ValidationError as PydanticValidationError

from helpers import FIXED_TIMESTAMP, mk_lease, mk_payment

from tvsystems_client.builders import (
    build_cancel_lease_tx,
    build_lease_tx,
    build_payment_tx,
    encode_attachment,
)
from tvsystems_client.codec.base58 import b58decode, b58encode
from tvsystems_client.config import (
    COLD_SIGN_AMOUNT_THRESHOLD,
    DEFAULT_FEE_SCALE,
    DEFAULT_TX_FEE,
    V_UNITY,
)
from tvsystems_client.crypto.hashing import blake2b256
from tvsystems_client.enums import TransactionType
from tvsystems_client.parser import parse_transaction
from tvsystems_client.transactions import (
    LeaseCancelTransaction,
    LeaseTransaction,
    MintingTransaction,
    PaymentTransaction,
    cold_sign_api_version,
)

LEASE_ID = b58encode(bytes(range(32)))


class TestApiProjection:
    """Broadcast payloads."""

    def test_lease_request_json(self, recipient):
        payload = mk_lease(recipient).to_api_request_json("PUBKEY", "SIG")

        assert payload == {
            "timestamp": FIXED_TIMESTAMP,
            "fee": DEFAULT_TX_FEE,
            "feeScale": DEFAULT_FEE_SCALE,
            "senderPublicKey": "PUBKEY",
            "signature": "SIG",
            "amount": V_UNITY,
            "recipient": recipient,
        }

    def test_payment_request_json_carries_attachment(self, recipient):
        attachment = encode_attachment("hello")
        payload = mk_payment(recipient, attachment=attachment).to_api_request_json("PUBKEY", "SIG")

        assert payload["attachment"] == attachment
        assert payload["recipient"] == recipient

    def test_cancel_request_json_names_lease_tx_id(self):
        tx = build_cancel_lease_tx(LEASE_ID, timestamp=FIXED_TIMESTAMP)
        payload = tx.to_api_request_json("PUBKEY", "SIG")

        assert payload["txId"] == LEASE_ID
        assert "leaseId" not in payload


class TestColdSignProjection:
    """Offline-signer payloads."""

    def test_lease_cold_sign_json(self, recipient):
        payload = mk_lease(recipient).to_cold_sign_json("PUBKEY")

        assert payload["protocol"] == "v.systems"
        assert payload["opc"] == "transaction"
        assert payload["api"] == 1
        assert payload["transactionType"] == 3
        assert payload["senderPublicKey"] == "PUBKEY"
        assert payload["amount"] == V_UNITY
        assert payload["recipient"] == recipient
        assert payload["timestamp"] == FIXED_TIMESTAMP

    @pytest.mark.parametrize("amount, expected", [
        (None, 1),
        (0, 1),
        (V_UNITY, 1),
        (COLD_SIGN_AMOUNT_THRESHOLD, 1),
        (COLD_SIGN_AMOUNT_THRESHOLD + 1, 2),
    ])
    def test_api_version_threshold(self, amount, expected):
        assert cold_sign_api_version(amount) == expected

    def test_large_lease_uses_version_2(self, recipient):
        tx = mk_lease(recipient, amount=COLD_SIGN_AMOUNT_THRESHOLD + 1)
        assert tx.to_cold_sign_json("PUBKEY")["api"] == 2

    def test_cancel_lease_is_always_version_1(self):
        tx = build_cancel_lease_tx(LEASE_ID, timestamp=FIXED_TIMESTAMP)
        assert tx.to_cold_sign_json("PUBKEY")["api"] == 1


class TestTransactionId:
    """Ids derived from canonical bytes."""

    def test_id_is_hash_of_bytes(self, recipient):
        tx = mk_lease(recipient)
        assert tx.get_id() == b58encode(blake2b256(tx.to_bytes()))
        assert len(b58decode(tx.get_id())) == 32

    def test_stored_id_wins(self, recipient):
        tx = mk_lease(recipient).model_copy(update={"id": "NodeAssignedId"})
        assert tx.get_id() == "NodeAssignedId"

    def test_distinct_transactions_have_distinct_ids(self, recipient):
        assert mk_lease(recipient, amount=1).get_id() != mk_lease(recipient, amount=2).get_id()


class TestModels:
    """Model behaviour shared by every variant."""

    def test_models_are_frozen(self, recipient):
        tx = mk_lease(recipient)
        with pytest.raises(PydanticValidationError):
            tx.amount = 1

    @pytest.mark.parametrize("cls, wrong_tag", [
        (PaymentTransaction, 3),
        (LeaseTransaction, 2),
        (LeaseCancelTransaction, 3),
        (MintingTransaction, 99),
    ])
    def test_type_tag_is_fixed_per_variant(self, cls, wrong_tag):
        with pytest.raises(PydanticValidationError):
            cls(type=wrong_tag)

    def test_tag_byte_matches_variant(self, recipient):
        tx = mk_lease(recipient)
        assert tx.to_bytes()[0] == TransactionType.LEASE
        assert type(parse_transaction(tx.to_json())) is LeaseTransaction

    @pytest.mark.parametrize("cls", [PaymentTransaction, LeaseTransaction, MintingTransaction])
    def test_negative_amount_rejected(self, cls):
        with pytest.raises(PydanticValidationError):
            cls(amount=-5)

    def test_direct_construction_allows_partial_records(self):
        tx = LeaseTransaction(amount=1)
        assert tx.recipient is None

    def test_type_tags(self, recipient):
        assert mk_payment(recipient).tx_type is TransactionType.PAYMENT
        assert mk_lease(recipient).tx_type is TransactionType.LEASE
        assert LeaseCancelTransaction().tx_type is TransactionType.CANCEL_LEASE
        assert MintingTransaction().tx_type is TransactionType.MINTING

    def test_aliases_populate(self):
        tx = LeaseCancelTransaction.model_validate({"leaseId": LEASE_ID, "feeScale": 100})
        assert tx.lease_id == LEASE_ID
        assert tx.fee_scale == 100

    def test_json_uses_wire_names(self, recipient):
        data = mk_lease(recipient).to_json_dict()
        assert data["feeScale"] == DEFAULT_FEE_SCALE
        assert "fee_scale" not in data
        assert "id" not in data

    @pytest.mark.parametrize("tx", [
        PaymentTransaction(recipient="3N1", amount=1, attachment="", fee=1, fee_scale=100, timestamp=1),
        LeaseTransaction(recipient="3N1", amount=1, fee=1, fee_scale=100, timestamp=1),
        LeaseCancelTransaction(lease_id="abc", fee=1, fee_scale=100, timestamp=1),
        MintingTransaction(recipient="3N1", amount=1, timestamp=1, current_block_height=9),
    ])
    def test_json_roundtrip(self, tx):
        assert parse_transaction(tx.to_json()) == tx


class TestBuilders:
    """Convenience constructors."""

    def test_payment_builder_defaults(self, recipient):
        tx = build_payment_tx(recipient, V_UNITY, attachment="memo")

        assert tx.fee == DEFAULT_TX_FEE
        assert tx.fee_scale == DEFAULT_FEE_SCALE
        assert tx.timestamp > 0
        assert b58decode(tx.attachment) == b"memo"

    def test_lease_builder_fixed_timestamp(self, recipient):
        tx = build_lease_tx(recipient, V_UNITY, timestamp=FIXED_TIMESTAMP)
        assert tx == mk_lease(recipient)

    def test_empty_attachment(self):
        assert encode_attachment("") == ""
        assert encode_attachment(b"") == ""
        assert encode_attachment(b"\x00\x01") == b58encode(b"\x00\x01")

    def test_timestamp_is_nanoseconds(self, recipient):
        tx = build_lease_tx(recipient, V_UNITY)
        # Past 2001 in nanoseconds
        assert tx.timestamp > 10 ** 18
