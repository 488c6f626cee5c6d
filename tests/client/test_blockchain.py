"""
Node client tests against a mock transport.
"""

import json

import pytest

from helpers import mk_lease, mk_payment

from tvsystems_client.blockchain import Blockchain
from tvsystems_client.builders import build_cancel_lease_tx
from tvsystems_client.codec.base58 import b58encode
from tvsystems_client.config import ClientConfig, TX_MAX_LIMIT, V_UNITY
from tvsystems_client.entities import BalanceDetail, Block
from tvsystems_client.enums import NetworkType, TransactionType
from tvsystems_client.runtime.errors import (
    ApiError,
    NetworkError,
    TransactionError,
    UnmarshalError,
    UnsupportedTransactionError,
)
from tvsystems_client.signers import AccountSigner
from tvsystems_client.transactions import (
    LeaseCancelTransaction,
    LeaseTransaction,
    MintingTransaction,
    PaymentTransaction,
    UnknownTransaction,
)

BASE_URL = "http://node.test:9922"
LEASE_ID = b58encode(bytes(range(32)))


def lease_record(recipient, **overrides):
    record = {
        "type": 3,
        "id": "LeaseTxId",
        "fee": 10000000,
        "feeScale": 100,
        "timestamp": 1547722056762000000,
        "recipient": recipient,
        "amount": V_UNITY,
    }
    record.update(overrides)
    return record


class TestBroadcast:
    """Sending signed transactions."""

    def test_send_lease(self, chain, mock_transport, account, recipient):
        tx = mk_lease(recipient)
        mock_transport.set_response("leasing/broadcast/lease", lease_record(recipient))

        result = account.send_transaction(chain, tx)

        method, url, body = mock_transport.last_request
        assert method == "POST"
        assert url == f"{BASE_URL}/leasing/broadcast/lease"

        payload = json.loads(body)
        assert payload["senderPublicKey"] == account.public_key
        assert payload["recipient"] == recipient
        assert payload["amount"] == V_UNITY
        assert AccountSigner(account).verify(tx, payload["signature"])

        assert isinstance(result, LeaseTransaction)
        assert result.id == "LeaseTxId"

    def test_send_payment_route(self, chain, mock_transport, account, recipient):
        tx = mk_payment(recipient)
        mock_transport.set_response("vsys/broadcast/payment", dict(tx.to_json_dict(), id="PayId"))
        result = account.send_transaction(chain, tx)

        assert mock_transport.last_request[1].endswith("/vsys/broadcast/payment")
        assert isinstance(result, PaymentTransaction)

    def test_send_cancel_route(self, chain, mock_transport, account):
        tx = build_cancel_lease_tx(LEASE_ID)
        mock_transport.set_response("leasing/broadcast/cancel", tx.to_json_dict())

        result = account.send_transaction(chain, tx)

        assert json.loads(mock_transport.last_request[2])["txId"] == LEASE_ID
        assert isinstance(result, LeaseCancelTransaction)

    def test_send_raw_payload_text(self, chain, mock_transport, recipient):
        mock_transport.set_response("leasing/broadcast/lease", lease_record(recipient))
        chain.send_transaction(TransactionType.LEASE, '{"amount": 1}')
        assert mock_transport.last_request[2] == '{"amount": 1}'

    def test_minting_cannot_be_broadcast(self, chain, mock_transport, account, recipient):
        tx = MintingTransaction(recipient=recipient, amount=1, timestamp=1, current_block_height=1)
        with pytest.raises(UnsupportedTransactionError):
            chain.send_transaction(tx.tx_type, {})
        assert mock_transport.requests == []

    def test_unknown_type_cannot_be_broadcast(self, chain):
        with pytest.raises(UnsupportedTransactionError):
            chain.send_transaction(None, {})

    def test_node_error_payload(self, chain, mock_transport, account, recipient):
        mock_transport.set_response("leasing/broadcast/lease", {"error": 112, "message": "insufficient balance"})

        with pytest.raises(ApiError) as exc_info:
            account.send_transaction(chain, mk_lease(recipient))

        assert exc_info.value.error == 112
        assert exc_info.value.message == "insufficient balance"
        assert not isinstance(exc_info.value, TransactionError)

    def test_node_error_with_transaction(self, chain, mock_transport, account, recipient):
        mock_transport.set_response(
            "leasing/broadcast/lease",
            {"error": 199, "message": "invalid timestamp", "tx": lease_record(recipient)},
        )

        with pytest.raises(TransactionError) as exc_info:
            account.send_transaction(chain, mk_lease(recipient))

        assert exc_info.value.transaction["id"] == "LeaseTxId"

    def test_non_json_response(self, chain, mock_transport, account, recipient):
        mock_transport.set_response("leasing/broadcast/lease", "502 Bad Gateway")

        with pytest.raises(ApiError) as exc_info:
            account.send_transaction(chain, mk_lease(recipient))

        assert exc_info.value.raw == "502 Bad Gateway"

    def test_network_failure_propagates(self, chain, mock_transport, account, recipient):
        mock_transport.set_failures(1)
        with pytest.raises(NetworkError):
            account.send_transaction(chain, mk_lease(recipient))


class TestTransactionLookup:
    """Transaction queries."""

    def test_get_transaction_by_id(self, chain, mock_transport, recipient):
        mock_transport.set_response("transactions/info/LeaseTxId", lease_record(recipient))

        tx = chain.get_transaction_by_id("LeaseTxId")

        assert isinstance(tx, LeaseTransaction)
        assert mock_transport.last_request == ("GET", f"{BASE_URL}/transactions/info/LeaseTxId", None)

    def test_get_unconfirmed_transaction(self, chain, mock_transport, recipient):
        mock_transport.set_response("transactions/unconfirmed/info/LeaseTxId", lease_record(recipient))
        assert chain.get_unconfirmed_transaction_by_id("LeaseTxId").id == "LeaseTxId"

    def test_unknown_record_type(self, chain, mock_transport):
        mock_transport.set_response("transactions/info/X", {"type": 99, "id": "X"})
        assert isinstance(chain.get_transaction_by_id("X"), UnknownTransaction)

    def test_malformed_record(self, chain, mock_transport):
        mock_transport.set_response("transactions/info/X", {"type": 3, "amount": "lots"})
        with pytest.raises(UnmarshalError):
            chain.get_transaction_by_id("X")

    def test_history(self, chain, mock_transport, account, recipient):
        path = f"transactions/address/{account.address}/limit/2"
        mock_transport.set_response(path, [[lease_record(recipient), {"type": 99}]])

        history = account.get_transaction_history(chain, 2)

        assert [type(tx) for tx in history] == [LeaseTransaction, UnknownTransaction]

    def test_history_is_clamped(self, chain, mock_transport, account):
        mock_transport.set_response(f"limit/{TX_MAX_LIMIT}", [[]])

        assert chain.get_transaction_history(account.address, TX_MAX_LIMIT + 500) == []
        assert mock_transport.last_request[1].endswith(f"/limit/{TX_MAX_LIMIT}")

    @pytest.mark.parametrize("num", [0, -3])
    def test_history_non_positive_count(self, chain, mock_transport, account, num):
        assert chain.get_transaction_history(account.address, num) == []
        assert mock_transport.requests == []

    def test_history_empty_outer_list(self, chain, mock_transport, account):
        mock_transport.set_response("limit/5", [])
        assert chain.get_transaction_history(account.address, 5) == []

    def test_history_wrong_shape(self, chain, mock_transport, account):
        mock_transport.set_response("limit/5", {"transactions": []})
        with pytest.raises(ApiError):
            chain.get_transaction_history(account.address, 5)


class TestAddressQueries:
    """Balance lookups."""

    def test_get_balance(self, chain, mock_transport, account):
        mock_transport.set_response(
            f"addresses/balance/{account.address}",
            {"address": account.address, "confirmations": 0, "balance": 5 * V_UNITY},
        )
        assert account.get_balance(chain) == 5 * V_UNITY

    def test_get_balance_detail(self, chain, mock_transport, account):
        mock_transport.set_response(
            f"addresses/balance/details/{account.address}",
            {
                "address": account.address,
                "regular": 10,
                "mintingAverage": 9,
                "available": 8,
                "effective": 7,
                "height": 100,
            },
        )

        detail = account.get_balance_detail(chain)

        assert isinstance(detail, BalanceDetail)
        assert detail.minting_average == 9
        assert detail.available == 8

    def test_balance_missing_field(self, chain, mock_transport, account):
        mock_transport.set_response(f"addresses/balance/{account.address}", {"address": account.address})
        with pytest.raises(ApiError):
            chain.get_balance(account.address)

    def test_invalid_address_error(self, chain, mock_transport):
        mock_transport.set_response("addresses/balance/bogus", {"error": 102, "message": "invalid address"})
        with pytest.raises(ApiError, match="invalid address"):
            chain.get_balance("bogus")


class TestBlocks:
    """Block queries."""

    def test_get_height(self, chain, mock_transport):
        mock_transport.set_response("blocks/height", {"height": 4321})
        assert chain.get_height() == 4321

    def test_get_height_bad_payload(self, chain, mock_transport):
        mock_transport.set_response("blocks/height", {"height": "tall"})
        with pytest.raises(ApiError):
            chain.get_height()

    def test_get_last_block(self, chain, mock_transport, recipient):
        mock_transport.set_response("blocks/last", {
            "version": 1,
            "timestamp": 1547722056762000000,
            "reference": "RefSig",
            "SPOSConsensus": {"mintTime": 1547722056000000000, "mintBalance": 500},
            "TransactionMerkleRoot": "Root",
            "transactions": [
                {"type": 5, "recipient": recipient, "amount": 900000000,
                 "timestamp": 1547722056762000000, "currentBlockHeight": 77},
                lease_record(recipient),
            ],
            "generator": recipient,
            "signature": "BlockSig",
            "fee": 10000000,
            "blocksize": 512,
            "height": 77,
            "transaction count": 2,
        })

        block = chain.get_last_block()

        assert isinstance(block, Block)
        assert block.height == 77
        assert block.transaction_count == 2
        assert block.spos_consensus.mint_balance == 500
        assert isinstance(block.transactions[0], MintingTransaction)
        assert block.transactions[0].current_block_height == 77
        assert isinstance(block.transactions[1], LeaseTransaction)

    def test_get_block_by_height(self, chain, mock_transport):
        mock_transport.set_response("blocks/at/12", {"height": 12, "transactions": []})

        block = chain.get_block_by_height(12)

        assert block.height == 12
        assert block.transactions == []
        assert mock_transport.last_request[1] == f"{BASE_URL}/blocks/at/12"


class TestClientLifecycle:
    """Construction and resource handling."""

    def test_trailing_slash_is_stripped(self, chain):
        assert chain.node_url == BASE_URL

    def test_from_config(self, mock_transport):
        config = ClientConfig(node_url="https://node.example/", network=NetworkType.MAINNET)
        chain = Blockchain.from_config(config, transport=mock_transport)

        assert chain.network is NetworkType.MAINNET
        assert chain.node_url == "https://node.example"

    def test_context_manager_closes_transport(self, mock_transport):
        with Blockchain(NetworkType.TESTNET, BASE_URL, transport=mock_transport):
            pass
        assert mock_transport.closed
