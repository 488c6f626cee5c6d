"""
TV Systems node client.

Wraps a node's REST API: broadcasting signed transactions, looking up
transactions, balances and blocks. Requests go through a :class:`Transport`;
responses are decoded with the transaction parser and the entity models.
"""

from __future__ import annotations
import json
import logging
from typing import Any, Dict, List, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError as PydanticValidationError

from .config import ClientConfig, TX_MAX_LIMIT
from .entities import Balance, BalanceDetail, Block
from .enums import NetworkType, TransactionType
from .parser import parse_transaction
from .runtime.errors import ApiError, UnsupportedTransactionError, error_from_response
from .transactions import Transaction
from .transport import RequestsTransport, Transport

M = TypeVar("M", bound=BaseModel)

_BROADCAST_ROUTES = {
    TransactionType.PAYMENT: "vsys/broadcast/payment",
    TransactionType.LEASE: "leasing/broadcast/lease",
    TransactionType.CANCEL_LEASE: "leasing/broadcast/cancel",
}


class Blockchain:
    """
    Client for one node of one network.

    Example:
        ```python
        chain = Blockchain(NetworkType.TESTNET, "http://test.v.systems:9922")
        account = Account.from_seed(NetworkType.TESTNET, "seed", 0)
        tx = build_payment_tx(recipient, 1 * V_UNITY)
        result = account.send_transaction(chain, tx)
        ```
    """

    def __init__(
        self,
        network: NetworkType,
        node_url: str,
        transport: Optional[Transport] = None,
        config: Optional[ClientConfig] = None
    ):
        """
        Initialize the client.

        Args:
            network: Network the node serves
            node_url: Base URL of the node API
            transport: Transport to use; a RequestsTransport is created when omitted
            config: Client configuration; defaults derived from network and node_url
        """
        self.config = config or ClientConfig(node_url=node_url, network=network)
        self.network = network
        self.node_url = node_url.rstrip("/")
        self.transport = transport or RequestsTransport.from_config(self.config)

        self.logger = logging.getLogger(__name__)
        if self.config.debug:
            self.logger.setLevel(logging.DEBUG)

    @classmethod
    def from_config(cls, config: ClientConfig, transport: Optional[Transport] = None) -> Blockchain:
        """Create a client from a configuration."""
        return cls(config.network, config.node_url, transport=transport, config=config)

    def close(self) -> None:
        self.transport.close()

    def __enter__(self) -> Blockchain:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    # =========================================================================
    # Low-level request helpers
    # =========================================================================

    def _url(self, path: str) -> str:
        return f"{self.node_url}/{path}"

    def _get(self, path: str) -> str:
        return self.transport.get(self._url(path))

    def _post(self, path: str, body: str) -> str:
        self.logger.debug("POST %s <- %s", path, body)
        return self.transport.post(self._url(path), body)

    @staticmethod
    def _decode(text: str) -> Any:
        """
        Decode a response body, lifting node error payloads into typed errors.

        Raises:
            ApiError: If the body is an error payload or is not JSON
        """
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ApiError.from_text(text, cause=e) from e

        error = error_from_response(data, raw=text)
        if error is not None:
            raise error
        return data

    def _parse_model(self, model: Type[M], text: str) -> M:
        data = self._decode(text)
        try:
            return model.model_validate(data)
        except PydanticValidationError as e:
            raise ApiError.from_text(text, cause=e) from e

    def _parse_transaction(self, text: str) -> Transaction:
        return parse_transaction(self._decode(text))

    # =========================================================================
    # Transactions
    # =========================================================================

    def send_transaction(self, tx_type: Optional[TransactionType],
                         payload: Union[Dict[str, Any], str]) -> Transaction:
        """
        Broadcast a signed transaction payload.

        Args:
            tx_type: Type of the transaction
            payload: API request JSON (``to_api_request_json``) as dict or text

        Returns:
            Transaction record echoed by the node

        Raises:
            UnsupportedTransactionError: If the type cannot be broadcast
            ApiError: If the node rejects the transaction
        """
        route = _BROADCAST_ROUTES.get(tx_type)
        if route is None:
            raise UnsupportedTransactionError(details={"type": getattr(tx_type, "name", tx_type)})

        body = payload if isinstance(payload, str) else json.dumps(payload)
        return self._parse_transaction(self._post(route, body))

    def get_transaction_by_id(self, tx_id: str) -> Transaction:
        """Look up a confirmed transaction."""
        return self._parse_transaction(self._get(f"transactions/info/{tx_id}"))

    def get_unconfirmed_transaction_by_id(self, tx_id: str) -> Transaction:
        """Look up a transaction still in the node's pool."""
        return self._parse_transaction(self._get(f"transactions/unconfirmed/info/{tx_id}"))

    def get_transaction_history(self, address: str, num: int) -> List[Transaction]:
        """
        Most recent transactions involving an address.

        Args:
            address: Base58 address
            num: Number of records; clamped to TX_MAX_LIMIT, ``<= 0`` returns nothing

        Returns:
            Typed transactions, newest first
        """
        if num <= 0:
            return []
        num = min(num, TX_MAX_LIMIT)

        text = self._get(f"transactions/address/{address}/limit/{num}")
        data = self._decode(text)
        if not isinstance(data, list):
            raise ApiError.from_text(text)
        if not data:
            return []
        records = data[0]
        if not isinstance(records, list):
            raise ApiError.from_text(text)
        return [parse_transaction(record) for record in records]

    # =========================================================================
    # Addresses
    # =========================================================================

    def get_balance(self, address: str) -> int:
        """Balance of an address in the smallest unit."""
        return self._parse_model(Balance, self._get(f"addresses/balance/{address}")).balance

    def get_balance_detail(self, address: str) -> BalanceDetail:
        """Balance breakdown of an address."""
        return self._parse_model(BalanceDetail, self._get(f"addresses/balance/details/{address}"))

    # =========================================================================
    # Blocks
    # =========================================================================

    def get_height(self) -> int:
        """Current chain height."""
        text = self._get("blocks/height")
        data = self._decode(text)
        if not isinstance(data, dict) or not isinstance(data.get("height"), int):
            raise ApiError.from_text(text)
        return data["height"]

    def get_last_block(self) -> Block:
        return self._parse_model(Block, self._get("blocks/last"))

    def get_block_by_height(self, height: int) -> Block:
        return self._parse_model(Block, self._get(f"blocks/at/{height}"))
