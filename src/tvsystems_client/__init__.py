"""
TV Systems Python SDK

This package provides account derivation, canonical transaction encoding and
signing, and a node client for the TV Systems ledger network.
"""

from .enums import NetworkType, TransactionType, FieldKind, StringEncoding
from .config import ClientConfig, V_UNITY, TX_MAX_LIMIT, DEFAULT_TX_FEE, DEFAULT_FEE_SCALE
from .runtime.errors import *
from .account import Account, derive_keypair, derive_address, address_from_public_key, validate_address
from .transactions import *
from .parser import TRANSACTION_CLASSES, parse_transaction, parse_transactions
from .codec import encode_transaction, b58encode, b58decode
from .signers import Signer, AccountSigner, sign_transaction
from .builders import build_payment_tx, build_lease_tx, build_cancel_lease_tx
from .entities import Balance, BalanceDetail, Block
from .transport import Transport, RequestsTransport
from .blockchain import Blockchain

__version__ = "0.1.0"
__all__ = [
    # Enums and configuration
    "NetworkType",
    "TransactionType",
    "FieldKind",
    "StringEncoding",
    "ClientConfig",
    "V_UNITY",
    "TX_MAX_LIMIT",
    "DEFAULT_TX_FEE",
    "DEFAULT_FEE_SCALE",

    # Accounts
    "Account",
    "derive_keypair",
    "derive_address",
    "address_from_public_key",
    "validate_address",

    # Encoding, decoding and signing
    "TRANSACTION_CLASSES",
    "parse_transaction",
    "parse_transactions",
    "encode_transaction",
    "b58encode",
    "b58decode",
    "Signer",
    "AccountSigner",
    "sign_transaction",

    # Builders
    "build_payment_tx",
    "build_lease_tx",
    "build_cancel_lease_tx",

    # Node client
    "Balance",
    "BalanceDetail",
    "Block",
    "Transport",
    "RequestsTransport",
    "Blockchain",

    # Transactions
    "Proof",
    "Transaction",
    "UnknownTransaction",
    "ProvenTransaction",
    "PaymentTransaction",
    "LeaseTransaction",
    "LeaseCancelTransaction",
    "MintingTransaction",
    "cold_sign_api_version",

    # Errors
    "ErrorCode",
    "TVSystemsError",
    "AccountKeyError",
    "ValidationError",
    "AddressFormatError",
    "EncodingError",
    "SerializationError",
    "ApiError",
    "NetworkError",
    "UnmarshalError",
    "TransactionError",
    "UnsupportedTransactionError",
    "error_from_response",
]
